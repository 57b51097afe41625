"""
Pytest configuration and fixtures.
"""

import copy
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from workforce_engine.application.services.job_manager import JobManager
from workforce_engine.config.settings import Settings
from workforce_engine.domain.entities.job import Job
from workforce_engine.domain.entities.technician import Technician
from workforce_engine.domain.value_objects.customer import Customer
from workforce_engine.domain.value_objects.job_priority import JobPriority
from workforce_engine.domain.value_objects.job_requirements import JobRequirements
from workforce_engine.domain.value_objects.job_status import JobStatus
from workforce_engine.domain.value_objects.job_type import JobType
from workforce_engine.domain.value_objects.location import GeoPoint, Location
from workforce_engine.domain.value_objects.time_slot import TimeSlot
from workforce_engine.domain.value_objects.user_role import UserRole
from workforce_engine.infrastructure.store.memory_store import InMemoryDocumentStore

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

NOW = datetime(2026, 3, 10, 15, 0, tzinfo=timezone.utc)

# Times Square, New York
SITE_LATITUDE = 40.7580
SITE_LONGITUDE = -73.9855


class FakeClock:
    """Controllable time source."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


BASE_PAYLOAD = {
    "title": "Repair air conditioning unit",
    "description": "Unit on the third floor stopped cooling",
    "type": "repair",
    "priority": "high",
    "customer": {
        "name": "Jane Cooper",
        "phone": "+1 212 555 0199",
        "email": "jane.cooper@example.com",
    },
    "location": {
        "address": "1560 Broadway",
        "city": "New York",
        "state": "NY",
        "zip_code": "10036",
        "latitude": SITE_LATITUDE,
        "longitude": SITE_LONGITUDE,
    },
    "scheduled_date": NOW + timedelta(days=1),
    "scheduled_time_slot": {"start": "09:00", "end": "11:00"},
    "estimated_duration": 90,
    "requirements": {
        "skills": ["hvac"],
        "equipment": [{"name": "Manifold gauge", "model": "MG-200", "quantity": 1}],
        "tools": ["multimeter"],
    },
    "created_by": "dispatcher-1",
}


@pytest.fixture(scope="session")
def test_settings():
    """Test settings configuration."""
    return Settings(
        ENVIRONMENT="test",
        DATABASE_URL=TEST_DATABASE_URL,
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def clock():
    """Clock frozen at NOW."""
    return FakeClock()


@pytest.fixture
def store():
    """Empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def manager(store, clock):
    """Job manager over the in-memory store."""
    return JobManager(store, clock)


@pytest.fixture
def job_payload():
    """Factory for valid job creation payloads with optional overrides."""

    def _make(**overrides):
        payload = copy.deepcopy(BASE_PAYLOAD)
        payload.update(overrides)
        return payload

    return _make


@pytest.fixture
def technician():
    """Active technician near the default job site."""
    return Technician(
        id="tech-1",
        name="Maria Lopez",
        email="maria.lopez@example.com",
        role=UserRole.TECHNICIAN,
        is_active=True,
        skills=["hvac", "electrical"],
        current_location=GeoPoint(latitude=40.7614, longitude=-73.9776),
    )


@pytest.fixture
def inactive_technician():
    """Technician that left the company."""
    return Technician(
        id="tech-2",
        name="Robert Hale",
        email="robert.hale@example.com",
        is_active=False,
        skills=["plumbing"],
    )


@pytest.fixture
def dispatcher():
    """Manager account, which cannot receive jobs."""
    return Technician(
        id="dispatcher-1",
        name="Ana Silva",
        email="ana.silva@example.com",
        role=UserRole.MANAGER,
    )


@pytest_asyncio.fixture
async def saved_users(manager, technician, inactive_technician, dispatcher):
    """Persist the technician fixtures."""
    for user in (technician, inactive_technician, dispatcher):
        await manager.technician_repo.save(user)
    return technician, inactive_technician, dispatcher


@pytest.fixture
def make_job():
    """Factory for job entities that bypass the creation workflow."""

    def _make(**overrides):
        fields = dict(
            title="Inspect fire alarm panel",
            description="Quarterly inspection",
            type=JobType.INSPECTION,
            priority=JobPriority.MEDIUM,
            customer=Customer(name="Acme Corp", phone="+1 212 555 0100"),
            location=Location(
                address="350 5th Ave",
                city="New York",
                state="NY",
                zip_code="10118",
                latitude=40.7484,
                longitude=-73.9857,
            ),
            scheduled_date=NOW + timedelta(days=1),
            scheduled_time_slot=TimeSlot(start="08:00", end="10:00"),
            estimated_duration=60,
            requirements=JobRequirements(skills=["electrical"]),
            created_by="dispatcher-1",
            status=JobStatus.PENDING,
            created_at=NOW,
        )
        fields.update(overrides)
        return Job(**fields)

    return _make
