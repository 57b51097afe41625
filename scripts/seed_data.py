#!/usr/bin/env python3
"""
Seed the document store with technicians and jobs for development.
"""

import asyncio
import os
from datetime import timedelta

import structlog

from workforce_engine.application.services.job_manager import build_sql_job_manager
from workforce_engine.application.use_cases.assign_job import JobAssignment
from workforce_engine.config.logging import configure_logging, get_logger
from workforce_engine.domain.clock import utc_now
from workforce_engine.domain.entities.technician import Technician
from workforce_engine.domain.value_objects.location import GeoPoint
from workforce_engine.domain.value_objects.user_role import UserRole

logger = get_logger(__name__)

TECHNICIANS = [
    Technician(
        id="tech-maria",
        name="Maria Lopez",
        email="maria.lopez@example.com",
        skills=["hvac", "electrical"],
        current_location=GeoPoint(latitude=40.7128, longitude=-74.0060),
    ),
    Technician(
        id="tech-james",
        name="James Carter",
        email="james.carter@example.com",
        skills=["plumbing", "cabling"],
        current_location=GeoPoint(latitude=40.7306, longitude=-73.9352),
    ),
    Technician(
        id="tech-retired",
        name="Robert Hale",
        email="robert.hale@example.com",
        skills=["plumbing"],
        is_active=False,
    ),
    Technician(
        id="dispatcher-ana",
        name="Ana Silva",
        email="ana.silva@example.com",
        role=UserRole.MANAGER,
    ),
]


def job_payload(title, job_type, priority, skills, latitude, longitude, days_ahead):
    return {
        "title": title,
        "description": f"{title} requested by the customer",
        "type": job_type,
        "priority": priority,
        "customer": {
            "name": "Acme Property Management",
            "phone": "+1 212 555 0100",
            "email": "facilities@acme.example.com",
        },
        "location": {
            "address": "350 5th Ave",
            "city": "New York",
            "state": "NY",
            "zip_code": "10118",
            "latitude": latitude,
            "longitude": longitude,
        },
        "scheduled_date": utc_now() + timedelta(days=days_ahead, hours=2),
        "scheduled_time_slot": {"start": "09:00", "end": "12:00"},
        "estimated_duration": 120,
        "requirements": {"skills": skills, "equipment": [], "tools": []},
        "created_by": "dispatcher-ana",
    }


JOBS = [
    job_payload("Replace rooftop HVAC unit", "installation", "high", ["hvac"], 40.7484, -73.9857, 1),
    job_payload("Fix leaking pipe", "repair", "urgent", ["plumbing"], 40.7306, -73.9352, 0),
    job_payload("Annual electrical inspection", "inspection", "medium", ["electrical"], 40.7580, -73.9855, 3),
    job_payload("Run network cabling", "upgrade", "low", ["cabling"], 40.6892, -74.0445, 5),
]


async def seed_database():
    """Seed technicians and jobs, assigning one job."""
    manager = await build_sql_job_manager(
        os.getenv("MIGRATION_DATABASE_URL"), create_tables=True
    )

    existing = await manager.get_job_stats()
    if existing.total > 0:
        logger.info("Document store already has jobs, skipping seed", jobs=existing.total)
        return

    for technician in TECHNICIANS:
        await manager.technician_repo.save(technician)
    logger.info("Technicians created", count=len(TECHNICIANS))

    jobs = [await manager.create_job(payload) for payload in JOBS]
    logger.info("Jobs created", count=len(jobs))

    await manager.assign_job(
        JobAssignment(
            job_id=jobs[1].id,
            technician_id="tech-james",
            assigned_by="dispatcher-ana",
            notes="Closest plumber",
        )
    )
    logger.info("Seed completed", stats=vars(await manager.get_job_stats()))


if __name__ == "__main__":
    configure_logging()
    with structlog.contextvars.bound_contextvars(task="seed"):
        asyncio.run(seed_database())
