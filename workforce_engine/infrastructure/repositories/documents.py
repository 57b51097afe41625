"""
Document schemas for records kept in the document store.

Every record read from the store is decoded through one of these models before
it reaches business logic. A record that does not fit its schema fails closed
with ``DocumentDecodeError`` instead of leaking untyped data.
"""

import dataclasses
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer
from pydantic import ValidationError as PydanticValidationError

from workforce_engine.domain.clock import as_utc
from workforce_engine.domain.entities.assignment import Assignment
from workforce_engine.domain.entities.job import MAX_PHOTOS, Job
from workforce_engine.domain.entities.technician import Technician
from workforce_engine.domain.exceptions.store_error import DocumentDecodeError
from workforce_engine.domain.value_objects.customer import Customer
from workforce_engine.domain.value_objects.equipment import Equipment
from workforce_engine.domain.value_objects.job_priority import JobPriority
from workforce_engine.domain.value_objects.job_requirements import JobRequirements
from workforce_engine.domain.value_objects.job_status import JobStatus
from workforce_engine.domain.value_objects.job_type import JobType
from workforce_engine.domain.value_objects.location import GeoPoint, Location
from workforce_engine.domain.value_objects.time_slot import TimeSlot
from workforce_engine.domain.value_objects.user_role import UserRole

# Fixed width so that string order equals chronological order in the store
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def encode_datetime(value: datetime) -> str:
    """Encode a datetime as a fixed-width UTC ISO-8601 string."""
    return as_utc(value).strftime(TIMESTAMP_FORMAT)


def to_json_value(value: Any) -> Any:
    """Convert a domain value to its JSON-native store representation."""
    if isinstance(value, datetime):
        return encode_datetime(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [to_json_value(item) for item in value]
    if isinstance(value, dict):
        return {key: to_json_value(item) for key, item in value.items()}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_json_value(dataclasses.asdict(value))
    return value


UtcDatetime = Annotated[
    datetime,
    AfterValidator(as_utc),
    PlainSerializer(encode_datetime, return_type=str, when_used="json"),
]


class _Document(BaseModel):
    """Base document schema."""

    model_config = ConfigDict(extra="ignore")


class LocationDocument(_Document):
    """Stored location."""

    address: str
    city: str
    state: str
    zip_code: str
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    landmark: Optional[str] = None
    access_instructions: Optional[str] = None

    def to_value(self) -> Location:
        return Location(**self.model_dump())


class CustomerDocument(_Document):
    """Stored customer."""

    name: str = Field(..., min_length=1)
    phone: str
    email: Optional[str] = None
    alternate_phone: Optional[str] = None
    address: Optional[LocationDocument] = None
    notes: Optional[str] = None

    def to_value(self) -> Customer:
        return Customer(
            name=self.name,
            phone=self.phone,
            email=self.email,
            alternate_phone=self.alternate_phone,
            address=self.address.to_value() if self.address else None,
            notes=self.notes,
        )


class EquipmentDocument(_Document):
    """Stored equipment entry."""

    name: str
    model: str
    quantity: int = Field(..., gt=0)
    serial_number: Optional[str] = None
    description: Optional[str] = None


class RequirementsDocument(_Document):
    """Stored job requirements."""

    skills: List[str] = Field(default_factory=list)
    equipment: List[EquipmentDocument] = Field(default_factory=list)
    tools: List[str] = Field(default_factory=list)
    estimated_duration: Optional[int] = None
    special_instructions: Optional[str] = None

    def to_value(self) -> JobRequirements:
        return JobRequirements(
            skills=list(self.skills),
            equipment=[Equipment(**item.model_dump()) for item in self.equipment],
            tools=list(self.tools),
            estimated_duration=self.estimated_duration,
            special_instructions=self.special_instructions,
        )


class TimeSlotDocument(_Document):
    """Stored time slot."""

    start: str
    end: str


class JobDocument(_Document):
    """Stored job."""

    id: str
    title: str
    description: str
    type: JobType
    priority: JobPriority
    status: JobStatus
    customer: CustomerDocument
    location: LocationDocument

    assigned_technician_id: Optional[str] = None
    assigned_by: Optional[str] = None
    assigned_at: Optional[UtcDatetime] = None

    scheduled_date: UtcDatetime
    scheduled_time_slot: TimeSlotDocument
    estimated_duration: int = Field(..., gt=0, le=1440)
    requirements: RequirementsDocument

    started_at: Optional[UtcDatetime] = None
    completed_at: Optional[UtcDatetime] = None
    actual_duration: Optional[int] = None

    notes: List[str] = Field(default_factory=list)
    internal_notes: List[str] = Field(default_factory=list)

    created_by: str = Field(..., min_length=1)
    created_at: UtcDatetime
    updated_at: UtcDatetime

    completion_notes: Optional[str] = None
    customer_signature: Optional[str] = None
    photos: List[str] = Field(default_factory=list, max_length=MAX_PHOTOS)
    work_summary: Optional[str] = None

    search_keywords: List[str] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, job: Job) -> "JobDocument":
        return cls.model_validate(dataclasses.asdict(job))

    def to_entity(self) -> Job:
        return Job(
            id=self.id,
            title=self.title,
            description=self.description,
            type=self.type,
            priority=self.priority,
            status=self.status,
            customer=self.customer.to_value(),
            location=self.location.to_value(),
            assigned_technician_id=self.assigned_technician_id,
            assigned_by=self.assigned_by,
            assigned_at=self.assigned_at,
            scheduled_date=self.scheduled_date,
            scheduled_time_slot=TimeSlot(
                start=self.scheduled_time_slot.start, end=self.scheduled_time_slot.end
            ),
            estimated_duration=self.estimated_duration,
            requirements=self.requirements.to_value(),
            started_at=self.started_at,
            completed_at=self.completed_at,
            actual_duration=self.actual_duration,
            notes=list(self.notes),
            internal_notes=list(self.internal_notes),
            created_by=self.created_by,
            created_at=self.created_at,
            updated_at=self.updated_at,
            completion_notes=self.completion_notes,
            customer_signature=self.customer_signature,
            photos=list(self.photos),
            work_summary=self.work_summary,
            search_keywords=list(self.search_keywords),
        )


class GeoPointDocument(_Document):
    """Stored technician position."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    recorded_at: Optional[UtcDatetime] = None


class TechnicianDocument(_Document):
    """Stored technician (a user record)."""

    id: str
    name: str
    email: str
    role: UserRole
    # Missing flag means inactive
    is_active: bool = False
    skills: List[str] = Field(default_factory=list)
    current_location: Optional[GeoPointDocument] = None
    phone: Optional[str] = None
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None

    @classmethod
    def from_entity(cls, technician: Technician) -> "TechnicianDocument":
        location = technician.current_location
        return cls(
            id=technician.id,
            name=technician.name,
            email=technician.email,
            role=technician.role,
            is_active=technician.is_active,
            skills=list(technician.skills),
            current_location=GeoPointDocument(
                latitude=location.latitude,
                longitude=location.longitude,
                recorded_at=location.recorded_at,
            )
            if location
            else None,
            phone=technician.phone,
            created_at=technician.created_at,
            updated_at=technician.updated_at,
        )

    def to_entity(self) -> Technician:
        location = self.current_location
        return Technician(
            id=self.id,
            name=self.name,
            email=self.email,
            role=self.role,
            is_active=self.is_active,
            skills=list(self.skills),
            current_location=GeoPoint(
                latitude=location.latitude,
                longitude=location.longitude,
                recorded_at=location.recorded_at,
            )
            if location
            else None,
            phone=self.phone,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class AssignmentDocument(_Document):
    """Stored assignment record."""

    id: str
    job_id: str
    technician_id: str
    assigned_by: str
    assigned_at: UtcDatetime
    notes: Optional[str] = None
    assignment_reason: str = "manual"

    @classmethod
    def from_entity(cls, assignment: Assignment) -> "AssignmentDocument":
        return cls.model_validate(dataclasses.asdict(assignment))

    def to_entity(self) -> Assignment:
        return Assignment(**self.model_dump())


def decode(schema: type, collection: str, record: Dict[str, Any]):
    """Decode a raw store record into its domain entity, failing closed."""
    try:
        return schema.model_validate(record).to_entity()
    except (PydanticValidationError, ValueError, TypeError) as e:
        raise DocumentDecodeError(
            collection, str(record.get("id", "<unknown>")), str(e)
        ) from e


def encode(document: _Document) -> Dict[str, Any]:
    """Encode a document schema instance into a JSON-native record."""
    return document.model_dump(mode="json")
