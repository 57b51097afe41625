"""
Validation rules for job payloads.

Every validator is a pure function that returns a ``ValidationResult`` holding
all violated rules. None of them stop at the first failure, so callers can
show the complete list to the user in one round trip.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional

from workforce_engine.domain.clock import as_utc, utc_now
from workforce_engine.domain.exceptions.validation_error import ValidationError
from workforce_engine.domain.value_objects.job_priority import JobPriority
from workforce_engine.domain.value_objects.job_status import JobStatus
from workforce_engine.domain.value_objects.job_type import JobType
from workforce_engine.domain.value_objects.time_slot import TIME_PATTERN, to_minutes

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000
CUSTOMER_NAME_MAX_LENGTH = 100
COMPLETION_NOTES_MAX_LENGTH = 1000
WORK_SUMMARY_MAX_LENGTH = 2000
MAX_ESTIMATED_DURATION = 1440  # 24 hours
MAX_PHOTOS = 10

PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]{10,15}$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
ZIP_CODE_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")


@dataclass
class ValidationResult:
    """Outcome of a validator: valid iff no errors were collected."""

    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def raise_for_errors(self, context: str = "Validation failed") -> None:
        """Raise ``ValidationError`` carrying every collected message."""
        if self.errors:
            raise ValidationError(self.errors, context)


def _get(payload: Any, key: str) -> Any:
    if isinstance(payload, Mapping):
        return payload.get(key)
    return getattr(payload, key, None)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_list(value: Any) -> bool:
    return isinstance(value, (list, tuple, set, frozenset))


def _is_section(value: Any) -> bool:
    return value is not None and not isinstance(value, (str, bytes, int, float))


def parse_datetime(value: Any) -> Optional[datetime]:
    """Accept a datetime or an ISO-8601 string; anything else is None."""
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, str):
        try:
            return as_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError:
            return None
    return None


def validate_job_creation(payload: Any, now: Optional[datetime] = None) -> ValidationResult:
    """Validate a job creation payload against structural and business rules."""
    errors: List[str] = []
    now = as_utc(now) if now else utc_now()

    title = _get(payload, "title")
    if _is_blank(title):
        errors.append("Job title is required")
    elif len(title) > TITLE_MAX_LENGTH:
        errors.append(f"Job title must be at most {TITLE_MAX_LENGTH} characters")

    description = _get(payload, "description")
    if _is_blank(description):
        errors.append("Job description is required")
    elif len(description) > DESCRIPTION_MAX_LENGTH:
        errors.append(
            f"Job description must be at most {DESCRIPTION_MAX_LENGTH} characters"
        )

    if _get(payload, "type") not in {t.value for t in JobType}:
        errors.append("Valid job type is required")

    if _get(payload, "priority") not in {p.value for p in JobPriority}:
        errors.append("Valid job priority is required")

    raw_date = _get(payload, "scheduled_date")
    scheduled_date = parse_datetime(raw_date)
    if raw_date is None:
        errors.append("Scheduled date is required")
    elif scheduled_date is None:
        errors.append("Scheduled date must be a valid date and time")
    elif scheduled_date < now:
        errors.append("Scheduled date cannot be in the past")

    duration = _get(payload, "estimated_duration")
    if not _is_number(duration) or duration <= 0:
        errors.append("Estimated duration must be greater than 0 minutes")
    elif duration > MAX_ESTIMATED_DURATION:
        errors.append("Estimated duration cannot exceed 24 hours")

    if _is_blank(_get(payload, "created_by")):
        errors.append("Created by field is required")

    customer = _get(payload, "customer")
    if not _is_section(customer):
        errors.append("Customer information is required")
    else:
        errors.extend(validate_customer(customer).errors)

    location = _get(payload, "location")
    if not _is_section(location):
        errors.append("Job location is required")
    else:
        errors.extend(validate_location(location).errors)

    requirements = _get(payload, "requirements")
    if not _is_section(requirements):
        errors.append("Job requirements are required")
    else:
        errors.extend(validate_job_requirements(requirements).errors)

    time_slot = _get(payload, "scheduled_time_slot")
    if not _is_section(time_slot):
        errors.append("Scheduled time slot is required")
    else:
        errors.extend(validate_time_slot(time_slot).errors)

    return ValidationResult(errors)


def validate_customer(customer: Any) -> ValidationResult:
    errors: List[str] = []

    name = _get(customer, "name")
    if _is_blank(name):
        errors.append("Customer name is required")
    elif len(name) > CUSTOMER_NAME_MAX_LENGTH:
        errors.append(
            f"Customer name must be at most {CUSTOMER_NAME_MAX_LENGTH} characters"
        )

    phone = _get(customer, "phone")
    if _is_blank(phone):
        errors.append("Customer phone is required")
    elif not PHONE_PATTERN.match(phone):
        errors.append("Customer phone must be a valid phone number")

    email = _get(customer, "email")
    if email and (not isinstance(email, str) or not EMAIL_PATTERN.match(email)):
        errors.append("Customer email must be a valid email address")

    alternate_phone = _get(customer, "alternate_phone")
    if alternate_phone and (
        not isinstance(alternate_phone, str) or not PHONE_PATTERN.match(alternate_phone)
    ):
        errors.append("Alternate phone must be a valid phone number")

    return ValidationResult(errors)


def validate_location(location: Any) -> ValidationResult:
    errors: List[str] = []

    if _is_blank(_get(location, "address")):
        errors.append("Location address is required")

    latitude = _get(location, "latitude")
    if not _is_number(latitude) or not -90 <= latitude <= 90:
        errors.append("Valid latitude is required (-90 to 90)")

    longitude = _get(location, "longitude")
    if not _is_number(longitude) or not -180 <= longitude <= 180:
        errors.append("Valid longitude is required (-180 to 180)")

    if _is_blank(_get(location, "city")):
        errors.append("City is required")

    if _is_blank(_get(location, "state")):
        errors.append("State is required")

    zip_code = _get(location, "zip_code")
    if not isinstance(zip_code, str) or not ZIP_CODE_PATTERN.match(zip_code):
        errors.append("Valid ZIP code is required")

    return ValidationResult(errors)


def validate_job_requirements(requirements: Any) -> ValidationResult:
    errors: List[str] = []

    skills = _get(requirements, "skills")
    if not _is_list(skills):
        errors.append("Skills must be a list")
    elif len(skills) == 0:
        errors.append("At least one skill is required")
    elif any(_is_blank(skill) for skill in skills):
        errors.append("All skills must be non-empty strings")

    equipment = _get(requirements, "equipment")
    if not _is_list(equipment):
        errors.append("Equipment must be a list")
    else:
        for index, item in enumerate(equipment, start=1):
            for error in validate_equipment(item).errors:
                errors.append(f"Equipment {index}: {error}")

    duration = _get(requirements, "estimated_duration")
    if duration is not None and (not _is_number(duration) or duration <= 0):
        errors.append("Estimated duration must be greater than 0 minutes")

    if not _is_list(_get(requirements, "tools")):
        errors.append("Tools must be a list")

    return ValidationResult(errors)


def validate_equipment(equipment: Any) -> ValidationResult:
    errors: List[str] = []

    if _is_blank(_get(equipment, "name")):
        errors.append("Equipment name is required")

    if _is_blank(_get(equipment, "model")):
        errors.append("Equipment model is required")

    quantity = _get(equipment, "quantity")
    if not _is_number(quantity) or quantity <= 0:
        errors.append("Equipment quantity must be greater than 0")

    return ValidationResult(errors)


def validate_time_slot(time_slot: Any) -> ValidationResult:
    """Validate a same-day ``HH:MM`` slot. Slots crossing midnight are rejected."""
    errors: List[str] = []

    start = _get(time_slot, "start")
    end = _get(time_slot, "end")
    start_ok = isinstance(start, str) and TIME_PATTERN.match(start) is not None
    end_ok = isinstance(end, str) and TIME_PATTERN.match(end) is not None

    if not start_ok:
        errors.append("Start time must be in HH:MM format")
    if not end_ok:
        errors.append("End time must be in HH:MM format")

    if start_ok and end_ok and to_minutes(end) <= to_minutes(start):
        errors.append("End time must be after start time")

    return ValidationResult(errors)


def validate_status_transition(current_status: Any, new_status: Any) -> ValidationResult:
    errors: List[str] = []
    try:
        current = JobStatus(current_status)
        requested = JobStatus(new_status)
    except ValueError:
        errors.append(f"Invalid status transition from {current_status} to {new_status}")
        return ValidationResult(errors)

    if not current.can_transition_to(requested):
        errors.append(
            f"Invalid status transition from {current.value} to {requested.value}"
        )
    return ValidationResult(errors)


def validate_job_completion(payload: Any) -> ValidationResult:
    errors: List[str] = []

    completion_notes = _get(payload, "completion_notes")
    if completion_notes and len(completion_notes) > COMPLETION_NOTES_MAX_LENGTH:
        errors.append(
            f"Completion notes must be at most {COMPLETION_NOTES_MAX_LENGTH} characters"
        )

    work_summary = _get(payload, "work_summary")
    if work_summary and len(work_summary) > WORK_SUMMARY_MAX_LENGTH:
        errors.append(
            f"Work summary must be at most {WORK_SUMMARY_MAX_LENGTH} characters"
        )

    actual_duration = _get(payload, "actual_duration")
    if actual_duration is not None and (
        not _is_number(actual_duration) or actual_duration <= 0
    ):
        errors.append("Actual duration must be greater than 0 minutes")

    photos = _get(payload, "photos")
    if photos is not None and (not _is_list(photos) or len(photos) > MAX_PHOTOS):
        errors.append(f"Maximum {MAX_PHOTOS} photos allowed per job")

    return ValidationResult(errors)


def validate_job_assignment(job_id: Any, technician_id: Any, assigned_by: Any) -> ValidationResult:
    errors: List[str] = []

    if _is_blank(job_id):
        errors.append("Job ID is required")

    if _is_blank(technician_id):
        errors.append("Technician ID is required")

    if _is_blank(assigned_by):
        errors.append("Assigned by field is required")

    return ValidationResult(errors)
