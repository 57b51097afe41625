"""
Unit tests for job payload validators.
"""

from datetime import timedelta

import pytest

from workforce_engine.application.services.job_validation import (
    ValidationResult,
    validate_customer,
    validate_equipment,
    validate_job_assignment,
    validate_job_completion,
    validate_job_creation,
    validate_job_requirements,
    validate_location,
    validate_status_transition,
    validate_time_slot,
)
from workforce_engine.domain.exceptions.validation_error import ValidationError

from tests.conftest import NOW


class TestValidateJobCreation:
    """Test cases for validate_job_creation."""

    def test_valid_payload(self, job_payload):
        result = validate_job_creation(job_payload(), now=NOW)
        assert result.is_valid
        assert result.errors == []

    def test_iso_string_schedule(self, job_payload):
        payload = job_payload(scheduled_date="2026-03-11T09:00:00Z")
        assert validate_job_creation(payload, now=NOW).is_valid

    @pytest.mark.parametrize(
        "field,message",
        [
            ("title", "Job title is required"),
            ("description", "Job description is required"),
            ("type", "Valid job type is required"),
            ("priority", "Valid job priority is required"),
            ("scheduled_date", "Scheduled date is required"),
            ("estimated_duration", "Estimated duration must be greater than 0 minutes"),
            ("created_by", "Created by field is required"),
            ("customer", "Customer information is required"),
            ("location", "Job location is required"),
            ("requirements", "Job requirements are required"),
            ("scheduled_time_slot", "Scheduled time slot is required"),
        ],
    )
    def test_missing_field(self, job_payload, field, message):
        payload = job_payload()
        del payload[field]
        result = validate_job_creation(payload, now=NOW)
        assert message in result.errors

    def test_reports_every_error(self, job_payload):
        """Validators never stop at the first failure."""
        payload = job_payload(title="", description="", type="plumbing", estimated_duration=0)
        payload["location"]["zip_code"] = "ABCDE"
        payload["scheduled_time_slot"] = {"start": "10:00", "end": "09:00"}

        errors = validate_job_creation(payload, now=NOW).errors

        assert errors == [
            "Job title is required",
            "Job description is required",
            "Valid job type is required",
            "Estimated duration must be greater than 0 minutes",
            "Valid ZIP code is required",
            "End time must be after start time",
        ]

    def test_length_limits(self, job_payload):
        payload = job_payload(title="x" * 101, description="y" * 1001)
        errors = validate_job_creation(payload, now=NOW).errors
        assert "Job title must be at most 100 characters" in errors
        assert "Job description must be at most 1000 characters" in errors

    def test_title_at_limit_is_valid(self, job_payload):
        assert validate_job_creation(job_payload(title="x" * 100), now=NOW).is_valid

    def test_schedule_in_the_past(self, job_payload):
        payload = job_payload(scheduled_date=NOW - timedelta(minutes=1))
        errors = validate_job_creation(payload, now=NOW).errors
        assert errors == ["Scheduled date cannot be in the past"]

    def test_unparseable_schedule(self, job_payload):
        errors = validate_job_creation(job_payload(scheduled_date="tomorrow"), now=NOW).errors
        assert errors == ["Scheduled date must be a valid date and time"]

    @pytest.mark.parametrize("duration", [1, 1440])
    def test_duration_bounds_valid(self, job_payload, duration):
        assert validate_job_creation(job_payload(estimated_duration=duration), now=NOW).is_valid

    def test_duration_over_a_day(self, job_payload):
        errors = validate_job_creation(job_payload(estimated_duration=1441), now=NOW).errors
        assert errors == ["Estimated duration cannot exceed 24 hours"]

    def test_boolean_is_not_a_duration(self, job_payload):
        errors = validate_job_creation(job_payload(estimated_duration=True), now=NOW).errors
        assert "Estimated duration must be greater than 0 minutes" in errors


class TestNestedValidators:
    """Test cases for customer, location, requirements and equipment validators."""

    def test_customer_rules(self):
        errors = validate_customer(
            {"name": " ", "phone": "12", "email": "not-an-email", "alternate_phone": "abc"}
        ).errors
        assert errors == [
            "Customer name is required",
            "Customer phone must be a valid phone number",
            "Customer email must be a valid email address",
            "Alternate phone must be a valid phone number",
        ]

    def test_customer_missing_phone(self):
        assert validate_customer({"name": "Jane"}).errors == ["Customer phone is required"]

    def test_location_rules(self):
        errors = validate_location(
            {
                "address": "",
                "city": "",
                "state": "",
                "zip_code": "1234",
                "latitude": 95,
                "longitude": "west",
            }
        ).errors
        assert errors == [
            "Location address is required",
            "Valid latitude is required (-90 to 90)",
            "Valid longitude is required (-180 to 180)",
            "City is required",
            "State is required",
            "Valid ZIP code is required",
        ]

    @pytest.mark.parametrize("zip_code", ["10036", "10036-1234"])
    def test_zip_formats(self, job_payload, zip_code):
        location = job_payload()["location"]
        location["zip_code"] = zip_code
        assert validate_location(location).is_valid

    def test_requirements_need_a_skill(self):
        errors = validate_job_requirements({"skills": [], "equipment": [], "tools": []}).errors
        assert errors == ["At least one skill is required"]

    def test_requirements_accept_empty_tools(self):
        result = validate_job_requirements({"skills": ["hvac"], "equipment": [], "tools": []})
        assert result.is_valid

    def test_requirements_need_tools_list(self):
        errors = validate_job_requirements({"skills": ["hvac"], "equipment": []}).errors
        assert errors == ["Tools must be a list"]

    def test_equipment_errors_are_numbered(self):
        errors = validate_job_requirements(
            {
                "skills": ["hvac"],
                "equipment": [
                    {"name": "Ladder", "model": "L-8", "quantity": 1},
                    {"name": "", "model": "X", "quantity": 0},
                ],
                "tools": [],
            }
        ).errors
        assert errors == [
            "Equipment 2: Equipment name is required",
            "Equipment 2: Equipment quantity must be greater than 0",
        ]

    def test_equipment(self):
        assert validate_equipment({"name": "Drill", "model": "D1", "quantity": 2}).is_valid


class TestValidateTimeSlot:
    """Test cases for validate_time_slot."""

    def test_end_before_start(self):
        errors = validate_time_slot({"start": "09:00", "end": "08:00"}).errors
        assert errors == ["End time must be after start time"]

    def test_valid_slot(self):
        assert validate_time_slot({"start": "09:00", "end": "10:00"}).is_valid

    def test_equal_times_rejected(self):
        assert not validate_time_slot({"start": "09:00", "end": "09:00"}).is_valid

    def test_overnight_slot_rejected(self):
        assert not validate_time_slot({"start": "22:00", "end": "02:00"}).is_valid

    def test_bad_format(self):
        errors = validate_time_slot({"start": "24:00", "end": "9am"}).errors
        assert errors == [
            "Start time must be in HH:MM format",
            "End time must be in HH:MM format",
        ]


class TestOtherValidators:
    """Test cases for transition, completion and assignment validators."""

    def test_status_transition(self):
        assert validate_status_transition("pending", "assigned").is_valid
        errors = validate_status_transition("completed", "pending").errors
        assert errors == ["Invalid status transition from completed to pending"]

    def test_unknown_status(self):
        assert not validate_status_transition("pending", "archived").is_valid

    def test_job_completion(self):
        errors = validate_job_completion(
            {
                "completion_notes": "n" * 1001,
                "work_summary": "s" * 2001,
                "actual_duration": 0,
                "photos": ["p"] * 11,
            }
        ).errors
        assert errors == [
            "Completion notes must be at most 1000 characters",
            "Work summary must be at most 2000 characters",
            "Actual duration must be greater than 0 minutes",
            "Maximum 10 photos allowed per job",
        ]

    def test_empty_completion_is_valid(self):
        assert validate_job_completion({}).is_valid

    def test_job_assignment(self):
        assert validate_job_assignment("job-1", "tech-1", "dispatcher-1").is_valid
        assert validate_job_assignment("", None, " ").errors == [
            "Job ID is required",
            "Technician ID is required",
            "Assigned by field is required",
        ]


class TestValidationResult:
    """Test cases for ValidationResult."""

    def test_raise_for_errors(self):
        result = ValidationResult(["first", "second"])
        with pytest.raises(ValidationError) as exc_info:
            result.raise_for_errors("Job creation failed")
        assert exc_info.value.errors == ["first", "second"]
        assert str(exc_info.value) == "Job creation failed: first, second"

    def test_valid_result_does_not_raise(self):
        ValidationResult().raise_for_errors()
