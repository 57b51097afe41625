"""
Unit tests for the data sanitizer.
"""

import pytest

from workforce_engine.application.services.data_sanitizer import (
    sanitize_job_payload,
    sanitize_string,
)


class TestSanitizeString:
    """Test cases for sanitize_string."""

    def test_strips_markup_and_whitespace(self):
        assert sanitize_string("  <b>Hi</b>  ") == "bHi/b"

    def test_strips_quotes(self):
        assert sanitize_string("""O'Brien "quoted" """) == "OBrien quoted"

    @pytest.mark.parametrize(
        "value",
        [
            "  <b>Hi</b>  ",
            "text ending in a bracket  >",
            "' padded between quotes '",
            "x" * 998 + "  tail",
            "   ",
        ],
    )
    def test_idempotent(self, value):
        once = sanitize_string(value)
        assert sanitize_string(once) == once

    def test_truncates(self):
        assert sanitize_string("a" * 1500) == "a" * 1000

    def test_custom_max_length(self):
        assert sanitize_string("abcdef", max_length=3) == "abc"

    def test_truncation_does_not_leave_trailing_space(self):
        assert sanitize_string("abc def", max_length=4) == "abc"

    @pytest.mark.parametrize("value", [None, 42, ["a"], {"a": 1}])
    def test_non_strings_become_empty(self, value):
        assert sanitize_string(value) == ""


class TestSanitizeJobPayload:
    """Test cases for sanitize_job_payload."""

    def test_sanitizes_free_text_fields(self, job_payload):
        payload = job_payload(
            title="  <script>Fix</script> ",
            description='"Leaking" pipe',
            notes=[" <i>first</i> ", "second"],
        )
        payload["customer"]["name"] = " <Jane> "
        payload["customer"]["notes"] = "Call 'before' arrival"
        payload["location"]["landmark"] = " <Near the park> "
        payload["location"]["access_instructions"] = "Gate code \"1234\""

        sanitized = sanitize_job_payload(payload)

        assert sanitized["title"] == "scriptFix/script"
        assert sanitized["description"] == "Leaking pipe"
        assert sanitized["notes"] == ["ifirst/i", "second"]
        assert sanitized["customer"]["name"] == "Jane"
        assert sanitized["customer"]["notes"] == "Call before arrival"
        assert sanitized["location"]["landmark"] == "Near the park"
        assert sanitized["location"]["access_instructions"] == "Gate code 1234"

    def test_does_not_modify_input(self, job_payload):
        payload = job_payload(title=" <b>Title</b> ")
        sanitize_job_payload(payload)
        assert payload["title"] == " <b>Title</b> "

    def test_leaves_structured_fields_alone(self, job_payload):
        payload = job_payload()
        sanitized = sanitize_job_payload(payload)
        assert sanitized["scheduled_date"] == payload["scheduled_date"]
        assert sanitized["location"]["latitude"] == payload["location"]["latitude"]
        assert sanitized["requirements"] == payload["requirements"]

    def test_idempotent(self, job_payload):
        payload = job_payload(title="  '<Fix>'  ", description="a" * 1200)
        once = sanitize_job_payload(payload)
        assert sanitize_job_payload(once) == once
