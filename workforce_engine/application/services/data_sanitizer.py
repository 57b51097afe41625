"""
Free-text sanitisation applied before job data reaches the store.
"""

import copy
import re
from typing import Any, Dict, Optional

from workforce_engine.config.settings import settings

_UNSAFE_CHARACTERS = re.compile(r"[<>'\"]")

_JOB_TEXT_FIELDS = (
    "title",
    "description",
    "completion_notes",
    "work_summary",
    "note",
    "internal_note",
)
_CUSTOMER_TEXT_FIELDS = ("name", "email", "notes")
_LOCATION_TEXT_FIELDS = ("address", "city", "state", "landmark", "access_instructions")


def sanitize_string(value: Any, max_length: Optional[int] = None) -> str:
    """
    Strip unsafe characters, trim whitespace and truncate.

    Non-string input becomes an empty string. The result is stable under
    re-application.
    """
    if not isinstance(value, str):
        return ""
    limit = max_length or settings.SANITIZE_MAX_LENGTH
    cleaned = _UNSAFE_CHARACTERS.sub("", value).strip()
    return cleaned[:limit].rstrip()


def _sanitize_fields(section: Dict[str, Any], fields, max_length: int) -> None:
    for name in fields:
        if section.get(name) is not None:
            section[name] = sanitize_string(section[name], max_length)


def sanitize_job_payload(payload: Dict[str, Any], max_length: Optional[int] = None) -> Dict[str, Any]:
    """Return a sanitised deep copy of a job payload. The input is not modified."""
    limit = max_length or settings.SANITIZE_MAX_LENGTH
    sanitized = copy.deepcopy(dict(payload))

    _sanitize_fields(sanitized, _JOB_TEXT_FIELDS, limit)

    customer = sanitized.get("customer")
    if isinstance(customer, dict):
        _sanitize_fields(customer, _CUSTOMER_TEXT_FIELDS, limit)

    location = sanitized.get("location")
    if isinstance(location, dict):
        _sanitize_fields(location, _LOCATION_TEXT_FIELDS, limit)

    for name in ("notes", "internal_notes"):
        entries = sanitized.get(name)
        if isinstance(entries, list):
            sanitized[name] = [sanitize_string(entry, limit) for entry in entries]

    return sanitized
