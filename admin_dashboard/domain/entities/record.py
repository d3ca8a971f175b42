"""Record helpers — backend entities are plain JSON mappings keyed by ``id``."""

import re
from enum import Enum
from typing import Any

Record = dict[str, Any]

# Temporary lookup key for a record that the server has not assigned an id to yet.
NEW_RECORD_KEY = "__new__"


class ApprovalStatus(str, Enum):
    """Closed set of buyer/seller approval states shown by the dashboard."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"

    @classmethod
    def coerce(cls, value: Any) -> "ApprovalStatus":
        """Map a loosely-typed server value onto the enum, defaulting to Pending."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            for status in cls:
                if status.value.lower() == lowered:
                    return status
        return cls.PENDING


def record_id(record: Record | None, entity: str | None = None) -> Any:
    """Return the stable key of a record, tolerating the backend's id spellings."""
    if not record:
        return None
    candidates = ["id", "_id"]
    if entity:
        candidates += [f"{entity}_id", f"{entity}Id"]
    for key in candidates:
        value = record.get(key)
        if value is not None:
            return value
    return None


def same_id(left: Any, right: Any) -> bool:
    """Compare ids loosely — the backend mixes ints and numeric strings."""
    if left is None or right is None:
        return False
    return str(left) == str(right)


def digits_only(value: Any) -> str:
    return re.sub(r"\D", "", value if isinstance(value, str) else str(value or ""))


def to_int(value: Any) -> int:
    """Lenient integer parse: blanks and garbage count as zero."""
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def to_text(value: Any, default: str = "") -> str:
    """Display string for a backend scalar; numbers (phones, epoch timestamps) become text."""
    if value is None or value == "":
        return default
    return str(value)


def optional_text(value: Any) -> str | None:
    return None if value is None or value == "" else str(value)
