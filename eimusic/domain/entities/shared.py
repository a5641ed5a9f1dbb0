"""Shared types and helpers for domain entities.

Pure utility functions with zero external dependencies.
"""

from collections.abc import Mapping
from datetime import UTC, date, datetime
from typing import Any

import attrs

# A Record is one domain row as the listing engine sees it.
RecordValue = str | int | float | bool | None
Record = Mapping[str, RecordValue]


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure datetime is timezone-aware with UTC."""
    if dt is None:
        return None
    return dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt


def to_record_value(value: Any) -> RecordValue:
    """Convert an entity attribute into a flat record value."""
    match value:
        case None | bool() | int() | float() | str():
            return value
        case datetime():
            return value.isoformat()
        case date():
            return value.isoformat()
        case list() | tuple():
            return ", ".join(str(item) for item in value)
        case _:
            return str(value)


def to_record(entity: Any) -> dict[str, RecordValue]:
    """Flatten an attrs entity into a record for listing screens."""
    return {
        attribute.name: to_record_value(getattr(entity, attribute.name))
        for attribute in attrs.fields(type(entity))
    }


def not_blank(_instance: Any, attribute: attrs.Attribute, value: str) -> None:
    """attrs validator rejecting empty or whitespace-only strings."""
    if not value or not value.strip():
        raise ValueError(f"{attribute.name} must not be blank")
