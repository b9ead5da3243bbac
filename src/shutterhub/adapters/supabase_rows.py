"""Conversions between PostgREST JSON rows and Python values."""

from datetime import datetime
from enum import Enum
from uuid import UUID


def parse_datetime(raw: object) -> datetime | None:
    """Parse an ISO timestamp column, tolerating nulls."""
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def parse_uuid(raw: object) -> UUID | None:
    if raw is None or raw == "":
        return None
    return UUID(str(raw))


def to_column_value(value: object) -> object:
    """Serialize a Python value for a filter or payload."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def to_payload(values: dict[str, object]) -> dict[str, object]:
    return {column: to_column_value(value) for column, value in values.items()}
