"""Timestamp helpers shared by the persisted models."""

from datetime import UTC, datetime


def parse_timestamp(value: str | datetime) -> datetime:
    """
    Parse a persisted timestamp into an aware UTC datetime.

    Accepts ISO-8601 strings, including the ``Z`` suffix written by
    JavaScript's ``Date.toJSON``. Naive values are assumed to be UTC so that
    every loaded timestamp can be compared with every other one.

    Raises:
        ValueError: If the string is not an ISO-8601 timestamp
        TypeError: If the value is neither a string nor a datetime
    """
    if isinstance(value, str):
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        value = datetime.fromisoformat(value)
    elif not isinstance(value, datetime):
        raise TypeError(f"Unsupported timestamp value: {value!r}")

    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def format_timestamp(value: datetime) -> str:
    """Serialize a timestamp for storage."""
    return value.isoformat()
