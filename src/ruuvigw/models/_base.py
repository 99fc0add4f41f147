"""Base model and shared annotated types.

Every ruuvigw model inherits from :class:`RuuviBaseModel`, which makes
instances immutable so a record handed to the store can be shared with
concurrent readers without copying.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
"""Sentinel time used before anything has been observed."""


def parse_unix_timestamp(value: Any) -> datetime:
    """Convert integer epoch seconds to a UTC datetime.

    ``datetime`` instances pass through (naive ones are taken as UTC).
    Booleans, negative numbers and fractional seconds are rejected.
    """
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=UTC)
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValueError("timestamp must be integer seconds since the Unix epoch")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError("timestamp must be integer seconds since the Unix epoch")
    seconds = int(value)
    if seconds < 0:
        raise ValueError("timestamp must not be negative")
    try:
        return datetime.fromtimestamp(seconds, tz=UTC)
    except (OverflowError, OSError, ValueError) as exc:
        raise ValueError("timestamp out of range") from exc


UnixTimestamp = Annotated[datetime, BeforeValidator(parse_unix_timestamp)]
"""Annotated type that coerces epoch seconds to UTC datetimes."""


def epoch_seconds(value: datetime) -> float:
    """Seconds since the Unix epoch for an aware datetime."""
    return (value - UNIX_EPOCH).total_seconds()


class RuuviBaseModel(BaseModel):
    """Immutable base for ruuvigw models."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )
