"""
Core Utilities.

Shared utility functions used across the package.
All modules should import time helpers from this module.
"""

from datetime import datetime, timedelta, timezone

_EPOCH = datetime(1970, 1, 1)


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime, truncated to milliseconds.

    All datetime values in the application are timezone-naive and assumed
    to be UTC. Millisecond precision matches what the store persists, so a
    value survives a save/load cycle unchanged.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return to_utc_millis(datetime.now(timezone.utc))


def to_utc_millis(value: datetime) -> datetime:
    """
    Normalize a datetime to naive UTC with millisecond precision.

    Aware values are converted to UTC first; naive values are assumed UTC.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def to_epoch_ms(value: datetime) -> int:
    """Convert a naive UTC datetime to integer epoch milliseconds."""
    delta = to_utc_millis(value) - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def from_epoch_ms(millis: int) -> datetime:
    """Convert integer epoch milliseconds to a naive UTC datetime."""
    return _EPOCH + timedelta(milliseconds=millis)
