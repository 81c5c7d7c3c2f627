"""Paste expiration: computation, display formatting, and state.

Expiry is computed, never tracked.  A paste is PERMANENT when it has no
``expires_at``, ACTIVE while ``expires_at`` is in the future, and EXPIRED
once it has passed.  Enforcement is lazy: the read path is the only place
that checks and deletes (see :mod:`sealbin.paste.service`).

Months are a fixed 30 days and years 365 days; there is no calendar
awareness.  Naive datetimes are interpreted as UTC.
"""

from __future__ import annotations

import enum
from datetime import datetime, timedelta, timezone
from typing import Optional

from sealbin.errors import ValidationError


class ExpirationState(str, enum.Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    PERMANENT = "permanent"


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

EXPIRATION_OPTIONS: tuple[tuple[str, str], ...] = (
    ("1h", "1 Hour"),
    ("1d", "1 Day"),
    ("1w", "1 Week"),
    ("1m", "1 Month"),
    ("never", "Never"),
    ("custom", "Custom..."),
)

_FIXED_OFFSETS: dict[str, timedelta] = {
    "1h": timedelta(hours=1),
    "1d": timedelta(days=1),
    "1w": timedelta(weeks=1),
    "1m": timedelta(days=30),
}

_CUSTOM_UNITS: dict[str, timedelta] = {
    "minutes": timedelta(minutes=1),
    "hours": timedelta(hours=1),
    "days": timedelta(days=1),
    "weeks": timedelta(weeks=1),
    "months": timedelta(days=30),
    "years": timedelta(days=365),
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Return *value* as an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def calculate_expiration_date(
    option: str,
    custom_date: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> Optional[datetime]:
    """Resolve an expiration *option* to an absolute UTC datetime.

    ``never`` yields ``None``.  ``custom`` returns *custom_date* verbatim
    (the caller is responsible for its validity).

    Raises:
        ValidationError: for an unrecognised option.
    """
    if option == "never":
        return None
    if option == "custom":
        return as_utc(custom_date) if custom_date is not None else None
    offset = _FIXED_OFFSETS.get(option)
    if offset is None:
        raise ValidationError(f"Unknown expiration option: {option!r}")
    return (now or _utcnow()) + offset


def calculate_custom_expiration(
    amount: int,
    unit: str,
    now: Optional[datetime] = None,
) -> datetime:
    """Return now + *amount* x *unit*."""
    step = _CUSTOM_UNITS.get(unit)
    if step is None:
        raise ValidationError(f"Unknown expiration unit: {unit!r}")
    if amount <= 0:
        raise ValidationError("Expiration amount must be positive")
    return (now or _utcnow()) + step * amount


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------

def is_expired(expires_at: Optional[datetime], now: Optional[datetime] = None) -> bool:
    """True iff *expires_at* is set and strictly before now."""
    if expires_at is None:
        return False
    return as_utc(expires_at) < (now or _utcnow())


def expiration_state(
    expires_at: Optional[datetime],
    now: Optional[datetime] = None,
) -> ExpirationState:
    if expires_at is None:
        return ExpirationState.PERMANENT
    if is_expired(expires_at, now):
        return ExpirationState.EXPIRED
    return ExpirationState.ACTIVE


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------

def _plural(count: int, unit: str) -> str:
    return f"Expires in {count} {unit}{'s' if count > 1 else ''}"


def format_expiration_time(
    expires_at: Optional[datetime],
    now: Optional[datetime] = None,
) -> str:
    """Human-readable countdown using the single largest applicable unit."""
    if expires_at is None:
        return "Never expires"

    diff = as_utc(expires_at) - (now or _utcnow())
    if diff < timedelta(0):
        return "Expired"

    seconds = int(diff.total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24
    months = days // 30
    years = months // 12

    for count, unit in (
        (years, "year"),
        (months, "month"),
        (days, "day"),
        (hours, "hour"),
        (minutes, "minute"),
        (seconds, "second"),
    ):
        if count > 0:
            return _plural(count, unit)
    return "Expires soon"
