"""Time and datetime utilities for the clinic calendar."""

from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo

from clinic.core.config import settings


def utc_now() -> datetime:
    """Get current UTC datetime.

    Returns:
        Current datetime in UTC timezone
    """
    return datetime.now(timezone.utc)


def clinic_tz() -> tzinfo:
    """Return the timezone the clinic calendar runs in."""
    if settings.clinic_timezone.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(settings.clinic_timezone)


def clinic_now() -> datetime:
    """Current clinic wall-clock time, without tzinfo."""
    return datetime.now(clinic_tz()).replace(tzinfo=None)


def to_clinic_time(dt: datetime) -> datetime:
    """Normalise a datetime to clinic wall-clock time without tzinfo.

    Naive datetimes are taken to be clinic local time already.
    """
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(clinic_tz()).replace(tzinfo=None)
