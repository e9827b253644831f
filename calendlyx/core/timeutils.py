from datetime import datetime
from zoneinfo import ZoneInfo

from calendlyx.core.config import settings


def local_zone() -> ZoneInfo:
    return ZoneInfo(settings.timezone)


def local_now() -> datetime:
    """Current wall-clock time in the configured zone, without tzinfo."""
    return datetime.now(local_zone()).replace(tzinfo=None)


def to_local_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(local_zone()).replace(tzinfo=None)
