from datetime import datetime
from zoneinfo import ZoneInfo

from app.core.config import get_settings

LOCAL_TZ = ZoneInfo(get_settings().timezone)


def now_local() -> datetime:
    return datetime.now(tz=LOCAL_TZ)


def now_iso() -> str:
    """Current local time as an RFC 3339 string with second precision."""
    return now_local().isoformat(timespec="seconds")


__all__ = ["LOCAL_TZ", "now_local", "now_iso"]
