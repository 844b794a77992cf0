"""Validation of the RFC 3339 timestamps stored on blocks and pauses.

Stored values are plain text and compared lexically by the range queries, so
only the strict interchange form is accepted: a ``T`` separator, seconds, an
optional fraction and a mandatory zone designator (``Z`` or ``+HH:MM``).
"""

import re
from datetime import datetime
from typing import Optional

_RFC3339 = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})T"
    r"(?P<time>\d{2}:\d{2}:\d{2})(?:\.\d+)?"
    r"(?P<zone>Z|[+-]\d{2}:\d{2})$"
)


def is_valid_rfc3339(value: Optional[str]) -> bool:
    if not value:
        return False
    match = _RFC3339.match(value)
    if match is None:
        return False
    zone = match.group("zone")
    if zone == "Z":
        zone = "+00:00"
    try:
        parsed = datetime.fromisoformat(f"{match.group('date')}T{match.group('time')}{zone}")
    except ValueError:
        return False
    return parsed.tzinfo is not None and int(zone[-2:]) < 60


def normalize_optional(value: Optional[str]) -> Optional[str]:
    """Map an empty timestamp to ``None`` and validate anything else."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError("invalid datetime found")
    value = value.strip()
    if not value:
        return None
    if not is_valid_rfc3339(value):
        raise ValueError("invalid datetime found")
    return value


__all__ = ["is_valid_rfc3339", "normalize_optional"]
