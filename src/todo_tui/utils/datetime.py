"""Timezone-aware datetime helpers.

Every timestamp stored on a todo item is UTC and timezone-aware so that
items loaded from disk compare cleanly with freshly created ones.
"""

from datetime import datetime, timezone
from typing import Optional


def now_utc() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_aware(dt: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a naive datetime; aware values and None pass through."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def to_iso_string(dt: Optional[datetime]) -> Optional[str]:
    """Serialize a datetime to ISO 8601, or None."""
    if dt is None:
        return None
    return ensure_aware(dt).isoformat()


def parse_iso(value) -> Optional[datetime]:
    """Parse an ISO 8601 string (or pass through a datetime).

    YAML may already hand back a datetime object for timestamp-looking
    values, so both are accepted. Unparseable input yields None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_aware(value)
    try:
        return ensure_aware(datetime.fromisoformat(str(value)))
    except ValueError:
        return None
