from datetime import date, datetime, time, timezone
from typing import Optional


def to_naive_utc(value: datetime) -> datetime:
    """Aware datetimes are converted to UTC; naive ones are taken as UTC already."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_range_bound(raw: Optional[str], *, end: bool = False) -> Optional[datetime]:
    """
    Parse a ``startDate``/``endDate`` query value.

    Accepts ISO dates (``2025-01-31``) and ISO datetimes. A bare date used as
    an upper bound covers that whole day.

    Raises:
        ValueError: If the value is not ISO formatted.
    """
    if raw is None:
        return None
    raw = raw.strip()
    if not raw:
        return None
    if len(raw) == 10:
        d = date.fromisoformat(raw)
        return datetime.combine(d, time.max if end else time.min)
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    return to_naive_utc(datetime.fromisoformat(raw))
