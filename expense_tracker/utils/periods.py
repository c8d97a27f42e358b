from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone
from typing import Optional

VALID_PERIODS = (
    "today",
    "yesterday",
    "thisWeek",
    "thisMonth",
    "lastMonth",
    "last30Days",
    "last90Days",
    "thisYear",
)

INVALID_PERIOD_MESSAGE = f"Invalid period. Valid options: {', '.join(VALID_PERIODS)}"


@dataclass(frozen=True)
class DateWindow:
    period: str
    start: datetime
    end: datetime


def _end_of_day(d: datetime) -> datetime:
    return datetime.combine(d.date(), time.max)


def resolve_period(period: str, *, now: Optional[datetime] = None) -> Optional[DateWindow]:
    """Resolve a named relative window; ``None`` for unknown names. Weeks start on Sunday."""
    now = now or datetime.now(timezone.utc).replace(tzinfo=None)
    today = datetime.combine(now.date(), time.min)

    if period == "today":
        return DateWindow(period, today, _end_of_day(today))
    if period == "yesterday":
        yesterday = today - timedelta(days=1)
        return DateWindow(period, yesterday, _end_of_day(yesterday))
    if period == "thisWeek":
        # weekday(): Monday=0 .. Sunday=6
        days_since_sunday = (today.weekday() + 1) % 7
        return DateWindow(period, today - timedelta(days=days_since_sunday), now)
    if period == "thisMonth":
        return DateWindow(period, today.replace(day=1), now)
    if period == "lastMonth":
        first_this = today.replace(day=1)
        last_month_end = first_this - timedelta(days=1)
        return DateWindow(period, last_month_end.replace(day=1), _end_of_day(last_month_end))
    if period == "last30Days":
        return DateWindow(period, today - timedelta(days=30), now)
    if period == "last90Days":
        return DateWindow(period, today - timedelta(days=90), now)
    if period == "thisYear":
        return DateWindow(period, today.replace(month=1, day=1), now)
    return None
