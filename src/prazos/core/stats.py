"""Dashboard statistics -- counters over the loaded deadline collection

Counters follow the dashboard cards: overdue and upcoming compare raw
timestamps against now, not calendar days.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta

from pydantic import BaseModel, Field

from .config import DASHBOARD_UPCOMING_DAYS, DASHBOARD_URGENT_LIMIT
from .models.deadline import Deadline
from .models.enums import TERMINAL_STATUSES, Classification, DeadlineStatus


class DeadlineStats(BaseModel):
    """Dashboard counters"""

    total: int = Field(default=0, ge=0)
    critical: int = Field(default=0, ge=0, description="Pending and tagged critical")
    fatal: int = Field(default=0, ge=0, description="Pending and tagged fatal")
    upcoming: int = Field(default=0, ge=0, description="Pending and due in the next 7 days")
    completed: int = Field(default=0, ge=0)
    pending: int = Field(default=0, ge=0)
    overdue: int = Field(default=0, ge=0, description="Pending and past due")


def _aligned(value: datetime, now: datetime) -> datetime:
    """Make value comparable with now when only one of them is aware"""
    if value.tzinfo is None and now.tzinfo is not None:
        return value.replace(tzinfo=now.tzinfo)
    if value.tzinfo is not None and now.tzinfo is None:
        return value.astimezone().replace(tzinfo=None)
    return value


def summarize(deadlines: Iterable[Deadline], now: datetime) -> DeadlineStats:
    """Compute the dashboard counters at now"""
    horizon = now + timedelta(days=DASHBOARD_UPCOMING_DAYS)
    stats = DeadlineStats()
    counts = stats.model_dump()

    for deadline in deadlines:
        counts["total"] += 1
        if deadline.status in TERMINAL_STATUSES:
            if deadline.status == DeadlineStatus.COMPLETED:
                counts["completed"] += 1
            continue

        counts["pending"] += 1
        if deadline.classification == Classification.CRITICAL:
            counts["critical"] += 1
        elif deadline.classification == Classification.FATAL:
            counts["fatal"] += 1

        due = _aligned(deadline.due_date, now)
        if due < now:
            counts["overdue"] += 1
        elif due <= horizon:
            counts["upcoming"] += 1

    return DeadlineStats(**counts)


def most_urgent(
    deadlines: Iterable[Deadline],
    limit: int = DASHBOARD_URGENT_LIMIT,
) -> list[Deadline]:
    """Pending fatal/critical deadlines, earliest due first"""
    tagged = [
        d
        for d in deadlines
        if d.status == DeadlineStatus.PENDING
        and d.classification in (Classification.FATAL, Classification.CRITICAL)
    ]
    tagged.sort(key=lambda d: d.due_date.timestamp())
    return tagged[:limit]
