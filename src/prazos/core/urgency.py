"""Urgency classification -- deadline + reference instant -> UrgencyDescriptor

Rules are evaluated in strict order and the first match wins:

1. completed / cancelled status -> terminal level, priority 0
2. due before today -> overdue (5)
3. fatal classification or due today -> fatal (4)
4. critical classification or due within 3 days -> critical (3)
5. due within 7 days -> warning (2)
6. due within 15 days -> upcoming (1)
7. otherwise -> normal (0)

A deadline due today is fatal even when its stored classification is normal.
"now" is always injected, never read from a global clock.
"""

from datetime import date, datetime

from .config import CRITICAL_WINDOW_DAYS, UPCOMING_WINDOW_DAYS, WARNING_WINDOW_DAYS
from .models.deadline import Deadline
from .models.enums import (
    TERMINAL_STATUSES,
    URGENCY_PRIORITY,
    Classification,
    DeadlineStatus,
    UrgencyLevel,
)
from .models.urgency import UrgencyDescriptor

# level, label, icon, color for statuses that end the urgency computation
_TERMINAL: dict[DeadlineStatus, tuple[UrgencyLevel, str, str, str]] = {
    DeadlineStatus.COMPLETED: (UrgencyLevel.COMPLETED, "Concluído", "✓", "green"),
    DeadlineStatus.CANCELLED: (UrgencyLevel.CANCELLED, "Cancelado", "✕", "gray"),
}


def local_date(value: datetime, now: datetime) -> date:
    """Truncate a timestamp to the calendar date in now's timezone

    Aware values are converted into now's timezone first (a naive now means
    system local time); naive values are taken as already local.
    """
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(now.tzinfo).date()


def days_until_due(due_date: datetime, now: datetime) -> int:
    """Whole days between today and the due date, both truncated to midnight

    Returns 0 for any time of day today, negative once the date has passed.
    """
    return (local_date(due_date, now) - now.date()).days


def _days_label(days: int) -> str:
    return f"{days} dia{'s' if days > 1 else ''}"


def _descriptor(
    level: UrgencyLevel,
    label: str,
    icon: str,
    color: str,
    should_animate: bool = False,
    days: int | None = None,
) -> UrgencyDescriptor:
    return UrgencyDescriptor(
        level=level,
        label=label,
        priority=URGENCY_PRIORITY[level],
        icon=icon,
        color=color,
        should_animate=should_animate,
        days_until_due=days,
    )


def classify(deadline: Deadline, now: datetime) -> UrgencyDescriptor:
    """Classify a deadline's urgency at a reference instant

    Args:
        deadline: deadline to classify
        now: reference instant

    Returns:
        UrgencyDescriptor, exactly one level
    """
    if deadline.status in TERMINAL_STATUSES:
        return _descriptor(*_TERMINAL[deadline.status])

    days = days_until_due(deadline.due_date, now)

    if days < 0:
        late = abs(days)
        return _descriptor(
            UrgencyLevel.OVERDUE,
            f"Vencido há {_days_label(late)}",
            "⚠️",
            "red",
            should_animate=True,
            days=days,
        )

    if deadline.classification == Classification.FATAL or days == 0:
        return _descriptor(
            UrgencyLevel.FATAL,
            "Vence Hoje!" if days == 0 else "Fatal",
            "🔥",
            "red",
            should_animate=True,
            days=days,
        )

    if deadline.classification == Classification.CRITICAL or days <= CRITICAL_WINDOW_DAYS:
        return _descriptor(
            UrgencyLevel.CRITICAL,
            _days_label(days) if days <= CRITICAL_WINDOW_DAYS else "Crítico",
            "⚡",
            "orange",
            should_animate=days <= 1,
            days=days,
        )

    if days <= WARNING_WINDOW_DAYS:
        return _descriptor(UrgencyLevel.WARNING, f"{days} dias", "⏰", "yellow", days=days)

    if days <= UPCOMING_WINDOW_DAYS:
        return _descriptor(UrgencyLevel.UPCOMING, f"{days} dias", "📅", "blue", days=days)

    return _descriptor(UrgencyLevel.NORMAL, f"{days} dias", "📋", "gray", days=days)


def urgency_rank(deadline: Deadline, now: datetime) -> int:
    """Priority of a deadline at now, usable as a sort key"""
    return classify(deadline, now).priority
