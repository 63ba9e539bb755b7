"""Enumerations -- deadline lifecycle, classification, urgency and UI keys

Member names are English; values are the wire strings used by the backend.
Also holds TERMINAL_STATUSES and the urgency level ordering.
"""

from enum import StrEnum


class DeadlineStatus(StrEnum):
    """Deadline lifecycle state"""

    PENDING = "pendente"
    COMPLETED = "concluido"
    CANCELLED = "cancelado"


# Terminal states never produce a computed urgency
TERMINAL_STATUSES: frozenset[DeadlineStatus] = frozenset(
    {DeadlineStatus.COMPLETED, DeadlineStatus.CANCELLED}
)


class Classification(StrEnum):
    """Stored editorial severity tag"""

    NORMAL = "normal"
    CRITICAL = "critico"
    FATAL = "fatal"


class UserProfile(StrEnum):
    """User role"""

    ADMIN = "admin"
    LAWYER = "advogado"
    INTERN = "estagiario"


class UrgencyLevel(StrEnum):
    """Computed urgency level"""

    COMPLETED = "completed"
    CANCELLED = "cancelled"
    OVERDUE = "overdue"
    FATAL = "fatal"
    CRITICAL = "critical"
    WARNING = "warning"
    UPCOMING = "upcoming"
    NORMAL = "normal"


# Priority per level; terminal levels and normal share the bottom rank
URGENCY_PRIORITY: dict[UrgencyLevel, int] = {
    UrgencyLevel.COMPLETED: 0,
    UrgencyLevel.CANCELLED: 0,
    UrgencyLevel.NORMAL: 0,
    UrgencyLevel.UPCOMING: 1,
    UrgencyLevel.WARNING: 2,
    UrgencyLevel.CRITICAL: 3,
    UrgencyLevel.FATAL: 4,
    UrgencyLevel.OVERDUE: 5,
}


class QuickFilter(StrEnum):
    """Named quick filter shortcuts"""

    TODAY = "today"
    THIS_WEEK = "thisWeek"
    NEXT_15_DAYS = "next15Days"
    CRITICAL = "critical"
    FATAL = "fatal"
    OVERDUE = "overdue"


class SortField(StrEnum):
    """Sortable deadline columns"""

    DUE_DATE = "due_date"
    TASK_DESCRIPTION = "task_description"
    PROCESS_NUMBER = "process_number"
    TYPE = "type"
    STATUS = "status"
    CLASSIFICATION = "classification"


class SortDirection(StrEnum):
    """Sort direction"""

    ASC = "asc"
    DESC = "desc"


class RenderVariant(StrEnum):
    """Urgency indicator render variant"""

    BADGE = "badge"
    DOT = "dot"
    BAR = "bar"
    CARD = "card"


class IndicatorSize(StrEnum):
    """Urgency indicator size"""

    SM = "sm"
    MD = "md"
    LG = "lg"


class ErrorKind(StrEnum):
    """Failure category seen above the HTTP boundary"""

    VALIDATION = "validation"
    NETWORK = "network"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
