"""Prazos Core Domain Models -- public type exports

All public model types are imported from here.
"""

from .deadline import (
    ActingUser,
    AttachmentRef,
    Deadline,
    DeadlineCreate,
    DeadlineUpdate,
    HistoryItem,
    ResponsibleRef,
)
from .enums import (
    TERMINAL_STATUSES,
    URGENCY_PRIORITY,
    Classification,
    DeadlineStatus,
    ErrorKind,
    IndicatorSize,
    QuickFilter,
    RenderVariant,
    SortDirection,
    SortField,
    UrgencyLevel,
    UserProfile,
)
from .filters import DAYS_UNTIL_DUE_BUCKETS, OVERDUE_BUCKET, FilterState
from .urgency import UrgencyDescriptor
from .user import User

__all__ = [
    # Enums
    "DeadlineStatus",
    "Classification",
    "UserProfile",
    "UrgencyLevel",
    "QuickFilter",
    "SortField",
    "SortDirection",
    "RenderVariant",
    "IndicatorSize",
    "ErrorKind",
    "TERMINAL_STATUSES",
    "URGENCY_PRIORITY",
    # Deadline
    "Deadline",
    "DeadlineCreate",
    "DeadlineUpdate",
    "HistoryItem",
    "ActingUser",
    "ResponsibleRef",
    "AttachmentRef",
    # User
    "User",
    # Filters
    "FilterState",
    "OVERDUE_BUCKET",
    "DAYS_UNTIL_DUE_BUCKETS",
    # Urgency
    "UrgencyDescriptor",
]
