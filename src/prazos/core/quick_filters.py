"""Quick filters -- named shortcuts expanded into FilterState patches

resolve_quick_filter() only computes the patch; apply_quick_filter() merges it
into a new snapshot, overwriting just the affected keys.
"""

from datetime import datetime, timedelta

from .config import NEXT_15_DAYS, THIS_WEEK_DAYS
from .models.enums import Classification, QuickFilter
from .models.filters import DAYS_UNTIL_DUE_BUCKETS, OVERDUE_BUCKET, FilterState

# FilterState field -> backend query parameter
QUERY_PARAM_NAMES: dict[str, str] = {
    "search": "q",
    "type": "type",
    "responsible_id": "responsible_id",
    "classification": "classification",
    "status": "status",
    "due_date_from": "due_date_from",
    "due_date_to": "due_date_to",
    "days_until_due": "days_until_due",
    "process_number": "process_number",
    "parties": "parties",
}


def _date_range(now: datetime, days: int) -> dict[str, str]:
    start = now.date()
    return {
        "due_date_from": start.isoformat(),
        "due_date_to": (start + timedelta(days=days)).isoformat(),
    }


def resolve_quick_filter(name: str | QuickFilter, now: datetime) -> dict[str, str]:
    """Expand a quick filter name into the FilterState keys it sets

    Args:
        name: quick filter name (today, thisWeek, next15Days, critical, fatal, overdue)
        now: reference instant

    Returns:
        Patch dict with only the affected FilterState keys

    Raises:
        ValueError: unknown quick filter name
    """
    quick = QuickFilter(name)

    if quick == QuickFilter.TODAY:
        return _date_range(now, 0)
    if quick == QuickFilter.THIS_WEEK:
        return _date_range(now, THIS_WEEK_DAYS)
    if quick == QuickFilter.NEXT_15_DAYS:
        return _date_range(now, NEXT_15_DAYS)
    if quick == QuickFilter.CRITICAL:
        return {"classification": Classification.CRITICAL.value}
    if quick == QuickFilter.FATAL:
        return {"classification": Classification.FATAL.value}
    # overdue: a bucket sentinel rather than a fixed date window
    return {"days_until_due": OVERDUE_BUCKET}


def apply_quick_filter(
    state: FilterState,
    name: str | QuickFilter,
    now: datetime,
) -> FilterState:
    """Return a new FilterState with the quick filter's keys overwritten"""
    return state.model_copy(update=resolve_quick_filter(name, now))


def update_filter(state: FilterState, field: str, value: str) -> FilterState:
    """Return a new FilterState with one field replaced

    Raises:
        ValueError: unknown filter field, or a days_until_due value outside
            DAYS_UNTIL_DUE_BUCKETS
    """
    if field not in FilterState.model_fields:
        raise ValueError(f"Unknown filter field: {field}")
    if field == "days_until_due" and value not in DAYS_UNTIL_DUE_BUCKETS:
        raise ValueError(f"days_until_due must be one of {DAYS_UNTIL_DUE_BUCKETS}, got {value!r}")
    return state.model_copy(update={field: value})


def clear_filters() -> FilterState:
    """Empty filter snapshot"""
    return FilterState()


def to_query_params(state: FilterState) -> dict[str, str]:
    """Map the non-empty filter fields to backend query parameters"""
    return {
        QUERY_PARAM_NAMES[field]: value
        for field, value in state.model_dump().items()
        if value
    }
