"""Configuration constants -- overridable through environment variables

Urgency thresholds and pagination defaults.
"""

import os

# Days-until-due thresholds (inclusive upper bounds)
CRITICAL_WINDOW_DAYS: int = 3
WARNING_WINDOW_DAYS: int = 7
UPCOMING_WINDOW_DAYS: int = 15

# Quick filter windows
THIS_WEEK_DAYS: int = 7
NEXT_15_DAYS: int = 15

# Page sizes offered to the list view
PAGE_SIZE_OPTIONS: tuple[int, ...] = (5, 10, 25, 50)

DEFAULT_PAGE_SIZE: int = int(os.environ.get("PRAZOS_DEFAULT_PAGE_SIZE", "10"))

# Dashboard: how many urgent deadlines to surface, and the "upcoming" window
DASHBOARD_URGENT_LIMIT: int = 5
DASHBOARD_UPCOMING_DAYS: int = 7
