"""CLI entry point -- python -m prazos.client <command>

Commands:
  login <email> <password>   store an access token (needs PRAZOS_SESSION_FILE)
  list [quick-filter]        list deadlines with their urgency, most urgent first
  stats                      dashboard counters
  logout                     forget the stored token
"""

import asyncio
import sys
from datetime import datetime

from prazos.core.models.enums import QuickFilter
from prazos.core.models.filters import FilterState
from prazos.core.quick_filters import apply_quick_filter
from prazos.core.stats import summarize
from prazos.core.urgency import classify

from .api import DeadlineApiClient
from .config import ClientConfig, load_client_config
from .exceptions import ApiError
from .logging_config import setup_logging
from .session import FileTokenStore, MemoryTokenStore, Session

USAGE = """usage: python -m prazos.client <command>
commands:
  login <email> <password>
  list [today|thisWeek|next15Days|critical|fatal|overdue]
  stats
  logout"""


def _session(config: ClientConfig) -> Session:
    store = FileTokenStore(config.session_file) if config.session_file else MemoryTokenStore()
    return Session.load(store)


async def cmd_login(config: ClientConfig, email: str, password: str) -> int:
    session = _session(config)
    async with DeadlineApiClient(config, session) as api:
        user = await session.login(api, email, password)
    print(f"Logged in as {user.name if user else email}")
    return 0


async def cmd_list(config: ClientConfig, quick: str | None) -> int:
    now = datetime.now().astimezone()
    filters = FilterState()
    if quick:
        filters = apply_quick_filter(filters, QuickFilter(quick), now)

    session = _session(config)
    async with DeadlineApiClient(config, session) as api:
        deadlines = await api.list_deadlines(filters)

    rows = [(classify(d, now), d) for d in deadlines]
    rows.sort(key=lambda row: (-row[0].priority, row[1].due_date.timestamp()))
    for urgency, deadline in rows:
        print(
            f"{urgency.icon} {urgency.label:<20} "
            f"{deadline.due_date:%d/%m/%Y %H:%M}  "
            f"{deadline.process_number or 'N/A':<28} {deadline.task_description}"
        )
    print(f"{len(rows)} prazo(s)")
    return 0


async def cmd_stats(config: ClientConfig) -> int:
    now = datetime.now().astimezone()
    session = _session(config)
    async with DeadlineApiClient(config, session) as api:
        deadlines = await api.list_deadlines()
    for name, value in summarize(deadlines, now).model_dump().items():
        print(f"{name:<10} {value}")
    return 0


def main() -> None:
    """CLI main entry"""
    args = sys.argv[1:]
    if not args:
        print(USAGE)
        sys.exit(1)

    config = load_client_config()
    setup_logging(config)
    command = args[0]

    if command == "login" and len(args) == 3:
        coro = cmd_login(config, args[1], args[2])
    elif command == "list" and len(args) <= 2:
        quick = args[1] if len(args) == 2 else None
        if quick is not None and quick not in {q.value for q in QuickFilter}:
            print(f"Unknown quick filter: {quick}")
            sys.exit(1)
        coro = cmd_list(config, quick)
    elif command == "stats":
        coro = cmd_stats(config)
    elif command == "logout":
        _session(config).clear()
        print("Session cleared")
        sys.exit(0)
    else:
        print(f"Unknown command: {' '.join(args)}")
        print(USAGE)
        sys.exit(1)

    try:
        sys.exit(asyncio.run(coro))
    except ApiError as e:
        print(f"Error ({e.kind}): {e}")
        sys.exit(2)


if __name__ == "__main__":
    main()
