"""Global pytest configuration -- fixed clock + deadline/user factories"""

from datetime import datetime, timedelta, timezone

import pytest
from prazos.core.models import Classification, Deadline, DeadlineStatus, User, UserProfile

# Brasília time, fixed offset so tests do not depend on tzdata
BRT = timezone(timedelta(hours=-3))


@pytest.fixture
def now() -> datetime:
    """Reference instant: 2025-03-10 14:30 BRT"""
    return datetime(2025, 3, 10, 14, 30, tzinfo=BRT)


@pytest.fixture
def make_deadline(now):
    """Deadline factory; due_date defaults to now"""
    counter = {"n": 0}

    def _make(
        id: str | None = None,
        due_date: datetime | None = None,
        status: DeadlineStatus = DeadlineStatus.PENDING,
        classification: Classification = Classification.NORMAL,
        **kwargs,
    ) -> Deadline:
        counter["n"] += 1
        return Deadline(
            id=id or f"d{counter['n']}",
            task_description=kwargs.pop("task_description", f"Tarefa {counter['n']}"),
            due_date=due_date or now,
            status=status,
            classification=classification,
            created_at=kwargs.pop("created_at", now - timedelta(days=30)),
            **kwargs,
        )

    return _make


@pytest.fixture
def admin() -> User:
    return User(id="u-admin", name="Ana Bacelar", email="ana@example.com", profile=UserProfile.ADMIN)


@pytest.fixture
def lawyer() -> User:
    return User(id="u-law", name="Bruno Lima", email="bruno@example.com", profile=UserProfile.LAWYER)
