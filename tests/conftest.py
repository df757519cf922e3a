"""Shared fixtures for tasker tests.

File handling in tests:
- Use tmp_path for any task file so tests are isolated and cleaned up.
- Use tasker.io_utils read_text/write_text for consistent UTF-8 I/O.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from tasker import log
from tasker.tasks.model import Priority, Task
from tasker.tasks.store import JsonTaskStore

T0 = datetime(2024, 5, 1, 9, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Deterministic clock: each call returns the current time, then advances."""

    def __init__(self, start: datetime = T0, step: timedelta = timedelta(minutes=1)) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + self.step
        return current


def _make_task(
    id: int,
    description: str = "",
    priority: Priority | str = Priority.MEDIUM,
    tags: list[str] | None = None,
    completed: bool = False,
    created_at: datetime = T0,
) -> Task:
    return Task(
        id=id,
        description=description or f"Task {id}",
        created_at=created_at,
        priority=Priority.parse(priority),
        tags=tuple(tags or []),
        completed_at=created_at + timedelta(hours=1) if completed else None,
    )


@pytest.fixture(autouse=True)
def _quiet_log():
    """Reset verbose logging between tests."""
    log.set_verbose(False)
    yield
    log.set_verbose(False)


@pytest.fixture
def make_task():
    """Factory fixture that creates Task instances."""
    return _make_task


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "tasks.json"


@pytest.fixture
def store(store_path: Path) -> JsonTaskStore:
    return JsonTaskStore(store_path)
