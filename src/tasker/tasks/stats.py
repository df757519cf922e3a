"""Counts and group-by breakdowns over a task sequence."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from tasker.tasks.model import Priority, Task


@dataclass(frozen=True)
class TaskStats:
    total: int = 0
    completed: int = 0
    pending: int = 0
    completion_rate: int = 0
    by_priority: dict[Priority, int] = field(default_factory=dict)
    by_tag: dict[str, int] = field(default_factory=dict)


def completion_rate(completed: int, total: int) -> int:
    """Percentage of completed tasks, rounded half up; 0 for no tasks."""
    if total <= 0:
        return 0
    return (completed * 200 + total) // (2 * total)


def compute_stats(tasks: Iterable[Task]) -> TaskStats:
    """Aggregate *tasks*.

    Breakdown keys appear in first-seen order. Tags are counted per
    occurrence, so a task listing the same tag twice counts twice.
    """
    total = 0
    completed = 0
    by_priority: dict[Priority, int] = {}
    by_tag: dict[str, int] = {}

    for task in tasks:
        total += 1
        if task.completed:
            completed += 1
        by_priority[task.priority] = by_priority.get(task.priority, 0) + 1
        for tag in task.tags:
            by_tag[tag] = by_tag.get(tag, 0) + 1

    return TaskStats(
        total=total,
        completed=completed,
        pending=total - completed,
        completion_rate=completion_rate(completed, total),
        by_priority=by_priority,
        by_tag=by_tag,
    )
