"""Read-only filtering over a task sequence."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from tasker.tasks.model import Priority, Task


class CompletionState(str, Enum):
    ANY = "any"
    COMPLETED = "completed"
    PENDING = "pending"


@dataclass(frozen=True)
class TaskFilter:
    """Conjunction of optional predicates; an empty filter matches everything."""

    completion: CompletionState = CompletionState.ANY
    priority: Priority | None = None
    tag: str | None = None

    @classmethod
    def from_flags(
        cls,
        completed: bool = False,
        pending: bool = False,
        priority: str | Priority | None = None,
        tag: str | None = None,
    ) -> TaskFilter:
        """Build a filter from ``list`` command flags.

        ``completed`` takes precedence when both state flags are given.
        """
        if completed:
            state = CompletionState.COMPLETED
        elif pending:
            state = CompletionState.PENDING
        else:
            state = CompletionState.ANY
        return cls(
            completion=state,
            priority=Priority.parse(priority) if priority else None,
            tag=tag or None,
        )

    def matches(self, task: Task) -> bool:
        if self.completion is CompletionState.COMPLETED and not task.completed:
            return False
        if self.completion is CompletionState.PENDING and task.completed:
            return False
        if self.priority is not None and task.priority is not self.priority:
            return False
        if self.tag is not None and not task.has_tag(self.tag):
            return False
        return True


def filter_tasks(tasks: Iterable[Task], spec: TaskFilter | None = None) -> list[Task]:
    """Return the tasks matching *spec*, in input order."""
    if spec is None:
        return list(tasks)
    return [t for t in tasks if spec.matches(t)]
