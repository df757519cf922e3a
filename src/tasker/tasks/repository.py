"""In-memory task repository backed by a load/save store."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from datetime import datetime
from enum import Enum
from typing import Protocol

from rich.markup import escape

from tasker import log
from tasker.tasks.model import Priority, Task, utc_now
from tasker.tasks.validate import parse_tags, validate_description


class TaskStore(Protocol):
    last_id: int

    def load_all(self) -> list[Task]: ...

    def save_all(self, tasks: Iterable[Task], last_id: int = 0) -> None: ...


class CompleteOutcome(str, Enum):
    COMPLETED = "completed"
    NOT_FOUND = "not-found"
    ALREADY_COMPLETED = "already-completed"


class TaskRepository:
    """Owns the task collection for one command invocation.

    Usage::

        repo = TaskRepository(JsonTaskStore(path))
        task = repo.add("Buy milk", priority="low", tags="errand,home")
        repo.complete(task.id)          # CompleteOutcome
        repo.delete(task.id)            # removed Task or None
        repo.save()                     # writes only if something changed

    Ids are assigned here, never by the caller, and are never reused: the
    next id is one past the highest id ever assigned, including ids of
    tasks that have since been deleted.
    """

    def __init__(
        self,
        store: TaskStore,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._clock = clock
        self._tasks: list[Task] = store.load_all()
        self._last_id = max([store.last_id, *(t.id for t in self._tasks)])
        self._dirty = False

    # ── queries ──────────────────────────────────────────────────

    @property
    def dirty(self) -> bool:
        return self._dirty

    def all(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def find_by_id(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def __len__(self) -> int:
        return len(self._tasks)

    # ── mutations ────────────────────────────────────────────────

    def add(
        self,
        description: str,
        priority: str | Priority | None = None,
        tags: str | Sequence[str] | None = None,
    ) -> Task:
        """Append a new pending task and return it."""
        # Validate everything before touching the collection.
        text = validate_description(description)
        prio = Priority.parse(priority)
        tag_list = parse_tags(tags)

        task = Task(
            id=self._last_id + 1,
            description=text,
            created_at=self._clock(),
            priority=prio,
            tags=tag_list,
        )
        self._tasks.append(task)
        self._last_id = task.id
        self._dirty = True
        log.debug(f"Added task {task.id} priority={prio.value} tags={escape(','.join(tag_list))}")
        return task

    def complete(self, task_id: int) -> CompleteOutcome:
        for i, task in enumerate(self._tasks):
            if task.id != task_id:
                continue
            if task.completed:
                return CompleteOutcome.ALREADY_COMPLETED
            self._tasks[i] = task.mark_completed(self._clock())
            self._dirty = True
            log.debug(f"Completed task {task_id}")
            return CompleteOutcome.COMPLETED
        return CompleteOutcome.NOT_FOUND

    def delete(self, task_id: int) -> Task | None:
        """Remove the task with *task_id* and return it, or ``None``."""
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                del self._tasks[i]
                self._dirty = True
                log.debug(f"Deleted task {task_id}")
                return task
        return None

    # ── persistence ──────────────────────────────────────────────

    def save(self) -> bool:
        """Persist the collection if it changed. Returns ``True`` if written.

        Raises :class:`~tasker.tasks.store.StoreError` when the write fails;
        the dirty flag is left set in that case.
        """
        if not self._dirty:
            return False
        self._store.save_all(self._tasks, last_id=self._last_id)
        self._dirty = False
        return True
