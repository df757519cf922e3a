"""JSON file store: loads and saves the whole task collection as one snapshot.

The store is the only component that touches the filesystem. It is read in
full at the start of a command and, for mutating commands, rewritten in full
at the end. There is no locking: two processes writing the same file
concurrently lose updates (last writer wins).
"""

from __future__ import annotations

import json
import shutil
from collections.abc import Iterable, Sequence
from pathlib import Path

from rich.markup import escape

from tasker import log
from tasker.io_utils import PathLike, read_text, replace_text
from tasker.tasks.model import Task
from tasker.tasks.validate import ValidationError


class StoreError(Exception):
    """Raised when the task collection cannot be persisted."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Could not save tasks to {path}: {reason}")
        self.path = path
        self.reason = reason


class JsonTaskStore:
    """Load/save pair over a single JSON file.

    Usage::

        store = JsonTaskStore("tasks.json")
        tasks = store.load_all()        # [] when missing or unreadable
        store.save_all(tasks)           # full overwrite, atomic replace
    """

    def __init__(self, path: PathLike) -> None:
        self.path = path if isinstance(path, Path) else Path(path)
        self.last_id = 0
        self.recovered = False

    # ── load ─────────────────────────────────────────────────────

    def load_all(self) -> list[Task]:
        """Return every stored task in insertion order.

        A missing file is an empty collection. An unreadable or malformed
        file is also treated as empty, with a warning; ``recovered`` is set
        so the next save keeps a copy of the bad file.
        """
        self.last_id = 0
        self.recovered = False

        if not self.path.is_file():
            log.debug(f"No task file at {escape(str(self.path))}; starting empty")
            return []

        try:
            data = json.loads(read_text(self.path))
            records, last_id = self._unwrap(data)
            tasks = [Task.from_dict(r) for r in records]
        except (
            OSError,
            UnicodeDecodeError,
            json.JSONDecodeError,
            RecursionError,
            ValidationError,
        ) as exc:
            log.warn(f"Ignoring unreadable task file {escape(str(self.path))}: {escape(str(exc))}")
            self.recovered = True
            return []

        seen: set[int] = set()
        for task in tasks:
            if task.id in seen:
                log.warn(
                    f"Ignoring unreadable task file {escape(str(self.path))}: duplicate task id {task.id}"
                )
                self.recovered = True
                return []
            seen.add(task.id)

        self.last_id = max([last_id, *seen])
        log.debug(f"Loaded {len(tasks)} task(s) from {escape(str(self.path))}")
        return tasks

    @staticmethod
    def _unwrap(data: object) -> tuple[list[object], int]:
        # Bare list: files written by older versions with no id high-water mark.
        if isinstance(data, list):
            return data, 0
        if isinstance(data, dict) and isinstance(data.get("tasks"), list):
            last_id = data.get("lastId", 0)
            if isinstance(last_id, bool) or not isinstance(last_id, int) or last_id < 0:
                raise ValidationError(f"Invalid lastId: {last_id!r}.")
            return data["tasks"], last_id
        raise ValidationError("Task file must hold a list of tasks.")

    # ── save ─────────────────────────────────────────────────────

    def save_all(self, tasks: Iterable[Task], last_id: int = 0) -> None:
        """Overwrite the file with *tasks*. Raises :class:`StoreError`."""
        ordered: Sequence[Task] = list(tasks)
        high = max([last_id, self.last_id, *(t.id for t in ordered)])
        payload = {
            "lastId": high,
            "tasks": [t.to_dict() for t in ordered],
        }
        text = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"

        try:
            if self.recovered and self.path.is_file():
                backup = self.path.with_name(self.path.name + ".corrupt")
                shutil.copy2(self.path, backup)
                log.warn(f"Kept a copy of the unreadable task file at {escape(str(backup))}")
            replace_text(self.path, text)
        except OSError as exc:
            raise StoreError(self.path, exc.strerror or str(exc)) from exc
        except UnicodeError as exc:
            raise StoreError(self.path, str(exc)) from exc

        self.recovered = False
        self.last_id = high
        log.debug(f"Saved {len(ordered)} task(s) to {escape(str(self.path))}")
