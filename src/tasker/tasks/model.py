"""Task data model and its persisted record shape."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from tasker.tasks.validate import ValidationError, check_stored_description, check_stored_tags


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, raw: str | Priority | None) -> Priority:
        """Return the matching priority; ``None`` or empty means medium."""
        if isinstance(raw, Priority):
            return raw
        if raw is None or not str(raw).strip():
            return cls.MEDIUM
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            allowed = ", ".join(p.value for p in cls)
            raise ValidationError(
                f"Invalid priority: {raw!r}. Valid priorities: {allowed}."
            ) from None


PRIORITY_CHOICES: tuple[str, ...] = tuple(p.value for p in Priority)


def utc_now() -> datetime:
    """Current UTC time truncated to milliseconds (the persisted precision)."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def format_timestamp(dt: datetime) -> str:
    """Serialize as ``2024-05-01T10:00:00.123Z``."""
    utc = dt.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(raw: object) -> datetime:
    if not isinstance(raw, str) or not raw:
        raise ValidationError(f"Invalid timestamp: {raw!r}.")
    try:
        dt = datetime.fromisoformat(raw)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        # Offsets near datetime.min/max do not fit once shifted to UTC.
        return dt.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        raise ValidationError(f"Invalid timestamp: {raw!r}.") from None


@dataclass(frozen=True)
class Task:
    """One tracked unit of work.

    A task is pending while ``completed_at`` is ``None``; completing it
    produces a new instance carrying the completion time, so ``completed``
    can never disagree with ``completed_at``.
    """

    id: int
    description: str
    created_at: datetime
    priority: Priority = Priority.MEDIUM
    tags: tuple[str, ...] = field(default_factory=tuple)
    completed_at: datetime | None = None

    @property
    def completed(self) -> bool:
        return self.completed_at is not None

    def mark_completed(self, at: datetime) -> Task:
        """Return the completed variant of this task, completed at *at*."""
        if self.completed_at is not None:
            return self
        return replace(self, completed_at=max(at, self.created_at))

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def to_dict(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "id": self.id,
            "description": self.description,
            "completed": self.completed,
            "createdAt": format_timestamp(self.created_at),
        }
        if self.completed_at is not None:
            record["completedAt"] = format_timestamp(self.completed_at)
        record["priority"] = self.priority.value
        record["tags"] = list(self.tags)
        return record

    @classmethod
    def from_dict(cls, record: object) -> Task:
        """Build a task from its persisted record, rejecting malformed ones.

        Description and tags are kept exactly as stored (no trimming), so
        loading and saving a file does not rewrite its records.
        """
        if not isinstance(record, dict):
            raise ValidationError(f"Task record must be an object, got {type(record).__name__}.")

        task_id = record.get("id")
        if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < 1:
            raise ValidationError(f"Invalid task id: {task_id!r}.")

        description = check_stored_description(record.get("description"))

        created_at = parse_timestamp(record.get("createdAt"))

        completed = record.get("completed", False)
        if not isinstance(completed, bool):
            raise ValidationError(f"Task {task_id}: completed must be a boolean.")
        completed_at: datetime | None = None
        if completed:
            completed_at = parse_timestamp(record.get("completedAt"))
            if completed_at < created_at:
                raise ValidationError(f"Task {task_id}: completed before it was created.")

        return cls(
            id=task_id,
            description=description,
            created_at=created_at,
            priority=Priority.parse(record.get("priority")),
            tags=check_stored_tags(record.get("tags")),
            completed_at=completed_at,
        )
