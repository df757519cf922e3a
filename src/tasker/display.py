"""Console rendering for task lists, confirmations and statistics."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from rich.markup import escape

from tasker import log
from tasker.tasks.model import Priority, Task
from tasker.tasks.stats import TaskStats

_RULE = "─"

_PRIORITY_STYLE: dict[Priority, str] = {
    Priority.LOW: "dim",
    Priority.MEDIUM: "yellow",
    Priority.HIGH: "bold red",
}


def format_local(dt: datetime) -> str:
    """Render a timestamp in the local timezone."""
    return dt.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _tag_suffix(task: Task) -> str:
    if not task.tags:
        return ""
    return " " + " ".join(f"[cyan]#{escape(t)}[/cyan]" for t in task.tags)


def show_tasks(tasks: Sequence[Task]) -> None:
    if not tasks:
        log.console.print("No tasks available.")
        return

    log.console.print("")
    log.console.print("[bold]Task List:[/bold]")
    log.console.print(_RULE * 80)

    for task in tasks:
        status = "[green]✔[/green]" if task.completed else "[yellow]…[/yellow]"
        style = _PRIORITY_STYLE[task.priority]
        priority = f" [{style}]\\[{task.priority.value.upper()}][/{style}]"
        log.console.print(
            f"{status} {task.id}. {escape(task.description)}{priority}{_tag_suffix(task)}"
        )
        log.console.print(f"   [dim]Created: {format_local(task.created_at)}[/dim]")
        if task.completed_at is not None:
            log.console.print(f"   [dim]Completed: {format_local(task.completed_at)}[/dim]")
        log.console.print("")


def show_added(task: Task) -> None:
    log.success(f'Task "{escape(task.description)}" added.')
    log.console.print(f"   ID: {task.id}, Priority: {task.priority.value}")
    if task.tags:
        log.console.print(f"   Tags: {escape(', '.join(task.tags))}")


def show_stats(stats: TaskStats) -> None:
    log.console.print("")
    log.console.print("[bold]Task Statistics:[/bold]")
    log.console.print(_RULE * 40)
    log.console.print(f"Total Tasks: {stats.total}")
    log.console.print(f"Completed: {stats.completed}")
    log.console.print(f"Pending: {stats.pending}")
    log.console.print(f"Completion Rate: {stats.completion_rate}%")

    log.console.print("")
    log.console.print("[bold]Priority Breakdown:[/bold]")
    for priority, count in stats.by_priority.items():
        log.console.print(f"  {priority.value}: {count}")

    if stats.by_tag:
        log.console.print("")
        log.console.print("[bold]Tag Breakdown:[/bold]")
        for tag, count in stats.by_tag.items():
            log.console.print(f"  #{escape(tag)}: {count}")
