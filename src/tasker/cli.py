"""tasker CLI: add, list, complete, delete and summarize tasks.

Installed as ``tasker`` console_script via pipx / pip.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import click
from rich.markup import escape

from tasker import __version__
from tasker.config import Config, STORE_FILE_ENV
from tasker.tasks.model import PRIORITY_CHOICES

if TYPE_CHECKING:
    from tasker.tasks.repository import TaskRepository


# ── Custom Click group that handles single-dash aliases ──────────────

class TaskerGroup(click.Group):
    """Handle ``-help``, ``-version`` and ``-pr`` single-dash aliases."""

    _ALIASES: dict[str, str] = {
        "-help": "--help",
        "-version": "--version",
        "-pr": "--priority",
    }

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        """Rewrite aliases before Click parses them.

        Tokens after a bare ``--`` are values, never options, and pass through.
        """
        end = args.index("--") if "--" in args else len(args)
        rewritten = [self._ALIASES.get(a, a) for a in args[:end]] + list(args[end:])
        return super().parse_args(ctx, rewritten)


CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


def _open_repository(cfg: Config) -> TaskRepository:
    from tasker.tasks.repository import TaskRepository
    from tasker.tasks.store import JsonTaskStore

    return TaskRepository(JsonTaskStore(cfg.store_path))


def _save_or_exit(repo: TaskRepository) -> None:
    """Persist *repo*; a failed write is the one fault that exits non-zero."""
    from tasker import log as tlog
    from tasker.tasks.store import StoreError

    try:
        repo.save()
    except StoreError as exc:
        tlog.error(escape(str(exc)))
        sys.exit(1)


def _priority_option(*names: str) -> Callable[[Any], Any]:
    return click.option(
        *names,
        "priority",
        type=click.Choice(PRIORITY_CHOICES, case_sensitive=False),
        default=None,
        help="Task priority (low, medium, high)",
    )


@click.group(cls=TaskerGroup, context_settings=CONTEXT_SETTINGS)
@click.option(
    "-f",
    "--file",
    "store_file",
    default="",
    help=f"Task file (default: ${STORE_FILE_ENV} or ./tasks.json)",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug output")
@click.version_option(__version__, prog_name="tasker")
@click.pass_context
def main(ctx: click.Context, store_file: str, verbose: bool) -> None:
    """tasker: a local command-line task tracker.

    Tasks live in a single JSON file that is read in full on every command
    and rewritten in full after every change.

    \b
    EXAMPLES:
      tasker add "Buy milk" -p low -t errand,home
      tasker list --pending --tag errand
      tasker done 1
      tasker delete 2
      tasker stats
    """
    from tasker import log as tlog

    tlog.set_verbose(verbose)
    ctx.obj = Config(store_file=store_file, verbose=verbose)
    tlog.debug(f"Task file: {escape(str(ctx.obj.store_path))}")


# ── Subcommand: add ──────────────────────────────────────────────


@main.command()
@click.argument("description")
@_priority_option("-p", "--priority")
@click.option("-t", "--tags", default=None, help="Comma-separated tags for the task")
@click.pass_obj
def add(cfg: Config, description: str, priority: str | None, tags: str | None) -> None:
    """Add a new task."""
    from tasker.display import show_added
    from tasker.tasks.validate import ValidationError

    repo = _open_repository(cfg)
    try:
        task = repo.add(description, priority=priority, tags=tags)
    except ValidationError as exc:
        raise click.BadParameter(str(exc)) from exc

    _save_or_exit(repo)
    show_added(task)


# ── Subcommand: list ─────────────────────────────────────────────


@main.command(name="list")
@click.option("-c", "--completed", is_flag=True, help="Show only completed tasks")
@click.option("-p", "--pending", is_flag=True, help="Show only pending tasks")
@_priority_option("--priority")
@click.option("-t", "--tag", default=None, help="Filter by tag")
@click.pass_obj
def list_tasks(
    cfg: Config,
    completed: bool,
    pending: bool,
    priority: str | None,
    tag: str | None,
) -> None:
    """List tasks, optionally filtered."""
    from tasker.display import show_tasks
    from tasker.tasks.query import TaskFilter, filter_tasks

    repo = _open_repository(cfg)
    spec = TaskFilter.from_flags(
        completed=completed, pending=pending, priority=priority, tag=tag
    )
    show_tasks(filter_tasks(repo.all(), spec))


# ── Subcommand: done ─────────────────────────────────────────────


@main.command()
@click.argument("task_id", metavar="ID", type=click.IntRange(min=1))
@click.pass_obj
def done(cfg: Config, task_id: int) -> None:
    """Mark a task as completed."""
    from tasker import log as tlog
    from tasker.tasks.repository import CompleteOutcome

    repo = _open_repository(cfg)
    outcome = repo.complete(task_id)

    match outcome:
        case CompleteOutcome.NOT_FOUND:
            tlog.warn(f"Task {task_id} not found.")
        case CompleteOutcome.ALREADY_COMPLETED:
            tlog.info(f"Task {task_id} is already completed.")
        case CompleteOutcome.COMPLETED:
            _save_or_exit(repo)
            tlog.success(f"Task {task_id} marked as completed.")


# ── Subcommand: delete ───────────────────────────────────────────


@main.command()
@click.argument("task_id", metavar="ID", type=click.IntRange(min=1))
@click.pass_obj
def delete(cfg: Config, task_id: int) -> None:
    """Delete a task."""
    from tasker import log as tlog

    repo = _open_repository(cfg)
    removed = repo.delete(task_id)
    if removed is None:
        tlog.warn(f"Task {task_id} not found.")
        return

    _save_or_exit(repo)
    tlog.success(f'Task {task_id} "{escape(removed.description)}" deleted.')


# ── Subcommand: stats ────────────────────────────────────────────


@main.command()
@click.pass_obj
def stats(cfg: Config) -> None:
    """Show task statistics."""
    from tasker.display import show_stats
    from tasker.tasks.stats import compute_stats

    repo = _open_repository(cfg)
    show_stats(compute_stats(repo.all()))
