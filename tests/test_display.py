"""Tests for console rendering in display.py."""

from __future__ import annotations

from datetime import datetime, timezone

from tasker.display import format_local, show_added, show_stats, show_tasks
from tasker.tasks.model import Priority
from tasker.tasks.stats import TaskStats, compute_stats


class TestShowTasks:

    def test_empty(self, capsys):
        show_tasks([])
        assert capsys.readouterr().out.strip() == "No tasks available."

    def test_pending_task_line(self, make_task, capsys):
        show_tasks([make_task(1, "Buy milk", priority="low", tags=["errand", "home"])])
        out = capsys.readouterr().out
        assert "1. Buy milk [LOW] #errand #home" in out
        assert "Created:" in out
        assert "Completed:" not in out

    def test_completed_task_shows_completion(self, make_task, capsys):
        show_tasks([make_task(2, "Ship", completed=True)])
        out = capsys.readouterr().out
        assert "2. Ship [MEDIUM]" in out
        assert "Completed:" in out

    def test_markup_in_text_is_escaped(self, make_task, capsys):
        show_tasks([make_task(1, "[red]x[/red]", tags=["[b]"])])
        out = capsys.readouterr().out
        assert "[red]x[/red]" in out
        assert "#[b]" in out


class TestShowAdded:

    def test_with_tags(self, make_task, capsys):
        show_added(make_task(4, "Call mom", priority="high", tags=["family"]))
        out = capsys.readouterr().out
        assert 'Task "Call mom" added.' in out
        assert "ID: 4, Priority: high" in out
        assert "Tags: family" in out

    def test_without_tags(self, make_task, capsys):
        show_added(make_task(4, "Call mom"))
        assert "Tags:" not in capsys.readouterr().out


class TestShowStats:

    def test_empty_stats(self, capsys):
        show_stats(TaskStats())
        out = capsys.readouterr().out
        assert "Total Tasks: 0" in out
        assert "Completion Rate: 0%" in out
        assert "Priority Breakdown:" in out
        assert "Tag Breakdown:" not in out

    def test_breakdowns_in_first_seen_order(self, make_task, capsys):
        stats = compute_stats([
            make_task(1, priority="low", tags=["z"]),
            make_task(2, priority="high", tags=["a", "z"], completed=True),
        ])
        show_stats(stats)
        out = capsys.readouterr().out
        assert "Completed: 1" in out
        assert "Pending: 1" in out
        assert "Completion Rate: 50%" in out
        assert out.index("low: 1") < out.index("high: 1")
        assert out.index("#z: 2") < out.index("#a: 1")

    def test_priority_values_not_enum_names(self, capsys):
        show_stats(TaskStats(total=1, pending=1, by_priority={Priority.HIGH: 1}))
        out = capsys.readouterr().out
        assert "high: 1" in out
        assert "Priority.HIGH" not in out


def test_format_local_is_readable():
    text = format_local(datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc))
    assert len(text) == len("2024-05-01 09:00:00")
    assert text.startswith("2024-")
