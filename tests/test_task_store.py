# tests/test_task_store.py

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from task_board.tasks.task_models import TaskPriority, TaskStatus
from task_board.tasks.task_store import TaskStore


def test_add_get_update_delete(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")

    task = store.add_task(title="Buy milk")
    assert task.id
    assert task.status is TaskStatus.TODO
    assert task.priority is TaskPriority.LOW
    assert store.get_task(task.id) == task

    updated = store.update_task_fields(task.id, {"status": "DONE", "priority": "HIGH"})
    assert updated is not None
    assert updated.status is TaskStatus.DONE
    assert updated.priority is TaskPriority.HIGH
    assert updated.title == "Buy milk"
    assert updated.created_at == task.created_at

    assert store.delete_task(task.id) is True
    assert store.get_task(task.id) is None
    assert store.delete_task(task.id) is False


def test_list_is_newest_first_and_filters_by_status(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")
    a = store.add_task(title="a")
    b = store.add_task(title="b")
    c = store.add_task(title="c")
    store.update_task_fields(b.id, {"status": "DOING"})

    assert [t.id for t in store.list_tasks()] == [c.id, b.id, a.id]
    assert [t.id for t in store.list_tasks(status=TaskStatus.TODO)] == [c.id, a.id]
    assert [t.id for t in store.list_tasks(status=TaskStatus.DOING)] == [b.id]
    assert store.list_tasks(status=TaskStatus.DONE) == []


def test_count_by_status_only_reports_present_groups(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")
    assert store.count_by_status() == {}

    t1 = store.add_task(title="one")
    store.add_task(title="two")
    store.update_task_fields(t1.id, {"status": "DONE"})

    assert store.count_by_status() == {"TODO": 1, "DONE": 1}
    assert store.count_tasks() == 2


@pytest.mark.parametrize(
    "fields",
    [
        {"status": "ARCHIVED"},
        {"priority": "URGENT"},
        {"status": None},
        {"title": "   "},
    ],
)
def test_constraints_reject_values_outside_the_model(tmp_path: Path, fields) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")
    task = store.add_task(title="guarded")

    with pytest.raises(sqlite3.IntegrityError):
        store.update_task_fields(task.id, fields)

    assert store.get_task(task.id) == task


def test_add_rejects_unknown_priority(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")
    with pytest.raises(sqlite3.IntegrityError):
        store.add_task(title="x", priority="P0")
    assert store.count_tasks() == 0


def test_update_missing_row_returns_none(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")
    assert store.update_task_fields("nope", {"status": "DONE"}) is None


def test_schema_survives_reopen(tmp_path: Path) -> None:
    db = tmp_path / "tasks.sqlite3"
    task = TaskStore(db).add_task(title="persisted", priority=TaskPriority.MEDIUM)

    again = TaskStore(db)
    assert again.get_task(task.id) == task
