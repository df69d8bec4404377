# src/task_board/view/board_state.py

"""
Client-side board state.

BoardState is immutable; every transition is a plain function returning a new
state. The controller in task_view.py decides when to call which one.

Two task lists are tracked:
- tasks: what the user sees right now (may include optimistic changes)
- confirmed: the last list the server has vouched for, used for delete rollback
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal, TypeAlias

from ..tasks.task_models import StatsSnapshot, Task, TaskStatus
from ..tasks.task_stats import stats_from_tasks

BoardFilter: TypeAlias = Literal["all"] | TaskStatus

FILTERS: tuple[BoardFilter, ...] = ("all", TaskStatus.TODO, TaskStatus.DOING, TaskStatus.DONE)


@dataclass(frozen=True, slots=True)
class BoardState:
    tasks: tuple[Task, ...] = ()
    confirmed: tuple[Task, ...] = ()
    filter: BoardFilter = "all"


def parse_filter(raw: str) -> BoardFilter | None:
    raw = raw.strip()
    if raw.lower() == "all":
        return "all"
    return TaskStatus.parse(raw.upper())


def find_task(state: BoardState, task_id: str) -> Task | None:
    for t in state.tasks:
        if t.id == task_id:
            return t
    return None


def _replace_by_id(tasks: tuple[Task, ...], task: Task) -> tuple[Task, ...]:
    return tuple(task if t.id == task.id else t for t in tasks)


# ---- transitions ----


def loaded(state: BoardState, tasks: list[Task]) -> BoardState:
    snapshot = tuple(tasks)
    return replace(state, tasks=snapshot, confirmed=snapshot)


def created(state: BoardState, task: Task) -> BoardState:
    """Server-confirmed create: new record goes to the head (newest first)."""
    return replace(state, tasks=(task, *state.tasks), confirmed=(task, *state.confirmed))


def status_changed(state: BoardState, task_id: str, status: TaskStatus) -> BoardState:
    tasks = tuple(replace(t, status=status) if t.id == task_id else t for t in state.tasks)
    return replace(state, tasks=tasks)


def removed(state: BoardState, task_id: str) -> BoardState:
    return replace(state, tasks=tuple(t for t in state.tasks if t.id != task_id))


def confirmed_update(state: BoardState, task: Task) -> BoardState:
    """Server reply for a task wins over whatever is held locally for that id."""
    return replace(
        state,
        tasks=_replace_by_id(state.tasks, task),
        confirmed=_replace_by_id(state.confirmed, task),
    )


def confirmed_removal(state: BoardState, task_id: str) -> BoardState:
    """The server has deleted the task; it goes from both lists, even after a rollback."""
    return replace(
        state,
        tasks=tuple(t for t in state.tasks if t.id != task_id),
        confirmed=tuple(t for t in state.confirmed if t.id != task_id),
    )


def rolled_back(state: BoardState) -> BoardState:
    """Back to the last server-confirmed list."""
    return replace(state, tasks=state.confirmed)


def filter_set(state: BoardState, board_filter: BoardFilter) -> BoardState:
    return replace(state, filter=board_filter)


# ---- derived values ----


def visible_tasks(state: BoardState) -> list[Task]:
    if state.filter == "all":
        return list(state.tasks)
    return [t for t in state.tasks if t.status == state.filter]


def view_metrics(state: BoardState) -> StatsSnapshot:
    return stats_from_tasks(state.tasks)
