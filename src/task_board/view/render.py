# src/task_board/view/render.py

"""Plain-text rendering of the board for the console view."""

from __future__ import annotations

from ..tasks.task_models import Task
from .board_state import FILTERS, BoardFilter, BoardState, view_metrics, visible_tasks

PROGRESS_WIDTH = 40
CYCLE_HINT = "Toggle a task to cycle its status: To do -> In progress -> Done"


def filter_label(board_filter: BoardFilter) -> str:
    return "All" if board_filter == "all" else board_filter.label


def next_status_label(task: Task) -> str:
    return f"Click to change -> {task.status.next().label}"


def progress_bar(pct: int, width: int = PROGRESS_WIDTH) -> str:
    pct = max(0, min(100, pct))
    filled = round(width * pct / 100)
    return "[" + "#" * filled + "-" * (width - filled) + f"] {pct}%"


def _row(n: int, task: Task) -> str:
    title = task.title
    if task.status == "DONE":
        title = f"~{title}~"
    return f"{n:>3}. {title:<40} {task.status.label:<12} {task.priority.label:<7}"


def render_board(state: BoardState) -> str:
    m = view_metrics(state)
    lines = [
        "My Tasks",
        f"{m.done} of {m.total} tasks completed",
        progress_bar(m.completion_rate),
        "",
        f"Total: {m.total}   To do: {m.todo}   In progress: {m.doing}   Done: {m.done}",
        "",
        "  ".join(
            f"[{filter_label(f)}]" if f == state.filter else filter_label(f) for f in FILTERS
        ),
        "",
    ]

    visible = visible_tasks(state)
    if not visible:
        lines.append("No tasks here.")
    else:
        lines.append(f"{'#':>3}  {'Task':<40} {'Status':<12} {'Priority':<7}")
        lines.extend(_row(i, t) for i, t in enumerate(visible, start=1))

    lines.extend(["", CYCLE_HINT])
    return "\n".join(lines)
