# src/task_board/tasks/task_stats.py

"""
Completion statistics.

Two entry points share the same arithmetic:
- stats_from_counts(): server side, fed by the store's grouped count
- stats_from_tasks(): client side, recomputed from whatever list the view holds
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping

from .task_models import StatsSnapshot, Task, TaskStatus


def completion_rate(done: int, total: int) -> int:
    """Percentage of done tasks, rounded half-up; 0 for an empty board."""
    if total <= 0:
        return 0
    return int(math.floor(done / total * 100 + 0.5))


def stats_from_counts(counts: Mapping[str, int]) -> StatsSnapshot:
    # Groups with no tasks are simply absent from the aggregation.
    todo = int(counts.get(TaskStatus.TODO.value, 0))
    doing = int(counts.get(TaskStatus.DOING.value, 0))
    done = int(counts.get(TaskStatus.DONE.value, 0))
    total = todo + doing + done
    return StatsSnapshot(
        total=total,
        todo=todo,
        doing=doing,
        done=done,
        completion_rate=completion_rate(done, total),
    )


def stats_from_tasks(tasks: Iterable[Task]) -> StatsSnapshot:
    counts: dict[str, int] = {}
    for t in tasks:
        counts[t.status.value] = counts.get(t.status.value, 0) + 1
    return stats_from_counts(counts)
