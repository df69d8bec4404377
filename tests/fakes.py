# tests/fakes.py

from __future__ import annotations

import asyncio
import time
import uuid
from dataclasses import replace
from typing import Any

from task_board.client.api_client import ApiError
from task_board.tasks.task_models import StatsSnapshot, Task, TaskPriority, TaskStatus
from task_board.tasks.task_stats import stats_from_tasks


def make_task(
    title: str,
    *,
    status: TaskStatus = TaskStatus.TODO,
    priority: TaskPriority = TaskPriority.LOW,
    created_at: float | None = None,
) -> Task:
    return Task(
        id=uuid.uuid4().hex,
        title=title,
        status=status,
        priority=priority,
        created_at=time.time() if created_at is None else created_at,
    )


class FakeTaskApi:
    """
    In-memory TaskApi used by view tests.

    - `fail`: operation names ("create", "update", "delete", ...) that answer 500
    - `gate`: when set, every call waits on it first, so a test can look at the
      view while a request is still in flight
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self.tasks: list[Task] = list(tasks or [])
        self.fail: set[str] = set()
        self.gate: asyncio.Event | None = None
        self.calls: list[tuple[str, Any]] = []

    async def _enter(self, op: str, arg: Any = None) -> None:
        self.calls.append((op, arg))
        if self.gate is not None:
            await self.gate.wait()
        if op in self.fail:
            raise ApiError(500, "Internal server error.")

    def _index(self, task_id: str) -> int:
        for i, t in enumerate(self.tasks):
            if t.id == task_id:
                return i
        raise ApiError(404, "Task not found.")

    async def list_tasks(self, status: TaskStatus | None = None) -> list[Task]:
        await self._enter("list", status)
        return [t for t in self.tasks if status is None or t.status == status]

    async def create_task(self, title: str, priority: str | None = None) -> Task:
        await self._enter("create", title)
        task = make_task(title, priority=TaskPriority(priority or "LOW"))
        self.tasks.insert(0, task)
        return task

    async def update_task(self, task_id: str, fields: dict[str, Any]) -> Task:
        await self._enter("update", (task_id, fields))
        i = self._index(task_id)
        t = self.tasks[i]
        if "status" in fields:
            t = replace(t, status=TaskStatus(fields["status"]))
        if "priority" in fields:
            t = replace(t, priority=TaskPriority(fields["priority"]))
        if "title" in fields:
            t = replace(t, title=fields["title"].strip())
        self.tasks[i] = t
        return t

    async def delete_task(self, task_id: str) -> None:
        await self._enter("delete", task_id)
        del self.tasks[self._index(task_id)]

    async def get_stats(self) -> StatsSnapshot:
        await self._enter("stats")
        return stats_from_tasks(self.tasks)

    async def get_board(self) -> tuple[list[Task], StatsSnapshot]:
        await self._enter("board")
        return list(self.tasks), stats_from_tasks(self.tasks)
