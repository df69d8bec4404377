# src/task_board/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The service depends on Protocols instead of concrete implementations.
This keeps the storage engine and the HTTP transport swappable and makes
testing easier.
"""

from typing import Any, Protocol

from ..tasks.task_models import StatsSnapshot, Task, TaskStatus


class TaskRepo(Protocol):
    """Durable task storage. Every call is one atomic statement."""

    def count_tasks(self) -> int: ...
    def add_task(self, *, title: str, priority: Any = ...) -> Task: ...
    def get_task(self, task_id: str) -> Task | None: ...
    def list_tasks(self, *, status: TaskStatus | None = None) -> list[Task]: ...
    def update_task_fields(self, task_id: str, fields: dict[str, Any]) -> Task | None: ...
    def delete_task(self, task_id: str) -> bool: ...

    # Store aggregation: {status: count}
    def count_by_status(self) -> dict[str, int]: ...


class TaskApi(Protocol):
    """
    Client-side port: how the view talks to the server.

    Implementations raise on any non-success outcome (HTTP error status,
    transport failure, timeout). The view does not care which.
    """

    async def list_tasks(self, status: TaskStatus | None = None) -> list[Task]: ...
    async def create_task(self, title: str, priority: str | None = None) -> Task: ...
    async def update_task(self, task_id: str, fields: dict[str, Any]) -> Task: ...
    async def delete_task(self, task_id: str) -> None: ...
    async def get_stats(self) -> StatsSnapshot: ...
    async def get_board(self) -> tuple[list[Task], StatsSnapshot]: ...
