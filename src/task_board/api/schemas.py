# src/task_board/api/schemas.py

"""Wire shapes for the JSON API."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from ..tasks.task_models import StatsSnapshot, Task, TaskPriority, TaskStatus


class TaskOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    status: TaskStatus
    priority: TaskPriority
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_task(cls, task: Task) -> TaskOut:
        return cls(
            id=task.id,
            title=task.title,
            status=task.status,
            priority=task.priority,
            created_at=datetime.fromtimestamp(task.created_at, tz=timezone.utc),
        )

    def to_task(self) -> Task:
        return Task(
            id=self.id,
            title=self.title,
            status=self.status,
            priority=self.priority,
            created_at=self.created_at.timestamp(),
        )


class StatsOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    todo: int
    doing: int
    done: int
    completion_rate: int = Field(alias="completionRate")

    @classmethod
    def from_snapshot(cls, snap: StatsSnapshot) -> StatsOut:
        return cls(
            total=snap.total,
            todo=snap.todo,
            doing=snap.doing,
            done=snap.done,
            completion_rate=snap.completion_rate,
        )

    def to_snapshot(self) -> StatsSnapshot:
        return StatsSnapshot(
            total=self.total,
            todo=self.todo,
            doing=self.doing,
            done=self.done,
            completion_rate=self.completion_rate,
        )


class BoardOut(BaseModel):
    tasks: list[TaskOut]
    stats: StatsOut


class ErrorOut(BaseModel):
    error: str
