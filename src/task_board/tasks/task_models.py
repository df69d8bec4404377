# src/task_board/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Final


class TaskStatus(StrEnum):
    """
    Task status.

    The board only ever moves a task around a fixed cycle:
    TODO -> DOING -> DONE -> TODO.
    """

    TODO = "TODO"
    DOING = "DOING"
    DONE = "DONE"

    def next(self) -> TaskStatus:
        return _STATUS_CYCLE[(_STATUS_CYCLE.index(self) + 1) % len(_STATUS_CYCLE)]

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @classmethod
    def parse(cls, raw: Any) -> TaskStatus | None:
        """Return the matching status, or None for anything that is not one."""
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


class TaskPriority(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def label(self) -> str:
        return self.value.capitalize()


_STATUS_CYCLE: Final[tuple[TaskStatus, ...]] = (TaskStatus.TODO, TaskStatus.DOING, TaskStatus.DONE)

_STATUS_LABELS: Final[dict[TaskStatus, str]] = {
    TaskStatus.TODO: "To do",
    TaskStatus.DOING: "In progress",
    TaskStatus.DONE: "Done",
}


class _Missing:
    """Marker for a patch field that was not sent at all."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    status: TaskStatus
    priority: TaskPriority
    created_at: float


@dataclass(frozen=True, slots=True)
class TaskPatch:
    """
    Partial update.

    A field left as MISSING is not touched. Any other value (including None or
    an empty string) is an explicit request to set that field and goes through
    validation. status/priority are kept raw here: the store's CHECK
    constraints decide whether they are acceptable.
    """

    title: Any = MISSING
    status: Any = MISSING
    priority: Any = MISSING

    @classmethod
    def from_body(cls, body: dict[str, Any]) -> TaskPatch:
        return cls(
            title=body.get("title", MISSING),
            status=body.get("status", MISSING),
            priority=body.get("priority", MISSING),
        )

    def is_empty(self) -> bool:
        return self.title is MISSING and self.status is MISSING and self.priority is MISSING

    def present_fields(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.title is not MISSING:
            out["title"] = self.title
        if self.status is not MISSING:
            out["status"] = self.status
        if self.priority is not MISSING:
            out["priority"] = self.priority
        return out


@dataclass(frozen=True, slots=True)
class StatsSnapshot:
    total: int
    todo: int
    doing: int
    done: int
    completion_rate: int
