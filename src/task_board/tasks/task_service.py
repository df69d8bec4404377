# src/task_board/tasks/task_service.py

from __future__ import annotations

import logging
import sqlite3
from typing import Any

from ..core.ports import TaskRepo
from ..errors import Internal, InvalidArgument, NotFound
from .task_models import StatsSnapshot, Task, TaskPatch, TaskPriority, TaskStatus
from .task_stats import stats_from_counts

logger = logging.getLogger(__name__)


class TaskService:
    """
    Request validation on top of a TaskRepo.

    Everything that can be rejected is rejected before the store is asked to
    change anything. Store failures are logged here and re-raised as
    Internal; constraint violations become InvalidArgument.
    """

    def __init__(self, store: TaskRepo) -> None:
        self.store = store

    # ---- queries ----

    def list_tasks(self, status: str | None = None) -> list[Task]:
        wanted: TaskStatus | None = None
        if status:
            wanted = TaskStatus.parse(status)
            if wanted is None:
                raise InvalidArgument("Invalid Status. Usage: TODO, DOING or DONE.")
        try:
            return self.store.list_tasks(status=wanted)
        except sqlite3.Error as e:
            logger.exception("list_tasks failed status=%s", status)
            raise Internal() from e

    def stats(self) -> StatsSnapshot:
        try:
            counts = self.store.count_by_status()
        except sqlite3.Error as e:
            logger.exception("count_by_status failed")
            raise Internal() from e
        return stats_from_counts(counts)

    def count_tasks(self) -> int:
        try:
            return self.store.count_tasks()
        except sqlite3.Error as e:
            logger.exception("count_tasks failed")
            raise Internal() from e

    # ---- mutations ----

    def create_task(self, title: Any, priority: Any = None) -> Task:
        if not isinstance(title, str) or not title.strip():
            raise InvalidArgument("The field 'title' is required.")
        if priority is None:
            priority = TaskPriority.LOW
        elif not isinstance(priority, str):
            raise InvalidArgument("Invalid priority. Usage: LOW, MEDIUM or HIGH.")

        try:
            task = self.store.add_task(title=title.strip(), priority=priority)
        except sqlite3.IntegrityError as e:
            logger.info("create_task rejected by store: %s", e)
            raise InvalidArgument("Invalid priority. Usage: LOW, MEDIUM or HIGH.") from e
        except sqlite3.Error as e:
            logger.exception("create_task failed")
            raise Internal() from e

        logger.info("Task created id=%s", task.id)
        return task

    def get_for_mutation(self, task_id: str) -> Task:
        try:
            task = self.store.get_task(task_id)
        except sqlite3.Error as e:
            logger.exception("Task lookup failed id=%s phase=lookup", task_id)
            raise Internal() from e
        if task is None:
            raise NotFound("Task not found.")
        return task

    def update_task(self, task_id: str, body: Any) -> Task:
        if not isinstance(body, dict):
            raise InvalidArgument("Invalid body.")

        existing = self.get_for_mutation(task_id)
        patch = TaskPatch.from_body(body)
        if patch.is_empty():
            return existing
        fields = self._patch_to_fields(patch)

        try:
            updated = self.store.update_task_fields(task_id, fields)
        except sqlite3.IntegrityError as e:
            logger.info("update_task rejected by store id=%s: %s", task_id, e)
            raise InvalidArgument("Invalid value for status or priority.") from e
        except sqlite3.Error as e:
            logger.exception("Task update failed id=%s phase=mutation", task_id)
            raise Internal() from e

        if updated is None:
            # Deleted between the lookup and the update.
            raise NotFound("Task not found.")
        logger.info("Task updated id=%s fields=%s", task_id, sorted(fields))
        return updated

    def delete_task(self, task_id: str) -> None:
        self.get_for_mutation(task_id)
        try:
            deleted = self.store.delete_task(task_id)
        except sqlite3.Error as e:
            logger.exception("Task delete failed id=%s phase=mutation", task_id)
            raise Internal() from e
        if not deleted:
            raise NotFound("Task not found.")
        logger.info("Task deleted id=%s", task_id)

    # ---- helpers ----

    @staticmethod
    def _patch_to_fields(patch: TaskPatch) -> dict[str, Any]:
        fields = patch.present_fields()

        if "title" in fields:
            title = fields["title"]
            if not isinstance(title, str) or not title.strip():
                raise InvalidArgument("The field 'title' cannot be empty.")
            fields["title"] = title.strip()

        # Enum membership is the store's job; only reject what it cannot bind.
        for name in ("status", "priority"):
            if name in fields and not isinstance(fields[name], str):
                raise InvalidArgument("Invalid value for status or priority.")

        return fields
