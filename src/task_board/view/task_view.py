# src/task_board/view/task_view.py

from __future__ import annotations

import logging

import httpx

from ..client.api_client import ApiError
from ..core.ports import TaskApi
from ..tasks.task_models import StatsSnapshot, Task
from . import board_state as bs
from .board_state import BoardFilter, BoardState

logger = logging.getLogger(__name__)

# Anything that means "the server did not confirm". TaskApiClient reports an
# unreadable 2xx body as ApiError too.
REQUEST_FAILURES: tuple[type[Exception], ...] = (ApiError, httpx.HTTPError)


class TaskView:
    """
    Board controller: owns a BoardState and talks to the API.

    Toggle and delete are optimistic: local state changes first, the request
    follows, and a failure rolls the change back. Create waits for the server
    and then inserts the returned record at the top.

    There is no queueing: two quick toggles on the same task race, and whichever
    reply arrives last decides that task's local record.
    """

    def __init__(self, api: TaskApi, state: BoardState | None = None) -> None:
        self.api = api
        self.state = state or BoardState()

    # ---- derived ----

    @property
    def visible(self) -> list[Task]:
        return bs.visible_tasks(self.state)

    @property
    def metrics(self) -> StatsSnapshot:
        return bs.view_metrics(self.state)

    # ---- actions ----

    async def load(self) -> None:
        """Initial (or manual) load: replaces local state with the server's board."""
        tasks, stats = await self.api.get_board()
        self.state = bs.loaded(self.state, tasks)
        logger.info("Board loaded: %d tasks, %d%% done", stats.total, stats.completion_rate)

    def set_filter(self, board_filter: BoardFilter) -> None:
        self.state = bs.filter_set(self.state, board_filter)

    async def create(self, title: str) -> Task | None:
        """Returns the created task, or None if the title was blank or the request failed."""
        title = title.strip()
        if not title:
            return None

        try:
            task = await self.api.create_task(title)
        except REQUEST_FAILURES as e:
            logger.warning("Create failed: %s", e)
            return None

        self.state = bs.created(self.state, task)
        return task

    async def toggle(self, task_id: str) -> bool:
        """Advance a task one step along the status cycle. Returns False on rollback."""
        before = bs.find_task(self.state, task_id)
        if before is None:
            return False
        nxt = before.status.next()

        self.state = bs.status_changed(self.state, task_id, nxt)
        try:
            updated = await self.api.update_task(task_id, {"status": nxt.value})
        except REQUEST_FAILURES as e:
            logger.warning("Toggle failed id=%s: %s", task_id, e)
            self.state = bs.status_changed(self.state, task_id, before.status)
            return False

        self.state = bs.confirmed_update(self.state, updated)
        return True

    async def delete(self, task_id: str) -> bool:
        """Remove a task. On failure the whole list returns to the last confirmed one."""
        if bs.find_task(self.state, task_id) is None:
            return False

        self.state = bs.removed(self.state, task_id)
        try:
            await self.api.delete_task(task_id)
        except REQUEST_FAILURES as e:
            logger.warning("Delete failed id=%s: %s", task_id, e)
            self.state = bs.rolled_back(self.state)
            return False

        self.state = bs.confirmed_removal(self.state, task_id)
        return True
