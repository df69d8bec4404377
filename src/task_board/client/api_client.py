# src/task_board/client/api_client.py

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

import httpx
from pydantic import ValidationError

from ..api.schemas import BoardOut, StatsOut, TaskOut
from ..tasks.task_models import StatsSnapshot, Task, TaskStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ApiError(RuntimeError):
    """Non-success (or unreadable) HTTP reply from the task API."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.reason_phrase or "request failed"
    if isinstance(data, dict) and isinstance(data.get("error"), str):
        return data["error"]
    return resp.reason_phrase or "request failed"


def _parse(resp: httpx.Response, parse: Callable[[Any], T]) -> T:
    """A 2xx reply whose body does not decode is still a failed request."""
    try:
        return parse(resp.json())
    except (ValueError, TypeError, ValidationError) as e:
        logger.warning("Unreadable reply %s %s: %s", resp.request.method, resp.request.url, e)
        raise ApiError(resp.status_code, "Malformed response.") from e


class TaskApiClient:
    """
    Async HTTP client for the task API.

    Every method either returns the parsed server reply or raises:
    - ApiError for a non-2xx status or a body that does not parse
    - httpx.HTTPError for transport problems and timeouts

    The client can be handed a ready httpx.AsyncClient (tests use one bound to
    the ASGI app); otherwise it owns one and closes it in aclose().
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        *,
        timeout: float = 10.0,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> TaskApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        resp = await self._http.request(method, url, **kwargs)
        if resp.is_success:
            return resp
        message = _error_message(resp)
        logger.debug("%s %s -> %s %s", method, url, resp.status_code, message)
        raise ApiError(resp.status_code, message)

    # ---- endpoints ----

    async def list_tasks(self, status: TaskStatus | None = None) -> list[Task]:
        params = {"status": status.value} if status is not None else None
        resp = await self._request("GET", "/tasks", params=params)
        return _parse(resp, lambda data: [TaskOut.model_validate(item).to_task() for item in data])

    async def create_task(self, title: str, priority: str | None = None) -> Task:
        payload: dict[str, Any] = {"title": title}
        if priority is not None:
            payload["priority"] = priority
        resp = await self._request("POST", "/tasks", json=payload)
        return _parse(resp, lambda data: TaskOut.model_validate(data).to_task())

    async def update_task(self, task_id: str, fields: dict[str, Any]) -> Task:
        resp = await self._request("PATCH", f"/tasks/{task_id}", json=fields)
        return _parse(resp, lambda data: TaskOut.model_validate(data).to_task())

    async def delete_task(self, task_id: str) -> None:
        await self._request("DELETE", f"/tasks/{task_id}")

    async def get_stats(self) -> StatsSnapshot:
        resp = await self._request("GET", "/stats")
        return _parse(resp, lambda data: StatsOut.model_validate(data).to_snapshot())

    async def get_board(self) -> tuple[list[Task], StatsSnapshot]:
        resp = await self._request("GET", "/board")
        board = _parse(resp, BoardOut.model_validate)
        return [t.to_task() for t in board.tasks], board.stats.to_snapshot()
