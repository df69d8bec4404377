# src/task_board/api/app.py

"""
HTTP surface of the board.

Route handlers stay thin: read the request, hand it to TaskService, shape the
reply. Errors raised by the service are turned into `{"error": ...}` bodies
by the exception handlers registered in create_app().
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from ..errors import Internal, TaskBoardError
from ..tasks.task_service import TaskService
from .schemas import BoardOut, ErrorOut, StatsOut, TaskOut

logger = logging.getLogger(__name__)

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorOut},
    404: {"model": ErrorOut},
    500: {"model": ErrorOut},
}


async def _read_json(request: Request) -> Any:
    """Parsed JSON body, or None when it is missing or malformed."""
    try:
        return await request.json()
    except ValueError:
        return None


def create_app(
    service: TaskService,
    *,
    title: str = "task-board",
    cors_origins: list[str] | None = None,
) -> FastAPI:
    app = FastAPI(title=title, description="Task tracking API", version="1.0.0")
    app.state.service = service

    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(TaskBoardError)
    async def _task_error_handler(request: Request, exc: TaskBoardError) -> JSONResponse:
        if isinstance(exc, Internal):
            logger.error("[%s %s] %s", request.method, request.url.path, exc.message)
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("[%s %s] unhandled error", request.method, request.url.path)
        return JSONResponse({"error": Internal.default_message}, status_code=500)

    @app.get("/health")
    async def health() -> dict[str, Any]:
        total = await run_in_threadpool(service.count_tasks)
        return {"status": "ok", "tasks": total}

    @app.get("/tasks", response_model=list[TaskOut], responses=_ERROR_RESPONSES)
    async def list_tasks(status: str | None = None) -> list[TaskOut]:
        tasks = await run_in_threadpool(service.list_tasks, status)
        return [TaskOut.from_task(t) for t in tasks]

    @app.post("/tasks", response_model=TaskOut, status_code=201, responses=_ERROR_RESPONSES)
    async def create_task(request: Request) -> TaskOut:
        body = await _read_json(request)
        if not isinstance(body, dict):
            body = {}
        task = await run_in_threadpool(service.create_task, body.get("title"), body.get("priority"))
        return TaskOut.from_task(task)

    @app.patch("/tasks/{task_id}", response_model=TaskOut, responses=_ERROR_RESPONSES)
    async def update_task(task_id: str, request: Request) -> TaskOut:
        body = await _read_json(request)
        task = await run_in_threadpool(service.update_task, task_id, body)
        return TaskOut.from_task(task)

    @app.delete("/tasks/{task_id}", status_code=204, responses=_ERROR_RESPONSES)
    async def delete_task(task_id: str) -> Response:
        await run_in_threadpool(service.delete_task, task_id)
        return Response(status_code=204)

    @app.get("/stats", response_model=StatsOut, responses=_ERROR_RESPONSES)
    async def stats() -> StatsOut:
        snap = await run_in_threadpool(service.stats)
        return StatsOut.from_snapshot(snap)

    @app.get("/board", response_model=BoardOut, responses=_ERROR_RESPONSES)
    async def board() -> BoardOut:
        tasks = await run_in_threadpool(service.list_tasks, None)
        snap = await run_in_threadpool(service.stats)
        return BoardOut(
            tasks=[TaskOut.from_task(t) for t in tasks],
            stats=StatsOut.from_snapshot(snap),
        )

    return app
