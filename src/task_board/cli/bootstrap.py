# src/task_board/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the store, the service and the HTTP app / console view together.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from ..api.app import create_app
from ..client.api_client import TaskApiClient
from ..config import get_settings
from ..tasks.task_service import TaskService
from ..tasks.task_store import TaskStore
from ..view.task_view import TaskView

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_service(*, settings=None) -> TaskService:
    """
    Build TaskService over a SQLite TaskStore.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)
    return TaskService(TaskStore(settings.tasks_db_path))


def create_web_app(*, settings=None) -> FastAPI:
    if settings is None:
        settings = get_settings()
    service = create_service(settings=settings)
    return create_app(
        service,
        title=getattr(settings, "app_name", "task-board"),
        cors_origins=list(getattr(settings, "cors_origins", []) or []),
    )


def create_view(*, settings=None) -> TaskView:
    if settings is None:
        settings = get_settings()
    client = TaskApiClient(settings.api_url, timeout=settings.http_timeout)
    logger.debug("Console view bound to %s (timeout=%.1fs)", settings.api_url, settings.http_timeout)
    return TaskView(client)


def app_factory() -> FastAPI:
    """Zero-arg factory for `uvicorn --factory task_board.cli.bootstrap:app_factory`."""
    return create_web_app()
