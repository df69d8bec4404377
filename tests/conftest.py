# tests/conftest.py

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path
from types import SimpleNamespace

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient

from task_board.api.app import create_app
from task_board.client.api_client import TaskApiClient
from task_board.tasks.task_service import TaskService
from task_board.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the bootstrap helpers.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="task-board-test",
        log_level="DEBUG",
        log_to_file=False,
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        host="127.0.0.1",
        port=8000,
        cors_origins=[],
        api_url="http://test",
        http_timeout=5.0,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    # Real SQLite: the CHECK constraints are part of what we test.
    return TaskStore(settings.tasks_db_path)


@pytest.fixture()
def service(store: TaskStore) -> TaskService:
    return TaskService(store)


@pytest.fixture()
def app(service: TaskService) -> FastAPI:
    return create_app(service)


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest_asyncio.fixture()
async def api(app: FastAPI) -> AsyncIterator[TaskApiClient]:
    """Real HTTP client talking to the app in-process."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield TaskApiClient(http=http)
