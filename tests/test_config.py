# tests/test_config.py

from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from task_board.cli.bootstrap import create_view, create_web_app
from task_board.client.api_client import TaskApiClient
from task_board.config import Settings


def test_settings_defaults(monkeypatch) -> None:
    for name in ("DATA_DIR", "TASKS_DB_PATH", "PORT", "API_URL", "HTTP_TIMEOUT", "CORS_ORIGINS"):
        monkeypatch.delenv(f"TASKBOARD_{name}", raising=False)

    s = Settings.from_env()
    assert s.data_dir == Path(".local/task_board")
    assert s.tasks_db_path == Path(".local/task_board/tasks.sqlite3")
    assert s.port == 8000
    assert s.api_url == f"http://{s.host}:8000"
    assert s.http_timeout == 10.0
    assert s.cors_origins == []


def test_settings_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKBOARD_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TASKBOARD_PORT", "9001")
    monkeypatch.setenv("TASKBOARD_HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("TASKBOARD_API_URL", "http://board.internal/")
    monkeypatch.setenv("TASKBOARD_CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("TASKBOARD_LOG_TO_FILE", "no")

    s = Settings.from_env()
    assert s.tasks_db_path == tmp_path / "tasks.sqlite3"
    assert s.port == 9001
    assert s.http_timeout == 2.5
    assert s.api_url == "http://board.internal"
    assert s.cors_origins == ["http://a.test", "http://b.test"]
    assert s.log_to_file is False


def test_bad_numbers_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("TASKBOARD_PORT", "eighty")
    monkeypatch.setenv("TASKBOARD_HTTP_TIMEOUT", "soon")
    s = Settings.from_env()
    assert s.port == 8000
    assert s.http_timeout == 10.0


def test_bootstrap_wires_a_working_app(settings) -> None:
    client = TestClient(create_web_app(settings=settings))
    assert client.post("/tasks", json={"title": "wired"}).status_code == 201
    assert settings.tasks_db_path.exists()

    view = create_view(settings=settings)
    assert isinstance(view.api, TaskApiClient)
