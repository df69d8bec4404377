# src/task_board/errors.py

"""
Error taxonomy shared by the service and HTTP layers.

Each error knows the HTTP status it maps to and carries a short message that
is safe to show to the user.
"""

from __future__ import annotations


class TaskBoardError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidArgument(TaskBoardError):
    status_code = 400
    default_message = "Invalid request."


class NotFound(TaskBoardError):
    status_code = 404
    default_message = "Task not found."


class Internal(TaskBoardError):
    """Unexpected store failure. The message never includes the cause."""

    status_code = 500
    default_message = "Internal server error."
