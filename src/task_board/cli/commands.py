# src/task_board/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from ..tasks.task_models import Task
from ..view.board_state import FILTERS, parse_filter
from ..view.render import filter_label, next_status_label, render_board
from ..view.task_view import REQUEST_FAILURES, TaskView

CommandHandler = Callable[[TaskView, list[str]], Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console view (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, view: TaskView, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return await handler(view, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _pick(view: TaskView, args: list[str]) -> Task | str:
    """Resolve a 1-based position in the visible list, or return an error reply."""
    if not args:
        return "Which task? Give its number from /list."
    try:
        n = int(args[0])
    except ValueError:
        return f"Not a task number: {args[0]}"
    visible = view.visible
    if n < 1 or n > len(visible):
        return f"No task #{n} in the current view."
    return visible[n - 1]


async def cmd_help(view: TaskView, args: list[str]) -> str:
    return registry.build_help()


async def cmd_list(view: TaskView, args: list[str]) -> str:
    return render_board(view.state)


async def cmd_add(view: TaskView, args: list[str]) -> str:
    title = " ".join(args).strip()
    if not title:
        return "Usage: /add <title>"
    task = await view.create(title)
    if task is None:
        return "Could not create the task. Try again."
    return f"Added: {task.title}"


async def cmd_toggle(view: TaskView, args: list[str]) -> str:
    picked = _pick(view, args)
    if isinstance(picked, str):
        return picked
    if not await view.toggle(picked.id):
        return f"Could not update '{picked.title}'. Status restored to {picked.status.label}."
    return f"{picked.title}: {picked.status.label} -> {picked.status.next().label}"


async def cmd_rm(view: TaskView, args: list[str]) -> str:
    picked = _pick(view, args)
    if isinstance(picked, str):
        return picked
    if not await view.delete(picked.id):
        return f"Could not delete '{picked.title}'. List restored."
    return f"Deleted: {picked.title}"


async def cmd_info(view: TaskView, args: list[str]) -> str:
    picked = _pick(view, args)
    if isinstance(picked, str):
        return picked
    created = datetime.fromtimestamp(picked.created_at).astimezone().strftime("%Y-%m-%d %H:%M:%S")
    return (
        f"{picked.title}\n"
        f"  Status: {picked.status.label} ({next_status_label(picked)})\n"
        f"  Priority: {picked.priority.label}\n"
        f"  Created: {created}\n"
        f"  Id: {picked.id}"
    )


async def cmd_filter(view: TaskView, args: list[str]) -> str:
    if not args:
        return "Filter is " + filter_label(view.state.filter) + ". Usage: /filter all|todo|doing|done"
    board_filter = parse_filter(args[0])
    if board_filter is None:
        options = "|".join(str(f).lower() for f in FILTERS)
        return f"Unknown filter: {args[0]}. Usage: /filter {options}"
    view.set_filter(board_filter)
    return render_board(view.state)


async def cmd_stats(view: TaskView, args: list[str]) -> str:
    m = view.metrics
    return (
        "Stats:\n"
        f"  Total: {m.total}\n"
        f"  To do: {m.todo}\n"
        f"  In progress: {m.doing}\n"
        f"  Done: {m.done}\n"
        f"  Completion: {m.completion_rate}%"
    )


async def cmd_reload(view: TaskView, args: list[str]) -> str:
    try:
        await view.load()
    except REQUEST_FAILURES as e:
        logger.warning("Reload failed: %s", e)
        return "Could not reach the server."
    return render_board(view.state)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the board.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Create a task: /add <title>.", aliases=["new"])
registry.register("toggle", cmd_toggle, help_text="Cycle a task's status: /toggle <n>.", aliases=["t"])
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <n>.", aliases=["del"])
registry.register("info", cmd_info, help_text="Show one task: /info <n>.")
registry.register(
    "filter", cmd_filter, help_text="Filter the list: /filter all | todo | doing | done."
)
registry.register("stats", cmd_stats, help_text="Show completion stats for the current list.")
registry.register("reload", cmd_reload, help_text="Reload the board from the server.")
