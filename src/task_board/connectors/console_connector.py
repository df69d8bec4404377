# src/task_board/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..view.render import render_board
from ..view.task_view import REQUEST_FAILURES, TaskView

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


async def run_console_loop(view: TaskView) -> None:
    logger.info("Console view started.")

    try:
        await view.load()
    except REQUEST_FAILURES as e:
        logger.error("Initial board load failed: %s", e)
        _print_ts("[CONSOLE] Could not load the board. Is the server running? Use /reload to retry.")
    else:
        print(render_board(view.state))

    _print_ts("[CONSOLE] Use /help for commands. Plain text adds a task. Use /exit to quit.\n")

    while True:
        try:
            line = (await asyncio.to_thread(input, ">>> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not line:
            continue

        if line.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if not line.startswith("/"):
            line = "/add " + line

        try:
            reply = await command_registry.handle(view, line)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is not None:
            print(reply)

    logger.info("Console view finished.")
