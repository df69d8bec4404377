# src/task_board/cli/main.py

"""
CLI entrypoint.

Initializes logging, then runs one of:
- `serve`: the JSON API under uvicorn,
- `console`: the interactive board view against a running API.
"""

from __future__ import annotations

import argparse
import asyncio
import logging

import uvicorn

from ..cli.bootstrap import create_view, create_web_app
from ..client.api_client import TaskApiClient
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _build_parser(settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="task-board", description="Task tracking board.")
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)

    sub.add_parser("console", help="Open the interactive board (needs a running API).")
    return parser


async def _run_console(settings) -> None:
    view = create_view(settings=settings)
    try:
        await run_console_loop(view)
    finally:
        if isinstance(view.api, TaskApiClient):
            await view.api.aclose()


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()
    args = _build_parser(settings).parse_args(argv)

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    log_dir = settings.data_dir if settings.log_to_file else None
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s (%s)...", settings.app_name, args.command or "serve")

    if args.command == "console":
        try:
            asyncio.run(_run_console(settings))
        except KeyboardInterrupt:
            logger.info("Interrupted.")
    else:
        host = getattr(args, "host", settings.host)
        port = getattr(args, "port", settings.port)
        # log_config=None keeps uvicorn on the handlers installed above.
        uvicorn.run(create_web_app(settings=settings), host=host, port=port, log_config=None)

    logger.info("Bye.")


if __name__ == "__main__":
    main()
