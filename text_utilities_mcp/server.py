"""stdio transport: newline-delimited JSON-RPC on stdin/stdout.

stdout carries protocol messages only; every log line goes to stderr.
Run with ``python -m text_utilities_mcp`` or the ``text-utilities-mcp`` script.
"""
from __future__ import annotations

import asyncio
import json
import logging
import signal
import sys
from typing import IO, Optional

from . import SERVER_NAME, __version__
from .config import load_settings
from .dispatcher import ToolDispatcher
from .logging_config import configure_logging
from .protocol import JsonRpcHandler

logger = logging.getLogger(__name__)


def send(obj, stream: Optional[IO[str]] = None):
    stream = stream or sys.stdout
    stream.write(json.dumps(obj) + "\n")
    stream.flush()


def serve(handler: JsonRpcHandler, stdin: IO[str], stdout: IO[str], runner: asyncio.Runner) -> None:
    """Answer one request at a time until stdin closes."""
    for line in stdin:
        line = line.strip()
        if not line:
            continue
        reply = runner.run(handler.handle_line(line))
        if reply is None:
            continue
        send(reply, stdout)


def _log_unhandled_task_error(loop, context):
    # non-fatal: mirror of an unhandled rejection
    logger.error("Unhandled error in event loop: %s", context.get("message"), exc_info=context.get("exception"))


def _log_uncaught(exc_type, exc, tb):
    logger.critical("Uncaught exception: %s", exc, exc_info=(exc_type, exc, tb))


def _shutdown_on_signal(signum, _frame):
    logger.info("Shutting down %s (signal %s)...", SERVER_NAME, signal.Signals(signum).name)
    raise SystemExit(0)


def main() -> int:
    settings = load_settings()
    configure_logging("DEBUG" if settings.debug else settings.log_level, quiet=settings.quiet)
    sys.excepthook = _log_uncaught
    signal.signal(signal.SIGINT, _shutdown_on_signal)
    signal.signal(signal.SIGTERM, _shutdown_on_signal)

    dispatcher = ToolDispatcher(settings=settings)
    handler = JsonRpcHandler(dispatcher, debug=settings.debug)
    logger.info("Starting %s v%s...", SERVER_NAME, __version__)
    logger.info("Available tools: %s", ", ".join(dispatcher.registry.names()))

    with asyncio.Runner() as runner:
        runner.get_loop().set_exception_handler(_log_unhandled_task_error)
        logger.info("%s is running on stdio transport", SERVER_NAME)
        serve(handler, sys.stdin, sys.stdout, runner)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
