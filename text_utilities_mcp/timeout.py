import asyncio
from typing import Awaitable, TypeVar

from .errors import ToolTimeoutError

TOOL_TIMEOUT_MS = 30_000

T = TypeVar("T")


async def with_timeout(work: Awaitable[T], timeout_ms: int, tool_name: str) -> T:
    """Await ``work`` for at most ``timeout_ms`` milliseconds.

    Results and exceptions from ``work`` pass through untouched. On expiry the
    awaited task is cancelled and ``ToolTimeoutError`` is raised. Work running
    in a thread (``asyncio.to_thread``) cannot be interrupted; it finishes in
    the background and its result is dropped.
    """
    try:
        return await asyncio.wait_for(work, timeout=timeout_ms / 1000)
    except asyncio.TimeoutError as exc:
        raise ToolTimeoutError(tool_name, timeout_ms) from exc
