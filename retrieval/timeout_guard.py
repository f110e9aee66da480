"""Per-call timeout for network requests."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

from utils.exceptions import NetworkError, RetrievalCancelledError

from .cancellation import CancellationToken


T = TypeVar("T")

DEFAULT_TIMEOUT_MS = 8000


def _timeout_error(label: str, timeout_ms: int) -> NetworkError:
    return NetworkError(
        f"{label} timed out after {timeout_ms} ms",
        timed_out=True,
        timeout_ms=timeout_ms,
    )


async def with_timeout(
    call: Callable[[], Awaitable[T]],
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    *,
    token: Optional[CancellationToken] = None,
    label: str = "request",
) -> T:
    """
    Await ``call()`` for at most ``timeout_ms``.

    On overrun the call is cancelled and a timed-out ``NetworkError`` is
    raised. With a token, cancelling it aborts the call and raises
    ``RetrievalCancelledError``.
    """
    if timeout_ms <= 0:
        raise ValueError("timeout_ms must be positive")
    seconds = timeout_ms / 1000

    if token is None:
        token = CancellationToken()

    token.raise_if_cancelled()
    task = asyncio.ensure_future(call())
    abort = asyncio.ensure_future(token.wait())
    try:
        done, _ = await asyncio.wait(
            {task, abort},
            timeout=seconds,
            return_when=asyncio.FIRST_COMPLETED,
        )
    finally:
        abort.cancel()
        if not task.done():
            task.cancel()

    if task in done:
        return task.result()
    # let the cancelled call finish unwinding; whatever it raises is discarded
    await asyncio.gather(task, return_exceptions=True)
    if token.cancelled:
        raise RetrievalCancelledError(token.reason or "cancelled by caller")
    raise _timeout_error(label, timeout_ms)
