"""Caller-initiated abort for a retrieval in flight."""

from __future__ import annotations

import asyncio
from typing import Optional

from utils.exceptions import RetrievalCancelledError


class CancellationToken:
    """
    One-shot abort signal shared between a caller and the retrieval loop.

    The loop checks it between attempts, races it against each network call,
    and uses ``sleep`` for backoff so a cancel cuts the wait short.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: str = "cancelled by caller") -> None:
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RetrievalCancelledError(self._reason or "cancelled by caller")

    async def wait(self) -> None:
        await self._event.wait()

    async def sleep(self, seconds: float) -> None:
        """Sleep up to ``seconds``; raise as soon as the token is cancelled."""
        self.raise_if_cancelled()
        if seconds <= 0:
            await asyncio.sleep(0)
        else:
            try:
                await asyncio.wait_for(self._event.wait(), timeout=seconds)
            except asyncio.TimeoutError:
                return
        self.raise_if_cancelled()
