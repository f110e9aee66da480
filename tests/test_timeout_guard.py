from __future__ import annotations

import asyncio

import pytest

from retrieval.backoff import constant_backoff, exponential_backoff
from retrieval.cancellation import CancellationToken
from retrieval.timeout_guard import with_timeout
from utils.exceptions import ErrorKind, NetworkError, RetrievalCancelledError


@pytest.mark.asyncio
async def test_returns_result_within_budget() -> None:
    async def _call():
        return "ok"

    assert await with_timeout(_call, 100) == "ok"


@pytest.mark.asyncio
async def test_overrun_becomes_timed_out_network_error() -> None:
    cancelled = asyncio.Event()

    async def _slow():
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            cancelled.set()
            raise

    with pytest.raises(NetworkError) as excinfo:
        await with_timeout(_slow, 20, label="batch request")

    assert excinfo.value.timed_out is True
    assert excinfo.value.kind == ErrorKind.TIMEOUT
    assert "batch request timed out after 20 ms" in str(excinfo.value)
    assert cancelled.is_set()


@pytest.mark.asyncio
async def test_overrun_waits_for_the_call_to_unwind() -> None:
    cleaned_up = []

    async def _slow():
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            await asyncio.sleep(0)
            cleaned_up.append(True)
            raise RuntimeError("cleanup failed")

    with pytest.raises(NetworkError) as excinfo:
        await with_timeout(_slow, 20)

    assert excinfo.value.timed_out is True
    assert cleaned_up == [True]


@pytest.mark.asyncio
async def test_overrun_with_token_is_still_a_timeout() -> None:
    async def _slow():
        await asyncio.sleep(5)

    with pytest.raises(NetworkError) as excinfo:
        await with_timeout(_slow, 20, token=CancellationToken())
    assert excinfo.value.timed_out is True


@pytest.mark.asyncio
async def test_call_errors_propagate_unchanged() -> None:
    async def _boom():
        raise NetworkError("connection reset")

    with pytest.raises(NetworkError, match="connection reset"):
        await with_timeout(_boom, 100, token=CancellationToken())


@pytest.mark.asyncio
async def test_token_cancel_aborts_inflight_call() -> None:
    token = CancellationToken()

    async def _slow():
        await asyncio.sleep(5)

    async def _cancel_soon():
        await asyncio.sleep(0.01)
        token.cancel("user pressed stop")

    canceller = asyncio.ensure_future(_cancel_soon())
    with pytest.raises(RetrievalCancelledError, match="user pressed stop"):
        await with_timeout(_slow, 5000, token=token)
    await canceller


@pytest.mark.asyncio
async def test_already_cancelled_token_skips_the_call() -> None:
    token = CancellationToken()
    token.cancel()
    calls = []

    async def _call():
        calls.append(1)

    with pytest.raises(RetrievalCancelledError):
        await with_timeout(_call, 100, token=token)
    assert calls == []


@pytest.mark.asyncio
async def test_token_sleep_is_cut_short_by_cancel() -> None:
    token = CancellationToken()
    loop = asyncio.get_running_loop()
    loop.call_later(0.01, token.cancel)
    started = loop.time()

    with pytest.raises(RetrievalCancelledError) as excinfo:
        await token.sleep(5)

    assert loop.time() - started < 1
    assert excinfo.value.kind == ErrorKind.CANCELLED


def test_non_positive_timeout_is_rejected() -> None:
    async def _call():
        return None

    with pytest.raises(ValueError):
        asyncio.run(with_timeout(_call, 0))


def test_constant_backoff_ignores_attempt_number() -> None:
    policy = constant_backoff(300)
    assert [policy(n) for n in (1, 2, 8)] == [0.3, 0.3, 0.3]


def test_exponential_backoff_doubles_and_caps() -> None:
    policy = exponential_backoff(base_ms=100, max_ms=500)
    assert [policy(n) for n in (1, 2, 3, 4)] == [0.1, 0.2, 0.4, 0.5]


def test_exponential_backoff_jitter_stays_in_range() -> None:
    policy = exponential_backoff(base_ms=100, max_ms=500, jitter=True)
    assert all(0 <= policy(3) <= 0.4 for _ in range(20))
