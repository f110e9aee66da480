"""
Backoff policies for the retrieval loop.

A policy maps the 1-based number of the attempt that just failed to the
delay in seconds before the next one.
"""

from __future__ import annotations

import random
from typing import Callable


BackoffPolicy = Callable[[int], float]

DEFAULT_BACKOFF_MS = 300


def constant_backoff(delay_ms: int = DEFAULT_BACKOFF_MS) -> BackoffPolicy:
    if delay_ms < 0:
        raise ValueError("delay_ms must be >= 0")
    delay = delay_ms / 1000

    def _policy(attempt: int) -> float:
        return delay

    return _policy


def exponential_backoff(
    base_ms: int = DEFAULT_BACKOFF_MS,
    max_ms: int = 5000,
    jitter: bool = False,
) -> BackoffPolicy:
    """Double the delay per attempt, capped at ``max_ms``; optional full jitter."""
    if base_ms < 0 or max_ms < 0:
        raise ValueError("delays must be >= 0")

    def _policy(attempt: int) -> float:
        delay_ms = min(max_ms, base_ms * (2 ** max(0, attempt - 1)))
        if jitter:
            delay_ms = random.uniform(0, delay_ms)
        return delay_ms / 1000

    return _policy
