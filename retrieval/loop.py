"""
Retrieval loop: fetch, normalize, filter and retry until one dog passes the ban list.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol, Union

from tenacity import AsyncRetrying, RetryCallState, retry_if_exception_type, stop_after_attempt

from models import BanList, CanonicalRecord
from utils.exceptions import (
    CapabilityError,
    ExhaustionError,
    MalformedResponseError,
    NetworkError,
    RetrievalCancelledError,
)

from .ban_matcher import banned_matches, is_banned
from .backoff import BackoffPolicy, constant_backoff
from .cancellation import CancellationToken
from .normalizer import merge_details, normalize_item
from .timeout_guard import DEFAULT_TIMEOUT_MS, with_timeout


logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 8
EXHAUSTION_MESSAGE = "No non-banned result found after maximum attempts"


class ItemSource(Protocol):
    async def fetch_batch(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        ...

    async def get_details(self, item_id: str) -> Optional[Dict[str, Any]]:
        ...


class _BatchRejected(Exception):
    """Every candidate in a batch was unusable or banned."""

    def __init__(self, attempt: int, scanned: int):
        super().__init__(f"attempt {attempt}: no acceptable candidate among {scanned} items")
        self.attempt = attempt
        self.scanned = scanned


def _ensure_capable(source: Any) -> None:
    if not callable(getattr(source, "fetch_batch", None)):
        raise CapabilityError("source cannot perform network calls", {"source": type(source).__name__})
    is_available = getattr(source, "is_available", None)
    if callable(is_available) and not is_available():
        raise CapabilityError("source is not available for network calls", {"source": type(source).__name__})


def _coerce_ban_list(ban_list: Union[BanList, Mapping[str, Any], None]) -> BanList:
    if ban_list is None:
        return BanList()
    if isinstance(ban_list, BanList):
        return ban_list
    return BanList.from_mapping(ban_list)


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
    logger.warning(f"[Retrieval] Attempt {retry_state.attempt_number} failed: {exc}; retrying in {delay:.2f}s")


async def _lookup_details(
    source: ItemSource,
    candidate: CanonicalRecord,
    timeout_ms: int,
    token: CancellationToken,
) -> Optional[CanonicalRecord]:
    get_details = getattr(source, "get_details", None)
    if not candidate.id or not callable(get_details):
        return None
    try:
        detail = await with_timeout(
            lambda: get_details(candidate.id),
            timeout_ms,
            token=token,
            label=f"detail lookup for {candidate.id}",
        )
    except (RetrievalCancelledError, CapabilityError):
        raise
    except NetworkError as e:
        logger.debug(f"[Retrieval] Enrichment failed for {candidate.id}: {e}")
        return None
    except Exception as e:
        logger.warning(f"[Retrieval] Enrichment raised {type(e).__name__} for {candidate.id}: {e}")
        return None
    return merge_details(candidate, detail)


async def _scan_batch(
    source: ItemSource,
    batch: List[Any],
    ban_list: BanList,
    *,
    strict: bool,
    timeout_ms: int,
    token: CancellationToken,
) -> Optional[CanonicalRecord]:
    """
    Pick the winner of one batch, in source order.

    The first complete, non-banned candidate wins outright. Otherwise the
    first incomplete, non-banned candidate is the fallback and is never
    replaced by a later one.
    """
    fallback: Optional[CanonicalRecord] = None

    for raw in batch:
        candidate = normalize_item(raw, strict=strict)
        if candidate is None:
            logger.debug("[Retrieval] Skipping unusable item")
            continue

        matches = banned_matches(candidate, ban_list)
        if matches:
            logger.info(f"[Retrieval] Skipping {candidate.id or '<no id>'}: banned {matches}")
            continue

        if candidate.has_full_attributes:
            return candidate

        enriched = await _lookup_details(source, candidate, timeout_ms, token)
        if enriched is not None:
            if is_banned(enriched, ban_list):
                logger.info(f"[Retrieval] Skipping {candidate.id}: banned after enrichment")
                continue
            return enriched

        if fallback is None:
            fallback = candidate

    if fallback is not None:
        logger.info(f"[Retrieval] Accepting {fallback.id or '<no id>'} without breed data")
    return fallback


async def fetch_random_item(
    source: ItemSource,
    ban_list: Union[BanList, Mapping[str, Any], None] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    *,
    batch_size: Optional[int] = None,
    strict: bool = True,
    backoff: Optional[BackoffPolicy] = None,
    token: Optional[CancellationToken] = None,
) -> CanonicalRecord:
    """
    Return one random record that does not match ``ban_list``.

    Each attempt makes exactly one primary ``fetch_batch`` call. Network
    and malformed-response failures, as well as batches with nothing
    acceptable, are retried after ``backoff(attempt)`` seconds.

    Raises:
        ExhaustionError: every attempt came back without an acceptable candidate
        NetworkError: the final attempt failed in transport
        CapabilityError: ``source`` cannot make network calls
        RetrievalCancelledError: ``token`` was cancelled
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")
    if timeout_ms <= 0:
        raise ValueError("timeout_ms must be positive")

    _ensure_capable(source)
    ban_list = _coerce_ban_list(ban_list)
    token = token or CancellationToken()
    backoff = backoff or constant_backoff()

    async def _attempt(number: int) -> CanonicalRecord:
        token.raise_if_cancelled()
        batch = await with_timeout(
            lambda: source.fetch_batch(batch_size),
            timeout_ms,
            token=token,
            label="batch request",
        )
        if not isinstance(batch, list) or not batch:
            raise MalformedResponseError("source returned no items", attempt=number)

        record = await _scan_batch(
            source,
            batch,
            ban_list,
            strict=strict,
            timeout_ms=timeout_ms,
            token=token,
        )
        if record is None:
            raise _BatchRejected(number, len(batch))
        return record

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=lambda retry_state: backoff(retry_state.attempt_number),
        retry=retry_if_exception_type((NetworkError, _BatchRejected)),
        sleep=token.sleep,
        before_sleep=_log_retry,
        reraise=True,
    )

    record: Optional[CanonicalRecord] = None
    try:
        async for attempt in retrying:
            with attempt:
                record = await _attempt(attempt.retry_state.attempt_number)
    except _BatchRejected as e:
        raise ExhaustionError(EXHAUSTION_MESSAGE, attempts=max_attempts) from e

    logger.info(f"[Retrieval] Accepted {record.id or '<no id>'} ({record.breed or 'unknown breed'})")
    return record
