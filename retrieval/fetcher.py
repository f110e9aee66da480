"""
Dog Fetcher
Caller-facing facade wiring settings, the TheDogAPI scraper and view history.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from config import Settings, get_settings
from models import BanList, CanonicalRecord
from scrapers import DogApiScraper

from .backoff import BackoffPolicy, constant_backoff
from .cancellation import CancellationToken
from .history import ViewHistory
from .loop import ItemSource, fetch_random_item


logger = logging.getLogger(__name__)


class DogFetcher:
    """
    Fetch random dogs that avoid a ban list.

    Defaults come from ``RetrievalSettings``; per-call arguments override
    them. Accepted records are pushed onto ``history``.

    Usage:
        async with DogFetcher() as fetcher:
            dog = await fetcher.fetch({"breed": ["Beagle"]})
    """

    def __init__(
        self,
        source: Optional[ItemSource] = None,
        settings: Optional[Settings] = None,
        history: Optional[ViewHistory] = None,
        backoff: Optional[BackoffPolicy] = None,
    ):
        self.settings = settings or get_settings()
        retrieval = self.settings.retrieval
        self._source = source if source is not None else DogApiScraper(
            api_key=self.settings.dogapi.api_key,
            base_url=self.settings.dogapi.base_url,
        )
        self.history = history if history is not None else ViewHistory(limit=retrieval.history_limit)
        self._backoff = backoff or constant_backoff(retrieval.backoff_ms)

    @property
    def source(self) -> ItemSource:
        return self._source

    async def fetch(
        self,
        ban_list: Union[BanList, Mapping[str, Any], None] = None,
        *,
        max_attempts: Optional[int] = None,
        timeout_ms: Optional[int] = None,
        batch_size: Optional[int] = None,
        strict: Optional[bool] = None,
        token: Optional[CancellationToken] = None,
    ) -> CanonicalRecord:
        retrieval = self.settings.retrieval
        record = await fetch_random_item(
            self._source,
            ban_list,
            max_attempts=max_attempts if max_attempts is not None else retrieval.max_attempts,
            timeout_ms=timeout_ms if timeout_ms is not None else retrieval.timeout_ms,
            batch_size=batch_size if batch_size is not None else self.settings.dogapi.batch_size,
            strict=strict if strict is not None else retrieval.strict,
            backoff=self._backoff,
            token=token,
        )
        self.history.record(record)
        return record

    async def close(self) -> None:
        close = getattr(self._source, "close", None)
        if callable(close):
            await close()

    async def __aenter__(self) -> "DogFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


async def fetch_random_dog(
    ban_list: Union[BanList, Mapping[str, Any], None] = None,
    max_attempts: Optional[int] = None,
    timeout_ms: Optional[int] = None,
) -> CanonicalRecord:
    """
    Convenience function: one fetch with a throwaway client.

    Usage:
        dog = await fetch_random_dog({"temperament": ["Aggressive"]})
    """
    async with DogFetcher() as fetcher:
        return await fetcher.fetch(ban_list, max_attempts=max_attempts, timeout_ms=timeout_ms)
