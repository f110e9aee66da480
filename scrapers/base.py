"""
Base Scraper
Abstract base class for randomized item sources.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
import logging

from config import get_settings


logger = logging.getLogger(__name__)


class BaseScraper(ABC):
    """
    Base class for item sources.

    Subclasses return raw JSON items; normalization happens downstream in
    the retrieval pipeline.
    """

    def __init__(self):
        self.settings = get_settings()
        self._session = None
        self._closed = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable source name used in log lines"""
        pass

    @abstractmethod
    async def fetch_batch(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Fetch a batch of randomized raw items.

        Args:
            limit: number of candidates to request

        Returns:
            Raw items in the order returned by the source
        """
        pass

    @abstractmethod
    async def get_details(self, item_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch one raw item with its full metadata.

        Args:
            item_id: item identifier

        Returns:
            The raw item, or None when the source has nothing for it
        """
        pass

    def is_available(self) -> bool:
        """Whether the source can still issue network calls"""
        return not self._closed

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Release the HTTP session; the scraper is unusable afterwards"""
        self._closed = True
        if self._session:
            await self._session.close()
            self._session = None

    def _log_batch(self, requested: int, count: int):
        logger.info(f"[{self.name}] Batch of {requested} returned {count} items")
