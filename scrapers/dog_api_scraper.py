"""
TheDogAPI Scraper
Random dog images with breed metadata.
API docs: https://docs.thedogapi.com/
"""
from typing import Any, Dict, List, Optional
import logging

import aiohttp

from .base import BaseScraper
from utils.exceptions import CapabilityError, MalformedResponseError, NetworkError


logger = logging.getLogger(__name__)


class DogApiScraper(BaseScraper):
    """
    TheDogAPI client.

    - ``GET /images/search`` for a random batch
    - ``GET /images/{id}`` for a single image with full breed data
    - the access key is optional; without it requests go out unauthenticated
    """

    API_KEY_HEADER = "x-api-key"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        super().__init__()
        dogapi = self.settings.dogapi
        self._api_key = api_key if api_key is not None else dogapi.api_key
        self._base_url = (base_url or dogapi.base_url).rstrip("/")
        self._session = session

    @property
    def name(self) -> str:
        return "TheDogAPI"

    @property
    def base_url(self) -> str:
        return self._base_url

    def _build_headers(self) -> Dict[str, str]:
        if self._api_key:
            return {self.API_KEY_HEADER: self._api_key}
        return {}

    def _search_params(self, limit: int) -> Dict[str, Any]:
        dogapi = self.settings.dogapi
        params: Dict[str, Any] = {
            "limit": limit,
            "size": dogapi.image_size,
            "mime_types": dogapi.mime_types,
        }
        if dogapi.has_breeds:
            params["has_breeds"] = 1
        return params

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or lazily create the HTTP session"""
        if self._closed:
            raise CapabilityError(f"{self.name} client is closed")
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def _request_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        session = await self._get_session()
        url = f"{self._base_url}{path}"

        try:
            async with session.get(url, params=params, headers=self._build_headers()) as response:
                if response.status >= 400:
                    raise NetworkError(
                        f"{self.name} error: {response.status} {response.reason}",
                        source=self.name,
                        status=response.status,
                        url=url,
                    )
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise MalformedResponseError(
                        f"{self.name} returned a non-JSON body",
                        source=self.name,
                        url=url,
                    ) from e
        except aiohttp.ClientError as e:
            logger.debug(f"[{self.name}] Request to {path} failed: {e}")
            raise NetworkError(f"{self.name} request failed: {e}", source=self.name, url=url) from e

    async def fetch_batch(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Fetch a random batch of images.

        Raises:
            NetworkError: transport failure or non-success status
            MalformedResponseError: body is not a non-empty JSON array
        """
        if limit is None:
            limit = self.settings.dogapi.batch_size

        data = await self._request_json("/images/search", params=self._search_params(limit))

        if not isinstance(data, list) or not data:
            raise MalformedResponseError(
                f"{self.name} returned no items",
                source=self.name,
                payload_type=type(data).__name__,
            )

        items = [item for item in data if isinstance(item, dict)]
        self._log_batch(limit, len(items))
        return items

    async def get_details(self, item_id: str) -> Optional[Dict[str, Any]]:
        """Fetch one image by id; used to fill in missing breed data."""
        if not item_id:
            return None

        data = await self._request_json(f"/images/{item_id}")

        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"{self.name} returned an unexpected detail payload",
                source=self.name,
                item_id=item_id,
            )
        return data
