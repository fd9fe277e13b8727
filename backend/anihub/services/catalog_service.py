"""Pass-through client for the third-party anime catalog (Jikan v4).

Responses are returned verbatim (``{"data": ...}`` envelope) and cached in
Redis keyed by path and query parameters.
"""

import json
import logging
from typing import Any, Dict, Optional

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from anihub.config import settings
from anihub.core.exceptions import CatalogUnavailableError, NotFoundError
from anihub.services.cache_service import CacheService

logger = structlog.get_logger(__name__)
_retry_logger = logging.getLogger(__name__)


def _is_transient(exc: BaseException) -> bool:
    """Network failures, rate limiting and 5xx are worth another try."""
    if isinstance(exc, httpx.HTTPStatusError):
        code = exc.response.status_code
        return code == 429 or code >= 500
    return isinstance(exc, (httpx.TransportError, httpx.TimeoutException))


class CatalogService:
    """Search, popular listing and detail lookups against the catalog."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        cache: Optional[CacheService] = None,
        cache_ttl: int = 600,
        max_attempts: int = 3,
        wait: Optional[wait_base] = None,
    ):
        self.client = client
        self.cache = cache
        self.cache_ttl = cache_ttl
        self.max_attempts = max_attempts
        self.wait = wait or wait_exponential(multiplier=0.5, min=0.5, max=5)

    async def search(self, query: str, limit: int = 20) -> Dict[str, Any]:
        return await self._fetch("/anime", {"q": query, "limit": limit})

    async def top(self, limit: int = 20) -> Dict[str, Any]:
        """Most popular titles first."""
        return await self._fetch(
            "/anime", {"order_by": "popularity", "sort": "asc", "limit": limit}
        )

    async def get_anime(self, anime_id: int) -> Dict[str, Any]:
        return await self._fetch(f"/anime/{anime_id}", {}, resource_id=anime_id)

    async def _fetch(
        self,
        path: str,
        params: Dict[str, Any],
        resource_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        key = self.cache_key(path, params)

        if self.cache is not None:
            cached = await self.cache.get(key)
            if cached:
                return json.loads(cached)

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=self.wait,
                retry=retry_if_exception(_is_transient),
                before_sleep=before_sleep_log(_retry_logger, logging.WARNING),
                reraise=True,
            ):
                with attempt:
                    response = await self.client.get(path, params=params)
                    response.raise_for_status()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise NotFoundError("Anime", resource_id)
            logger.error("catalog_request_failed", path=path, status_code=e.response.status_code)
            raise CatalogUnavailableError()
        except httpx.HTTPError as e:
            logger.error("catalog_request_failed", path=path, error=str(e))
            raise CatalogUnavailableError()

        try:
            payload = response.json()
        except ValueError:
            logger.error("catalog_invalid_json", path=path)
            raise CatalogUnavailableError("Anime catalog returned an invalid response")

        if self.cache is not None:
            await self.cache.set(key, json.dumps(payload), ttl=self.cache_ttl)

        return payload

    @staticmethod
    def cache_key(path: str, params: Dict[str, Any]) -> str:
        parts = ["catalog", path.strip("/").replace("/", ":")]
        parts.extend(f"{k}={params[k]}" for k in sorted(params))
        return ":".join(parts)


_client: Optional[httpx.AsyncClient] = None


def get_catalog_client() -> httpx.AsyncClient:
    """Process-wide HTTP client for the catalog."""
    global _client

    if _client is None:
        _client = httpx.AsyncClient(
            base_url=settings.CATALOG_BASE_URL,
            timeout=settings.CATALOG_TIMEOUT_SECONDS,
            headers={"Accept": "application/json"},
        )
    return _client


async def close_catalog_client() -> None:
    global _client

    if _client is not None:
        await _client.aclose()
        _client = None
