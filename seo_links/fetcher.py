# seo_links/fetcher.py
"""
HTTPX-based page fetcher.

Fetches the single page under analysis. This is the collaborator that
sits in front of the link engine: the engine only ever sees the returned
page source, never the network.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from seo_links.cache import CacheConfig, FileCache

log = logging.getLogger(__name__)


class FetchError(Exception):
    """The page could not be fetched as HTML."""


@dataclass(frozen=True)
class FetchedPage:
    url: str
    final_url: str
    status: int
    content_type: str
    text: str
    from_cache: bool = False


class PageFetcher:
    """
    Async context manager wrapping one httpx.AsyncClient.

    Config keys consumed:
      - user_agent: str
      - timeout: float (seconds)
      - follow_redirects: bool
      - max_content_bytes: int
      - cache: mapping for CacheConfig
    """

    def __init__(
        self,
        config: Dict[str, Any],
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        cache: Optional[FileCache] = None,
    ):
        self.config = config
        self._transport = transport
        self._cache = cache
        self._owns_cache = cache is None
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "PageFetcher":
        if self._cache is None:
            self._cache = FileCache(CacheConfig.from_mapping(self.config.get("cache", {})))
        self._client = httpx.AsyncClient(
            follow_redirects=bool(self.config.get("follow_redirects", True)),
            timeout=self.config.get("timeout", 10.0),
            headers={"User-Agent": self.config["user_agent"]},
            transport=self._transport,
        )
        log.info("httpx session initialized.")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._client is not None:
            await self._client.aclose()
        if self._cache is not None and self._owns_cache:
            self._cache.close()
        log.info("httpx session closed.")

    def _from_cache(self, url: str) -> Optional[FetchedPage]:
        if self._cache is None:
            return None
        hit = self._cache.get(url)
        if not hit or hit.get("status") != 200:
            return None
        if "text/html" not in hit.get("content_type", "") or not hit.get("text"):
            log.debug("Ignoring unusable cache entry for %s", url)
            return None
        log.info("Cache hit for %s", url)
        return FetchedPage(
            url=url,
            final_url=hit.get("final_url", url),
            status=200,
            content_type=hit["content_type"],
            text=hit["text"],
            from_cache=True,
        )

    async def fetch(self, url: str) -> FetchedPage:
        """
        Fetch one HTML page.

        Raises:
            FetchError: on network failure, non-2xx status, non-HTML content
                or a body larger than max_content_bytes.
        """
        if self._client is None:
            raise RuntimeError("PageFetcher must be used as an async context manager")

        cached = self._from_cache(url)
        if cached is not None:
            return cached

        try:
            resp = await self._client.get(url)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            log.error("HTTP error for %s: %s", url, e)
            raise FetchError(f"HTTP error for {url}: {e}") from e
        except httpx.RequestError as e:
            log.error("Network error fetching %s: %s", url, e)
            raise FetchError(f"Network error fetching {url}: {e}") from e

        ctype = resp.headers.get("content-type", "").lower()
        if "text/html" not in ctype:
            raise FetchError(f"Not an HTML page at {url} ({ctype or 'no content-type'})")

        max_bytes = int(self.config.get("max_content_bytes", 5_242_880))
        if len(resp.content) > max_bytes:
            raise FetchError(
                f"Content too large at {url} ({len(resp.content)} > {max_bytes})"
            )

        page = FetchedPage(
            url=url,
            final_url=str(resp.url),
            status=resp.status_code,
            content_type=ctype,
            text=resp.text,
        )
        if self._cache is not None:
            self._cache.set_page(
                url,
                final_url=page.final_url,
                status=page.status,
                headers=dict(resp.headers),
                text=page.text,
                content_type=ctype,
            )
        log.info("Fetched %s (%d bytes)", page.final_url, len(resp.content))
        return page
