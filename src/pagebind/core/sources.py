"""Content document sources.

A source fetches the JSON document for one page identifier. Sources never
cache: every call reads the document afresh so that editorial changes show
up on the next page load.
"""

import json
import logging
import time
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

import httpx

from pagebind.core.types import JSONValue

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_PATH = "content"

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


class ContentUnavailableError(Exception):
    """Content document could not be obtained."""

    def __init__(self, page: str, reason: str) -> None:
        super().__init__(f"Could not load content for {page!r}: {reason}")
        self.page = page
        self.reason = reason


class ContentFetchError(ContentUnavailableError):
    """Document is missing or the transport failed."""


class ContentParseError(ContentUnavailableError):
    """Document body is not valid JSON."""


class ContentSource(Protocol):
    """Anything that can fetch a content document by page identifier."""

    def describe(self, page: str) -> str: ...

    async def fetch(self, page: str) -> JSONValue: ...

    async def close(self) -> None: ...


class HttpContentSource:
    """Fetches content documents over HTTP, bypassing caches.

    Each request carries a timestamp query parameter and no-cache headers so
    that neither the browser-facing CDN nor an intermediate proxy serves a
    stale document.
    """

    def __init__(
        self,
        base_url: str,
        *,
        client: httpx.AsyncClient | None = None,
        content_path: str = DEFAULT_CONTENT_PATH,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize HTTP source.

        Args:
            base_url: URL the content directory is relative to
                      (e.g., "https://example.com/site/")
            client: httpx AsyncClient used for all requests. If None, one is
                    opened on first fetch and closed by close().
            content_path: Directory of content documents below base_url
            clock: Returns the current time in seconds (cache-busting value)
        """
        self._client = client
        self._owns_client = client is None
        self._base_url = httpx.URL(base_url)
        self._content_path = content_path.strip("/")
        self._clock = clock

    def describe(self, page: str) -> str:
        return str(self._document_url(page))

    async def fetch(self, page: str) -> JSONValue:
        """Fetch and parse the document for a page.

        Args:
            page: Content identifier (e.g., "kitchen")

        Returns:
            Parsed JSON document

        Raises:
            ContentFetchError: On a non-success status or a network failure
            ContentParseError: If the body is not valid JSON
        """
        params = {"t": str(int(self._clock() * 1000))}
        logger.debug(f"Fetching {self.describe(page)}")

        try:
            response = await self._get_client().get(
                self._document_url(page), params=params, headers=NO_CACHE_HEADERS
            )
        except httpx.HTTPError as e:
            raise ContentFetchError(page, str(e) or type(e).__name__) from e

        if not response.is_success:
            raise ContentFetchError(page, f"HTTP {response.status_code}")

        return _parse(page, response.content)

    async def close(self) -> None:
        """Close the HTTP client if this source opened it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client

    def _document_url(self, page: str) -> httpx.URL:
        return self._base_url.join(f"{self._content_path}/{page}.json")


class DirectoryContentSource:
    """Reads content documents from a local directory."""

    def __init__(self, content_dir: Path) -> None:
        """Initialize directory source.

        Args:
            content_dir: Directory holding {page}.json documents
        """
        self._content_dir = content_dir

    @property
    def content_dir(self) -> Path:
        """Directory holding content documents."""
        return self._content_dir

    def describe(self, page: str) -> str:
        return str(self.document_path(page))

    def document_path(self, page: str) -> Path:
        """Path of the document for a page identifier."""
        return self._content_dir / f"{page}.json"

    async def fetch(self, page: str) -> JSONValue:
        """Read and parse the document for a page.

        Args:
            page: Content identifier (e.g., "kitchen")

        Returns:
            Parsed JSON document

        Raises:
            ContentFetchError: If the file is missing or unreadable
            ContentParseError: If the file is not valid JSON
        """
        path = self.document_path(page)
        try:
            body = path.read_bytes()
        except OSError as e:
            raise ContentFetchError(page, str(e)) from e

        return _parse(page, body)

    async def close(self) -> None:
        """Nothing to release."""


def _parse(page: str, body: str | bytes) -> JSONValue:
    try:
        return json.loads(body)
    except ValueError as e:
        raise ContentParseError(page, str(e)) from e
