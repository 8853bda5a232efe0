"""Page content loading.

Ties the pieces together for one page load: derive the page identity from
the location, fetch its content document, and inject it into the page.
A page whose content cannot be loaded is left exactly as its static markup
defines it.
"""

import asyncio
import logging
from dataclasses import dataclass, field

from bs4 import BeautifulSoup

from pagebind.core.injector import InjectionPlan, inject
from pagebind.core.routing import PageRoutes
from pagebind.core.sources import ContentSource, ContentUnavailableError
from pagebind.core.types import JSONValue, PageId

logger = logging.getLogger(__name__)

DEFAULT_GRACE_PERIOD = 0.1


@dataclass(frozen=True)
class LoaderConfig:
    """Loader settings."""

    routes: PageRoutes = field(default_factory=PageRoutes)
    # Seconds to wait before injecting, so markup added late by other
    # scripts is in place
    grace_period: float = DEFAULT_GRACE_PERIOD


class ContentLoader:
    """Loads a page's content document and injects it into the page."""

    def __init__(self, source: ContentSource, config: LoaderConfig | None = None) -> None:
        """Initialize loader.

        Args:
            source: Where content documents are fetched from
            config: Routing table and grace period (defaults if None)
        """
        self._source = source
        self._config = config or LoaderConfig()

    @property
    def source(self) -> ContentSource:
        """Content source documents are fetched from."""
        return self._source

    @property
    def config(self) -> LoaderConfig:
        """Loader settings."""
        return self._config

    def page_for(self, location: str) -> PageId:
        """Derive the content identifier for a location path."""
        return self._config.routes.page_for(location)

    async def fetch_document(self, page: str) -> JSONValue:
        """Fetch the content document for a page.

        Args:
            page: Content identifier

        Returns:
            Parsed document, or None if it could not be fetched or parsed
        """
        try:
            document = await self._source.fetch(page)
        except ContentUnavailableError as e:
            logger.warning(f"Could not load {self._source.describe(page)}: {e.reason}")
            return None

        logger.debug(f"Loaded {self._source.describe(page)}")
        return document

    async def initialize(self, page: BeautifulSoup, location: str) -> InjectionPlan | None:
        """Run the single content pass for a page load.

        Args:
            page: Parsed HTML document, modified in place
            location: URL path the page was requested under

        Returns:
            Applied InjectionPlan, or None if no content was available
            (the page is then left untouched)
        """
        if self._config.grace_period > 0:
            await asyncio.sleep(self._config.grace_period)

        page_id = self.page_for(location)
        document = await self.fetch_document(page_id)
        if document is None:
            return None

        return inject(page, document)
