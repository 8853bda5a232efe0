"""Page identity: which content document belongs to a page.

The mapping is total. Every location maps to some content identifier, with
unknown pages falling back to the default.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from pagebind.core.types import PageId

DEFAULT_PAGE = PageId("home")

DEFAULT_PAGES: Mapping[str, PageId] = MappingProxyType(
    {
        "index.html": PageId("home"),
        "kitchen.html": PageId("kitchen"),
        "master-bedroom.html": PageId("master-bedroom"),
        "closet.html": PageId("closet"),
        "kids-bedroom.html": PageId("kids"),
    }
)


@dataclass(frozen=True)
class PageRoutes:
    """Mapping from page file names to content identifiers."""

    pages: Mapping[str, PageId] = field(default_factory=lambda: DEFAULT_PAGES)
    default: PageId = DEFAULT_PAGE

    def page_for(self, location: str) -> PageId:
        """Map a location path to its content identifier.

        Only the last path segment is considered, so "/a/kitchen.html" and
        "kitchen.html" are the same page. A trailing slash means the
        directory index.

        Args:
            location: URL path of the page (e.g., "/kitchen.html")

        Returns:
            Content identifier, the default one for unknown pages
        """
        name = location.split("?", 1)[0].split("#", 1)[0].rsplit("/", 1)[-1]
        return self.pages.get(name or "index.html", self.default)

    def with_pages(self, pages: Mapping[str, str]) -> "PageRoutes":
        """Create routes extended with additional page mappings.

        Args:
            pages: Page file name to content identifier

        Returns:
            New PageRoutes; existing entries are overridden by name
        """
        merged = dict(self.pages)
        merged.update({name: PageId(page) for name, page in pages.items()})
        return PageRoutes(pages=MappingProxyType(merged), default=self.default)
