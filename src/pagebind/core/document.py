"""HTML page parsing and serialization.

Pages are parsed with the html5lib tree builder, so the tree matches the DOM
a browser builds for the same markup (implied end tags, html/head/body).
"""

from bs4 import BeautifulSoup, Tag
from bs4.dammit import EntitySubstitution, UnicodeDammit
from bs4.element import PageElement
from bs4.formatter import HTMLFormatter

PARSER = "html5lib"

# Void elements are written as <br>, not <br/>, matching what a browser
# serializes for the markup it received
_FORMATTER = HTMLFormatter(
    entity_substitution=EntitySubstitution.substitute_xml,
    void_element_close_prefix=None,
)


def decode_page(data: bytes) -> str | None:
    """Decode raw page bytes.

    The encoding comes from a byte order mark or a <meta> declaration when
    present; otherwise it is detected, falling back to UTF-8 and then
    Windows-1252.

    Args:
        data: File contents

    Returns:
        Page markup, or None if no encoding decodes it cleanly
    """
    dammit = UnicodeDammit(data, is_html=True)
    if dammit.unicode_markup is None or dammit.contains_replacement_characters:
        return None
    return dammit.unicode_markup


def parse_page(html: str) -> BeautifulSoup:
    """Parse an HTML page into a mutable document tree."""
    return BeautifulSoup(html, PARSER)


def parse_fragment(markup: str) -> list[PageElement]:
    """Parse markup meant for an element's inner HTML.

    Returns:
        Top-level nodes of the fragment, detached from any document
    """
    soup = BeautifulSoup(markup, PARSER)
    container = soup.body if soup.body is not None else soup
    return [node.extract() for node in list(container.contents)]


def render_page(page: BeautifulSoup) -> str:
    """Serialize a document tree back to HTML."""
    return page.decode(formatter=_FORMATTER)


def render_fragment(element: Tag) -> str:
    """Serialize the children of an element (its inner HTML)."""
    return element.decode_contents(formatter=_FORMATTER)


def append_script(page: BeautifulSoup, src: str) -> None:
    """Append a script tag to the page body (or the document end).

    Args:
        page: Parsed HTML document, modified in place
        src: Script URL
    """
    script = page.new_tag("script", src=src)
    container = page.body or page
    container.append(script)
