"""Binding discovery in a parsed HTML page.

Finds every element carrying a binding marker, plus the positional
project list used by the kitchen page. Discovery never mutates the page.
"""

from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

TEXT_MARKER = "data-content"
IMAGE_MARKER = "data-image"

PROJECT_ITEM_SELECTOR = ".project-item"
PROJECT_HEADING_SELECTOR = "h4"


@dataclass(frozen=True)
class TextBinding:
    """Element whose text comes from a binding path."""

    element: Tag
    path: str


@dataclass(frozen=True)
class ImageSlots:
    """Elements inside a picture that receive image URLs.

    Any slot may be missing from the markup.
    """

    avif: Tag | None = None
    webp: Tag | None = None
    img: Tag | None = None


@dataclass(frozen=True)
class ImageBinding:
    """Picture element whose sources come from an image base name."""

    element: Tag
    path: str
    slots: ImageSlots


@dataclass(frozen=True)
class ProjectItem:
    """Project list entry, paired with projects[index] by position."""

    index: int
    element: Tag
    heading: Tag | None
    heading_bound: bool


@dataclass(frozen=True)
class BindingScan:
    """Everything the injector may write to, in document order."""

    text: list[TextBinding]
    images: list[ImageBinding]
    projects: list[ProjectItem]

    def __len__(self) -> int:
        return len(self.text) + len(self.images) + len(self.projects)


def scan(page: BeautifulSoup | Tag) -> BindingScan:
    """Discover binding targets in a page.

    Args:
        page: Parsed HTML document (or any subtree of one)

    Returns:
        BindingScan with text bindings, image bindings and project items
    """
    text = [
        TextBinding(element=element, path=str(element.get(TEXT_MARKER, "")))
        for element in page.select(f"[{TEXT_MARKER}]")
    ]

    images = [
        ImageBinding(
            element=element,
            path=str(element.get(IMAGE_MARKER, "")),
            slots=_image_slots(element),
        )
        for element in page.select(f"picture[{IMAGE_MARKER}]")
    ]

    projects = []
    for index, element in enumerate(page.select(PROJECT_ITEM_SELECTOR)):
        heading = element.select_one(PROJECT_HEADING_SELECTOR)
        projects.append(
            ProjectItem(
                index=index,
                element=element,
                heading=heading,
                heading_bound=heading is not None and heading.has_attr(TEXT_MARKER),
            )
        )

    return BindingScan(text=text, images=images, projects=projects)


def _image_slots(picture: Tag) -> ImageSlots:
    return ImageSlots(
        avif=picture.select_one('source[type="image/avif"]'),
        webp=picture.select_one('source[type="image/webp"]'),
        img=picture.select_one("img"),
    )
