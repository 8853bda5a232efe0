"""Content injection into bound elements.

Injection is split in two: ``plan`` turns a binding scan and a content
document into write instructions without touching the page, and ``apply``
performs them. Every element is handled independently; a miss on one never
affects another, and nothing here raises on bad content.
"""

import logging
import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Literal

from bs4 import BeautifulSoup

from pagebind.core.bindings import BindingScan, ImageBinding, ProjectItem, TextBinding, scan
from pagebind.core.document import parse_fragment
from pagebind.core.images import FALLBACK_CODEC, PRIMARY_CODEC, expand
from pagebind.core.paths import ABSENT, resolve
from pagebind.core.types import JSONValue

logger = logging.getLogger(__name__)

CONTACT_PATH = "footer.contact"
CONTACT_FIELDS = ("address", "phone", "email")

WriteField = Literal["text", "html", "srcset", "src"]
DiagnosticKind = Literal[
    "no-document",
    "resolution-miss",
    "null-value",
    "empty-value",
    "structural-mismatch",
]


@dataclass(frozen=True)
class Write:
    """One mutation: set ``field`` of ``element`` to ``value``."""

    element: Any
    field: WriteField
    value: str


@dataclass(frozen=True)
class Diagnostic:
    """Why a binding produced no write."""

    kind: DiagnosticKind
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


@dataclass
class InjectionPlan:
    """Ordered writes plus diagnostics for the skipped bindings."""

    writes: list[Write] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def skip(self, kind: DiagnosticKind, path: str, message: str) -> None:
        logger.debug(f"Skipping binding {path!r}: {message}")
        self.diagnostics.append(Diagnostic(kind=kind, path=path, message=message))


def plan(bindings: BindingScan, document: JSONValue) -> InjectionPlan:
    """Compute the writes a content document implies for a page.

    Args:
        bindings: Result of scanning the page for binding targets
        document: Parsed content document (None when unavailable)

    Returns:
        InjectionPlan; the page itself is not modified
    """
    result = InjectionPlan()
    if document is None:
        result.skip("no-document", "", "no content document provided")
        return result

    for binding in bindings.text:
        _plan_text(result, binding, document)

    for binding in bindings.images:
        _plan_image(result, binding, document)

    projects = document.get("projects") if isinstance(document, dict) else None
    if isinstance(projects, list):
        for item in bindings.projects:
            _plan_project(result, item, projects)

    return result


def apply(writes: list[Write]) -> None:
    """Perform planned writes on the page elements.

    Args:
        writes: Instructions produced by plan()
    """
    for write in writes:
        element = write.element
        if write.field == "text":
            element.string = write.value
        elif write.field == "html":
            element.clear()
            element.extend(parse_fragment(write.value))
        else:
            element[write.field] = write.value


def inject(page: BeautifulSoup, document: JSONValue) -> InjectionPlan:
    """Scan a page, plan the writes for a document and apply them.

    Args:
        page: Parsed HTML document, modified in place
        document: Parsed content document (None leaves the page untouched)

    Returns:
        The applied InjectionPlan
    """
    bindings = scan(page)
    logger.debug(
        f"Found {len(bindings.text)} text bindings, {len(bindings.images)} image bindings, "
        f"{len(bindings.projects)} project items"
    )
    result = plan(bindings, document)
    apply(result.writes)
    return result


def to_text(value: JSONValue) -> str | None:
    """Render a scalar JSON value as element text.

    Args:
        value: Resolved JSON value

    Returns:
        Text as JavaScript's String() would format it, or None for objects,
        arrays and null
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _number_text(value)
    if isinstance(value, (str, int)):
        return str(value)
    return None


def _number_text(value: float) -> str:
    """Format a float the way JavaScript's Number#toString does."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    text = repr(value)
    if "e" not in text:
        return text

    mantissa, exponent_text = text.split("e")
    exponent = int(exponent_text)
    # Decimal notation for 1e-6 <= |value| < 1e21, exponent form outside
    if -7 < exponent < 21:
        return format(Decimal(text), "f")
    sign = "+" if exponent > 0 else "-"
    return f"{mantissa}e{sign}{abs(exponent)}"


def _plan_text(result: InjectionPlan, binding: TextBinding, document: JSONValue) -> None:
    path = binding.path
    value = resolve(document, path)
    if value is ABSENT:
        result.skip("resolution-miss", path, f"no value found for path: {path}")
        return
    if value is None:
        result.skip("null-value", path, f"value is null for path: {path}")
        return

    if path == CONTACT_PATH:
        if not isinstance(value, dict):
            result.skip("structural-mismatch", path, f"expected an object for path: {path}")
            return
        result.writes.append(Write(binding.element, "html", _contact_markup(value)))
        return

    _plan_text_value(result, binding.element, path, value)


def _plan_text_value(
    result: InjectionPlan, element: Any, path: str, value: JSONValue
) -> None:
    text = to_text(value)
    if text is None:
        result.skip(
            "structural-mismatch",
            path,
            f"expected a scalar for path: {path}, got {type(value).__name__}",
        )
        return

    text = text.strip()
    if not text:
        result.skip("empty-value", path, f"empty text for path: {path}")
        return

    result.writes.append(Write(element, "text", text))


def _contact_markup(contact: dict[str, JSONValue]) -> str:
    parts = []
    for name in CONTACT_FIELDS:
        text = to_text(contact.get(name))
        parts.append(text if text is not None else "")
    return "<br>".join(parts)


def _plan_image(result: InjectionPlan, binding: ImageBinding, document: JSONValue) -> None:
    path = binding.path
    value = resolve(document, path)
    if value is ABSENT:
        result.skip("resolution-miss", path, f"no image found for path: {path}")
        return
    if value is None:
        result.skip("null-value", path, f"image is null for path: {path}")
        return
    if not isinstance(value, str):
        result.skip("structural-mismatch", path, f"expected an image name for path: {path}")
        return

    reference = expand(value)
    if reference is None:
        result.skip("empty-value", path, f"empty image name for path: {path}")
        return

    slots = binding.slots
    if slots.avif is not None:
        result.writes.append(Write(slots.avif, "srcset", reference.srcset(PRIMARY_CODEC)))
    if slots.webp is not None:
        result.writes.append(Write(slots.webp, "srcset", reference.srcset(FALLBACK_CODEC)))
    if slots.img is not None:
        result.writes.append(Write(slots.img, "src", reference.fallback))


def _plan_project(
    result: InjectionPlan, item: ProjectItem, projects: list[JSONValue]
) -> None:
    path = f"projects[{item.index}].title"
    if item.index >= len(projects):
        return
    if item.heading is None or item.heading_bound:
        return

    project = projects[item.index]
    if project is None:
        result.skip("null-value", path, f"no project entry at index {item.index}")
        return
    if not isinstance(project, dict):
        result.skip("structural-mismatch", path, f"expected an object at projects[{item.index}]")
        return
    if "title" not in project:
        result.skip("resolution-miss", path, f"no value found for path: {path}")
        return
    if project["title"] is None:
        result.skip("null-value", path, f"value is null for path: {path}")
        return

    _plan_text_value(result, item.heading, path, project["title"])
