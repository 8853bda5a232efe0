"""Binding path resolution over parsed JSON content.

A binding path is a string of segments separated by ``.``. Each segment is
either a bare key (``footer``) or a key with a single array index
(``cards[0]``). Segments are applied strictly left to right, each against
the value produced by the previous one.
"""

import re
from typing import Final

from pagebind.core.types import JSONValue

INDEX_SEGMENT_RE = re.compile(r"([A-Za-z0-9_]+)\[([0-9]+)\]")


class _Absent:
    """Marker for a path that does not resolve.

    Distinct from None, which is a legitimate resolved JSON null.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Final = _Absent()


def resolve(document: JSONValue, path: object) -> JSONValue:
    """Resolve a binding path against a content document.

    Args:
        document: Parsed JSON value used as the root
        path: Binding path, e.g. "footer.contact" or "cards[1].title"

    Returns:
        The terminal value (may be None, an object or an array), or ABSENT
        if the path is empty, malformed, or walks through a missing key or
        an out-of-range index
    """
    if not isinstance(path, str) or not path:
        return ABSENT

    current = document
    for segment in path.split("."):
        if not segment:
            return ABSENT

        match = INDEX_SEGMENT_RE.fullmatch(segment)
        if match:
            current = _index(current, match.group(1), int(match.group(2)))
        else:
            current = _key(current, segment)

        if current is ABSENT:
            return ABSENT

    return current


def is_absent(value: object) -> bool:
    """Check whether a resolved value is the ABSENT marker."""
    return value is ABSENT


def _key(current: JSONValue, key: str) -> JSONValue:
    if not isinstance(current, dict) or key not in current:
        return ABSENT
    return current[key]


def _index(current: JSONValue, key: str, index: int) -> JSONValue:
    items = _key(current, key)
    if not isinstance(items, list) or index >= len(items):
        return ABSENT
    return items[index]
