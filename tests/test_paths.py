"""Tests for binding path resolution."""

import pytest
from pagebind.core.paths import ABSENT, is_absent, resolve

DOCUMENT = {
    "hero": {"title": "Welcome", "count": 0, "empty": "", "missing": None, "flag": False},
    "cards": [{"title": "First"}, {"title": "Second", "tags": ["a", "b"]}, None],
    "footer": {"contact": {"address": "12 Main St"}},
}


class TestResolve:
    """Tests for resolve()."""

    def test__nested_key__returns_value(self) -> None:
        """Walk plain keys left to right."""
        assert resolve(DOCUMENT, "hero.title") == "Welcome"

    def test__indexed_segment__returns_array_item(self) -> None:
        """Apply an index segment to an array field."""
        assert resolve(DOCUMENT, "cards[1].title") == "Second"

    def test__index_after_index__walks_nested_arrays(self) -> None:
        """Index segments compose with further index segments."""
        assert resolve(DOCUMENT, "cards[1].tags[0]") == "a"

    def test__terminal_object__returns_object(self) -> None:
        """Return containers unchanged, callers decide what to accept."""
        assert resolve(DOCUMENT, "footer.contact") == {"address": "12 Main St"}

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("hero.count", 0),
            ("hero.empty", ""),
            ("hero.flag", False),
            ("hero.missing", None),
            ("cards[2]", None),
        ],
    )
    def test__falsy_values__are_present(self, path: str, expected: object) -> None:
        """Presence gates success, not truthiness."""
        result = resolve(DOCUMENT, path)

        assert result is not ABSENT
        assert result == expected

    @pytest.mark.parametrize(
        "path",
        [
            "",
            "hero.unknown",
            "unknown.title",
            "cards[3]",
            "cards[3].title",
            "hero[0]",
            "hero.title.length",
            "cards.0",
            "hero..title",
            ".hero",
            "hero.",
            "cards[-1]",
            "cards[x]",
            "hero.missing.title",
        ],
    )
    def test__unresolvable_path__returns_absent(self, path: str) -> None:
        """Missing keys, bad indexes and malformed paths collapse to ABSENT."""
        assert resolve(DOCUMENT, path) is ABSENT

    @pytest.mark.parametrize("path", [None, 3, ["hero"]])
    def test__non_string_path__returns_absent(self, path: object) -> None:
        """Paths that are not strings never raise."""
        assert resolve(DOCUMENT, path) is ABSENT

    @pytest.mark.parametrize("document", [None, "text", 42, [1, 2], True])
    def test__non_object_document__returns_absent(self, document: object) -> None:
        """Scalars and arrays are not keyed containers."""
        assert resolve(document, "hero") is ABSENT

    def test__array_root_with_index_segment__returns_absent(self) -> None:
        """Index segments need a keyed field, not a bare array."""
        assert resolve([["x"]], "[0]") is ABSENT

    @pytest.mark.parametrize("path", ["cards[0]\n", "cards[0] ", "hero.title\n"])
    def test__trailing_whitespace__returns_absent(self, path: str) -> None:
        """Segments must match exactly, including the end of the string."""
        assert resolve(DOCUMENT, path) is ABSENT


class TestAbsent:
    """Tests for the ABSENT marker."""

    def test__absent__is_distinct_from_none(self) -> None:
        """ABSENT and a resolved JSON null are different outcomes."""
        assert ABSENT is not None
        assert is_absent(ABSENT)
        assert not is_absent(None)

    def test__absent__is_falsy(self) -> None:
        """ABSENT can be used in boolean context."""
        assert not ABSENT
        assert repr(ABSENT) == "ABSENT"
