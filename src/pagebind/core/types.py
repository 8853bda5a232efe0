"""Core type definitions."""

from typing import Any, NewType

# Content identifier naming a document under content/ (e.g., "kitchen")
# Distinct from the page file name it is routed from
PageId = NewType("PageId", str)

# Parsed JSON value: dict, list, str, int, float, bool or None
JSONValue = Any
