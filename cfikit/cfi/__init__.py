"""Canonical fragment identifier (``epubcfi(...)``) parsing, ordering and ranges."""

from __future__ import annotations

from .compare import EQUAL, GREATER, LESS, ORDERING_NAMES, compare, sort_key, sorted_locations
from .errors import CFIError, EmptyRangeCollapse, IncomparableBase, InvalidStepIndex, MalformedIdentifier
from .parser import parse, parse_segment
from .ranges import collapse, make_range, make_range_identifier
from .serialize import segment_string, serialize
from .spine import point_in_spine, spine_base, spine_index
from .types import (
    AFTER,
    BEFORE,
    ELEMENT,
    TEXT,
    Assertion,
    Identifier,
    Path,
    Step,
    element_step,
    equal_step,
    is_cfi_string,
    text_step,
)

__all__ = [
    "AFTER",
    "BEFORE",
    "ELEMENT",
    "TEXT",
    "EQUAL",
    "GREATER",
    "LESS",
    "ORDERING_NAMES",
    "Assertion",
    "Identifier",
    "Path",
    "Step",
    "CFIError",
    "EmptyRangeCollapse",
    "IncomparableBase",
    "InvalidStepIndex",
    "MalformedIdentifier",
    "collapse",
    "compare",
    "element_step",
    "equal_step",
    "is_cfi_string",
    "make_range",
    "make_range_identifier",
    "parse",
    "parse_segment",
    "point_in_spine",
    "segment_string",
    "serialize",
    "sort_key",
    "sorted_locations",
    "spine_base",
    "spine_index",
    "text_step",
]
