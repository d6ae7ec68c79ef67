"""
Leaf classification and composite categories (internal).

A leaf is a terminal value that cannot take part in a reference cycle, so the
engines compare, hash and render it directly without touching a visited set.
Everything else is a composite and falls into one of the ``Category`` values.
"""

from __future__ import annotations

import datetime
import numbers
import uuid
from collections.abc import Mapping, Sequence, Set
from enum import Enum
from pathlib import PurePath
from typing import Any

import numpy as np

from valuekit.buffers import is_buffer
from valuekit.protocol import has_value_semantics

_LEAF_TYPES: tuple[type, ...] = (
    str,
    bool,
    numbers.Number,
    np.generic,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    Enum,
    uuid.UUID,
    PurePath,
)


class Category(str, Enum):
    """How a non-leaf value is traversed."""

    VALUE_OBJECT = "value_object"
    BUFFER = "buffer"
    SEQUENCE = "sequence"
    SET = "set"
    MAPPING = "mapping"
    OPAQUE = "opaque"


def is_leaf(value: Any) -> bool:
    """Return True if *value* is a terminal scalar (None, text, number, time, enum...)."""
    if value is None:
        return True
    if is_buffer(value):
        # np.bytes_ is a numpy scalar and bytes at once; it hashes as bytes
        return False
    return isinstance(value, _LEAF_TYPES)


def categorize(value: Any) -> Category:
    """
    Classify a non-leaf value.

    Callers check ``is_leaf`` first; text is reported as opaque rather than
    as a sequence of characters.

    Order matters: buffers are sequences too, and a value object may also
    happen to be iterable, so the value-semantics capability wins.
    """
    if has_value_semantics(value):
        return Category.VALUE_OBJECT
    if is_buffer(value):
        return Category.BUFFER
    if isinstance(value, Mapping):
        return Category.MAPPING
    if isinstance(value, Set):
        return Category.SET
    if isinstance(value, Sequence) and not isinstance(value, str):
        return Category.SEQUENCE
    if isinstance(value, np.ndarray):
        # Object-dtype arrays hold references, not bytes
        return Category.SEQUENCE
    return Category.OPAQUE


def as_sequence(value: Any) -> Sequence[Any]:
    """Return an indexable view of an ordered sequence."""
    if isinstance(value, np.ndarray):
        return value.tolist()
    return value
