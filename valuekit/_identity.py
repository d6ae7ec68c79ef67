"""
Identity-keyed visited sets for cycle detection (internal).

All three traversals guard against reference cycles by remembering which
composites are currently on the recursion stack. Membership is by reference
identity (``id()``), never by value, so checking membership never recurses
into the very equality or hash being computed.

Entries are only held while the referenced objects are on the caller's
stack, so their ids cannot be reused for the lifetime of an entry. Every
set is created fresh for one top-level call and discarded afterwards.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator


@dataclass(frozen=True)
class IdentityPair:
    """
    An ordered pair of objects, compared and hashed by reference identity.

    Only the ids are stored; equality of two pairs never calls ``__eq__`` on
    the objects themselves.
    """

    left_id: int
    right_id: int

    @classmethod
    def of(cls, a: Any, b: Any) -> IdentityPair:
        return cls(id(a), id(b))


class IdentityPairSet:
    """Pairs of objects currently being compared by the equality engine."""

    def __init__(self) -> None:
        self._pairs: set[IdentityPair] = set()

    def __contains__(self, pair: IdentityPair) -> bool:
        return pair in self._pairs

    def __len__(self) -> int:
        return len(self._pairs)

    @contextmanager
    def visiting(self, pair: IdentityPair) -> Iterator[None]:
        """Hold *pair* in the set for the duration of the block."""
        self._pairs.add(pair)
        try:
            yield
        finally:
            self._pairs.discard(pair)


class IdentitySet:
    """Objects currently being hashed or formatted."""

    def __init__(self) -> None:
        self._ids: set[int] = set()

    def __contains__(self, obj: Any) -> bool:
        return id(obj) in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    @contextmanager
    def visiting(self, obj: Any) -> Iterator[None]:
        """Hold *obj* in the set for the duration of the block."""
        key = id(obj)
        self._ids.add(key)
        try:
            yield
        finally:
            self._ids.discard(key)
