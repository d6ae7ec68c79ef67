"""
Structural equality engine.

Two value-semantic objects are equal when their ``identity_values()`` are
pairwise deep-equal. Deep equality dispatches on the value's category:

- leaves compare with native ``==`` (no tolerance for floats)
- binary buffers compare kind and bytes
- ordered sequences compare length, then position by position
- sets compare size, then match every left element to a distinct right
  element it deep-equals (O(n^2), independent of iteration order)
- mappings compare size, key presence (using the mapping's own lookup) and
  values

Cycle handling: a per-call ``IdentityPairSet`` holds the pairs currently
being compared. Meeting the same pair again answers "equal so far" instead
of recursing. Two cyclic graphs that differ only inside the cycle are
therefore reported equal; this is what guarantees termination.
"""

from __future__ import annotations

import logging
from typing import Any

from valuekit._identity import IdentityPair, IdentityPairSet
from valuekit._leaf import Category, as_sequence, categorize, is_leaf
from valuekit.buffers import buffer_view, buffers_equal
from valuekit.protocol import HasIdentityValues, has_value_semantics, identity_values_of

logger = logging.getLogger(__name__)

_CONTAINERS = (Category.SEQUENCE, Category.SET, Category.MAPPING)


class EqualityEngine:
    """
    Stateless deep-equality service.

    Every top-level call builds its own visited set, so one engine can be
    shared across threads as long as the compared graphs are not mutated
    during the call.
    """

    def equals(self, a: Any, b: Any) -> bool:
        """
        Compare two objects.

        Value-semantic objects are compared structurally. If neither side
        exposes ``identity_values()`` the native ``==`` decides; if only one
        side does, they are unequal.
        """
        if a is b:
            return True

        a_has, b_has = has_value_semantics(a), has_value_semantics(b)
        if not a_has and not b_has:
            return bool(a == b)
        if not (a_has and b_has):
            return False

        return self._equals_objects(a, b, IdentityPairSet())

    def deep_equals(self, a: Any, b: Any) -> bool:
        """Compare two arbitrary values (containers, buffers, value objects)."""
        return self._deep_equals(a, b, IdentityPairSet())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _equals_objects(
        self, a: HasIdentityValues, b: HasIdentityValues, visited: IdentityPairSet
    ) -> bool:
        if a is b:
            return True

        pair = IdentityPair.of(a, b)
        if pair in visited:
            logger.debug(
                "Revisited %s/%s pair; assuming equal", type(a).__name__, type(b).__name__
            )
            return True

        with visited.visiting(pair):
            a_values = identity_values_of(a)
            b_values = identity_values_of(b)

            # Nothing to compare: the declared kind is the only discriminator
            if not a_values and not b_values:
                return type(a) is type(b)

            if len(a_values) != len(b_values):
                return False

            return all(
                self._deep_equals(x, y, visited) for x, y in zip(a_values, b_values)
            )

    def _deep_equals(self, a: Any, b: Any, visited: IdentityPairSet) -> bool:
        if a is b:
            return True
        if a is None or b is None:
            return False

        a_leaf, b_leaf = is_leaf(a), is_leaf(b)
        if a_leaf and b_leaf:
            return bool(a == b)
        if a_leaf or b_leaf:
            # Text is never a sequence of characters here
            other = b if a_leaf else a
            return categorize(other) is Category.OPAQUE and bool(a == b)

        a_cat, b_cat = categorize(a), categorize(b)
        if a_cat is not b_cat:
            if a_cat is Category.OPAQUE or b_cat is Category.OPAQUE:
                return bool(a == b)
            return False

        if a_cat is Category.VALUE_OBJECT:
            return self._equals_objects(a, b, visited)
        if a_cat is Category.BUFFER:
            return buffers_equal(buffer_view(a), buffer_view(b))
        if a_cat in _CONTAINERS:
            pair = IdentityPair.of(a, b)
            if pair in visited:
                logger.debug(
                    "Revisited %s/%s pair; assuming equal",
                    type(a).__name__,
                    type(b).__name__,
                )
                return True
            with visited.visiting(pair):
                if a_cat is Category.SEQUENCE:
                    return self._sequences_equal(as_sequence(a), as_sequence(b), visited)
                if a_cat is Category.SET:
                    return self._sets_equal(a, b, visited)
                return self._mappings_equal(a, b, visited)

        return bool(a == b)

    def _sequences_equal(self, a: Any, b: Any, visited: IdentityPairSet) -> bool:
        if len(a) != len(b):
            return False
        return all(self._deep_equals(x, y, visited) for x, y in zip(a, b))

    def _sets_equal(self, a: Any, b: Any, visited: IdentityPairSet) -> bool:
        if len(a) != len(b):
            return False

        candidates = list(b)
        used = [False] * len(candidates)
        for item in a:
            for index, other in enumerate(candidates):
                if not used[index] and self._deep_equals(item, other, visited):
                    used[index] = True
                    break
            else:
                return False
        return True

    def _mappings_equal(self, a: Any, b: Any, visited: IdentityPairSet) -> bool:
        if len(a) != len(b):
            return False
        for key, value in a.items():
            # Key presence uses the mapping's own key equality
            if key not in b:
                return False
            if not self._deep_equals(value, b[key], visited):
                return False
        return True


_engine = EqualityEngine()


def equals(a: Any, b: Any) -> bool:
    """
    Structural equality of two objects.

    Example:
        >>> equals(Point(1, 2), Point(1, 2))
        True
        >>> equals(Point(1, 2), Point(2, 1))
        False
    """
    return _engine.equals(a, b)


def deep_equals(a: Any, b: Any) -> bool:
    """Structural equality of two arbitrary values."""
    return _engine.deep_equals(a, b)
