"""
Structural hashing engine.

The hash is consistent with the equality engine: ``equals(a, b)`` implies
``hash_code(a) == hash_code(b)``. It is not stable across processes (text
hashing is randomised per interpreter), so it must never be persisted.

Combination uses a Jenkins-style one-at-a-time step masked to 29 bits, so
intermediate values stay small regardless of the inputs.

Per category:
- leaves: native ``hash()`` (``None`` hashes to 0)
- value objects: values folded in order, see ``HashingEngine.hash_code``
- buffers: kind, then every byte; buffers above the sample threshold are
  hashed at a stride plus their first and last byte. The sampled hash
  collides more often, which is safe because equality stays byte-exact.
- sequences: folded in order
- sets: element hashes XOR-ed together (order-insensitive)
- mappings: ``combine(key, value)`` per entry, XOR-ed together
- anything else: ``id()``; a foreign ``__hash__`` is never called because
  it may recurse back into a cyclic graph

Cycle handling: a per-call ``IdentitySet`` tracks composites currently being
hashed. A revisited composite contributes 0 and traversal continues.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import Any

from valuekit._identity import IdentitySet
from valuekit._leaf import Category, as_sequence, categorize, is_leaf
from valuekit.buffers import BufferView, buffer_view
from valuekit.config import EngineConfig
from valuekit.protocol import HasIdentityValues, has_value_semantics, identity_values_of

logger = logging.getLogger(__name__)

HASH_MASK = 0x1FFFFFFF
SEQUENCE_SEED = 1
VALUE_OBJECT_SEED = 0x5EED


def combine_hash(hash_: int, value: int) -> int:
    """Fold *value* into *hash_*. Position-sensitive, result fits in 29 bits."""
    hash_ = HASH_MASK & (hash_ + value)
    hash_ = HASH_MASK & (hash_ + ((0x0007FFFF & hash_) << 10))
    return hash_ ^ (hash_ >> 6)


class HashingEngine:
    """
    Stateless structural hashing service.

    Args:
        config: Buffer sampling settings. Defaults to ``EngineConfig()``.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def hash_code(self, obj: Any) -> int:
        """
        Hash an object.

        Objects without value semantics use their native hash; unhashable
        containers and buffers get the structural hash instead, including
        tuples that hold unhashable items.

        A value object is seeded with its type when it has no identity values
        (equality then compares types) and with a fixed seed otherwise
        (equality compares values only), then each value is folded in order.

        Foreign objects nested in identity values hash by ``id()``, so two
        distinct but ``==``-equal instances of a foreign class (a plain
        frozen dataclass, say) make the objects equal with different hashes.
        Give such classes ``identity_values()`` to hash them structurally.
        """
        if not has_value_semantics(obj):
            if isinstance(obj, Hashable):
                try:
                    return hash(obj)
                except TypeError:
                    # A tuple holding a list is Hashable but not hashable
                    return self.deep_hash(obj)
            return self.deep_hash(obj)

        visited = IdentitySet()
        with visited.visiting(obj):
            return self._hash_object(obj, visited)

    def deep_hash(self, value: Any) -> int:
        """Structural hash of an arbitrary value."""
        return self._deep_hash(value, IdentitySet())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _hash_object(self, obj: HasIdentityValues, visited: IdentitySet) -> int:
        values = identity_values_of(obj)
        if not values:
            return hash(type(obj))

        h = VALUE_OBJECT_SEED
        for value in values:
            h = combine_hash(h, self._deep_hash(value, visited))
        return h

    def _deep_hash(self, value: Any, visited: IdentitySet) -> int:
        if value is None:
            return 0
        if is_leaf(value):
            return hash(value)

        category = categorize(value)
        if category is Category.BUFFER:
            # Buffers hold no references, so they never need tracking
            return self._hash_buffer(buffer_view(value))

        if value in visited:
            logger.debug("Revisited %s while hashing; contributing 0", type(value).__name__)
            return 0

        with visited.visiting(value):
            if category is Category.VALUE_OBJECT:
                return self._hash_object(value, visited)

            if category is Category.SEQUENCE:
                h = SEQUENCE_SEED
                for item in as_sequence(value):
                    h = combine_hash(h, self._deep_hash(item, visited))
                return h

            if category is Category.SET:
                h = 0
                for item in value:
                    h ^= self._deep_hash(item, visited)
                return h

            if category is Category.MAPPING:
                h = 0
                for key, item in value.items():
                    h ^= combine_hash(
                        self._deep_hash(key, visited), self._deep_hash(item, visited)
                    )
                return h

            return id(value)

    def _hash_buffer(self, view: BufferView) -> int:
        h = hash(view.kind)
        data = view.data
        length = len(view)

        if length > self.config.buffer_sample_threshold:
            stride = self.config.sample_stride(length)
            logger.debug("Sampling %d-byte %s at stride %d", length, view.type_name, stride)
            for byte in data[::stride]:
                h = combine_hash(h, byte)
            h = combine_hash(h, data[0])
            h = combine_hash(h, data[-1])
            return h

        for byte in data:
            h = combine_hash(h, byte)
        return h


_engine = HashingEngine()


def hash_code(obj: Any) -> int:
    """
    Structural hash of an object, consistent with :func:`equals`.

    Example:
        >>> hash_code(Point(1, 2)) == hash_code(Point(1, 2))
        True
    """
    return _engine.hash_code(obj)


def deep_hash(value: Any) -> int:
    """Structural hash of an arbitrary value, consistent with :func:`deep_equals`."""
    return _engine.deep_hash(value)
