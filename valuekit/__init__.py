"""
valuekit: Structural value semantics for Python objects.

A class opts in by exposing ``identity_values()``, an ordered list of the
values that define it. From that single method valuekit derives:

- deep, cycle-safe equality (``equals``)
- a hash consistent with that equality (``hash_code``)
- a readable string form with pluggable naming and layout (``format``)

Nested containers, binary buffers and self-referential graphs are handled;
every traversal terminates.

Example:
    import valuekit

    @valuekit.value_object
    class Point:
        x: int
        y: int

    Point(1, 2) == Point(1, 2)         # True
    hash(Point(1, 2)) == hash(Point(1, 2))
    print(Point(1, 2))                 # Point(x: 1, y: 2)

    # Or bring your own class
    class Pair:
        def __init__(self, left, right):
            self.left, self.right = left, right

        def identity_values(self):
            return [self.left, self.right]

    valuekit.equals(Pair(1, [2]), Pair(1, [2]))        # True
    valuekit.format_with(Pair(1, 2), valuekit.COMPACT)  # 'Pair(1, 2)'
"""

__version__ = "0.1.0"

# Configuration
from valuekit.config import EngineConfig, ValueKitConfig, find_config_file

# Display (rich)
from valuekit.display import print_value, render_value

# Engines
from valuekit.equality import EqualityEngine, deep_equals, equals
from valuekit.errors import IdentityValuesError
from valuekit.formatting import Formatter, format_value, format_with, layout_of
from valuekit.formatting import format_value as format
from valuekit.hashing import HashingEngine, combine_hash, deep_hash, hash_code

# Layout
from valuekit.layout import (
    COMPACT,
    COMPACT_MULTILINE,
    MULTILINE,
    PRESETS,
    SMART_NAMES,
    STANDARD,
    TYPE_BASED_NAMES,
    LayoutConfig,
    positional_name,
    smart_name,
    type_based_name,
)

# Opting in
from valuekit.mixin import ValueSemantics, value_object
from valuekit.protocol import HasIdentityValues, HasLayoutConfig, has_value_semantics

__all__ = [
    # Version
    "__version__",
    # Protocol
    "HasIdentityValues",
    "HasLayoutConfig",
    "has_value_semantics",
    "ValueSemantics",
    "value_object",
    # Equality
    "EqualityEngine",
    "equals",
    "deep_equals",
    # Hashing
    "HashingEngine",
    "hash_code",
    "deep_hash",
    "combine_hash",
    # Formatting
    "Formatter",
    "format",
    "format_value",
    "format_with",
    "layout_of",
    "LayoutConfig",
    "STANDARD",
    "COMPACT",
    "MULTILINE",
    "COMPACT_MULTILINE",
    "SMART_NAMES",
    "TYPE_BASED_NAMES",
    "PRESETS",
    "positional_name",
    "smart_name",
    "type_based_name",
    # Display
    "print_value",
    "render_value",
    # Configuration
    "EngineConfig",
    "ValueKitConfig",
    "find_config_file",
    # Errors
    "IdentityValuesError",
]
