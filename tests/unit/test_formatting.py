"""Tests for the formatter and its layouts."""

from __future__ import annotations

from decimal import Decimal

import numpy as np

from valuekit.config import EngineConfig
from valuekit.formatting import Formatter, format_value, format_with
from valuekit.layout import (
    COMPACT,
    COMPACT_MULTILINE,
    MULTILINE,
    SMART_NAMES,
    STANDARD,
    TYPE_BASED_NAMES,
    LayoutConfig,
    smart_name,
    type_based_name,
)


class Person:
    def __init__(self, name, age, email, layout=STANDARD):
        self.name = name
        self.age = age
        self.email = email
        self.layout = layout

    def identity_values(self):
        return [self.name, self.age, self.email]

    def layout_config(self):
        return self.layout


class Plain:
    """A value object without a layout of its own."""

    def __init__(self, *values):
        self.values = values

    def identity_values(self):
        return list(self.values)


class Compact:
    def __init__(self, *values):
        self.values = values

    def identity_values(self):
        return list(self.values)

    def layout_config(self):
        return COMPACT


class Node:
    def __init__(self, name, children=None):
        self.name = name
        self.children = children if children is not None else []

    def identity_values(self):
        return [self.name, self.children]

    def layout_config(self):
        return COMPACT


class Empty:
    def identity_values(self):
        return []


class TestLayouts:
    """Tests for format_with() under each layout."""

    def test_standard(self):
        """STANDARD uses positional names on a single line."""
        p = Person("Alice", 25, "alice@example.com")
        assert format_with(p, STANDARD) == (
            "Person(value0: Alice, value1: 25, value2: alice@example.com)"
        )

    def test_compact(self):
        """COMPACT omits names."""
        p = Person("Bob", 30, "bob@example.com")
        assert format_with(p, COMPACT) == "Person(Bob, 30, bob@example.com)"

    def test_multiline(self):
        """MULTILINE puts each value on an indented line."""
        p = Person("Charlie", 40, "c@example.com")
        assert format_with(p, MULTILINE) == (
            "Person(\n"
            "  value0: Charlie,\n"
            "  value1: 40,\n"
            "  value2: c@example.com\n"
            ")"
        )

    def test_compact_multiline(self):
        """COMPACT_MULTILINE indents values without names."""
        p = Person("Dora", 22, "d@example.com")
        assert format_with(p, COMPACT_MULTILINE) == (
            "Person(\n  Dora,\n  22,\n  d@example.com\n)"
        )

    def test_smart_names(self):
        """SMART_NAMES infers names from the values."""
        p = Person("Eve", 28, "eve@example.com")
        assert format_with(p, SMART_NAMES) == (
            "Person(name: Eve, age: 28, email: eve@example.com)"
        )

    def test_type_based_names(self):
        """TYPE_BASED_NAMES uses lower-cased runtime type names."""
        p = Person("Frank", 33, "f@example.com")
        assert format_with(p, TYPE_BASED_NAMES) == (
            "Person(str: Frank, int: 33, str: f@example.com)"
        )

    def test_custom_separator(self):
        """A custom separator replaces the default."""
        p = Person("Grace", 44, "g@example.com")
        layout = LayoutConfig(separator=" | ", include_names=False)
        assert format_with(p, layout) == "Person(Grace | 44 | g@example.com)"

    def test_without_type_name(self):
        """Output is bare parentheses without the type name."""
        p = Person("Henry", 55, "h@example.com")
        layout = LayoutConfig(include_type_name=False)
        assert format_with(p, layout) == (
            "(value0: Henry, value1: 55, value2: h@example.com)"
        )

    def test_explicit_names(self):
        """Explicit names replace positional ones."""
        p = Person("Ivy", 60, "ivy@example.com")
        layout = LayoutConfig(explicit_names=["first", "years", "contact"])
        assert format_with(p, layout) == (
            "Person(first: Ivy, years: 60, contact: ivy@example.com)"
        )

    def test_short_explicit_names_fill_positionally(self):
        """Missing explicit names continue the positional index."""
        p = Person("Jill", 66, "jill@example.com")
        layout = LayoutConfig(explicit_names=["first"])
        assert format_with(p, layout) == (
            "Person(first: Jill, value1: 66, value2: jill@example.com)"
        )

    def test_short_explicit_names_with_generator(self):
        """Missing explicit names come from the generator when one is set."""
        p = Person("Jill", 66, "jill@example.com")
        layout = LayoutConfig(explicit_names=["first"], name_generator=smart_name)
        assert format_with(p, layout) == (
            "Person(first: Jill, age: 66, email: jill@example.com)"
        )

    def test_multiline_with_custom_separator(self):
        """A custom separator is kept in multi-line mode."""
        p = Person("Kira", 77, "k@example.com")
        layout = LayoutConfig(multi_line=True, separator=" | ")
        assert format_with(p, layout) == (
            "Person(\n  value0: Kira | value1: 77 | value2: k@example.com\n)"
        )

    def test_multiline_single_value_stays_inline(self):
        """Indentation only applies with two or more values."""
        assert format_with(Plain(1), MULTILINE) == "Plain(value0: 1)"

    def test_custom_generator(self):
        """A name generator receives each value and its index."""
        layout = LayoutConfig(name_generator=lambda value, index: f"n{index}")
        assert format_with(Plain("x", 1, True), layout) == "Plain(n0: x, n1: 1, n2: True)"

    def test_empty_with_type_name(self):
        """An object without values renders as TypeName()."""
        assert format_with(Empty(), STANDARD) == "Empty()"

    def test_empty_without_type_name(self):
        """An object without values renders as () without the type name."""
        assert format_with(Empty(), LayoutConfig(include_type_name=False)) == "()"


class TestOwnLayout:
    """Tests for format_value() honouring layout_config()."""

    def test_uses_layout_config(self):
        """format_value() uses the object's own layout."""
        p = Person("Lee", 21, "lee@example.com", layout=COMPACT)
        assert format_value(p) == "Person(Lee, 21, lee@example.com)"

    def test_default_layout(self):
        """Objects without layout_config() use the formatter default."""
        assert format_value(Plain(1, 2)) == "Plain(value0: 1, value1: 2)"
        assert Formatter(default_layout=COMPACT).format(Plain(1, 2)) == "Plain(1, 2)"

    def test_nested_objects_use_their_own_layout(self):
        """The parent's layout does not leak into nested objects."""
        outer = Plain(Compact(1, 2), 3)
        assert format_value(outer) == "Plain(value0: Compact(1, 2), value1: 3)"
        assert format_with(outer, COMPACT) == "Plain(Compact(1, 2), 3)"
        assert format_with(Compact(Plain(1), 2), STANDARD) == (
            "Compact(value0: Plain(value0: 1), value1: 2)"
        )

    def test_foreign_objects(self):
        """Objects without value semantics render with str()."""
        assert format_value(42) == "42"
        assert format_with([1, 2], COMPACT) == "[1, 2]"


class TestValues:
    """Tests for rendering individual identity values."""

    def test_leaves(self):
        """Leaves render with str()."""
        assert format_with(Plain(None, 1.5, True, "x"), COMPACT) == "Plain(None, 1.5, True, x)"

    def test_containers(self):
        """Sequences, sets and mappings use their bracket conventions."""
        value = Plain([1, 2], (3,), {4}, {"k": [5]})
        assert format_with(value, COMPACT) == "Plain([1, 2], [3], {4}, {k: [5]})"

    def test_small_buffers(self):
        """Small buffers render as a byte list."""
        assert format_with(Plain(bytes([1, 2, 3])), COMPACT) == "Plain(bytes([1, 2, 3]))"
        assert format_with(Plain(bytearray(b"\x01")), COMPACT) == "Plain(bytearray([1]))"
        array = np.array([1, 2], dtype=np.uint8)
        assert format_with(Plain(array), COMPACT) == "Plain(ndarray([1, 2]))"

    def test_large_buffers(self):
        """Large buffers render as a byte count."""
        assert format_with(Plain(bytes(100)), COMPACT) == "Plain(bytes (100 bytes))"

    def test_inline_limit_is_configurable(self):
        """The byte-list limit comes from the engine config."""
        formatter = Formatter(EngineConfig(buffer_inline_limit=2))
        assert formatter.format_with(Plain(bytes([1, 2, 3])), COMPACT) == (
            "Plain(bytes (3 bytes))"
        )

    def test_shared_values_render_twice(self):
        """A value shared by siblings is not mistaken for a cycle."""
        shared = Compact(1)
        assert format_with(Plain(shared, [shared]), COMPACT) == (
            "Plain(Compact(1), [Compact(1)])"
        )


class TestCycles:
    """Tests for circular-reference placeholders."""

    def test_self_reference(self):
        """A self-referential object renders a placeholder."""
        x = Node("x")
        x.children.append(x)
        assert format_value(x) == "Node(x, [(circular ref)])"

    def test_mutual_reference(self):
        """Mutually-referential objects terminate with a placeholder."""
        a = Node("a")
        b = Node("b", [a])
        a.children.append(b)
        assert format_value(a) == "Node(a, [Node(b, [(circular ref)])])"
        assert format_value(a) == format_value(a)

    def test_circular_list(self):
        """A list containing itself renders the list placeholder."""
        items = [1]
        items.append(items)
        assert format_with(Plain(items), COMPACT) == "Plain([1, [/* circular ref */]])"

    def test_circular_mapping(self):
        """A mapping containing itself renders the mapping placeholder."""
        mapping = {}
        mapping["self"] = mapping
        assert format_with(Plain(mapping), COMPACT) == "Plain({self: {/* circular ref */}})"


class TestNameGenerators:
    """Tests for smart_name() and type_based_name()."""

    def test_smart_text(self):
        """Text is named by its shape."""
        assert smart_name("a@b.c", 0) == "email"
        assert smart_name("Alice", 0) == "name"
        assert smart_name("x" * 60, 0) == "text"

    def test_smart_numbers(self):
        """Numbers are named by their range and kind."""
        assert smart_name(0, 0) == "age"
        assert smart_name(150, 0) == "age"
        assert smart_name(151, 0) == "number"
        assert smart_name(-5, 0) == "number"
        assert smart_name(2_000_000_000, 0) == "timestamp"
        assert smart_name(3.5, 0) == "decimal"
        assert smart_name(Decimal("1.5"), 0) == "decimal"
        assert smart_name(True, 0) == "flag"

    def test_smart_containers(self):
        """Containers and buffers have fixed names."""
        assert smart_name([1], 0) == "items"
        assert smart_name((1,), 0) == "items"
        assert smart_name({1}, 0) == "collection"
        assert smart_name({}, 0) == "data"
        assert smart_name(b"x", 0) == "bytes"

    def test_smart_fallbacks(self):
        """None and unknown values use indexed names."""
        assert smart_name(None, 3) == "nullValue3"
        assert smart_name(object(), 2) == "value2"

    def test_type_based(self):
        """Type-based names are lower-cased type names."""
        assert type_based_name(1, 0) == "int"
        assert type_based_name("a", 0) == "str"
        assert type_based_name(Plain(), 0) == "plain"
        assert type_based_name(None, 0) == "nullValue"
