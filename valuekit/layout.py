"""
Layout configuration for the formatter (PUBLIC).

A ``LayoutConfig`` is a plain, read-only record chosen by the caller (or by a
value object through ``layout_config()``). It controls:

- whether values are prefixed with names (``name: value``)
- how names are chosen (explicit list, generator, or positional ``valueN``)
- separator and single-line vs. indented multi-line layout
- whether the type name wraps the output (``Point(...)`` vs ``(...)``)

Predefined layouts:
- STANDARD → ``User(value0: 1, value1: Alice)``
- COMPACT → ``User(1, Alice)``
- MULTILINE / COMPACT_MULTILINE → one value per indented line
- SMART_NAMES → names inferred from values (``email``, ``age``, ...)
- TYPE_BASED_NAMES → names from runtime types (``str``, ``int``, ...)
"""

from __future__ import annotations

import decimal
import numbers
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass
from typing import Any, Callable

from valuekit.buffers import is_buffer

NameGenerator = Callable[[Any, int], str]

# Smart naming: text shorter than this is treated as a name
SHORT_TEXT_LIMIT = 50
MAX_AGE = 150
MIN_TIMESTAMP = 1_000_000_000


def positional_name(value: Any, index: int) -> str:
    """Default naming: ``value0``, ``value1``, ..."""
    return f"value{index}"


def smart_name(value: Any, index: int) -> str:
    """
    Infer a name from the shape of a value.

    - text containing ``@`` → ``email``; short text → ``name``; else ``text``
    - integers in [0, 150] → ``age``; above 1e9 → ``timestamp``; else ``number``
    - other real numbers → ``decimal``; booleans → ``flag``
    - sequences → ``items``; sets → ``collection``; mappings → ``data``
    - binary buffers → ``bytes``; None → ``nullValueN``

    Anything else falls back to the positional name.
    """
    if value is None:
        return f"nullValue{index}"
    if isinstance(value, str):
        if "@" in value:
            return "email"
        if len(value) < SHORT_TEXT_LIMIT:
            return "name"
        return "text"
    if isinstance(value, bool):
        return "flag"
    if isinstance(value, numbers.Integral):
        if 0 <= value <= MAX_AGE:
            return "age"
        if value > MIN_TIMESTAMP:
            return "timestamp"
        return "number"
    if isinstance(value, (numbers.Real, decimal.Decimal)):
        return "decimal"
    if is_buffer(value):
        return "bytes"
    if isinstance(value, Mapping):
        return "data"
    if isinstance(value, Set):
        return "collection"
    if isinstance(value, Sequence):
        return "items"
    return positional_name(value, index)


def type_based_name(value: Any, index: int) -> str:
    """Name a value by its lower-cased runtime type (``str``, ``int``, ...)."""
    if value is None:
        return "nullValue"
    return type(value).__name__.lower()


@dataclass(frozen=True)
class LayoutConfig:
    """
    Formatter layout.

    Attributes:
        include_names: Prefix each value with a name (``name: value``).
        multi_line: Put each value on its own indented line.
        separator: Custom separator. Defaults to ``", "``, or ``",\\n"`` when
            ``multi_line`` is set. A custom separator is used in both modes.
        include_type_name: Wrap output as ``TypeName(...)`` instead of ``(...)``.
        explicit_names: Names used in order. When shorter than the number of
            values, the remaining values get names from ``name_generator``
            (or positional names continuing the index).
        name_generator: ``(value, index) -> name`` used for values not
            covered by ``explicit_names``.
    """

    include_names: bool = True
    multi_line: bool = False
    separator: str | None = None
    include_type_name: bool = True
    explicit_names: tuple[str, ...] | None = None
    name_generator: NameGenerator | None = None

    def __post_init__(self) -> None:
        # Accept any sequence of names but keep the record immutable
        if self.explicit_names is not None and not isinstance(self.explicit_names, tuple):
            object.__setattr__(self, "explicit_names", tuple(self.explicit_names))

    @property
    def effective_separator(self) -> str:
        if self.separator is not None:
            return self.separator
        return ",\n" if self.multi_line else ", "

    def names_for(self, values: Sequence[Any]) -> list[str]:
        """Resolve one name per value."""
        explicit = self.explicit_names or ()
        generate = self.name_generator or positional_name
        names = list(explicit[: len(values)])
        for index in range(len(names), len(values)):
            names.append(generate(values[index], index))
        return names


STANDARD = LayoutConfig()
COMPACT = LayoutConfig(include_names=False)
MULTILINE = LayoutConfig(multi_line=True)
COMPACT_MULTILINE = LayoutConfig(include_names=False, multi_line=True)
SMART_NAMES = LayoutConfig(name_generator=smart_name)
TYPE_BASED_NAMES = LayoutConfig(name_generator=type_based_name)

PRESETS: dict[str, LayoutConfig] = {
    "standard": STANDARD,
    "compact": COMPACT,
    "multiline": MULTILINE,
    "compact_multiline": COMPACT_MULTILINE,
    "smart_names": SMART_NAMES,
    "type_based_names": TYPE_BASED_NAMES,
}
