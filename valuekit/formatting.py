"""
Human-readable rendering of value-semantic objects.

``format_value(obj)`` renders with the object's own layout (its
``layout_config()`` if defined, otherwise the formatter's default).
``format_with(obj, layout)`` renders the top-level object with an explicit
layout; nested value objects always use their own.

Rendering rules for identity values:
- leaves: ``str(value)``
- buffers: ``bytes([1, 2, 3])`` up to the inline limit, else ``bytes (2048 bytes)``
- sequences: ``[a, b]``; sets: ``{a, b}``; mappings: ``{k: v}``
- nested value objects: recursively, with their own layout
- anything else: ``str(value)``

A composite met again while it is still being rendered is replaced by a
placeholder: ``(circular ref)`` for value objects, ``[/* circular ref */]``
for sequences and ``{/* circular ref */}`` for sets and mappings.
"""

from __future__ import annotations

import logging
from typing import Any

from valuekit._identity import IdentitySet
from valuekit._leaf import Category, as_sequence, categorize, is_leaf
from valuekit.buffers import buffer_view
from valuekit.config import EngineConfig
from valuekit.layout import STANDARD, LayoutConfig
from valuekit.protocol import (
    HasIdentityValues,
    HasLayoutConfig,
    has_value_semantics,
    identity_values_of,
)

logger = logging.getLogger(__name__)

CIRCULAR_OBJECT = "(circular ref)"
CIRCULAR_SEQUENCE = "[/* circular ref */]"
CIRCULAR_MAPPING = "{/* circular ref */}"

INDENT = "  "


class Formatter:
    """
    Stateless formatting service.

    Args:
        config: Buffer rendering settings. Defaults to ``EngineConfig()``.
        default_layout: Layout for value objects that do not define
            ``layout_config()``.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        default_layout: LayoutConfig = STANDARD,
    ) -> None:
        self.config = config or EngineConfig()
        self.default_layout = default_layout

    def layout_of(self, obj: Any) -> LayoutConfig:
        """Return the layout *obj* asks for, or the default."""
        if not isinstance(obj, type) and isinstance(obj, HasLayoutConfig):
            return obj.layout_config()
        return self.default_layout

    def format(self, obj: Any) -> str:
        """Render *obj* with its own layout; non-value objects use ``str()``."""
        if not has_value_semantics(obj):
            return str(obj)
        return self._format_object(obj, self.layout_of(obj), IdentitySet())

    def format_with(self, obj: Any, layout: LayoutConfig) -> str:
        """Render *obj* with an explicit top-level *layout*."""
        if not has_value_semantics(obj):
            return str(obj)
        return self._format_object(obj, layout, IdentitySet())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _format_object(
        self, obj: HasIdentityValues, layout: LayoutConfig, visited: IdentitySet
    ) -> str:
        if obj in visited:
            logger.debug("Revisited %s while formatting", type(obj).__name__)
            return CIRCULAR_OBJECT

        with visited.visiting(obj):
            values = identity_values_of(obj)
            type_name = type(obj).__name__ if layout.include_type_name else ""

            if not values:
                return f"{type_name}()"

            rendered = [self._render(value, visited) for value in values]
            if layout.include_names:
                names = layout.names_for(values)
                rendered = [f"{name}: {text}" for name, text in zip(names, rendered)]

            content = layout.effective_separator.join(rendered)
            if layout.multi_line and len(rendered) > 1:
                indented = "\n".join(INDENT + line for line in content.split("\n"))
                return f"{type_name}(\n{indented}\n)"
            return f"{type_name}({content})"

    def _render(self, value: Any, visited: IdentitySet) -> str:
        if value is None or is_leaf(value):
            return str(value)

        category = categorize(value)
        if category is Category.VALUE_OBJECT:
            return self._format_object(value, self.layout_of(value), visited)
        if category is Category.BUFFER:
            return self._render_buffer(value)
        if category is Category.OPAQUE:
            return str(value)

        if value in visited:
            logger.debug("Revisited %s while formatting", type(value).__name__)
            return CIRCULAR_SEQUENCE if category is Category.SEQUENCE else CIRCULAR_MAPPING

        with visited.visiting(value):
            if category is Category.SEQUENCE:
                items = ", ".join(self._render(item, visited) for item in as_sequence(value))
                return f"[{items}]"
            if category is Category.SET:
                items = ", ".join(self._render(item, visited) for item in value)
                return f"{{{items}}}"
            entries = ", ".join(
                f"{self._render(key, visited)}: {self._render(item, visited)}"
                for key, item in value.items()
            )
            return f"{{{entries}}}"

    def _render_buffer(self, value: Any) -> str:
        view = buffer_view(value)
        if len(view) <= self.config.buffer_inline_limit:
            return f"{view.type_name}([{', '.join(str(byte) for byte in view.data)}])"
        return f"{view.type_name} ({len(view)} bytes)"


_formatter = Formatter()


def format_value(obj: Any) -> str:
    """
    Render *obj* using its own layout.

    Example:
        >>> format_value(Point(1, 2))
        'Point(value0: 1, value1: 2)'
    """
    return _formatter.format(obj)


def format_with(obj: Any, layout: LayoutConfig) -> str:
    """
    Render *obj* with an explicit layout.

    Example:
        >>> format_with(Point(1, 2), COMPACT)
        'Point(1, 2)'
    """
    return _formatter.format_with(obj, layout)


def layout_of(obj: Any) -> LayoutConfig:
    """Return the layout :func:`format_value` would use for *obj*."""
    return _formatter.layout_of(obj)
