"""
Display utilities for value objects.

Prints formatted values through a rich Console. The text is emitted as a
``rich.text.Text`` so brackets in rendered containers are never parsed as
console markup.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.text import Text

from valuekit.formatting import format_value, format_with
from valuekit.layout import LayoutConfig


def render_value(obj: Any, layout: LayoutConfig | None = None, style: str = "") -> Text:
    """Render *obj* (with *layout*, or its own) as rich ``Text``."""
    text = format_with(obj, layout) if layout is not None else format_value(obj)
    return Text(text, style=style)


def print_value(
    obj: Any,
    console: Console | None = None,
    layout: LayoutConfig | None = None,
    style: str = "",
) -> None:
    """
    Print a value object to the console.

    Args:
        obj: The object to print.
        console: Optional rich Console instance.
        layout: Layout for the top-level object (default: its own).
        style: Optional rich style applied to the whole text.

    Example:
        print_value(Point(1, 2), layout=MULTILINE)
    """
    if console is None:
        console = Console()
    console.print(render_value(obj, layout, style))
