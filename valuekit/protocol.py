"""
The value-semantics capability (PUBLIC).

A class opts into structural equality, hashing and formatting by exposing
``identity_values()``: an ordered sequence of the values that define its
identity. Dispatch is by capability, never by base class, so any object with
a callable ``identity_values`` participates.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Protocol, Sequence, runtime_checkable

from valuekit.errors import IdentityValuesError

if TYPE_CHECKING:
    from valuekit.layout import LayoutConfig


@runtime_checkable
class HasIdentityValues(Protocol):
    """
    Protocol for value-semantic objects.

    Implementations must return the same values, in the same order, for the
    whole lifetime of the object. Order is significant: two objects whose
    values are permutations of each other are not equal.

    Example:
    ```python
    class Point:
        def __init__(self, x: int, y: int) -> None:
            self.x = x
            self.y = y

        def identity_values(self) -> list[Any]:
            return [self.x, self.y]

    valuekit.equals(Point(1, 2), Point(1, 2))  # True
    ```
    """

    def identity_values(self) -> Sequence[Any]:
        """Return the values that define this object's identity."""
        ...


@runtime_checkable
class HasLayoutConfig(Protocol):
    """Optional hook: a value object may choose how it is formatted."""

    def layout_config(self) -> LayoutConfig:
        """Return the layout used when this object is formatted."""
        ...


def has_value_semantics(obj: Any) -> bool:
    """Return True if *obj* is an instance exposing ``identity_values()``."""
    if isinstance(obj, type):
        return False
    return isinstance(obj, HasIdentityValues)


def identity_values_of(obj: HasIdentityValues) -> list[Any]:
    """
    Call ``obj.identity_values()`` and materialise the result as a list.

    Raises:
        IdentityValuesError: If the result is not an iterable of values.
    """
    values = obj.identity_values()
    if not isinstance(values, Iterable) or isinstance(values, (str, bytes, bytearray)):
        # Text and bytes are iterable but would silently explode into characters
        raise IdentityValuesError(
            f"{type(obj).__name__}.identity_values() must return a sequence of "
            f"values, got {type(values).__name__}"
        )
    return list(values)
