"""
Wiring value semantics into Python's data model.

Two ways to opt a class in:

- ``ValueSemantics``: a mixin that implements ``__eq__``, ``__hash__``,
  ``__repr__`` and ``__rich_repr__`` on top of the class's own
  ``identity_values()``.
- ``@value_object``: a decorator that turns a class into a frozen dataclass
  whose identity values are its fields in declaration order, and installs
  the same methods.

Either way the engines only ever look for ``identity_values()``; the mixin is
a convenience, not a requirement.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Iterator, Sequence, TypeVar, dataclass_transform, overload

from valuekit.equality import equals
from valuekit.formatting import format_value, layout_of
from valuekit.hashing import hash_code
from valuekit.layout import STANDARD, LayoutConfig
from valuekit.protocol import has_value_semantics, identity_values_of

T = TypeVar("T")


class ValueSemantics:
    """
    Mixin providing value-based ``==``, ``hash()`` and ``repr()``.

    Subclasses implement ``identity_values()`` and may override
    ``layout_config()``. When combining with ``@dataclass`` pass
    ``eq=False`` (and ``repr=False`` to keep this repr), otherwise the
    dataclass replaces ``__eq__`` and drops ``__hash__``.

    Example:
    ```python
    class User(ValueSemantics):
        def __init__(self, user_id: str, name: str) -> None:
            self.user_id = user_id
            self.name = name

        def identity_values(self) -> list[Any]:
            return [self.user_id, self.name]

    User("1", "Alice") == User("1", "Alice")  # True
    repr(User("1", "Alice"))                  # 'User(value0: 1, value1: Alice)'
    ```
    """

    __slots__ = ()

    def identity_values(self) -> Sequence[Any]:
        raise NotImplementedError(f"{type(self).__name__} must implement identity_values()")

    def __eq__(self, other: object) -> bool:
        return _value_eq(self, other)

    def __hash__(self) -> int:
        return hash_code(self)

    def __repr__(self) -> str:
        return format_value(self)

    def __rich_repr__(self) -> Iterator[tuple[Any, ...]]:
        yield from _value_rich_repr(self)


def _value_eq(self: Any, other: object) -> bool:
    if not has_value_semantics(other):
        return NotImplemented
    return equals(self, other)


def _value_rich_repr(self: Any) -> Iterator[tuple[Any, ...]]:
    # rich treats 2-tuples as (name, value) and 1-tuples as positional
    values = identity_values_of(self)
    layout = layout_of(self)
    if not layout.include_names:
        for value in values:
            yield (value,)
        return
    yield from zip(layout.names_for(values), values)


@overload
def value_object(cls: type[T]) -> type[T]: ...
@overload
def value_object(
    *,
    frozen: bool = True,
    layout: LayoutConfig | None = None,
) -> Any: ...


@dataclass_transform(frozen_default=True, field_specifiers=(dataclasses.Field,))
def value_object(
    cls: type[T] | None = None,
    *,
    frozen: bool = True,
    layout: LayoutConfig | None = None,
) -> type[T] | Any:
    """
    Decorator that creates a dataclass with value semantics.

    This decorator:
    1. Applies @dataclass(frozen=True, eq=False) to the class (unless it is
       already a dataclass)
    2. Adds ``identity_values()`` returning the compared fields in order,
       unless the class defines its own
    3. Adds ``layout_config()`` naming values after the fields, unless the
       class defines its own or *layout* is given
    4. Installs ``__eq__``, ``__hash__``, ``__repr__`` and ``__rich_repr__``

    Args:
        cls: The class to decorate (when used without parentheses).
        frozen: Whether to make the dataclass frozen (default: True).
        layout: Layout used when formatting instances.

    Example:
    ```python
    @valuekit.value_object
    class Point:
        x: int
        y: int

    Point(1, 2) == Point(1, 2)  # True
    repr(Point(1, 2))           # 'Point(x: 1, y: 2)'
    ```
    """

    def decorator(cls: type[T]) -> type[T]:
        if not dataclasses.is_dataclass(cls):
            cls = dataclasses.dataclass(frozen=frozen, eq=False)(cls)

        field_names = tuple(f.name for f in dataclasses.fields(cls) if f.compare)

        if "identity_values" not in cls.__dict__:

            def identity_values(self) -> list[Any]:
                return [getattr(self, name) for name in field_names]

            cls.identity_values = identity_values  # type: ignore

        if "layout_config" not in cls.__dict__:
            effective = layout or dataclasses.replace(STANDARD, explicit_names=field_names)

            def layout_config(self) -> LayoutConfig:
                return effective

            cls.layout_config = layout_config  # type: ignore

        cls.__eq__ = _value_eq  # type: ignore
        cls.__hash__ = ValueSemantics.__hash__  # type: ignore
        cls.__repr__ = ValueSemantics.__repr__  # type: ignore
        cls.__rich_repr__ = _value_rich_repr  # type: ignore
        return cls

    # Handle both @value_object and @value_object() syntax
    if cls is not None:
        return decorator(cls)
    return decorator
