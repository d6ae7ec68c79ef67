"""
Binary buffer views.

Fixed-size binary buffers are compared byte-for-byte and hashed over their
bytes. This module normalises the buffer types valuekit understands into a
``BufferView``: a *kind* tag that must match for two buffers to be equal, and
a flat unsigned-byte ``memoryview`` over the contents.

Supported buffers:
- ``bytes``, ``bytearray`` and ``memoryview`` (kind ``"bytes"``)
- ``array.array`` (kind ``("array", typecode)``)
- ``numpy.ndarray`` with a non-object dtype (kind ``("ndarray", dtype, shape)``)
"""

from __future__ import annotations

import array
from dataclasses import dataclass
from typing import Any, Hashable

import numpy as np


@dataclass(frozen=True)
class BufferView:
    """
    A normalised view over a binary buffer.

    Attributes:
        kind: Tag that must be equal for two buffers to compare equal.
        type_name: Runtime type name used when formatting.
        data: Flat, contiguous, unsigned-byte view of the contents.
    """

    kind: Hashable
    type_name: str
    data: memoryview

    def __len__(self) -> int:
        return self.data.nbytes


def is_buffer(obj: Any) -> bool:
    """Return True if *obj* is a binary buffer valuekit compares by bytes."""
    if isinstance(obj, (bytes, bytearray, memoryview, array.array)):
        return True
    return isinstance(obj, np.ndarray) and not obj.dtype.hasobject


def buffer_view(obj: Any) -> BufferView:
    """
    Build a ``BufferView`` for a supported buffer.

    Raises:
        TypeError: If *obj* is not a supported buffer.
    """
    type_name = type(obj).__name__
    if isinstance(obj, (bytes, bytearray)):
        return BufferView("bytes", type_name, memoryview(obj))
    if isinstance(obj, memoryview):
        if obj.c_contiguous:
            return BufferView("bytes", type_name, obj.cast("B"))
        return BufferView("bytes", type_name, memoryview(obj.tobytes()))
    if isinstance(obj, array.array):
        return BufferView(("array", obj.typecode), type_name, memoryview(obj).cast("B"))
    if isinstance(obj, np.ndarray) and not obj.dtype.hasobject:
        contiguous = np.ascontiguousarray(obj)
        return BufferView(
            ("ndarray", obj.dtype.str, obj.shape),
            type_name,
            memoryview(contiguous.reshape(-1).view(np.uint8)),
        )
    raise TypeError(f"Not a binary buffer: {type_name}")


def buffers_equal(a: BufferView, b: BufferView) -> bool:
    """Byte-exact comparison of two buffer views."""
    if a.kind != b.kind:
        return False
    if len(a) != len(b):
        return False
    return a.data == b.data
