"""
Exceptions raised by valuekit.

The engines themselves never raise for well-formed input. The only error
that valuekit raises on its own is for a malformed ``identity_values()``
result, which is a programming error in the participating class.
"""

from __future__ import annotations


class IdentityValuesError(TypeError):
    """Raised when ``identity_values()`` does not return an iterable of values."""

    pass
