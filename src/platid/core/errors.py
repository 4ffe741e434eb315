"""Exceptions raised by strict classification entry points."""

from __future__ import annotations


class UnsupportedPlatformError(ValueError):
    """Raised when an aspect of a platform cannot be determined.

    Attributes:
        aspect: Dimension that failed (``os``, ``arch``, ``env``, ``platform``).
        value: The offending input.
    """

    def __init__(self, aspect: str, value: str):
        self.aspect = aspect
        self.value = value
        super().__init__(f"Unknown {aspect}: {value!r}")
