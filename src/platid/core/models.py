from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from platid.core.errors import UnsupportedPlatformError

T = TypeVar("T")


@dataclass(frozen=True)
class Detection(Generic[T]):
    """Outcome of running one classifier cascade over an input.

    Strict callers ``unwrap()`` it, lenient callers take ``or_unknown()``.
    Both views come from the same cascade run, so they cannot disagree.
    """

    aspect: str
    text: str
    fallback: T
    value: Optional[T] = None
    rule: Optional[str] = None

    @property
    def matched(self) -> bool:
        """Whether the cascade produced a definite answer."""
        return self.value is not None

    def unwrap(self) -> T:
        """Return the detected value or raise UnsupportedPlatformError."""
        if self.value is None:
            raise UnsupportedPlatformError(self.aspect, self.text)
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value if self.value is not None else default

    def or_unknown(self) -> T:
        """Return the detected value, or the dimension's unknown sentinel."""
        return self.unwrap_or(self.fallback)
