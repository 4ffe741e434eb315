"""Canonical platform identifiers.

Grammar (both halves are plain ``Os`` / ``Arch`` identifiers)::

    platform   = os "-" arch
    os         = segment
    arch       = segment "-" bitness [ "-" endianness ]
    segment    = [a-z][a-z0-9]*
    bitness    = [1-9][0-9]* | "unknown"
    endianness = "be" | "le"

An omitted endianness means the family default. ``unknown`` stands for any
unresolved part, so the fully unknown platform is ``unknown-unknown-unknown``.

``strict_decode`` never applies heuristics: it only accepts strings that
``encode`` produces, which keeps round-tripping exact no matter how the
heuristic cascades evolve. ``decode`` is the lenient counterpart.
"""

from __future__ import annotations

import itertools
import re
from functools import lru_cache
from typing import Dict, List, Optional

from platid.core.errors import UnsupportedPlatformError
from platid.core.models import Detection
from platid.detection.arch import Arch, detect_arch
from platid.detection.system import Os, detect_os
from platid.platform import Platform

ASPECT = "platform"

CANONICAL_PATTERN = re.compile(
    r"^(?P<os>[a-z][a-z0-9]*)-"
    r"(?P<arch>(?P<family>[a-z][a-z0-9]*)-(?P<bitness>[1-9][0-9]*|unknown)(?:-(?P<endianness>be|le))?)$"
)


def encode(platform: Platform) -> str:
    """Render a platform as its canonical identifier."""
    return platform.id


def is_canonical(value: str) -> bool:
    """Whether ``value`` is syntactically a canonical identifier."""
    return CANONICAL_PATTERN.match(value) is not None


@lru_cache(maxsize=1)
def _canonical_table() -> Dict[str, Platform]:
    return {
        p.id: p
        for p in (Platform(os_, arch) for os_, arch in itertools.product(Os, Arch))
    }


def all_platforms(include_unknown: bool = False) -> List[Platform]:
    """Every representable platform, sorted by identifier."""
    platforms = sorted(_canonical_table().values())
    if include_unknown:
        return platforms
    return [p for p in platforms if not p.is_unknown]


def strict_decode_or_none(value: str) -> Optional[Platform]:
    """Return the platform whose canonical identifier is exactly ``value``."""
    if not is_canonical(value):
        return None
    return _canonical_table().get(value)


def strict_decode(value: str) -> Platform:
    """Exactly decode a canonical identifier.

    Raises:
        UnsupportedPlatformError: If ``value`` is not produced by ``encode``.
    """
    platform = strict_decode_or_none(value)
    if platform is None:
        raise UnsupportedPlatformError(ASPECT, value)
    return platform


def detect_platform(text: str) -> Detection[Platform]:
    """Run the OS and architecture cascades over the same text.

    The detection only carries a value when both dimensions matched; the
    fallback holds whatever partial result was found.
    """
    os_detection = detect_os(text)
    arch_detection = detect_arch(text)
    fallback = Platform(os_detection.or_unknown(), arch_detection.or_unknown())
    value = fallback if os_detection.matched and arch_detection.matched else None
    return Detection(aspect=ASPECT, text=text, fallback=fallback, value=value)


def parse_platform(text: str) -> Platform:
    """Strictly classify text as a platform using the heuristic cascades.

    Raises:
        UnsupportedPlatformError: If either OS or architecture is unknown.
    """
    return detect_platform(text).unwrap()


def decode(text: str) -> Platform:
    """Leniently classify text, filling unresolved parts with ``unknown``."""
    return detect_platform(text).or_unknown()
