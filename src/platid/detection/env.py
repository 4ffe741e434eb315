"""C runtime / ABI environment classification.

A platform's environment defines the libc/ABI that shared libraries and
dynamic executables are linked against. Some operating systems fix it;
for the rest it is inferred from auxiliary text such as a target triple
or the first line of ``ldd --version``.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, List, Optional, Tuple

from platid.core.logging import get_logger
from platid.core.models import Detection
from platid.core.normalize import normalize
from platid.detection.system import Os

LOGGER = get_logger(__name__)

ASPECT = "env"


class Env(str, Enum):
    """C runtime family; the value is its canonical identifier."""

    UNKNOWN = "unknown"
    BIONIC = "bionic"
    BSDLIBC = "bsdlibc"
    DIETLIBC = "dietlibc"
    GLIBC = "glibc"
    KLIBC = "klibc"
    MSVC = "msvc"
    MUSL = "musl"
    NEWLIB = "newlib"
    UCLIBC = "uclibc"

    def __str__(self) -> str:
        return self.value

    @property
    def id(self) -> str:
        return self.value

    @property
    def is_unknown(self) -> bool:
        return self is Env.UNKNOWN


# Operating systems that ship exactly one C runtime.
FIXED_ENVS: Dict[Os, Env] = {
    Os.ANDROID: Env.BIONIC,
    Os.DARWIN: Env.BSDLIBC,
    Os.DRAGONFLYBSD: Env.BSDLIBC,
    Os.FREEBSD: Env.BSDLIBC,
    Os.NETBSD: Env.BSDLIBC,
    Os.OPENBSD: Env.BSDLIBC,
    Os.WINDOWS: Env.MSVC,
}

# Consulted after the exact env names, in order.
_RULES: List[Tuple[Env, "re.Pattern[str]"]] = [
    # gnu also shows up in GNU-branded systems that do not use glibc
    # (https://en.wikipedia.org/wiki/GNU_variants); kept because gcc and
    # *-gnu triples are by far the common case.
    (Env.GLIBC, re.compile(r"g(cc|nu)")),
    (Env.BSDLIBC, re.compile(r"apple|bsd|darwin|mac|osx|ios|dragonfly")),
    (Env.MSVC, re.compile(r"crtdll|ucrt|vcruntime|\bvs|win")),
    (Env.BIONIC, re.compile(r"android")),
]


def fixed_env(os_: Os) -> Optional[Env]:
    """Return the environment ``os_`` implies unconditionally, if any."""
    return FIXED_ENVS.get(os_)


def detect_env_text(text: str) -> Detection[Env]:
    """Run the environment cascade over arbitrary text."""
    token = normalize(text)
    if token:
        for env in Env:
            if env is not Env.UNKNOWN and env.value in token:
                return Detection(aspect=ASPECT, text=text, fallback=env, value=env, rule="id")
        for env, pattern in _RULES:
            if pattern.search(token):
                LOGGER.debug(f"env rule {env.value} matched {text!r}")
                return Detection(aspect=ASPECT, text=text, fallback=env, value=env, rule=env.value)
    return Detection(aspect=ASPECT, text=text, fallback=Env.UNKNOWN)


def detect_env(os_: Os, probe_text: str = "") -> Detection[Env]:
    """Classify the environment of a platform running ``os_``.

    Args:
        os_: Operating system of the platform.
        probe_text: Auxiliary text, ignored when the OS fixes the answer.

    Returns:
        Detection of the environment.
    """
    fixed = fixed_env(os_)
    if fixed is not None:
        return Detection(aspect=ASPECT, text=probe_text, fallback=fixed, value=fixed, rule="os")
    return detect_env_text(probe_text)


def parse_env(os_: Os, probe_text: str = "") -> Env:
    """Strictly classify the environment.

    Raises:
        UnsupportedPlatformError: If the environment cannot be determined.
    """
    return detect_env(os_, probe_text).unwrap()


def classify_env(os_: Os, probe_text: str = "") -> Env:
    """Leniently classify the environment, returning ``Env.UNKNOWN`` on failure."""
    return detect_env(os_, probe_text).or_unknown()


def env_from_id(value: str) -> Optional[Env]:
    """Return the known environment whose identifier is exactly ``value``."""
    for env in Env:
        if env is not Env.UNKNOWN and env.value == value:
            return env
    return None
