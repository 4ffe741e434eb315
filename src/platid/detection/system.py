"""Operating system classification.

Maps free-form OS strings (target triples, release file names, host OS
names) to an ``Os`` member.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, List, Optional, Tuple

from platid.core.logging import get_logger
from platid.core.models import Detection
from platid.core.normalize import normalize

LOGGER = get_logger(__name__)

ASPECT = "os"


class Os(str, Enum):
    """Operating system; the value is its canonical identifier."""

    UNKNOWN = "unknown"
    AIX = "aix"
    ANDROID = "android"
    DARWIN = "darwin"
    DRAGONFLYBSD = "dragonflybsd"
    FREEBSD = "freebsd"
    FUCHSIA = "fuchsia"
    HAIKU = "haiku"
    HPUX = "hpux"
    IBMI = "ibmi"
    ILLUMOS = "illumos"
    LINUX = "linux"
    NETBSD = "netbsd"
    OPENBSD = "openbsd"
    PLAN9 = "plan9"
    QNX = "qnx"
    REDOX = "redox"
    SOLARIS = "solaris"
    VXWORKS = "vxworks"
    WINDOWS = "windows"
    ZOS = "zos"

    def __str__(self) -> str:
        return self.value

    @property
    def id(self) -> str:
        return self.value

    @property
    def is_unknown(self) -> bool:
        return self is Os.UNKNOWN

    @property
    def is_bsd(self) -> bool:
        """Whether this is Darwin or one of the BSD family systems."""
        return self in (Os.DARWIN, Os.DRAGONFLYBSD, Os.FREEBSD, Os.NETBSD, Os.OPENBSD)


# Spellings reported by runtimes and tools (platform.system(), uname -s),
# keyed by their stripped normalized form. "linux" is absent: it needs the
# Android runtime check.
HOST_OS_MAP: Dict[str, Os] = {
    "aix": Os.AIX,
    "android": Os.ANDROID,
    "darwin": Os.DARWIN,
    "macosx": Os.DARWIN,
    "macos": Os.DARWIN,
    "ios": Os.DARWIN,
    "ipados": Os.DARWIN,
    "dragonflybsd": Os.DRAGONFLYBSD,
    "dragonfly": Os.DRAGONFLYBSD,
    "freebsd": Os.FREEBSD,
    "fuchsia": Os.FUCHSIA,
    "haiku": Os.HAIKU,
    "hpux": Os.HPUX,
    "os400": Os.IBMI,
    "illumos": Os.ILLUMOS,
    "netbsd": Os.NETBSD,
    "openbsd": Os.OPENBSD,
    "plan9": Os.PLAN9,
    "qnx": Os.QNX,
    "procnto": Os.QNX,
    "redox": Os.REDOX,
    "solaris": Os.SOLARIS,
    "sunos": Os.SOLARIS,
    "vxworks": Os.VXWORKS,
    "windows": Os.WINDOWS,
    "zos": Os.ZOS,
}

# Runtime names that mark a Linux kernel as Android.
ANDROID_RUNTIMES = frozenset({"dalvik", "art", "android"})


def _word(body: str) -> "re.Pattern[str]":
    return re.compile(rf"\b({body})\b")


# Order is load-bearing: the first matching rule wins.
_RULES: List[Tuple[Os, "re.Pattern[str]"]] = [
    # Android triples also name linux (armv7-linux-androideabi), so Android
    # goes first, and its suffix may run on (androideabi, android21).
    (Os.ANDROID, re.compile(r"\bandroid")),
    (Os.LINUX, re.compile(r"\b((many|musl)?linux|u?nix)(?=\d|\b)")),
    # Bare "os x" is too ambiguous to count; "osx" glued onto a RISC-V
    # ISA string (rv64i-osx) is not Darwin either.
    (Os.DARWIN, re.compile(
        r"\b(apple|darwin|i(pad)?os|mac(-?os(-?x)?)?)\b|(?<!32i-)(?<!64i-)\bosx\b"
    )),
    (Os.WINDOWS, _word(r"w(7|8|1[01]|32|64|xp)|win(dows)?(\d|\d\d|xp)?|mingw(32|64)?|cygwin")),
    (Os.AIX, _word(r"aix")),
    (Os.DRAGONFLYBSD, _word(r"dragon-?fly(-?bsd)?")),
    (Os.FREEBSD, _word(r"free-?bsd")),
    (Os.FUCHSIA, _word(r"fuchsia")),
    (Os.HAIKU, _word(r"haiku")),
    (Os.HPUX, _word(r"hp-?ux")),
    (Os.IBMI, _word(r"ibm-?i|os-?400")),
    (Os.ILLUMOS, _word(r"illum(-?os)?")),
    (Os.NETBSD, _word(r"net-?bsd")),
    (Os.OPENBSD, _word(r"open-?bsd")),
    (Os.PLAN9, _word(r"plan-?9")),
    (Os.QNX, _word(r"qnx|procnto")),
    (Os.REDOX, _word(r"redox")),
    (Os.SOLARIS, _word(r"solaris|sun-?os")),
    (Os.VXWORKS, _word(r"vx-?works")),
    (Os.ZOS, _word(r"z-?os")),
]


def detect_os(text: str) -> Detection[Os]:
    """Run the operating system cascade over arbitrary text.

    An exact canonical identifier or runtime spelling short-circuits the
    cascade.

    Args:
        text: Raw input, e.g. ``aarch64-apple-darwin`` or ``Windows 10``.

    Returns:
        Detection whose value is the first matching OS.
    """
    token = normalize(text)
    if token:
        exact = os_from_id(token)
        if exact is not None:
            return Detection(aspect=ASPECT, text=text, fallback=exact, value=exact, rule="id")
        exact = HOST_OS_MAP.get(normalize(text, strip=True))
        if exact is not None:
            return Detection(aspect=ASPECT, text=text, fallback=exact, value=exact, rule="exact")
        for os_, pattern in _RULES:
            if pattern.search(token):
                LOGGER.debug(f"os rule {os_.value} matched {text!r}")
                return Detection(aspect=ASPECT, text=text, fallback=os_, value=os_, rule=os_.value)
    return Detection(aspect=ASPECT, text=text, fallback=Os.UNKNOWN)


def parse_os(text: str) -> Os:
    """Strictly classify text as an operating system.

    Raises:
        UnsupportedPlatformError: If no operating system is recognized.
    """
    return detect_os(text).unwrap()


def classify_os(text: str) -> Os:
    """Leniently classify text, returning ``Os.UNKNOWN`` on failure."""
    return detect_os(text).or_unknown()


def detect_host_os(
    os_name: Optional[str],
    path_separator: Optional[str] = None,
    vm_name: Optional[str] = None,
) -> Detection[Os]:
    """Classify the operating system reported by the running host.

    A backslash path separator means Windows regardless of the OS name.
    Otherwise a Linux kernel with an Android runtime is Android, and
    anything else is classified like free text.
    """
    if path_separator == "\\":
        return Detection(
            aspect=ASPECT,
            text=os_name or "",
            fallback=Os.WINDOWS,
            value=Os.WINDOWS,
            rule="path-separator",
        )
    if not os_name:
        return Detection(aspect=ASPECT, text="", fallback=Os.UNKNOWN)

    key = normalize(os_name, strip=True)
    if key == "linux":
        runtime = normalize(vm_name or "", strip=True)
        found = Os.ANDROID if runtime in ANDROID_RUNTIMES else Os.LINUX
        return Detection(aspect=ASPECT, text=os_name, fallback=found, value=found, rule="host")

    return detect_os(os_name)


def os_from_id(value: str) -> Optional[Os]:
    """Return the known OS whose identifier is exactly ``value``."""
    for os_ in Os:
        if os_ is not Os.UNKNOWN and os_.value == value:
            return os_
    return None
