"""Architecture classification.

Maps free-form architecture strings (target triples, release file names,
host machine names) to an ``Arch`` variant. Each variant's identifier
encodes family, bitness and, when it differs from the family default,
endianness, e.g. ``x86-64``, ``arm-32-be``, ``mips-64-le``.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, List, NamedTuple, Optional

from platid.core.logging import get_logger
from platid.core.models import Detection
from platid.core.normalize import normalize

LOGGER = get_logger(__name__)

ASPECT = "arch"


class ArchFamily(str, Enum):
    """Instruction set families."""

    UNKNOWN = "unknown"
    ALPHA = "alpha"
    ARM = "arm"
    ITANIUM = "itanium"
    M68K = "m68k"
    MIPS = "mips"
    PPC = "ppc"
    RISCV = "riscv"
    S390 = "s390"
    SPARC = "sparc"
    SUPERH = "superh"
    X86 = "x86"


class Endianness(str, Enum):
    """Byte order of an architecture variant."""

    LITTLE = "le"
    BIG = "be"


# Families whose variants are big endian unless tagged with ``-le``
_BIG_ENDIAN_FAMILIES = frozenset({
    ArchFamily.M68K,
    ArchFamily.MIPS,
    ArchFamily.PPC,
    ArchFamily.S390,
    ArchFamily.SPARC,
})


class Arch(str, Enum):
    """Architecture variant; the value is its canonical identifier."""

    UNKNOWN_UNKNOWN = "unknown-unknown"
    UNKNOWN_32 = "unknown-32"
    UNKNOWN_64 = "unknown-64"
    ALPHA_64 = "alpha-64"
    ARM_32 = "arm-32"
    ARM_32_BE = "arm-32-be"
    ARM_64 = "arm-64"
    ARM_64_BE = "arm-64-be"
    ITANIUM_32 = "itanium-32"
    ITANIUM_64 = "itanium-64"
    M68K_32 = "m68k-32"
    MIPS_32 = "mips-32"
    MIPS_32_LE = "mips-32-le"
    MIPS_64 = "mips-64"
    MIPS_64_LE = "mips-64-le"
    PPC_32 = "ppc-32"
    PPC_32_LE = "ppc-32-le"
    PPC_64 = "ppc-64"
    PPC_64_LE = "ppc-64-le"
    RISCV_32 = "riscv-32"
    RISCV_64 = "riscv-64"
    S390_32 = "s390-32"
    S390_64 = "s390-64"
    SPARC_32 = "sparc-32"
    SPARC_64 = "sparc-64"
    SUPERH_32 = "superh-32"
    SUPERH_32_BE = "superh-32-be"
    X86_32 = "x86-32"
    X86_64 = "x86-64"

    def __str__(self) -> str:
        return self.value

    @property
    def id(self) -> str:
        return self.value

    @property
    def family(self) -> ArchFamily:
        return ArchFamily(self.value.split("-", 1)[0])

    @property
    def bitness(self) -> Optional[int]:
        """Word size in bits, ``None`` only for ``UNKNOWN_UNKNOWN``."""
        word = self.value.split("-")[1]
        return int(word) if word.isdigit() else None

    @property
    def endianness(self) -> Endianness:
        parts = self.value.split("-")
        if len(parts) == 3:
            return Endianness(parts[2])
        if self.family in _BIG_ENDIAN_FAMILIES:
            return Endianness.BIG
        return Endianness.LITTLE

    @property
    def is_32bit(self) -> bool:
        return self.bitness == 32

    @property
    def is_64bit(self) -> bool:
        return self.bitness == 64

    @property
    def is_unknown(self) -> bool:
        return self.family is ArchFamily.UNKNOWN

    @property
    def is_big_endian(self) -> bool:
        return self.endianness is Endianness.BIG

    @property
    def is_arm(self) -> bool:
        return self.family is ArchFamily.ARM

    @property
    def is_arm_be(self) -> bool:
        return self.is_arm and self.is_big_endian

    @property
    def is_arm_le(self) -> bool:
        return self.is_arm and not self.is_big_endian

    @property
    def is_itanium(self) -> bool:
        return self.family is ArchFamily.ITANIUM

    @property
    def is_mips(self) -> bool:
        return self.family is ArchFamily.MIPS

    @property
    def is_mips_be(self) -> bool:
        return self.is_mips and self.is_big_endian

    @property
    def is_mips_le(self) -> bool:
        return self.is_mips and not self.is_big_endian

    @property
    def is_ppc(self) -> bool:
        return self.family is ArchFamily.PPC

    @property
    def is_ppc_be(self) -> bool:
        return self.is_ppc and self.is_big_endian

    @property
    def is_ppc_le(self) -> bool:
        return self.is_ppc and not self.is_big_endian

    @property
    def is_riscv(self) -> bool:
        return self.family is ArchFamily.RISCV

    @property
    def is_s390(self) -> bool:
        return self.family is ArchFamily.S390

    @property
    def is_sparc(self) -> bool:
        return self.family is ArchFamily.SPARC

    @property
    def is_x86(self) -> bool:
        return self.family is ArchFamily.X86


# Spellings reported by runtimes and tools (platform.machine(), uname -m),
# keyed by their stripped normalized form.
HOST_ARCH_MAP: Dict[str, Arch] = {
    "alpha": Arch.ALPHA_64,
    "arm": Arch.ARM_32,
    "arm64": Arch.ARM_64,
    "aarch64": Arch.ARM_64,
    "ia64": Arch.ITANIUM_64,
    "m68k": Arch.M68K_32,
    "mips": Arch.MIPS_32,
    "mipsel": Arch.MIPS_32_LE,
    "mips64": Arch.MIPS_64,
    "mips64el": Arch.MIPS_64_LE,
    "ppc": Arch.PPC_32,
    "ppcle": Arch.PPC_32_LE,
    "ppc64": Arch.PPC_64,
    "ppc64le": Arch.PPC_64_LE,
    "s390": Arch.S390_32,
    "s390x": Arch.S390_64,
    "sparc": Arch.SPARC_32,
    "sparcv9": Arch.SPARC_64,
    "sun4u": Arch.SPARC_64,
    "sun4v": Arch.SPARC_64,
    "sh": Arch.SUPERH_32,
    "shbe": Arch.SUPERH_32_BE,
    "x8664": Arch.X86_64,
    "amd64": Arch.X86_64,
    "x86": Arch.X86_32,
    "i386": Arch.X86_32,
    "i686": Arch.X86_32,
    "pentium": Arch.X86_32,
}


class _Rule(NamedTuple):
    result: Arch
    pattern: "re.Pattern[str]"
    raw: bool = False
    """Match against the raw input instead of the normalized token."""


_ARM64 = r"(64|v[89]|v[1-9]\d+)"
_POWER = r"(power-?(pc|rs)?|ppc)"

# Order is load-bearing: the first matching rule wins.
_RULES: List[_Rule] = [
    _Rule(Arch.X86_64, re.compile(r"x86-?64|amd64|em64t|ia32e|(?<!nvpt)(?<!s390)(?<!s390-)x64|[89]86")),
    _Rule(Arch.X86_32, re.compile(r"(ia|x)32|(x|[1-7])86|pentium")),
    _Rule(Arch.ARM_64_BE, re.compile(r"aarch-?(64)?-?(be|eb)")),
    _Rule(Arch.ARM_64, re.compile(r"aarch")),
    _Rule(Arch.ARM_64_BE, re.compile(rf"arm-?({_ARM64}-?(be|eb)|(be|eb)-?{_ARM64})")),
    _Rule(Arch.ARM_32_BE, re.compile(r"arm-?((32)?-?(be|eb)|(be|eb))")),
    _Rule(Arch.ARM_64, re.compile(rf"arm-?{_ARM64}")),
    _Rule(Arch.ARM_32, re.compile(r"arm")),
    _Rule(Arch.ALPHA_64, re.compile(r"alpha")),
    # ia64n and ia6432 contain the 64-bit spelling
    _Rule(Arch.ITANIUM_32, re.compile(r"i(a(-?32|-?64(n|-?32))|tanium-?32)")),
    _Rule(Arch.ITANIUM_64, re.compile(r"i(a-?64|tanium)")),
    _Rule(Arch.M68K_32, re.compile(r"m68(k|000)(?!\d)")),
    _Rule(Arch.S390_64, re.compile(r"s390-?(x|64)|ibm-?z-?64")),
    _Rule(Arch.S390_32, re.compile(r"s390|ibm-?z")),
    _Rule(Arch.PPC_64_LE, re.compile(rf"{_POWER}-?(64-?(le|el)|(le|el)-?64)")),
    _Rule(Arch.PPC_32_LE, re.compile(rf"{_POWER}-?((32)?-?(le|el)|(le|el))")),
    _Rule(Arch.PPC_64, re.compile(rf"{_POWER}-?64")),
    _Rule(Arch.PPC_32, re.compile(_POWER)),
    _Rule(Arch.MIPS_64_LE, re.compile(r"mips(isa)?-?(64-?(r\d-?)?(le|el)|(le|el)-?64)")),
    _Rule(Arch.MIPS_32_LE, re.compile(r"mips(isa)?-?((32)?-?(r\d-?)?(le|el)|(le|el))")),
    _Rule(Arch.MIPS_64, re.compile(r"mips(isa)?-?64")),
    _Rule(Arch.MIPS_32, re.compile(r"mips")),
    _Rule(Arch.RISCV_64, re.compile(r"risc-?v-?64")),
    _Rule(Arch.RISCV_32, re.compile(r"risc-?v")),
    _Rule(Arch.SPARC_64, re.compile(r"ultra-?sparc|sparc-?(64|v(9|[1-9][01]))")),
    _Rule(Arch.SPARC_32, re.compile(r"sparc")),
    _Rule(Arch.SUPERH_32_BE, re.compile(r"(superh|\bsh)-?((32-?)?(be|eb)|(be|eb)-?32)")),
    _Rule(Arch.SUPERH_32, re.compile(r"superh")),
    # A lone "sh" is only SuperH when it is a word of its own: not a file
    # suffix (script.sh), not part of a shell name (bash, zsh) and not sh64.
    _Rule(
        Arch.SUPERH_32,
        re.compile(r"(?:^|[^\w.])sh(?:[ _-]?32)?(?![\w.])(?![ _-]*64)", re.IGNORECASE),
        raw=True,
    ),
    # Vendor shorthands naming OS and arch at once. Windows runs on other
    # archs too, so these only apply when nothing more specific matched.
    _Rule(Arch.X86_32, re.compile(r"win32")),
    _Rule(Arch.X86_64, re.compile(r"win64")),
]


def _unknown_for(token: str) -> Arch:
    if "32" in token:
        return Arch.UNKNOWN_32
    if "64" in token:
        return Arch.UNKNOWN_64
    return Arch.UNKNOWN_UNKNOWN


def detect_arch(text: str) -> Detection[Arch]:
    """Classify arbitrary text as an architecture.

    Exact runtime spellings (``amd64``, ``aarch64``, ``sun4v``) are looked
    up first, then the heuristic cascade runs over the normalized token.

    Args:
        text: Raw input, e.g. ``x86_64-unknown-linux-gnu``.

    Returns:
        Detection whose value is the first matching variant. When no family
        matched, the fallback still carries any bitness found in the text
        (``nvptx64`` yields ``UNKNOWN_64``).
    """
    exact = HOST_ARCH_MAP.get(normalize(text, strip=True))
    if exact is not None:
        return Detection(aspect=ASPECT, text=text, fallback=exact, value=exact, rule="exact")

    token = normalize(text)
    if token:
        for index, rule in enumerate(_RULES):
            subject = text if rule.raw else token
            if rule.pattern.search(subject):
                LOGGER.debug(f"arch rule #{index} matched {text!r} as {rule.result.value}")
                return Detection(
                    aspect=ASPECT,
                    text=text,
                    fallback=rule.result,
                    value=rule.result,
                    rule=f"{rule.result.value}#{index}",
                )
    return Detection(aspect=ASPECT, text=text, fallback=_unknown_for(token))


def parse_arch(text: str) -> Arch:
    """Strictly classify text as an architecture.

    Raises:
        UnsupportedPlatformError: If no architecture family is recognized.
    """
    return detect_arch(text).unwrap()


def classify_arch(text: str) -> Arch:
    """Leniently classify text, returning an ``UNKNOWN_*`` variant on failure."""
    return detect_arch(text).or_unknown()


def detect_host_arch(machine: str, bitness_hint: Optional[int] = None) -> Detection[Arch]:
    """Classify a machine name reported by the running host.

    ``bitness_hint`` (the pointer width of the running interpreter) replaces
    a text-derived bitness guess when no family could be determined.
    """
    detection = detect_arch(machine)
    if detection.matched or bitness_hint not in (32, 64):
        return detection
    fallback = Arch.UNKNOWN_32 if bitness_hint == 32 else Arch.UNKNOWN_64
    return Detection(aspect=ASPECT, text=machine, fallback=fallback)


def arch_from_id(value: str) -> Optional[Arch]:
    """Return the architecture whose identifier is exactly ``value``."""
    try:
        return Arch(value)
    except ValueError:
        return None
