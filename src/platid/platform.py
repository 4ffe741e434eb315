"""Platform aggregate: the pairing of operating system and architecture."""

from __future__ import annotations

import functools
from dataclasses import dataclass

from platid.detection.arch import Arch
from platid.detection.system import Os


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Platform:
    """Operating system and architecture of a native artifact or host.

    The C runtime environment is not part of a platform: it is
    expensive to determine and one host may run binaries linked against
    several runtimes (glibc and musl side by side).

    Equality, ordering and hashing are defined by ``id`` only.
    """

    os: Os = Os.UNKNOWN
    arch: Arch = Arch.UNKNOWN_UNKNOWN

    @property
    def id(self) -> str:
        """Canonical identifier, e.g. ``linux-x86-64`` or ``linux-arm-32-be``."""
        return f"{self.os.value}-{self.arch.value}"

    @property
    def is_unknown(self) -> bool:
        """Whether either half of the platform is unknown."""
        return self.os.is_unknown or self.arch.is_unknown

    def __str__(self) -> str:
        return self.id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Platform):
            return NotImplemented
        return self.id == other.id

    def __lt__(self, other: "Platform") -> bool:
        if not isinstance(other, Platform):
            return NotImplemented
        return self.id < other.id

    def __hash__(self) -> int:
        return hash(self.id)
