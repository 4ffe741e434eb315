"""Heuristic classifiers for operating systems, architectures and C runtimes.

Each classifier runs an ordered rule cascade over normalized text; the
first matching rule wins.
"""

from platid.detection.arch import Arch, ArchFamily, Endianness
from platid.detection.env import Env
from platid.detection.system import Os

__all__ = [
    "Arch",
    "ArchFamily",
    "Endianness",
    "Env",
    "Os",
]
