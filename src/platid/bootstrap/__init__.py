"""
Bootstrap module: everything that touches the running host.

This module handles:
- Host property capture (OS name, machine, path separator, runtime)
- The dynamic linker probe used to detect the C runtime
- The platid home directory (~/.platid/)
"""

from platid.bootstrap.host import (
    HostContext,
    current_arch,
    current_env,
    current_os,
    current_platform,
)
from platid.bootstrap.paths import get_platid_home, PlatidPaths
from platid.bootstrap.probe import has_musl, probe_libc_version

__all__ = [
    "HostContext",
    "current_arch",
    "current_env",
    "current_os",
    "current_platform",
    "get_platid_home",
    "PlatidPaths",
    "has_musl",
    "probe_libc_version",
]
