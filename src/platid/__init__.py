"""platid: identify operating systems, CPU architectures and C runtimes.

Typical use::

    from platid import classify_os, classify_arch, strict_decode

    classify_os("aarch64-apple-darwin")      # Os.DARWIN
    classify_arch("aarch64-apple-darwin")    # Arch.ARM_64
    strict_decode("linux-arm-32-be")         # Platform(LINUX, ARM_32_BE)
"""

__version__ = "0.1.0"

from platid.bootstrap.host import (
    HostContext,
    current_arch,
    current_arch_or_unknown,
    current_env,
    current_os,
    current_os_or_unknown,
    current_platform,
    current_platform_or_unknown,
)
from platid.bootstrap.probe import has_musl, probe_libc_version
from platid.codec import (
    all_platforms,
    decode,
    encode,
    parse_platform,
    strict_decode,
    strict_decode_or_none,
)
from platid.core.errors import UnsupportedPlatformError
from platid.core.models import Detection
from platid.core.normalize import normalize
from platid.detection.arch import (
    Arch,
    ArchFamily,
    Endianness,
    arch_from_id,
    classify_arch,
    detect_arch,
    parse_arch,
)
from platid.detection.env import Env, classify_env, env_from_id, parse_env
from platid.detection.system import Os, classify_os, detect_os, os_from_id, parse_os
from platid.platform import Platform

__all__ = [
    "__version__",
    "HostContext",
    "current_arch",
    "current_arch_or_unknown",
    "current_env",
    "current_os",
    "current_os_or_unknown",
    "current_platform",
    "current_platform_or_unknown",
    "has_musl",
    "probe_libc_version",
    "all_platforms",
    "decode",
    "encode",
    "parse_platform",
    "strict_decode",
    "strict_decode_or_none",
    "UnsupportedPlatformError",
    "Detection",
    "normalize",
    "Arch",
    "ArchFamily",
    "Endianness",
    "arch_from_id",
    "classify_arch",
    "detect_arch",
    "parse_arch",
    "Env",
    "classify_env",
    "env_from_id",
    "parse_env",
    "Os",
    "classify_os",
    "detect_os",
    "os_from_id",
    "parse_os",
    "Platform",
]
