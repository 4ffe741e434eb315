"""Host context for detecting the running platform.

The raw host properties are captured once in an immutable ``HostContext``
and passed explicitly to the ``current_*`` functions, so tests and
cross-platform tooling can substitute their own values.
"""

from __future__ import annotations

import os
import platform
import struct
import sys
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from platid.bootstrap.probe import DEFAULT_TIMEOUT, probe_libc_version
from platid.core.errors import UnsupportedPlatformError
from platid.core.logging import get_logger
from platid.core.models import Detection
from platid.detection.arch import Arch, detect_host_arch
from platid.detection.env import Env, detect_env
from platid.detection.system import Os, detect_host_os
from platid.platform import Platform

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class HostContext:
    """Raw identifier strings describing a host.

    Attributes:
        os_name: OS name as reported by the runtime (``platform.system()``).
        machine: Machine name as reported by the runtime (``platform.machine()``).
        path_separator: Path separator of the host (``os.sep``).
        vm_name: Name of the language runtime; ``dalvik``/``art`` on Android.
        bitness_hint: Pointer width of the running interpreter in bits.
    """

    os_name: str = ""
    machine: str = ""
    path_separator: str = "/"
    vm_name: str = ""
    bitness_hint: Optional[int] = None

    @classmethod
    def from_runtime(cls) -> "HostContext":
        """Capture the properties of the running interpreter."""
        vm_name = platform.python_implementation()
        if sys.platform == "android" or hasattr(sys, "getandroidapilevel"):
            vm_name = "android"
        return cls(
            os_name=platform.system(),
            machine=platform.machine(),
            path_separator=os.sep,
            vm_name=vm_name,
            bitness_hint=struct.calcsize("P") * 8,
        )

    def with_overrides(self, overrides: Dict[str, Any]) -> "HostContext":
        """Return a copy with the non-empty values of ``overrides`` applied."""
        known = {k: v for k, v in overrides.items() if k in self.__dataclass_fields__ and v}
        return replace(self, **known) if known else self


def detect_current_os(ctx: HostContext) -> Detection[Os]:
    return detect_host_os(ctx.os_name, ctx.path_separator, ctx.vm_name)


def detect_current_arch(ctx: HostContext) -> Detection[Arch]:
    return detect_host_arch(ctx.machine, ctx.bitness_hint)


def current_os(ctx: HostContext) -> Os:
    """Operating system of the host.

    Raises:
        UnsupportedPlatformError: If the OS name is not recognized.
    """
    return detect_current_os(ctx).unwrap()


def current_os_or_unknown(ctx: HostContext) -> Os:
    return detect_current_os(ctx).or_unknown()


def current_arch(ctx: HostContext) -> Arch:
    """Architecture of the host.

    This is the architecture the running interpreter was built for, which
    may differ from the hardware (a 32-bit interpreter on a 64-bit CPU
    reports 32-bit). Native libraries loaded into the process must match it.

    Raises:
        UnsupportedPlatformError: If the machine name is not recognized.
    """
    return detect_current_arch(ctx).unwrap()


def current_arch_or_unknown(ctx: HostContext) -> Arch:
    return detect_current_arch(ctx).or_unknown()


def current_platform(ctx: HostContext) -> Platform:
    """Platform of the host.

    Raises:
        UnsupportedPlatformError: If either OS or architecture is unknown.
    """
    try:
        return Platform(current_os(ctx), current_arch(ctx))
    except UnsupportedPlatformError as e:
        raise UnsupportedPlatformError(
            "platform", f"{ctx.os_name}/{ctx.machine}"
        ) from e


def current_platform_or_unknown(ctx: HostContext) -> Platform:
    return Platform(current_os_or_unknown(ctx), current_arch_or_unknown(ctx))


def detect_current_env(
    ctx: HostContext,
    probe_path: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Detection[Env]:
    """Determine the C runtime of the host.

    Only spawns the probe when the operating system does not already fix
    the environment. Not cached: callers that need it repeatedly should
    keep the result, it does not change during the process lifetime.
    """
    os_ = current_os_or_unknown(ctx)
    detection = detect_env(os_)
    if detection.matched:
        return detection
    probe_text = probe_libc_version(probe_path, timeout)
    LOGGER.debug(f"Probe output: {probe_text!r}")
    return detect_env(os_, probe_text)


def current_env(
    ctx: HostContext,
    probe_path: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Env:
    """Environment of the host, ``Env.UNKNOWN`` when it cannot be determined."""
    return detect_current_env(ctx, probe_path, timeout).or_unknown()
