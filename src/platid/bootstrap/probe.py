"""Dynamic linker probe.

Asks ``ldd --version`` for the C runtime it belongs to. The probe is
best-effort: every failure (missing binary, timeout, bad path, broken
pipe) yields an empty string, and the child process is always killed.
"""

from __future__ import annotations

import os
import re
import signal
import subprocess
from typing import List, Optional

from platid.core.logging import get_logger

LOGGER = get_logger(__name__)

DEFAULT_PROBE = "ldd"
DEFAULT_TIMEOUT = 1.0

_ASCII_LOWER = str.maketrans("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz")
_MUSL_PATTERN = re.compile(r"\bmusl\b")


def _terminate(proc: subprocess.Popen) -> None:
    """Force-kill the probe and everything it spawned, then reap it."""
    try:
        if os.name == "posix":
            # The probe runs in its own session, so its pid is the group id.
            os.killpg(proc.pid, signal.SIGKILL)
        else:
            proc.kill()
    except OSError:
        pass
    try:
        proc.wait(timeout=1)
    except subprocess.TimeoutExpired:
        LOGGER.debug(f"Probe process {proc.pid} did not exit after kill")
    for stream in (proc.stdout, proc.stderr):
        if stream is not None:
            stream.close()


def probe_libc_version(path: Optional[str] = None, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Return the first line of ``<path> --version``, ASCII-lowercased.

    Args:
        path: Probe executable; defaults to ``ldd`` resolved via ``PATH``.
        timeout: Seconds to wait for the probe to finish.

    Returns:
        First stdout line, or an empty string on any failure.

    A ``KeyboardInterrupt`` during the wait is re-raised once the probe
    has been killed.
    """
    cmd: List[str] = [path or DEFAULT_PROBE, "--version"]
    try:
        proc = subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            start_new_session=os.name == "posix",
        )
    except (OSError, ValueError, subprocess.SubprocessError) as e:
        LOGGER.debug(f"Could not start probe {cmd[0]!r}: {e}")
        return ""

    try:
        stdout, _ = proc.communicate(timeout=timeout)
    except subprocess.TimeoutExpired:
        LOGGER.debug(f"Probe {cmd[0]!r} timed out after {timeout}s")
        return ""
    except (OSError, ValueError) as e:
        LOGGER.debug(f"Probe {cmd[0]!r} failed: {e}")
        return ""
    finally:
        _terminate(proc)

    if not stdout:
        return ""
    first_line = stdout.split(b"\n", 1)[0].rstrip(b"\r")
    return first_line.decode("utf-8", errors="replace").translate(_ASCII_LOWER)


def has_musl(path: Optional[str] = None, timeout: float = DEFAULT_TIMEOUT) -> bool:
    """Whether the dynamic linker on ``PATH`` (or at ``path``) is musl.

    A musl ``ldd`` does not rule out other C runtimes being installed, but
    it is a strong hint that native executables must be static or linked
    against musl.
    """
    return bool(_MUSL_PATTERN.search(probe_libc_version(path, timeout)))
