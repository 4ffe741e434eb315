"""File name extensions of native artifacts per operating system."""

from __future__ import annotations

from pathlib import PurePath
from typing import TypeVar

from platid.detection.system import Os

PathT = TypeVar("PathT", str, PurePath)


def executable_extension(os_: Os) -> str:
    return ".exe" if os_ is Os.WINDOWS else ""


def shared_library_extension(os_: Os) -> str:
    """``.dll`` on Windows, ``.dylib`` on Darwin, ``.so`` elsewhere."""
    if os_ is Os.WINDOWS:
        return ".dll"
    if os_ is Os.DARWIN:
        return ".dylib"
    return ".so"


def static_library_extension(os_: Os) -> str:
    return ".lib" if os_ is Os.WINDOWS else ".a"


def link_library_extension(os_: Os) -> str:
    """Extension of the library handed to the linker (import library on Windows)."""
    return ".lib" if os_ is Os.WINDOWS else ".so"


def _append(path: PathT, ext: str) -> PathT:
    if not ext:
        return path
    if isinstance(path, PurePath):
        if not path.name:
            raise ValueError(f"{path!r} has no file name to extend")
        return path.with_name(path.name + ext)
    return path + ext


def with_executable_extension(os_: Os, path: PathT) -> PathT:
    return _append(path, executable_extension(os_))


def with_shared_library_extension(os_: Os, path: PathT) -> PathT:
    return _append(path, shared_library_extension(os_))


def with_static_library_extension(os_: Os, path: PathT) -> PathT:
    return _append(path, static_library_extension(os_))


def with_link_library_extension(os_: Os, path: PathT) -> PathT:
    return _append(path, link_library_extension(os_))
