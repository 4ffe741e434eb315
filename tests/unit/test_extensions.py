"""Tests for platid.extensions."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

import pytest

from platid.detection.system import Os
from platid.extensions import (
    executable_extension,
    link_library_extension,
    shared_library_extension,
    static_library_extension,
    with_executable_extension,
    with_link_library_extension,
    with_shared_library_extension,
    with_static_library_extension,
)


class TestExtensions:
    """Tests for the per-OS extension lookups."""

    @pytest.mark.parametrize(
        "os_,exe,shared,static,link",
        [
            (Os.WINDOWS, ".exe", ".dll", ".lib", ".lib"),
            (Os.DARWIN, "", ".dylib", ".a", ".so"),
            (Os.LINUX, "", ".so", ".a", ".so"),
            (Os.UNKNOWN, "", ".so", ".a", ".so"),
        ],
    )
    def test_lookups(self, os_: Os, exe: str, shared: str, static: str, link: str) -> None:
        assert executable_extension(os_) == exe
        assert shared_library_extension(os_) == shared
        assert static_library_extension(os_) == static
        assert link_library_extension(os_) == link


class TestWithExtension:
    """Tests for the with_*_extension helpers."""

    def test_string_stays_string(self) -> None:
        assert with_executable_extension(Os.WINDOWS, "bin/tool") == "bin/tool.exe"
        assert with_shared_library_extension(Os.DARWIN, "libfoo") == "libfoo.dylib"

    def test_path_stays_path(self) -> None:
        result = with_static_library_extension(Os.LINUX, Path("lib") / "libfoo")
        assert isinstance(result, Path)
        assert result == Path("lib") / "libfoo.a"

    def test_keeps_existing_suffix(self) -> None:
        result = with_link_library_extension(Os.WINDOWS, PurePosixPath("out/foo.1"))
        assert result == PurePosixPath("out/foo.1.lib")

    def test_empty_extension_returns_input(self) -> None:
        path = Path("bin/tool")
        assert with_executable_extension(Os.LINUX, path) is path
        assert with_executable_extension(Os.LINUX, "bin/tool") == "bin/tool"

    def test_path_without_name_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="no file name"):
            with_executable_extension(Os.WINDOWS, PurePosixPath(""))
