"""Tests for platid.detection.system."""

from __future__ import annotations

import pytest

from platid.core.errors import UnsupportedPlatformError
from platid.detection.system import (
    Os,
    classify_os,
    detect_host_os,
    detect_os,
    os_from_id,
    parse_os,
)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("linux", Os.LINUX),
        ("x86_64-unknown-linux-gnu", Os.LINUX),
        ("manylinux2014_x86_64", Os.LINUX),
        ("aarch64-apple-darwin", Os.DARWIN),
        ("macOS", Os.DARWIN),
        ("Mac OS X", Os.DARWIN),
        ("Windows 10", Os.WINDOWS),
        ("x86_64-pc-windows-msvc", Os.WINDOWS),
        ("win32", Os.WINDOWS),
        ("FreeBSD", Os.FREEBSD),
        ("x86_64-unknown-freebsd", Os.FREEBSD),
        ("SunOS", Os.SOLARIS),
        ("OS/400", Os.IBMI),
        ("HP-UX", Os.HPUX),
        ("haiku", Os.HAIKU),
        ("x86_64-unknown-redox", Os.REDOX),
    ],
)
def test_classify_os(text: str, expected: Os) -> None:
    assert classify_os(text) is expected
    assert parse_os(text) is expected


class TestAndroidBeforeLinux:
    """Android identifiers also mention linux; Android must win."""

    def test_plain_android(self) -> None:
        assert classify_os("android") is Os.ANDROID

    def test_android_between_linux(self) -> None:
        assert classify_os("linux android linux") is Os.ANDROID

    def test_android_triple(self) -> None:
        assert classify_os("armv7-linux-androideabi") is Os.ANDROID


class TestUnknownOs:
    """Tests for unresolved operating systems."""

    def test_lenient_returns_unknown(self) -> None:
        assert classify_os("") is Os.UNKNOWN
        assert classify_os("TempleOS") is Os.UNKNOWN

    def test_strict_raises(self) -> None:
        with pytest.raises(UnsupportedPlatformError) as exc_info:
            parse_os("TempleOS")
        assert exc_info.value.aspect == "os"
        assert exc_info.value.value == "TempleOS"

    def test_bare_os_x_is_ambiguous(self) -> None:
        assert detect_os("os x").value is None

    def test_riscv_isa_suffix_is_not_darwin(self) -> None:
        assert detect_os("rv64i-osx").value is None
        assert detect_os("rv32i-osx").value is None
        assert classify_os("x86_64-osx") is Os.DARWIN


class TestDetectHostOs:
    """Tests for detect_host_os."""

    def test_backslash_separator_means_windows(self) -> None:
        detection = detect_host_os("Linux", path_separator="\\")
        assert detection.value is Os.WINDOWS
        assert detection.rule == "path-separator"

    def test_linux_with_dalvik_is_android(self) -> None:
        assert detect_host_os("Linux", "/", "Dalvik").value is Os.ANDROID

    def test_linux_with_cpython_is_linux(self) -> None:
        assert detect_host_os("Linux", "/", "CPython").value is Os.LINUX

    def test_runtime_spellings(self) -> None:
        assert detect_host_os("Darwin").value is Os.DARWIN
        assert detect_host_os("Windows").value is Os.WINDOWS
        assert detect_host_os("OS400").value is Os.IBMI

    def test_empty_name_is_unknown(self) -> None:
        detection = detect_host_os("")
        assert not detection.matched
        assert detection.or_unknown() is Os.UNKNOWN


class TestOsProperties:
    """Tests for Os members."""

    def test_str_is_identifier(self) -> None:
        assert str(Os.DRAGONFLYBSD) == "dragonflybsd"

    def test_is_bsd(self) -> None:
        assert Os.DARWIN.is_bsd
        assert Os.OPENBSD.is_bsd
        assert not Os.LINUX.is_bsd

    def test_os_from_id(self) -> None:
        assert os_from_id("zos") is Os.ZOS
        assert os_from_id("unknown") is None
        assert os_from_id("macos") is None
