"""Pytest configuration and fixtures for integration tests.

The probe tests run real subprocesses: small shell scripts standing in for
``ldd`` are written to ``tmp_path``.
"""

from __future__ import annotations

import stat
from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture
def fake_probe(tmp_path: Path) -> Callable[[str, str], Path]:
    """Factory writing an executable shell script and returning its path."""

    def _make(name: str, body: str) -> Path:
        script = tmp_path / name
        script.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _make
