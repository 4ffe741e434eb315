"""Tests for platid.bootstrap.paths."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

from platid.bootstrap.paths import (
    DEFAULT_HOME_DIR_NAME,
    PLATID_HOME_ENV,
    PlatidPaths,
    get_platid_home,
)


class TestGetPlatidHome:
    """Tests for get_platid_home."""

    def test_returns_default_in_user_home(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {"HOME": str(tmp_path)}, clear=False):
            os.environ.pop(PLATID_HOME_ENV, None)
            with patch("pathlib.Path.home", return_value=tmp_path):
                assert get_platid_home() == tmp_path / DEFAULT_HOME_DIR_NAME

    def test_respects_env_var(self, tmp_path: Path) -> None:
        custom_home = tmp_path / "custom-platid"
        with patch.dict(os.environ, {PLATID_HOME_ENV: str(custom_home)}):
            assert get_platid_home() == custom_home


class TestPlatidPaths:
    """Tests for PlatidPaths."""

    def test_paths_from_home(self, tmp_path: Path) -> None:
        paths = PlatidPaths(tmp_path)
        assert paths.config_dir == tmp_path / "config"
        assert paths.global_config == tmp_path / "config" / "config.yml"

    def test_default_uses_env_var(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {PLATID_HOME_ENV: str(tmp_path)}):
            assert PlatidPaths.default().home == tmp_path
