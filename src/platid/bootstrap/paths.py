"""Path management for the platid home directory.

Only global configuration lives there: ~/.platid/config/config.yml.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

# Default directory name under user home
DEFAULT_HOME_DIR_NAME = ".platid"

# Environment variable to override home directory
PLATID_HOME_ENV = "PLATID_HOME"


def get_platid_home() -> Path:
    """Get the platid home directory path.

    Resolution order:
    1. PLATID_HOME environment variable (if set)
    2. ~/.platid (default)

    Returns:
        Path to the platid home directory.
    """
    env_home = os.environ.get(PLATID_HOME_ENV)
    if env_home:
        return Path(env_home)
    return Path.home() / DEFAULT_HOME_DIR_NAME


@dataclass
class PlatidPaths:
    """Paths within the platid home directory.

    Directory structure:
        ~/.platid/
            config/
                config.yml      - Global configuration
    """

    home: Path

    _CONFIG_DIR: ClassVar[str] = "config"
    _GLOBAL_CONFIG: ClassVar[str] = "config.yml"

    @classmethod
    def default(cls) -> "PlatidPaths":
        """Create paths from the default platid home."""
        return cls(get_platid_home())

    @property
    def config_dir(self) -> Path:
        """Directory for configuration files."""
        return self.home / self._CONFIG_DIR

    @property
    def global_config(self) -> Path:
        """Path of the global configuration file (may not exist)."""
        return self.config_dir / self._GLOBAL_CONFIG
