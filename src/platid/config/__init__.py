"""Configuration loading for platid.

Usage:
    from platid.config import load_config

    config = load_config(Path("."))
"""

from platid.config.loader import ConfigError, load_config
from platid.config.models import HostConfig, OutputConfig, PlatidConfig, ProbeConfig

__all__ = [
    "ConfigError",
    "load_config",
    "HostConfig",
    "OutputConfig",
    "PlatidConfig",
    "ProbeConfig",
]
