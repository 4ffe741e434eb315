"""Configuration file loading and merging.

Handles loading configuration from YAML files with:
- Project-level config (.platid.yml)
- Global config (~/.platid/config/config.yml)
- Environment variable expansion (${VAR})
- Config merging with proper precedence
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from platid.bootstrap.paths import PlatidPaths
from platid.bootstrap.probe import DEFAULT_TIMEOUT
from platid.config.models import HostConfig, OutputConfig, PlatidConfig, ProbeConfig
from platid.config.validation import ValidationSeverity, has_errors, validate_config
from platid.core.logging import get_logger

LOGGER = get_logger(__name__)

PROJECT_CONFIG_NAMES = [".platid.yml", ".platid.yaml", "platid.yml", "platid.yaml"]

# Environment variable pattern: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


class ConfigError(Exception):
    """Configuration loading or parsing error."""

    pass


def load_config(
    project_root: Path,
    cli_config_path: Optional[Path] = None,
    cli_overrides: Optional[Dict[str, Any]] = None,
) -> PlatidConfig:
    """Load configuration with proper precedence.

    Precedence (highest to lowest):
    1. CLI flags (cli_overrides)
    2. Custom config file (cli_config_path) OR project config (.platid.yml)
    3. Global config (~/.platid/config/config.yml)
    4. Built-in defaults

    Args:
        project_root: Directory searched for a project config file.
        cli_config_path: Optional path to custom config file (--config flag).
        cli_overrides: Dict of CLI flag overrides.

    Returns:
        Merged PlatidConfig instance.

    Raises:
        ConfigError: If the config file is missing, unparseable or invalid.
    """
    sources: List[str] = []
    merged: Dict[str, Any] = {}

    # Layer 1: Global config, unreadable is not fatal
    global_path = find_global_config()
    if global_path is not None:
        try:
            global_dict = _load_validated(global_path)
            merged = merge_configs(merged, global_dict)
            sources.append(f"global:{global_path}")
            LOGGER.debug(f"Loaded global config from {global_path}")
        except ConfigError as e:
            LOGGER.warning(f"Failed to load global config: {e}")

    # Layer 2: Project or custom config
    if cli_config_path:
        if not cli_config_path.exists():
            raise ConfigError(f"Config file not found: {cli_config_path}")
        merged = merge_configs(merged, _load_validated(cli_config_path))
        sources.append(f"custom:{cli_config_path}")
        LOGGER.debug(f"Loaded custom config from {cli_config_path}")
    else:
        project_path = find_project_config(project_root)
        if project_path is not None:
            merged = merge_configs(merged, _load_validated(project_path))
            sources.append(f"project:{project_path}")
            LOGGER.debug(f"Loaded project config from {project_path}")

    # Layer 3: CLI overrides
    if cli_overrides:
        merged = merge_configs(merged, cli_overrides)
        sources.append("cli")
        LOGGER.debug("Applied CLI overrides")

    config = dict_to_config(merged)
    config._config_sources = sources

    LOGGER.debug(f"Config loaded from sources: {sources}")
    return config


def _load_validated(path: Path) -> Dict[str, Any]:
    try:
        data = load_yaml_file(path)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    issues = validate_config(data, source=str(path))
    if has_errors(issues):
        first = next(i for i in issues if i.severity == ValidationSeverity.ERROR)
        raise ConfigError(f"{first.message} in {path}")
    return data


def find_project_config(project_root: Path) -> Optional[Path]:
    """Find config file in project root.

    Searches for .platid.yml, .platid.yaml, platid.yml, platid.yaml
    in the project root directory.

    Returns:
        Path to config file if found, None otherwise.
    """
    for name in PROJECT_CONFIG_NAMES:
        config_path = project_root / name
        if config_path.exists():
            return config_path
    return None


def find_global_config() -> Optional[Path]:
    """Find global config at ~/.platid/config/config.yml.

    Returns:
        Path to global config if it exists, None otherwise.
    """
    config_path = PlatidPaths.default().global_config
    if config_path.exists():
        return config_path
    return None


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML config file.

    Performs environment variable expansion on string values.

    Args:
        path: Path to YAML file.

    Returns:
        Parsed dictionary.

    Raises:
        yaml.YAMLError: If YAML parsing fails.
        ConfigError: If the document is not a mapping.
    """
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()

    data = yaml.safe_load(content)

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a YAML mapping, got {type(data).__name__}")

    return expand_env_vars(data)


def expand_env_vars(data: Any) -> Any:
    """Recursively expand environment variables in config values.

    Supports ${VAR} and ${VAR:-default} syntax.
    """
    if isinstance(data, dict):
        return {k: expand_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        return ENV_VAR_PATTERN.sub(_env_var_replacer, data)
    else:
        return data


def _env_var_replacer(match: re.Match[str]) -> str:
    """Replace environment variable reference with its value."""
    var_name = match.group(1)
    default_value = match.group(2)

    value = os.environ.get(var_name)
    if value is not None:
        return value
    if default_value is not None:
        return default_value

    LOGGER.warning(f"Environment variable ${var_name} is not set and has no default")
    return ""


def merge_configs(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two config dicts, with overlay taking precedence.

    Rules:
    - Scalar values: overlay replaces base
    - Lists: overlay replaces base (no merging)
    - Dicts: recursive merge
    """
    result = base.copy()

    for key, overlay_value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(overlay_value, dict):
            result[key] = merge_configs(result[key], overlay_value)
        else:
            result[key] = overlay_value

    return result


def dict_to_config(data: Dict[str, Any]) -> PlatidConfig:
    """Convert a merged dict to a typed PlatidConfig.

    Raises:
        ConfigError: If a CLI override carries an unusable value.
    """
    probe_data = data.get("probe") or {}
    timeout = probe_data.get("timeout", DEFAULT_TIMEOUT)
    try:
        timeout = float(timeout)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid probe timeout: {timeout!r}") from e
    if timeout <= 0:
        raise ConfigError(f"Invalid probe timeout: {timeout!r}")
    probe = ProbeConfig(path=probe_data.get("path"), timeout=timeout)

    output_data = data.get("output") or {}
    output = OutputConfig(format=output_data.get("format", "text"))

    host_data = data.get("host") or {}
    host = HostConfig(
        os_name=host_data.get("os_name"),
        machine=host_data.get("machine"),
        path_separator=host_data.get("path_separator"),
        vm_name=host_data.get("vm_name"),
    )

    return PlatidConfig(
        strict=bool(data.get("strict", False)),
        probe=probe,
        output=output,
        host=host,
    )
