"""Configuration validation for platid.

Unknown keys produce warnings with "did you mean" suggestions; values of
the wrong type or outside their allowed set are errors.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import get_close_matches
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple

import yaml

from platid.core.logging import get_logger

LOGGER = get_logger(__name__)


class ValidationSeverity(Enum):
    """Severity level for validation issues."""

    ERROR = "error"  # Config will fail at runtime
    WARNING = "warning"  # Likely mistake but config usable


@dataclass
class ConfigValidationIssue:
    """A validation issue for configuration with severity."""

    message: str
    source: str
    severity: ValidationSeverity
    key: Optional[str] = None
    suggestion: Optional[str] = None


VALID_TOP_LEVEL_KEYS: Set[str] = {
    "version",
    "strict",
    "probe",
    "output",
    "host",
}

VALID_PROBE_KEYS: Set[str] = {
    "path",
    "timeout",
}

VALID_OUTPUT_KEYS: Set[str] = {
    "format",
}

VALID_HOST_KEYS: Set[str] = {
    "os_name",
    "machine",
    "path_separator",
    "vm_name",
}

VALID_OUTPUT_FORMATS: Set[str] = {
    "json",
    "text",
}

_SECTION_KEYS: Dict[str, Set[str]] = {
    "probe": VALID_PROBE_KEYS,
    "output": VALID_OUTPUT_KEYS,
    "host": VALID_HOST_KEYS,
}


def validate_config(data: Any, source: str) -> List[ConfigValidationIssue]:
    """Validate a configuration dictionary.

    Does not raise; every problem is returned (and logged) as an issue.

    Args:
        data: Parsed configuration.
        source: Source file path for messages.

    Returns:
        List of validation issues.
    """
    issues: List[ConfigValidationIssue] = []

    if not isinstance(data, dict):
        issues.append(_error(f"Config must be a mapping, got {type(data).__name__}", source))
        return issues

    for key in data.keys():
        if key not in VALID_TOP_LEVEL_KEYS:
            issues.append(_unknown_key(str(key), f"Unknown top-level key '{key}'",
                                       source, VALID_TOP_LEVEL_KEYS))

    strict = data.get("strict")
    if strict is not None and not isinstance(strict, bool):
        issues.append(_error(
            f"'strict' must be a boolean, got {type(strict).__name__}", source, key="strict"
        ))

    for section, valid_keys in _SECTION_KEYS.items():
        section_data = data.get(section)
        if section_data is None:
            continue
        if not isinstance(section_data, dict):
            issues.append(_error(
                f"'{section}' must be a mapping, got {type(section_data).__name__}",
                source,
                key=section,
            ))
            continue
        for key in section_data.keys():
            if key not in valid_keys:
                issues.append(_unknown_key(
                    f"{section}.{key}", f"Unknown key '{section}.{key}'", source, valid_keys
                ))

    probe = data.get("probe")
    if isinstance(probe, dict):
        path = probe.get("path")
        if path is not None and not isinstance(path, str):
            issues.append(_error(
                f"'probe.path' must be a string, got {type(path).__name__}",
                source,
                key="probe.path",
            ))
        timeout = probe.get("timeout")
        if timeout is not None:
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
                issues.append(_error(
                    f"'probe.timeout' must be a number, got {type(timeout).__name__}",
                    source,
                    key="probe.timeout",
                ))
            elif timeout <= 0:
                issues.append(_error(
                    f"Invalid value {timeout} for 'probe.timeout': must be positive",
                    source,
                    key="probe.timeout",
                ))

    output = data.get("output")
    if isinstance(output, dict):
        fmt = output.get("format")
        if fmt is not None and fmt not in VALID_OUTPUT_FORMATS:
            suggestion = _suggest_key(str(fmt), VALID_OUTPUT_FORMATS)
            issue = _error(
                f"Invalid value '{fmt}' for 'output.format'",
                source,
                key="output.format",
                suggestion=suggestion,
            )
            issues.append(issue)

    host = data.get("host")
    if isinstance(host, dict):
        for key in sorted(VALID_HOST_KEYS):
            value = host.get(key)
            if value is not None and not isinstance(value, str):
                issues.append(_error(
                    f"'host.{key}' must be a string, got {type(value).__name__}",
                    source,
                    key=f"host.{key}",
                ))

    for issue in issues:
        _log_issue(issue)
    return issues


def _error(
    message: str,
    source: str,
    key: Optional[str] = None,
    suggestion: Optional[str] = None,
) -> ConfigValidationIssue:
    return ConfigValidationIssue(
        message=message,
        source=source,
        severity=ValidationSeverity.ERROR,
        key=key,
        suggestion=suggestion,
    )


def _unknown_key(
    key: str, message: str, source: str, valid_keys: Set[str]
) -> ConfigValidationIssue:
    return ConfigValidationIssue(
        message=message,
        source=source,
        severity=ValidationSeverity.WARNING,
        key=key,
        suggestion=_suggest_key(key.rsplit(".", 1)[-1], valid_keys),
    )


def _suggest_key(invalid_key: str, valid_keys: Set[str]) -> Optional[str]:
    """Suggest the closest valid key for a typo.

    Args:
        invalid_key: The invalid key that was provided.
        valid_keys: Set of valid keys to match against.

    Returns:
        Closest matching valid key, or None if no good match.
    """
    matches = get_close_matches(invalid_key, sorted(valid_keys), n=1, cutoff=0.6)
    return matches[0] if matches else None


def _log_issue(issue: ConfigValidationIssue) -> None:
    msg = f"{issue.message} in {issue.source}"
    if issue.suggestion:
        msg += f" (did you mean '{issue.suggestion}'?)"
    LOGGER.warning(msg)


def has_errors(issues: List[ConfigValidationIssue]) -> bool:
    return any(issue.severity == ValidationSeverity.ERROR for issue in issues)


def validate_config_file(config_path: Path) -> Tuple[bool, List[ConfigValidationIssue]]:
    """Validate a configuration file from disk.

    Checks file existence, YAML syntax, and configuration semantics.

    Args:
        config_path: Path to the configuration file.

    Returns:
        Tuple of (is_valid, issues) where is_valid is False if any errors exist.
    """
    source = str(config_path)

    if not config_path.exists():
        return False, [_error(f"Configuration file not found: {config_path}", source)]

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return False, [_error(f"Invalid YAML syntax: {e}", source)]
    except (OSError, UnicodeDecodeError) as e:
        return False, [_error(f"Cannot read configuration file: {e}", source)]

    if data is None:
        return True, [ConfigValidationIssue(
            message="Configuration file is empty",
            source=source,
            severity=ValidationSeverity.WARNING,
        )]

    issues = validate_config(data, source)
    return not has_errors(issues), issues
