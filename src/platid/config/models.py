"""Typed configuration for platid."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from platid.bootstrap.probe import DEFAULT_TIMEOUT


@dataclass
class ProbeConfig:
    """Settings of the dynamic linker probe."""

    path: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT


@dataclass
class OutputConfig:
    """Output settings."""

    format: str = "text"


@dataclass
class HostConfig:
    """Overrides applied on top of the captured host properties."""

    os_name: Optional[str] = None
    machine: Optional[str] = None
    path_separator: Optional[str] = None
    vm_name: Optional[str] = None

    def to_overrides(self) -> Dict[str, Any]:
        return {
            "os_name": self.os_name,
            "machine": self.machine,
            "path_separator": self.path_separator,
            "vm_name": self.vm_name,
        }


@dataclass
class PlatidConfig:
    """Complete platid configuration."""

    strict: bool = False
    probe: ProbeConfig = field(default_factory=ProbeConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    host: HostConfig = field(default_factory=HostConfig)

    # Set by the loader for diagnostics
    _config_sources: List[str] = field(default_factory=list, repr=False)

    @property
    def sources(self) -> List[str]:
        return list(self._config_sources)
