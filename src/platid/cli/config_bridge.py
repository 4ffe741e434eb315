"""Bridge between CLI arguments and configuration models."""

from __future__ import annotations

import argparse
from typing import Any, Dict

from platid.core.logging import get_logger

LOGGER = get_logger(__name__)


class ConfigBridge:
    """Translates CLI arguments to configuration overrides."""

    @staticmethod
    def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
        """Convert CLI arguments to a config override dict.

        Only options explicitly given on the command line are included, so
        file values survive when a flag is absent.

        Args:
            args: Parsed CLI arguments.

        Returns:
            Dictionary of config overrides.
        """
        overrides: Dict[str, Any] = {}

        if getattr(args, "strict", False):
            overrides["strict"] = True

        output_format = getattr(args, "format", None)
        if output_format:
            overrides["output"] = {"format": output_format}

        probe: Dict[str, Any] = {}
        ldd = getattr(args, "ldd", None)
        if ldd:
            probe["path"] = ldd
        timeout = getattr(args, "timeout", None)
        if timeout is not None:
            probe["timeout"] = timeout
        if probe:
            overrides["probe"] = probe

        if overrides:
            LOGGER.debug(f"CLI overrides: {overrides}")
        return overrides
