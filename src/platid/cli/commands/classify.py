"""Classify command implementation."""

from __future__ import annotations

from argparse import Namespace
from typing import Any, Dict, List, Optional

from platid.bootstrap.probe import probe_libc_version
from platid.cli.commands import Command
from platid.cli.exit_codes import EXIT_ISSUES_FOUND, EXIT_SUCCESS
from platid.cli.output import render
from platid.codec import decode, parse_platform
from platid.config.models import PlatidConfig
from platid.core.errors import UnsupportedPlatformError
from platid.core.logging import get_logger
from platid.detection.env import classify_env

LOGGER = get_logger(__name__)

COLUMNS = ("input", "id", "env")


class ClassifyCommand(Command):
    """Classifies free-form strings into os, arch and environment."""

    @property
    def name(self) -> str:
        return "classify"

    def execute(self, args: Namespace, config: "PlatidConfig | None" = None) -> int:
        """Execute the classify command.

        In strict mode every input whose OS or architecture is unknown is
        reported as an error and left out of the output.

        Returns:
            Exit code: 0 on success, 1 if strict mode rejected any input.
        """
        config = config or PlatidConfig()
        probe_text: Optional[str] = None
        if getattr(args, "probe_env", False):
            probe_text = probe_libc_version(config.probe.path, config.probe.timeout)

        records: List[Dict[str, Any]] = []
        failures = 0
        for text in args.texts:
            try:
                platform = parse_platform(text) if config.strict else decode(text)
            except UnsupportedPlatformError as e:
                LOGGER.error(str(e))
                failures += 1
                continue
            env = classify_env(platform.os, text if probe_text is None else probe_text)
            records.append({
                "input": text,
                "id": platform.id,
                "os": platform.os.value,
                "arch": platform.arch.value,
                "env": env.value,
            })

        if records:
            print(render(records, config.output.format, COLUMNS))
        return EXIT_ISSUES_FOUND if failures else EXIT_SUCCESS
