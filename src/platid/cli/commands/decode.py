"""Decode command implementation."""

from __future__ import annotations

from argparse import Namespace
from typing import Any, Dict, List

from platid.cli.commands import Command
from platid.cli.exit_codes import EXIT_ISSUES_FOUND, EXIT_SUCCESS
from platid.cli.output import render
from platid.codec import decode, strict_decode, strict_decode_or_none
from platid.config.models import PlatidConfig
from platid.core.errors import UnsupportedPlatformError
from platid.core.logging import get_logger

LOGGER = get_logger(__name__)

COLUMNS = ("input", "os", "arch", "bitness", "endianness")


class DecodeCommand(Command):
    """Decodes canonical platform identifiers."""

    @property
    def name(self) -> str:
        return "decode"

    def execute(self, args: Namespace, config: "PlatidConfig | None" = None) -> int:
        """Execute the decode command.

        Without ``--lenient`` only identifiers produced by the encoder are
        accepted; anything else is an error.

        Returns:
            Exit code: 0 if every identifier decoded, 1 otherwise.
        """
        config = config or PlatidConfig()
        lenient = getattr(args, "lenient", False)

        records: List[Dict[str, Any]] = []
        failures = 0
        for value in args.ids:
            if lenient:
                platform = strict_decode_or_none(value) or decode(value)
            else:
                try:
                    platform = strict_decode(value)
                except UnsupportedPlatformError as e:
                    LOGGER.error(str(e))
                    failures += 1
                    continue
            arch = platform.arch
            records.append({
                "input": value,
                "id": platform.id,
                "os": platform.os.value,
                "arch": arch.value,
                "family": arch.family.value,
                "bitness": arch.bitness,
                "endianness": arch.endianness.value,
            })

        if records:
            print(render(records, config.output.format, COLUMNS))
        return EXIT_ISSUES_FOUND if failures else EXIT_SUCCESS
