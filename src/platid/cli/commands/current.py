"""Current command implementation."""

from __future__ import annotations

from argparse import Namespace

from platid.bootstrap.host import (
    HostContext,
    current_env,
    current_platform,
    current_platform_or_unknown,
)
from platid.cli.commands import Command
from platid.cli.exit_codes import EXIT_ISSUES_FOUND, EXIT_SUCCESS
from platid.cli.output import render
from platid.config.models import PlatidConfig
from platid.core.errors import UnsupportedPlatformError
from platid.core.logging import get_logger

LOGGER = get_logger(__name__)

COLUMNS = ("id", "env")


class CurrentCommand(Command):
    """Shows the platform and C runtime of the running host."""

    def __init__(self, context: "HostContext | None" = None):
        """Initialize CurrentCommand.

        Args:
            context: Host properties to use instead of the running interpreter's.
        """
        self._context = context

    @property
    def name(self) -> str:
        return "current"

    def execute(self, args: Namespace, config: "PlatidConfig | None" = None) -> int:
        config = config or PlatidConfig()
        ctx = (self._context or HostContext.from_runtime()).with_overrides(
            config.host.to_overrides()
        )
        LOGGER.debug(f"Host context: {ctx}")

        if config.strict:
            try:
                platform = current_platform(ctx)
            except UnsupportedPlatformError as e:
                LOGGER.error(str(e))
                return EXIT_ISSUES_FOUND
        else:
            platform = current_platform_or_unknown(ctx)

        env = current_env(ctx, config.probe.path, config.probe.timeout)
        record = {
            "id": platform.id,
            "os": platform.os.value,
            "arch": platform.arch.value,
            "env": env.value,
        }
        print(render([record], config.output.format, COLUMNS))
        return EXIT_SUCCESS
