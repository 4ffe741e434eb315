"""CLI runner orchestration.

This module handles command dispatch and execution for the platid CLI.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from importlib.metadata import version, PackageNotFoundError

from platid.cli.arguments import build_parser
from platid.cli.commands import (
    ClassifyCommand,
    Command,
    CurrentCommand,
    DecodeCommand,
    ListCommand,
    ValidateCommand,
)
from platid.cli.config_bridge import ConfigBridge
from platid.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_ISSUES_FOUND, EXIT_SUCCESS
from platid.config import load_config
from platid.config.loader import ConfigError
from platid.config.models import PlatidConfig
from platid.core.logging import configure_logging, get_logger

LOGGER = get_logger(__name__)


def get_version() -> str:
    """Get platid version.

    Returns:
        Version string from package metadata or fallback.
    """
    try:
        return version("platid")
    except PackageNotFoundError:
        # Fallback for editable installs that have not yet built metadata.
        from platid import __version__
        return __version__


class CLIRunner:
    """Orchestrates CLI execution with subcommand dispatch."""

    # Commands that run without loading configuration.
    _CONFIG_FREE = frozenset({"list", "validate"})

    def __init__(self, current_cmd: Optional[CurrentCommand] = None) -> None:
        """Initialize CLIRunner with parser and commands.

        Args:
            current_cmd: Replacement for the host command, e.g. one bound to
                a fixed ``HostContext``.
        """
        self.parser = build_parser()
        self._version = get_version()
        commands = [
            ClassifyCommand(),
            current_cmd or CurrentCommand(),
            DecodeCommand(),
            ListCommand(),
            ValidateCommand(),
        ]
        self.commands = {cmd.name: cmd for cmd in commands}

    def run(self, argv: Optional[Iterable[str]] = None) -> int:
        """Run the CLI.

        Args:
            argv: Command-line arguments (defaults to sys.argv).

        Returns:
            Exit code.
        """
        argv_list = list(argv) if argv is not None else None
        try:
            args = self.parser.parse_args(argv_list)
        except SystemExit as e:
            # argparse exits 0 for --help and 2 for usage errors
            return EXIT_SUCCESS if e.code in (0, None) else EXIT_INVALID_USAGE

        configure_logging(
            debug=args.debug,
            verbose=args.verbose,
            quiet=args.quiet,
        )

        if args.version:
            print(self._version)
            return EXIT_SUCCESS

        command_name = getattr(args, "command", None)
        command = self.commands.get(command_name) if command_name else None
        if command is None:
            self.parser.print_help()
            return EXIT_SUCCESS

        if command.name in self._CONFIG_FREE:
            return command.execute(args)
        return self._run_with_config(command, args)

    def _run_with_config(self, command: Command, args) -> int:
        """Load configuration for ``command`` and execute it.

        Args:
            command: Command to run.
            args: Parsed command-line arguments.

        Returns:
            Exit code.
        """
        try:
            config = self._load_config(args)
        except ConfigError as e:
            LOGGER.error(str(e))
            return EXIT_ISSUES_FOUND
        return command.execute(args, config)

    def _load_config(self, args) -> PlatidConfig:
        return load_config(
            project_root=Path.cwd(),
            cli_config_path=getattr(args, "config", None),
            cli_overrides=ConfigBridge.args_to_overrides(args),
        )
