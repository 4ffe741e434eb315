"""CLI commands package.

This module provides the base Command class and exports all command implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from argparse import Namespace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from platid.config.models import PlatidConfig


class Command(ABC):
    """Base class for CLI commands.

    All CLI commands should inherit from this class and implement
    the execute method.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Command identifier."""

    @abstractmethod
    def execute(self, args: Namespace, config: "PlatidConfig | None" = None) -> int:
        """Execute the command.

        Args:
            args: Parsed command-line arguments.
            config: Effective configuration; defaults apply when omitted.

        Returns:
            Exit code (0 for success, non-zero for error).
        """


# ruff: noqa: E402
from platid.cli.commands.classify import ClassifyCommand
from platid.cli.commands.current import CurrentCommand
from platid.cli.commands.decode import DecodeCommand
from platid.cli.commands.list_ids import ListCommand
from platid.cli.commands.validate import ValidateCommand

__all__ = [
    "Command",
    "ClassifyCommand",
    "CurrentCommand",
    "DecodeCommand",
    "ListCommand",
    "ValidateCommand",
]
