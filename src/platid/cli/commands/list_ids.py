"""List command implementation."""

from __future__ import annotations

from argparse import Namespace
from typing import List

from platid.cli.commands import Command
from platid.cli.exit_codes import EXIT_SUCCESS
from platid.codec import all_platforms
from platid.config.models import PlatidConfig
from platid.detection.arch import Arch
from platid.detection.env import Env
from platid.detection.system import Os


class ListCommand(Command):
    """Lists known identifiers, one per line."""

    @property
    def name(self) -> str:
        return "list"

    def execute(self, args: Namespace, config: "PlatidConfig | None" = None) -> int:
        include_unknown = getattr(args, "all", False)
        kind = getattr(args, "kind", "platforms")

        ids: List[str]
        if kind == "os":
            ids = [m.value for m in Os if include_unknown or not m.is_unknown]
        elif kind == "arch":
            ids = [m.value for m in Arch if include_unknown or not m.is_unknown]
        elif kind == "env":
            ids = [m.value for m in Env if include_unknown or not m.is_unknown]
        else:
            ids = [p.id for p in all_platforms(include_unknown=include_unknown)]

        for value in ids:
            print(value)
        return EXIT_SUCCESS
