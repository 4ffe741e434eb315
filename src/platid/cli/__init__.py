"""Command-line interface for platid."""

from __future__ import annotations

import sys
from typing import Iterable, Optional

from platid.cli.runner import CLIRunner


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Entry point of the ``platid`` console script."""
    return CLIRunner().run(argv)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
