"""Logging setup shared by the library and the CLI.

Library modules only create loggers; handlers are installed by the CLI.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "platid"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def log_level(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> int:
    """Map CLI verbosity flags to a logging level.

    Precedence:
    - quiet → ERROR
    - debug → DEBUG
    - verbose → INFO
    - default → WARNING
    """
    if quiet:
        return logging.ERROR
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def configure_logging(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> None:
    """Send log records to stderr and set the platid logger level.

    stdout stays reserved for command output, so ``--format json`` can be
    piped even with ``--debug``.
    """
    level = log_level(debug=debug, verbose=verbose, quiet=quiet)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-level logger."""

    return logging.getLogger(name if name is not None else PACKAGE_LOGGER)
