"""CLI logging setup."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER = logging.getLogger("eke_kubectl")


def setup_logging(debug: bool = False, verbose: bool = False) -> None:
    """Send package logs to stderr through rich.

    stdout is left to kubectl and to command output so it stays parseable.
    Calling this again replaces the handler installed by a previous call.

    Args:
        debug: Log everything, with the emitting module.
        verbose: Log progress messages (downloads, fallbacks).
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    for handler in list(LOGGER.handlers):
        if isinstance(handler, RichHandler):
            LOGGER.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=debug,
        show_path=debug,
        markup=False,
        rich_tracebacks=debug,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    LOGGER.addHandler(handler)
    LOGGER.setLevel(level)
    LOGGER.propagate = False
