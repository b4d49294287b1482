"""Logging setup for a single CLI run.

Library modules log through ``logging.getLogger(__name__)``; this module
decides where those records go.  Logs always go to stderr so that the
JSON written to stdout stays machine-readable.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER_NAME = "clikit"

_HANDLER_MARKER = "_clikit_handler"


def _make_handler() -> logging.Handler:
    """Return a Rich handler on stderr, or a plain stream handler."""
    try:
        from rich.logging import RichHandler

        from clikit.cli.console import get_rich_console
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        return handler
    return RichHandler(
        console=get_rich_console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Route ``clikit`` log records to stderr.

    ``verbose`` selects DEBUG, otherwise only warnings and errors are
    shown.  Calling this again replaces the handler installed by the
    previous call instead of stacking another one.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            logger.removeHandler(handler)

    handler = _make_handler()
    setattr(handler, _HANDLER_MARKER, True)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger
