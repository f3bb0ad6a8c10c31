"""Logging setup for the CLI.

Library modules only create module-level loggers; the CLI attaches a
single Rich handler on stderr when it starts.
"""

import logging

from rich.logging import RichHandler

from agentmounts.utils.formatting import err_console


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Route agentmounts log records to stderr through Rich.

    Args:
        verbose: Show debug records (unreadable directories and the like).
        quiet: Show warnings and errors only.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logger = logging.getLogger("agentmounts")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=err_console,
        show_time=False,
        show_path=verbose,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
