"""Logging configuration for the rdsjanitor CLI.

Library modules only obtain loggers via ``logging.getLogger(__name__)``;
the CLI installs a single Rich handler on the package logger.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from rdsjanitor.core.theme import get_theme

PACKAGE_LOGGER = "rdsjanitor"


def get_log_level(verbose: bool = False, quiet: bool = False) -> int:
    """Map CLI verbosity flags to a logging level.

    Args:
        verbose: Show debug output.
        quiet: Only show errors. Ignored when verbose is set.

    Returns:
        Logging level constant.
    """
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Configure the package logger to write through Rich to stderr.

    Safe to call more than once; the previous handler is replaced.

    Args:
        verbose: Show debug output.
        quiet: Only show errors.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(get_log_level(verbose, quiet))

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(theme=get_theme(), stderr=True),
        show_path=verbose,
        show_time=verbose,
        markup=False,
        rich_tracebacks=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
