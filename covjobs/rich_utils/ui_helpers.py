import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

CONSOLE_LOGGER_NAME = "covjobs"
NULL_LOGGER_NAME = "covjobs.null"


def is_ci_environment():
    return (
        os.getenv('CI') is not None or
        os.getenv('GITHUB_ACTIONS') is not None or
        not sys.stdout.isatty()
    )


def get_console() -> Console:
    """Detect environment and create console."""
    if is_ci_environment():
        # CI/automated environment - no colors, no interactive elements
        return Console(force_terminal=False, no_color=True)
    # Interactive terminal - full Rich capabilities
    return Console()


def _reset_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = False
    logger.disabled = False
    return logger


def build_console_logger(console: Console) -> logging.Logger:
    """Logger writing to the console through Rich.

    Handlers are replaced on every call, so the logger always writes to the
    console of the current run only.
    """
    logger = _reset_logger(CONSOLE_LOGGER_NAME)
    logger.setLevel(logging.INFO)
    handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        markup=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def build_null_logger() -> logging.Logger:
    """Logger that discards every record."""
    logger = _reset_logger(NULL_LOGGER_NAME)
    logger.addHandler(logging.NullHandler())
    logger.disabled = True
    return logger


def select_logger(config, console: Console) -> logging.Logger:
    """Console logger when the configuration allows verbose output, else a null logger."""
    if config.is_logging_enabled():
        return build_console_logger(console)
    return build_null_logger()
