"""
Logger Configuration
Rich console logging for the fetcher's package loggers.
"""
import logging

from rich.logging import RichHandler
from rich.console import Console


# Shared console for log records and CLI output
console = Console()

PACKAGE_LOGGERS = ("retrieval", "scrapers")


def setup_logger(name: str, level: int = logging.WARNING) -> logging.Logger:
    """Attach a single RichHandler to ``name`` and set its level."""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(console=console, show_time=True, show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)
    return logger


def configure_logging(verbose: bool = False) -> None:
    """INFO for every package logger when verbose, WARNING otherwise."""
    level = logging.INFO if verbose else logging.WARNING
    for name in PACKAGE_LOGGERS:
        setup_logger(name, level)
