"""
Utils Module
Logging and error types shared across the fetcher.
"""
from .logger import configure_logging, console, setup_logger
from .exceptions import (
    ErrorKind,
    DogFetchError,
    NetworkError,
    MalformedResponseError,
    ExhaustionError,
    CapabilityError,
    RetrievalCancelledError,
)

__all__ = [
    "configure_logging",
    "console",
    "setup_logger",
    "ErrorKind",
    "DogFetchError",
    "NetworkError",
    "MalformedResponseError",
    "ExhaustionError",
    "CapabilityError",
    "RetrievalCancelledError",
]
