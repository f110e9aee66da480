"""
Custom Exceptions
Error taxonomy for dog retrieval, discriminated by ``ErrorKind``.
"""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Structured error discriminator; callers branch on this, not on message text."""
    NETWORK = "network"
    TIMEOUT = "timeout"
    MALFORMED_RESPONSE = "malformed_response"
    EXHAUSTED = "exhausted"
    CAPABILITY = "capability"
    CANCELLED = "cancelled"


class DogFetchError(Exception):
    """Base exception for the dog fetcher"""

    kind: ErrorKind = ErrorKind.NETWORK

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class NetworkError(DogFetchError):
    """
    Transport failure, non-success status or timeout on a single call.

    Retried by the retrieval loop at the primary request step.
    """

    def __init__(
        self,
        message: str,
        source: str = None,
        status: Optional[int] = None,
        timed_out: bool = False,
        **kwargs,
    ):
        super().__init__(message, kwargs)
        self.source = source
        self.status = status
        self.timed_out = timed_out
        if timed_out:
            self.kind = ErrorKind.TIMEOUT


class MalformedResponseError(NetworkError):
    """Response body is not the expected array shape, or is empty"""
    kind = ErrorKind.MALFORMED_RESPONSE


class ExhaustionError(DogFetchError):
    """No acceptable candidate was found within the attempt budget"""
    kind = ErrorKind.EXHAUSTED

    def __init__(self, message: str, attempts: int = 0, **kwargs):
        super().__init__(message, kwargs)
        self.attempts = attempts


class CapabilityError(DogFetchError):
    """The source cannot perform network calls at all; never retried"""
    kind = ErrorKind.CAPABILITY


class RetrievalCancelledError(DogFetchError):
    """The caller aborted the retrieval through its cancellation token"""
    kind = ErrorKind.CANCELLED
