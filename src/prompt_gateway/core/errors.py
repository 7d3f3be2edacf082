"""
Prompt gateway error types.

Every error carries a structured ``kind`` tag so callers can classify
failures without inspecting message text.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Stable failure categories shared by all backends."""
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    CONNECTIVITY = "connectivity"
    BACKEND = "backend"
    UNKNOWN_BACKEND = "unknown_backend"


class GatewayError(Exception):
    """Base exception for gateway errors."""

    kind: ErrorKind = ErrorKind.BACKEND

    def __init__(self, message: str, backend: Optional[str] = None):
        self.message = message
        self.backend = backend
        super().__init__(message)


class BackendError(GatewayError):
    """Raised when a backend rejects a request or returns a malformed response."""

    def __init__(
        self,
        message: str,
        backend: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, backend)
        self.status_code = status_code


class AuthError(BackendError):
    """Raised when the backend rejects the credential."""
    kind = ErrorKind.AUTH


class RateLimitError(BackendError):
    """Raised when the backend signals throttling."""
    kind = ErrorKind.RATE_LIMIT

    def __init__(
        self,
        message: str,
        backend: Optional[str] = None,
        status_code: Optional[int] = 429,
        retry_after: Optional[float] = None,
    ):
        super().__init__(message, backend, status_code)
        self.retry_after = retry_after


class ConnectivityError(BackendError):
    """Raised when the backend cannot be reached (DNS, timeout, refused connection)."""
    kind = ErrorKind.CONNECTIVITY


class UnknownBackendError(GatewayError):
    """Raised when a backend identifier is not recognised."""
    kind = ErrorKind.UNKNOWN_BACKEND


_KIND_MESSAGES = {
    ErrorKind.AUTH: "Invalid API key. Check your key and try again.",
    ErrorKind.RATE_LIMIT: "Rate limited. Wait a moment and try again.",
    ErrorKind.CONNECTIVITY: "Can't connect. Check your internet.",
}

DEFAULT_FAILURE_MESSAGE = "Failed to enhance prompt"


def classify(error: BaseException) -> ErrorKind:
    """
    Map any exception onto the error taxonomy.

    Gateway errors report their own tag. Anything else is matched on its
    message, which is the only signal a foreign exception carries.
    """
    if isinstance(error, GatewayError):
        return error.kind

    message = str(error).lower()
    if "401" in message or "invalid" in message:
        return ErrorKind.AUTH
    if "429" in message or "rate" in message:
        return ErrorKind.RATE_LIMIT
    if "network" in message or "fetch" in message or "connect" in message:
        return ErrorKind.CONNECTIVITY
    return ErrorKind.BACKEND


def describe_error(error: BaseException) -> str:
    """
    Turn an exception into the sentence shown to the user.

    Args:
        error: Exception raised by an enhancement call

    Returns:
        User-facing message
    """
    kind = classify(error)

    if kind == ErrorKind.CONNECTIVITY and getattr(error, "backend", None) == "ollama":
        return "Can't reach Ollama. Make sure it is running."

    if kind in _KIND_MESSAGES:
        return _KIND_MESSAGES[kind]

    return str(error) or DEFAULT_FAILURE_MESSAGE
