"""Errors raised by the Shipi18n client."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Classification of a client failure."""

    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    SERVICE = "service"
    TRANSPORT = "transport"


class Shipi18nError(Exception):
    """
    Base error for all client failures.

    Attributes:
        message: Human-readable message
        code: Machine code supplied by the service (None if not supplied)
        status: HTTP status of a non-success response (None for local failures)
        kind: ErrorKind discriminant
    """

    kind = ErrorKind.SERVICE

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status: Optional[int] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"code={self.code!r}, status={self.status!r})"
        )


class ConfigurationError(Shipi18nError):
    """Raised when a required credential is missing."""

    kind = ErrorKind.CONFIGURATION


class ValidationError(Shipi18nError):
    """Raised when a caller argument fails a precondition."""

    kind = ErrorKind.VALIDATION


class ServiceError(Shipi18nError):
    """Raised when the service answered with a failure."""

    kind = ErrorKind.SERVICE


class TransportError(Shipi18nError):
    """Raised when no response was received from the service."""

    kind = ErrorKind.TRANSPORT
