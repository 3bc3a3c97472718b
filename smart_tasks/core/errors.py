"""
Service Errors

Every failure the application reports to a caller is a ``ServiceError``.
Each carries a distinguishable ``ErrorKind``, the HTTP status it maps to and
the caller-visible message that ends up in the ``{"error": ...}`` body.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a service failure."""

    VALIDATION = "validation"
    METHOD = "method"
    AUTH = "auth"
    NOT_FOUND = "not_found"
    CONFIGURATION = "configuration"
    UPSTREAM = "upstream"
    INTERNAL = "internal"


class ServiceError(Exception):
    """
    Base class for caller-visible failures.

    Subclasses pin ``kind``, ``status_code`` and the default message;
    the message can be overridden per instance.
    """

    kind: ErrorKind = ErrorKind.INTERNAL
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(kind={self.kind.value}, message='{self.message}')>"


class InvalidQueryError(ServiceError):
    kind = ErrorKind.VALIDATION
    status_code = 400
    default_message = "Query is required"


class MethodNotAllowedError(ServiceError):
    kind = ErrorKind.METHOD
    status_code = 405
    default_message = "Method not allowed"


class ConfigurationError(ServiceError):
    kind = ErrorKind.CONFIGURATION
    status_code = 500
    default_message = "Supabase configuration missing"


class MissingAuthorizationError(ServiceError):
    kind = ErrorKind.AUTH
    status_code = 401
    default_message = "Authorization required"


class InvalidAuthorizationError(ServiceError):
    kind = ErrorKind.AUTH
    status_code = 401
    default_message = "Invalid authorization"


class SearchFailedError(ServiceError):
    kind = ErrorKind.UPSTREAM
    status_code = 500
    default_message = "Search failed"


class InternalServerError(ServiceError):
    kind = ErrorKind.INTERNAL
    status_code = 500
    default_message = "Internal server error"


class FunctionCallError(ServiceError):
    """
    Failure of a client-side edge function call.

    Unlike the fixed-message errors above, the kind and status are
    set per instance from the upstream response.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind = ErrorKind.UPSTREAM,
        status_code: int = 502,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code

    @classmethod
    def from_status(cls, status_code: int, message: str) -> FunctionCallError:
        """Build an error whose kind follows the upstream HTTP status."""
        if status_code == 400:
            kind = ErrorKind.VALIDATION
        elif status_code in (401, 403):
            kind = ErrorKind.AUTH
        elif status_code == 404:
            kind = ErrorKind.NOT_FOUND
        else:
            kind = ErrorKind.UPSTREAM
        return cls(message, kind=kind, status_code=status_code)
