"""Error taxonomy shared by both backend adapters and the gateway.

Every adapter raises ``ApiError`` subclasses at its boundary, so the gateway
decides on fallback by reading ``kind`` instead of inspecting messages or
transport exceptions:

    network      → transport failure, backend unreachable.   Falls back to mock.
    http-status  → backend answered with a 4xx/5xx.          Propagated.
    domain       → adapter-level business rejection.         Propagated.

Called by: adapters/*, gateway.py, api/errors.py
Depends on: Nothing
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of failure classes the gateway understands."""

    NETWORK = "network"
    HTTP_STATUS = "http-status"
    DOMAIN = "domain"


class ApiError(Exception):
    """Base class for classified backend failures.

    Attributes:
        message: Human-readable reason, safe to show in the dashboard.
        status: HTTP-style status code. ``0`` means no response was received.
        details: Parsed error body from the backend, when there was one.
    """

    kind: ErrorKind = ErrorKind.DOMAIN

    def __init__(
        self,
        message: str,
        status: int = 0,
        *,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.details = details

    @classmethod
    def from_status(
        cls,
        status: int | None,
        message: str,
        *,
        details: Any = None,
    ) -> ApiError:
        """Build the right subclass for a response status.

        A missing or zero status means the request never got an answer,
        which is a network failure whatever the caller thought it was.
        """
        if not status:
            return NetworkError(message, details=details)
        return HttpStatusError(message, status, details=details)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "status": self.status,
            "message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, status={self.status}, message={self.message!r})"


class NetworkError(ApiError):
    """DNS failure, refused connection, timeout or aborted request."""

    kind = ErrorKind.NETWORK

    def __init__(self, message: str, *, details: Any = None) -> None:
        super().__init__(message, 0, details=details)


class HttpStatusError(ApiError):
    """The backend was reachable and rejected the request."""

    kind = ErrorKind.HTTP_STATUS


class DomainError(ApiError):
    """A business-rule rejection raised by an adapter itself.

    The mock backend uses this for its deliberately simulated failures
    (wrong credentials, unknown account, insufficient funds).
    """

    kind = ErrorKind.DOMAIN

    def __init__(self, message: str, status: int = 400, *, details: Any = None) -> None:
        super().__init__(message, status, details=details)


def classify_error(exc: BaseException) -> ErrorKind | None:
    """Return the kind of a classified error, or None for anything else.

    Exceptions outside the taxonomy are programming errors and are never
    treated as connectivity problems.
    """
    if isinstance(exc, ApiError):
        return exc.kind
    return None


def is_fallback_eligible(exc: BaseException) -> bool:
    """True when a failed live call may be retried once against the mock."""
    return classify_error(exc) is ErrorKind.NETWORK
