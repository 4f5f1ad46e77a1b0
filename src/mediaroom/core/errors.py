"""Error taxonomy shared by the service layer and the HTTP surface.

Services raise these exceptions; the API layer renders them as
``{"kind": ..., "detail": ...}`` with the matching status code.
"""

from __future__ import annotations


class MediaRoomError(Exception):
    """Base exception for all domain failures.

    Attributes:
        kind: Stable machine-readable error identifier.
        status_code: HTTP status used when the error reaches the API layer.
    """

    kind = "error"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(MediaRoomError):
    """Raised when input has the wrong shape or is out of range."""

    kind = "validation_error"
    status_code = 400


class NotFoundError(MediaRoomError):
    """Raised when a content, user or notification row does not exist."""

    kind = "not_found"
    status_code = 404


class UnauthorizedError(MediaRoomError):
    """Raised when no valid session identity accompanies the request."""

    kind = "unauthorized"
    status_code = 401


class ForbiddenError(MediaRoomError):
    """Raised when the caller is authenticated but acts for someone else."""

    kind = "forbidden"
    status_code = 403


class ConflictError(MediaRoomError):
    """Raised when a unique constraint rejects a write."""

    kind = "conflict"
    status_code = 409


class UpstreamError(MediaRoomError):
    """Raised when the datastore or the blob store fails.

    ``retryable`` tells callers whether repeating the request may succeed;
    the core itself never retries.
    """

    kind = "upstream_error"
    status_code = 500

    def __init__(self, message: str, *, retryable: bool = False) -> None:
        super().__init__(message)
        self.retryable = retryable


class UpstreamTimeoutError(UpstreamError):
    """Raised when an upstream dependency does not answer in time."""

    kind = "upstream_timeout"
    status_code = 504

    def __init__(self, message: str) -> None:
        super().__init__(message, retryable=True)
