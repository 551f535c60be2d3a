"""Domain-level exceptions shared by the PeerTutor packages."""
from __future__ import annotations

from typing import Optional


class PeerTutorError(Exception):
    """Base class for errors that are reported back to the caller."""

    status_code: int = 400
    reason: str = "error"

    def __init__(self, reason: Optional[str] = None) -> None:
        super().__init__(reason or self.reason)
        if reason:
            self.reason = reason


class ValidationFailed(PeerTutorError):
    status_code = 400
    reason = "invalid_request"


class NotAuthenticated(PeerTutorError):
    status_code = 401
    reason = "not_authenticated"


class Forbidden(PeerTutorError):
    status_code = 403
    reason = "forbidden"


class NotFound(PeerTutorError):
    status_code = 404
    reason = "not_found"


class Conflict(PeerTutorError):
    status_code = 409
    reason = "conflict"


class StoreUnavailable(PeerTutorError):
    status_code = 503
    reason = "storage_unavailable"


__all__ = [
    "PeerTutorError",
    "ValidationFailed",
    "NotAuthenticated",
    "Forbidden",
    "NotFound",
    "Conflict",
    "StoreUnavailable",
]
