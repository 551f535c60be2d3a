"""Domain-level exceptions for connection requests."""
from __future__ import annotations

from errors import Conflict, Forbidden, NotFound


class RequestNotFound(NotFound):
    reason = "request_not_found"


class RecipientNotFound(NotFound):
    reason = "user_not_found"


class RequestForbidden(Forbidden):
    reason = "forbidden"


class RequestConflict(Conflict):
    reason = "conflict"


class RequestSelfError(RequestConflict):
    reason = "self_request"


class RequestAlreadySent(RequestConflict):
    reason = "already_sent"


class AlreadyConnected(RequestConflict):
    reason = "already_connected"


__all__ = [
    "RequestNotFound",
    "RecipientNotFound",
    "RequestForbidden",
    "RequestConflict",
    "RequestSelfError",
    "RequestAlreadySent",
    "AlreadyConnected",
]
