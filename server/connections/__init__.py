"""Connection requests between users and the connections they produce."""
from .exceptions import (
    AlreadyConnected,
    RecipientNotFound,
    RequestAlreadySent,
    RequestForbidden,
    RequestNotFound,
    RequestSelfError,
)
from .service import (
    DEFAULT_REQUEST_MESSAGE,
    accept_request,
    cancel_request,
    discover_peers,
    list_connections,
    list_incoming,
    list_outgoing,
    reject_request,
    send_request,
)

__all__ = [
    "AlreadyConnected",
    "DEFAULT_REQUEST_MESSAGE",
    "RecipientNotFound",
    "RequestAlreadySent",
    "RequestForbidden",
    "RequestNotFound",
    "RequestSelfError",
    "accept_request",
    "cancel_request",
    "discover_peers",
    "list_connections",
    "list_incoming",
    "list_outgoing",
    "reject_request",
    "send_request",
]
