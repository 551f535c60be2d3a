"""Connection request state machine and connection listings.

States of an ordered pair of users::

    NONE --send--> REQUESTED --accept--> CONNECTED
                       |
                       +--reject / cancel--> NONE

A request is consumed exactly once: whichever transition deletes it first
wins, later attempts see ``request_not_found``. Connections are never
removed by these flows.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from docstore import DocumentStore
from errors import ValidationFailed
from identity import AuthenticatedUser, public_profile
from utils import normalize_optional_str, parse_subjects, utc_now_iso

from .exceptions import (
    AlreadyConnected,
    RecipientNotFound,
    RequestAlreadySent,
    RequestForbidden,
    RequestNotFound,
    RequestSelfError,
)
from .repository import (
    canonical_pair,
    consume_request,
    fetch_connection,
    fetch_incoming_requests,
    fetch_outgoing_requests,
    fetch_request,
    fetch_user,
    fetch_user_connections,
    fetch_users,
    insert_connection,
    insert_request,
)

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_MESSAGE = "Hi! I'd like to connect and collaborate!"


def send_request(
    store: DocumentStore,
    sender: AuthenticatedUser,
    to_uid: Optional[str],
    message: Optional[str] = None,
) -> Dict[str, Any]:
    target = normalize_optional_str(to_uid)
    if not target:
        raise ValidationFailed("missing_recipient")
    if target == sender.uid:
        raise RequestSelfError()

    recipient = fetch_user(store, target)
    if not recipient:
        raise RecipientNotFound()
    if fetch_connection(store, sender.uid, target):
        raise AlreadyConnected()

    data = {
        "fromUid": sender.uid,
        "fromName": sender.name,
        "toUid": target,
        "toName": str(recipient.get("name") or ""),
        "message": normalize_optional_str(message) or DEFAULT_REQUEST_MESSAGE,
        "createdAt": utc_now_iso(),
    }
    request_id = insert_request(store, data)
    if request_id is None:
        raise RequestAlreadySent()
    logger.info("User %s sent connection request %s to %s", sender.uid, request_id, target)
    return {"id": request_id, **data}


def _load_request(store: DocumentStore, request_id: str) -> Dict[str, Any]:
    request = fetch_request(store, request_id)
    if not request:
        raise RequestNotFound()
    return request


def _consume(store: DocumentStore, request_id: str) -> Dict[str, Any]:
    consumed = consume_request(store, request_id)
    if consumed is None:
        logger.info("Connection request %s was already consumed", request_id)
        raise RequestNotFound()
    return consumed


def accept_request(store: DocumentStore, principal: AuthenticatedUser, request_id: str) -> Dict[str, Any]:
    """Turn a pending request addressed to ``principal`` into a connection."""
    request = _load_request(store, request_id)
    if request.get("toUid") != principal.uid:
        raise RequestForbidden("not_recipient")

    consumed = _consume(store, request_id)
    from_uid = str(consumed.get("fromUid"))
    to_uid = str(consumed.get("toUid"))
    names = {from_uid: consumed.get("fromName") or "", to_uid: consumed.get("toName") or ""}
    user_a, user_b = canonical_pair(from_uid, to_uid)
    data = {
        "userA": user_a,
        "userB": user_b,
        "userAName": names[user_a],
        "userBName": names[user_b],
        "requestedBy": from_uid,
        "message": consumed.get("message") or "",
        "createdAt": utc_now_iso(),
    }
    connection_id = insert_connection(store, data)
    if connection_id is None:
        existing = fetch_connection(store, user_a, user_b)
        logger.info("Users %s and %s were already connected", user_a, user_b)
        if existing:
            return existing
        raise AlreadyConnected()
    logger.info("Connection %s created from request %s", connection_id, request_id)
    return {"id": connection_id, **data}


def reject_request(store: DocumentStore, principal: AuthenticatedUser, request_id: str) -> Dict[str, Any]:
    request = _load_request(store, request_id)
    if request.get("toUid") != principal.uid:
        raise RequestForbidden("not_recipient")
    consumed = _consume(store, request_id)
    logger.info("User %s rejected connection request %s", principal.uid, request_id)
    return consumed


def cancel_request(store: DocumentStore, principal: AuthenticatedUser, request_id: str) -> Dict[str, Any]:
    request = _load_request(store, request_id)
    if request.get("fromUid") != principal.uid:
        raise RequestForbidden("not_sender")
    consumed = _consume(store, request_id)
    logger.info("User %s cancelled connection request %s", principal.uid, request_id)
    return consumed


def list_incoming(store: DocumentStore, user: AuthenticatedUser) -> List[Dict[str, Any]]:
    return fetch_incoming_requests(store, user.uid)


def list_outgoing(store: DocumentStore, user: AuthenticatedUser) -> List[Dict[str, Any]]:
    return fetch_outgoing_requests(store, user.uid)


def list_connections(store: DocumentStore, user: AuthenticatedUser) -> List[Dict[str, Any]]:
    items: List[Dict[str, Any]] = []
    for row in fetch_user_connections(store, user.uid):
        item = dict(row)
        if item.get("userA") == user.uid:
            item["peerUid"], item["peerName"] = item.get("userB"), item.get("userBName")
        else:
            item["peerUid"], item["peerName"] = item.get("userA"), item.get("userAName")
        items.append(item)
    return items


def discover_peers(
    store: DocumentStore,
    user: AuthenticatedUser,
    search: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Other users not yet connected, filtered by a subject substring."""
    needle = (normalize_optional_str(search) or "").lower()
    connected = {item["peerUid"] for item in list_connections(store, user)}
    peers: List[Dict[str, Any]] = []
    for doc in fetch_users(store):
        profile = public_profile(doc)
        uid = profile["uid"]
        if not uid or uid == user.uid or uid in connected:
            continue
        if needle and needle not in " ".join(parse_subjects(doc.get("subjects"))).lower():
            continue
        peers.append(profile)
    return peers


__all__ = [
    "DEFAULT_REQUEST_MESSAGE",
    "accept_request",
    "cancel_request",
    "discover_peers",
    "list_connections",
    "list_incoming",
    "list_outgoing",
    "reject_request",
    "send_request",
]
