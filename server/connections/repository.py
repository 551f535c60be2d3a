"""Document store access for connection requests and connections.

Both collections use deterministic document ids: a request is keyed by
the ordered ``(sender, recipient)`` pair and a connection by the sorted
pair, so insert-if-absent enforces one pending request per direction and
one connection per pair.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from docstore import CONNECTION_REQUESTS, CONNECTIONS, USERS, DocumentStore


def request_id_for(from_uid: str, to_uid: str) -> str:
    return f"{from_uid}:{to_uid}"


def canonical_pair(uid_a: str, uid_b: str) -> Tuple[str, str]:
    return (uid_a, uid_b) if uid_a <= uid_b else (uid_b, uid_a)


def connection_id_for(uid_a: str, uid_b: str) -> str:
    user_a, user_b = canonical_pair(uid_a, uid_b)
    return f"{user_a}:{user_b}"


def fetch_user(store: DocumentStore, uid: str) -> Optional[Dict[str, Any]]:
    return store.get(USERS, uid)


def fetch_users(store: DocumentStore) -> List[Dict[str, Any]]:
    return store.query(USERS)


def fetch_request(store: DocumentStore, request_id: str) -> Optional[Dict[str, Any]]:
    return store.get(CONNECTION_REQUESTS, request_id)


def insert_request(store: DocumentStore, data: Mapping[str, Any]) -> Optional[str]:
    return store.insert(
        CONNECTION_REQUESTS,
        data,
        doc_id=request_id_for(data["fromUid"], data["toUid"]),
    )


def consume_request(store: DocumentStore, request_id: str) -> Optional[Dict[str, Any]]:
    """Delete the request; only the caller that gets a document back owns the transition."""
    return store.delete(CONNECTION_REQUESTS, request_id)


def fetch_incoming_requests(store: DocumentStore, uid: str) -> List[Dict[str, Any]]:
    return store.query(CONNECTION_REQUESTS, "toUid", uid, order_by="createdAt", descending=True)


def fetch_outgoing_requests(store: DocumentStore, uid: str) -> List[Dict[str, Any]]:
    return store.query(CONNECTION_REQUESTS, "fromUid", uid, order_by="createdAt", descending=True)


def fetch_connection(store: DocumentStore, uid_a: str, uid_b: str) -> Optional[Dict[str, Any]]:
    return store.get(CONNECTIONS, connection_id_for(uid_a, uid_b))


def insert_connection(store: DocumentStore, data: Mapping[str, Any]) -> Optional[str]:
    return store.insert(
        CONNECTIONS,
        data,
        doc_id=connection_id_for(data["userA"], data["userB"]),
    )


def fetch_user_connections(store: DocumentStore, uid: str) -> List[Dict[str, Any]]:
    rows = store.query(CONNECTIONS, "userA", uid, order_by="createdAt", descending=True)
    rows.extend(store.query(CONNECTIONS, "userB", uid, order_by="createdAt", descending=True))
    rows.sort(key=lambda row: str(row.get("createdAt") or ""), reverse=True)
    return rows


__all__ = [
    "request_id_for",
    "canonical_pair",
    "connection_id_for",
    "fetch_user",
    "fetch_users",
    "fetch_request",
    "insert_request",
    "consume_request",
    "fetch_incoming_requests",
    "fetch_outgoing_requests",
    "fetch_connection",
    "insert_connection",
    "fetch_user_connections",
]
