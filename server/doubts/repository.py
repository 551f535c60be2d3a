"""Document store access for doubts."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from docstore import DOUBTS, USERS, DocumentStore
from identity import TUTOR_ROLE


def insert_doubt(store: DocumentStore, data: Mapping[str, Any]) -> Optional[str]:
    return store.insert(DOUBTS, data)


def fetch_doubt(store: DocumentStore, doubt_id: str) -> Optional[Dict[str, Any]]:
    return store.get(DOUBTS, doubt_id)


def fetch_doubts(store: DocumentStore, *, subject: Optional[str] = None) -> List[Dict[str, Any]]:
    if subject:
        return store.query(DOUBTS, "subject", subject, order_by="createdAt", descending=True)
    return store.query(DOUBTS, order_by="createdAt", descending=True)


def fetch_learner_doubts(store: DocumentStore, learner_uid: str) -> List[Dict[str, Any]]:
    return store.query(DOUBTS, "uid", learner_uid, order_by="createdAt", descending=True)


def add_accepted_tutor(store: DocumentStore, doubt_id: str, tutor_uid: str) -> Optional[bool]:
    return store.add_to_set(DOUBTS, doubt_id, "acceptedTutors", tutor_uid)


def fetch_tutor_names(store: DocumentStore) -> Dict[str, str]:
    names: Dict[str, str] = {}
    for doc in store.query(USERS, "role", TUTOR_ROLE):
        uid = str(doc.get("id") or doc.get("uid") or "")
        if uid:
            names[uid] = str(doc.get("name") or "")
    return names


__all__ = [
    "insert_doubt",
    "fetch_doubt",
    "fetch_doubts",
    "fetch_learner_doubts",
    "add_accepted_tutor",
    "fetch_tutor_names",
]
