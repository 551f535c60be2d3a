"""Document store access for matching workflows."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from docstore import DOUBTS, USERS, DocumentStore
from identity import TUTOR_ROLE

from .models import TutorProfile


def load_candidate_pool(store: DocumentStore) -> List[TutorProfile]:
    """Fresh full scan of tutor profiles, in store order.

    An empty pool is a valid result; callers degrade to zero matches.
    """
    docs = store.query(USERS, "role", TUTOR_ROLE)
    pool: List[TutorProfile] = []
    seen = set()
    for doc in docs:
        tutor = TutorProfile.from_document(doc)
        if not tutor.uid or tutor.uid in seen:
            continue
        seen.add(tutor.uid)
        pool.append(tutor)
    return pool


def fetch_doubt(store: DocumentStore, doubt_id: str) -> Optional[Dict[str, Any]]:
    return store.get(DOUBTS, doubt_id)


def save_recommendations(store: DocumentStore, doubt_id: str, tutor_ids: Sequence[str]) -> bool:
    """Replace ``recommendedTutors`` on the doubt; other fields are untouched."""
    return store.update(DOUBTS, doubt_id, {"recommendedTutors": list(tutor_ids)})


__all__ = ["load_candidate_pool", "fetch_doubt", "save_recommendations"]
