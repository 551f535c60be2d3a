"""Doubt lifecycle: creation, listing and tutor acceptance."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from docstore import DocumentStore
from errors import Forbidden, NotFound, StoreUnavailable, ValidationFailed
from identity import AuthenticatedUser
from utils import normalize_optional_str, utc_now_iso

from .repository import (
    add_accepted_tutor,
    fetch_doubt,
    fetch_doubts,
    fetch_learner_doubts,
    fetch_tutor_names,
    insert_doubt,
)

logger = logging.getLogger(__name__)


def _normalized(doc: Mapping[str, Any]) -> Dict[str, Any]:
    item = dict(doc)
    item["recommendedTutors"] = list(item.get("recommendedTutors") or [])
    item["acceptedTutors"] = list(item.get("acceptedTutors") or [])
    return item


def tutor_label(tutor_names: Mapping[str, str], uid: str) -> str:
    return tutor_names.get(uid) or f"Tutor ID: {uid}"


def can_accept(user: AuthenticatedUser, doubt: Mapping[str, Any]) -> bool:
    """A tutor may accept a doubt in one of their own subjects."""
    return user.teaches(doubt.get("subject"))


def create_doubt(
    store: DocumentStore,
    learner: AuthenticatedUser,
    *,
    title: Optional[str],
    description: Optional[str],
    subject: Optional[str],
) -> Dict[str, Any]:
    title_val = normalize_optional_str(title)
    description_val = normalize_optional_str(description)
    subject_val = normalize_optional_str(subject)
    if not (title_val and description_val and subject_val):
        raise ValidationFailed("missing_fields")
    if not learner.is_learner:
        raise Forbidden("not_learner")
    if learner.subjects and subject_val not in learner.subjects:
        raise ValidationFailed("unknown_subject")

    data = {
        "uid": learner.uid,
        "name": learner.name,
        "subject": subject_val,
        "title": title_val,
        "description": description_val,
        "createdAt": utc_now_iso(),
        "recommendedTutors": [],
        "acceptedTutors": [],
    }
    doubt_id = insert_doubt(store, data)
    if not doubt_id:
        raise StoreUnavailable()
    logger.info("Learner %s posted doubt %s (%s)", learner.uid, doubt_id, subject_val)
    return {"id": doubt_id, **data}


def get_doubt(store: DocumentStore, doubt_id: str) -> Dict[str, Any]:
    doubt = fetch_doubt(store, doubt_id)
    if not doubt:
        raise NotFound("doubt_not_found")
    return _normalized(doubt)


def accept_doubt(store: DocumentStore, tutor: AuthenticatedUser, doubt_id: str) -> Dict[str, Any]:
    """Add the tutor to ``acceptedTutors``; repeating the call is a no-op."""
    doubt = get_doubt(store, doubt_id)
    if not can_accept(tutor, doubt):
        raise Forbidden("not_qualified")

    added = add_accepted_tutor(store, doubt_id, tutor.uid)
    if added is None:
        raise NotFound("doubt_not_found")
    if added:
        logger.info("Tutor %s accepted doubt %s", tutor.uid, doubt_id)
    else:
        logger.info("Tutor %s had already accepted doubt %s", tutor.uid, doubt_id)
    return {"accepted": bool(added), "doubt": get_doubt(store, doubt_id)}


def _with_tutor_names(doubt: Dict[str, Any], tutor_names: Mapping[str, str]) -> Dict[str, Any]:
    doubt["recommendedTutorNames"] = [tutor_label(tutor_names, uid) for uid in doubt["recommendedTutors"]]
    doubt["acceptedTutorNames"] = [tutor_label(tutor_names, uid) for uid in doubt["acceptedTutors"]]
    return doubt


def list_doubts(
    store: DocumentStore,
    viewer: AuthenticatedUser,
    *,
    subject: Optional[str] = None,
) -> List[Dict[str, Any]]:
    tutor_names = fetch_tutor_names(store)
    items: List[Dict[str, Any]] = []
    for doc in fetch_doubts(store, subject=normalize_optional_str(subject)):
        doubt = _with_tutor_names(_normalized(doc), tutor_names)
        doubt["canAccept"] = can_accept(viewer, doubt) and viewer.uid not in doubt["acceptedTutors"]
        items.append(doubt)
    return items


def list_learner_doubts(store: DocumentStore, learner: AuthenticatedUser) -> List[Dict[str, Any]]:
    tutor_names = fetch_tutor_names(store)
    return [
        _with_tutor_names(_normalized(doc), tutor_names)
        for doc in fetch_learner_doubts(store, learner.uid)
    ]


__all__ = [
    "accept_doubt",
    "can_accept",
    "create_doubt",
    "get_doubt",
    "list_doubts",
    "list_learner_doubts",
    "tutor_label",
]
