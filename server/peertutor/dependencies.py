"""FastAPI dependencies wiring the store, the matcher and the acting user."""
from __future__ import annotations

from typing import ContextManager, Iterator, Optional

from fastapi import Depends, Request

from docstore import USERS, DocumentStore, open_store
from errors import NotAuthenticated
from identity import AuthenticatedUser
from matching import MatchingLLMClient, create_matching_llm_client
from matching.service import StoreOpener
from utils import normalize_optional_str

from .config import get_auth_user_header
from .db import get_conn


def _open_postgres_store() -> ContextManager[DocumentStore]:
    return open_store(get_conn)


def get_store_opener() -> StoreOpener:
    """Factory for stores outliving the request, e.g. background matching."""
    return _open_postgres_store


def get_store(opener: StoreOpener = Depends(get_store_opener)) -> Iterator[DocumentStore]:
    """One store and one transaction per request."""
    with opener() as store:
        yield store


def get_llm_client() -> Optional[MatchingLLMClient]:
    return create_matching_llm_client()


def get_current_user(request: Request, store: DocumentStore = Depends(get_store)) -> AuthenticatedUser:
    """Resolve the gateway-supplied user id to a stored profile.

    The header is only a lookup key; an id without a ``users`` document is
    rejected.
    """
    uid = normalize_optional_str(request.headers.get(get_auth_user_header()))
    if not uid:
        raise NotAuthenticated()
    doc = store.get(USERS, uid)
    if not doc:
        raise NotAuthenticated("unknown_user")
    return AuthenticatedUser.from_document(doc)


__all__ = [
    "get_current_user",
    "get_llm_client",
    "get_store",
    "get_store_opener",
]
