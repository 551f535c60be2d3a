"""Profile lookups."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from docstore import USERS, DocumentStore
from errors import NotFound
from identity import AuthenticatedUser, public_profile

from ..dependencies import get_current_user, get_store


def create_router() -> APIRouter:
    router = APIRouter()

    @router.get("/api/me", response_class=JSONResponse)
    def api_me(
        user: AuthenticatedUser = Depends(get_current_user),
        store: DocumentStore = Depends(get_store),
    ):
        doc = store.get(USERS, user.uid) or {"uid": user.uid}
        return public_profile(doc)

    @router.get("/api/users/{uid}", response_class=JSONResponse)
    def api_user(
        uid: str,
        user: AuthenticatedUser = Depends(get_current_user),
        store: DocumentStore = Depends(get_store),
    ):
        doc = store.get(USERS, uid)
        if not doc:
            raise NotFound("user_not_found")
        return public_profile(doc)

    return router
