"""Doubt endpoints for learners and tutors."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from fastapi.responses import JSONResponse

from docstore import DocumentStore
from doubts import accept_doubt, create_doubt, get_doubt, list_doubts, list_learner_doubts
from identity import AuthenticatedUser
from matching import MatchingLLMClient, run_match_in_background
from matching.service import StoreOpener

from ..dependencies import get_current_user, get_llm_client, get_store, get_store_opener
from ..schemas import DoubtCreateRequest


def create_router() -> APIRouter:
    router = APIRouter()

    @router.post("/api/doubts", response_class=JSONResponse, status_code=201)
    def api_create_doubt(
        payload: DoubtCreateRequest,
        background_tasks: BackgroundTasks,
        user: AuthenticatedUser = Depends(get_current_user),
        opener: StoreOpener = Depends(get_store_opener),
        llm: Optional[MatchingLLMClient] = Depends(get_llm_client),
    ):
        # Committed before matching is scheduled.
        with opener() as store:
            doubt = create_doubt(
                store,
                user,
                title=payload.title,
                description=payload.description,
                subject=payload.subject,
            )
        background_tasks.add_task(
            run_match_in_background,
            opener,
            doubt["id"],
            subject=doubt["subject"],
            description=doubt["description"],
            llm_client=llm,
        )
        return {"status": "ok", "doubt": doubt}

    @router.get("/api/doubts", response_class=JSONResponse)
    def api_list_doubts(
        subject: Optional[str] = Query(None),
        user: AuthenticatedUser = Depends(get_current_user),
        store: DocumentStore = Depends(get_store),
    ):
        return list_doubts(store, user, subject=subject)

    @router.get("/api/doubts/mine", response_class=JSONResponse)
    def api_my_doubts(
        user: AuthenticatedUser = Depends(get_current_user),
        store: DocumentStore = Depends(get_store),
    ):
        return list_learner_doubts(store, user)

    @router.get("/api/doubts/{doubt_id}", response_class=JSONResponse)
    def api_get_doubt(
        doubt_id: str,
        user: AuthenticatedUser = Depends(get_current_user),
        store: DocumentStore = Depends(get_store),
    ):
        return get_doubt(store, doubt_id)

    @router.post("/api/doubts/{doubt_id}/accept", response_class=JSONResponse)
    def api_accept_doubt(
        doubt_id: str,
        user: AuthenticatedUser = Depends(get_current_user),
        store: DocumentStore = Depends(get_store),
    ):
        result = accept_doubt(store, user, doubt_id)
        return {"status": "ok", **result}

    return router
