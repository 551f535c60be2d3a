"""LLM-based matching endpoint."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from matching import MatchingLLMClient, handle_match_doubt
from matching.service import StoreOpener

from ..dependencies import get_llm_client, get_store_opener
from ..schemas import MatchTutorRequest

router = APIRouter()


@router.post("/api/matchTutor", response_class=JSONResponse)
def match_tutor(
    payload: MatchTutorRequest,
    opener: StoreOpener = Depends(get_store_opener),
    llm: Optional[MatchingLLMClient] = Depends(get_llm_client),
):
    # Recommendations are committed before the response is sent.
    with opener() as store:
        matched = handle_match_doubt(
            store,
            payload.doubtId,
            subject=payload.subject,
            description=payload.description,
            llm_client=llm,
        )
    return {"matchedTutors": matched}
