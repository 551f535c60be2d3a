"""High level orchestration for the doubt-to-tutor matching pipeline."""
from __future__ import annotations

import logging
from typing import Callable, ContextManager, List, Optional

from docstore import DocumentStore
from errors import NotFound, ValidationFailed
from utils import normalize_optional_str

from .llm import MatchingLLMClient, create_matching_llm_client
from .prompt import build_match_prompt
from .repository import fetch_doubt, load_candidate_pool, save_recommendations
from .resolver import parse_names, resolve_matches

logger = logging.getLogger(__name__)

StoreOpener = Callable[[], ContextManager[DocumentStore]]


def _pick_llm(llm: Optional[MatchingLLMClient]) -> Optional[MatchingLLMClient]:
    return llm or create_matching_llm_client()


def handle_match_doubt(
    store: DocumentStore,
    doubt_id: str,
    *,
    subject: Optional[str] = None,
    description: Optional[str] = None,
    llm_client: Optional[MatchingLLMClient] = None,
) -> List[str]:
    """Run the pipeline for one doubt and persist the resolved tutor uids.

    ``subject`` and ``description`` default to the stored doubt's fields.
    Upstream failures resolve to an empty list; the stored recommendation
    set is always replaced, never merged.
    """
    doubt_key = normalize_optional_str(doubt_id)
    if not doubt_key:
        raise ValidationFailed("missing_doubt_id")

    doubt = fetch_doubt(store, doubt_key)
    if not doubt:
        raise NotFound("doubt_not_found")
    subject_val = normalize_optional_str(subject) or normalize_optional_str(doubt.get("subject")) or ""
    description_val = (
        normalize_optional_str(description) or normalize_optional_str(doubt.get("description")) or ""
    )

    logger.info("Matching tutors for doubt %s", doubt_key)
    candidates = load_candidate_pool(store)
    logger.info("Candidate pool for doubt %s has %d tutors", doubt_key, len(candidates))

    matched: List[str] = []
    if candidates:
        prompt = build_match_prompt(subject_val, description_val, candidates)
        logger.debug("Matcher prompt for doubt %s:\n%s", doubt_key, prompt)
        llm = _pick_llm(llm_client)
        raw_text = llm.complete(prompt) if llm else ""
        if not llm:
            logger.warning("No matching backend configured; doubt %s gets no recommendations", doubt_key)
        logger.debug("Matcher reply for doubt %s: %r", doubt_key, raw_text)
        logger.debug("Parsed names for doubt %s: %s", doubt_key, parse_names(raw_text))
        matched = resolve_matches(raw_text, candidates)

    if not save_recommendations(store, doubt_key, matched):
        raise NotFound("doubt_not_found")
    logger.info("Doubt %s matched tutors: %s", doubt_key, matched)
    return matched


def run_match_in_background(
    open_store: StoreOpener,
    doubt_id: str,
    *,
    subject: Optional[str] = None,
    description: Optional[str] = None,
    llm_client: Optional[MatchingLLMClient] = None,
) -> List[str]:
    """Pipeline entry point for work scheduled after the doubt was created.

    Runs in its own transaction. Failures are logged and swallowed: the
    learner only ever sees an empty recommendation list.
    """
    try:
        with open_store() as store:
            return handle_match_doubt(
                store,
                doubt_id,
                subject=subject,
                description=description,
                llm_client=llm_client,
            )
    except Exception:
        logger.exception("Background matching failed for doubt %s", doubt_id)
        return []


__all__ = ["handle_match_doubt", "run_match_in_background", "StoreOpener"]
