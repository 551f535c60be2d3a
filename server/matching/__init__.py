"""Matching service package exposing orchestration helpers."""
from .llm import (
    GeminiMatchingClient,
    MatchingLLMClient,
    ProxyMatchingClient,
    create_matching_llm_client,
)
from .models import TutorProfile
from .prompt import build_match_prompt
from .resolver import resolve_matches
from .service import handle_match_doubt, run_match_in_background

__all__ = [
    "GeminiMatchingClient",
    "MatchingLLMClient",
    "ProxyMatchingClient",
    "TutorProfile",
    "build_match_prompt",
    "create_matching_llm_client",
    "handle_match_doubt",
    "resolve_matches",
    "run_match_in_background",
]
