"""Turn the matcher's free-text reply into validated tutor identifiers.

The completion service is untrusted: a name only resolves when it equals
(case-insensitively, no fuzzy or substring matching) the name of a tutor
in the candidate pool, so the reply can shrink the result but never
invent an identifier.
"""
from __future__ import annotations

from typing import Any, List, Sequence

from .models import TutorProfile


def parse_names(raw_text: Any) -> List[str]:
    if not isinstance(raw_text, str) or not raw_text:
        return []
    return [name.strip() for name in raw_text.split(",") if name.strip()]


def resolve_matches(raw_text: Any, candidates: Sequence[TutorProfile]) -> List[str]:
    """Return the uids of candidates named in ``raw_text``, in pool order."""
    wanted = {name.lower() for name in parse_names(raw_text)}
    if not wanted:
        return []

    matched: List[str] = []
    for tutor in candidates:
        if not tutor.uid or tutor.uid in matched:
            continue
        if tutor.name.lower() in wanted:
            matched.append(tutor.uid)
    return matched


__all__ = ["parse_names", "resolve_matches"]
