"""Prompt rendering for the doubt-to-tutor matcher."""
from __future__ import annotations

from typing import Iterable, List

from .models import TutorProfile

PROMPT_INSTRUCTION = (
    "Which tutors match best? Return ONLY a comma-separated list of tutor names, nothing else."
)


def describe_tutor(tutor: TutorProfile) -> str:
    return f"Name: {tutor.name}, Subjects: {', '.join(tutor.subjects)}, Bio: {tutor.bio}"


def build_match_prompt(subject: str, description: str, candidates: Iterable[TutorProfile]) -> str:
    """Render a doubt and its candidate pool into a single instruction.

    Tutors are listed in pool order, one per line, so the same inputs always
    produce the same prompt.
    """
    lines: List[str] = [
        "A learner posted a doubt:",
        f"Subject: {subject}",
        f"Description: {description}",
        "",
        "Here are available tutors:",
    ]
    lines.extend(describe_tutor(tutor) for tutor in candidates)
    lines.extend(["", PROMPT_INSTRUCTION])
    return "\n".join(lines)


__all__ = ["PROMPT_INSTRUCTION", "build_match_prompt", "describe_tutor"]
