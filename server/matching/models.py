"""Value types used by the matching pipeline."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Tuple

from utils import parse_subjects


@dataclass(frozen=True)
class TutorProfile:
    """Read-only snapshot of a tutor taken at the start of a matching run."""

    uid: str
    name: str
    subjects: Tuple[str, ...] = field(default_factory=tuple)
    bio: str = ""

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "TutorProfile":
        return cls(
            uid=str(doc.get("id") or doc.get("uid") or ""),
            name=str(doc.get("name") or ""),
            subjects=tuple(parse_subjects(doc.get("subjects"))),
            bio=str(doc.get("bio") or ""),
        )


__all__ = ["TutorProfile"]
