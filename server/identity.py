"""Verified principals and the role rules evaluated against them."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Tuple

from utils import parse_subjects

TUTOR_ROLE = "Tutor"
LEARNER_ROLES = frozenset({"Student", "Learner"})


@dataclass(frozen=True)
class AuthenticatedUser:
    """The acting user, resolved server-side from the ``users`` collection."""

    uid: str
    name: str = ""
    role: str = ""
    subjects: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "AuthenticatedUser":
        return cls(
            uid=str(doc.get("id") or doc.get("uid") or ""),
            name=str(doc.get("name") or ""),
            role=str(doc.get("role") or "").strip(),
            subjects=tuple(parse_subjects(doc.get("subjects"))),
        )

    @property
    def is_tutor(self) -> bool:
        return self.role == TUTOR_ROLE

    @property
    def is_learner(self) -> bool:
        return self.role in LEARNER_ROLES

    def teaches(self, subject: Any) -> bool:
        return self.is_tutor and str(subject or "") in self.subjects


def public_profile(doc: Mapping[str, Any]) -> dict:
    """Fields of a user document that other users are allowed to see."""
    return {
        "uid": str(doc.get("id") or doc.get("uid") or ""),
        "name": str(doc.get("name") or ""),
        "role": str(doc.get("role") or "").strip(),
        "subjects": parse_subjects(doc.get("subjects")),
        "bio": str(doc.get("bio") or ""),
    }


__all__ = ["AuthenticatedUser", "TUTOR_ROLE", "LEARNER_ROLES", "public_profile"]
