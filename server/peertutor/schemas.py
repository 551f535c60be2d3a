"""Request bodies accepted by the HTTP API."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class MatchTutorRequest(BaseModel):
    doubtId: Optional[str] = None
    subject: Optional[str] = None
    description: Optional[str] = None


class DoubtCreateRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    subject: Optional[str] = None


class ConnectionRequestCreate(BaseModel):
    toUid: str
    message: Optional[str] = None
