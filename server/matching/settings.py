"""Configuration helpers for matching services."""
from __future__ import annotations

import os
from typing import Final

from dotenv import load_dotenv

load_dotenv()

GEMINI_API_KEY: Final[str | None] = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL: Final[str] = os.getenv("GEMINI_MODEL", "gemini-pro")
GEMINI_BASE_URL: Final[str] = os.getenv(
    "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
)
PROXY_API_KEY: Final[str | None] = os.getenv("PROXY_API_KEY")
PROXY_BASE_URL: Final[str | None] = os.getenv("PROXY_BASE_URL")
PROXY_MODEL: Final[str] = os.getenv("PROXY_MODEL", "gpt-4o-mini")
LLM_PROVIDER: Final[str] = (os.getenv("MATCHING_LLM_PROVIDER") or "").strip().lower()
LLM_TEMPERATURE: Final[float] = float(os.getenv("MATCHING_LLM_TEMPERATURE", "0.2"))
LLM_TIMEOUT: Final[float] = float(os.getenv("MATCHING_LLM_TIMEOUT", "30"))

__all__ = [
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "GEMINI_BASE_URL",
    "PROXY_API_KEY",
    "PROXY_BASE_URL",
    "PROXY_MODEL",
    "LLM_PROVIDER",
    "LLM_TEMPERATURE",
    "LLM_TIMEOUT",
]
