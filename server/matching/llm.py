"""Completion clients used by the tutor matcher.

Both backends return the reply as plain text. Transport failures,
non-2xx responses, timeouts and unexpected response shapes all come back
as an empty string so that a broken matcher only starves the
recommendation list.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import requests
from openai import OpenAI, OpenAIError

from .settings import (
    GEMINI_API_KEY,
    GEMINI_BASE_URL,
    GEMINI_MODEL,
    LLM_PROVIDER,
    LLM_TEMPERATURE,
    LLM_TIMEOUT,
    PROXY_API_KEY,
    PROXY_BASE_URL,
    PROXY_MODEL,
)

logger = logging.getLogger(__name__)


def extract_reply_text(payload: Any) -> str:
    """Pull ``candidates[0].content.parts[0].text`` out of a generateContent reply."""
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return ""
    return text if isinstance(text, str) else ""


class MatchingLLMClient:
    """Interface shared by the completion backends."""

    def complete(self, prompt: str) -> str:
        raise NotImplementedError


class GeminiMatchingClient(MatchingLLMClient):
    """Calls the Gemini ``generateContent`` REST endpoint."""

    def __init__(
        self,
        api_key: str,
        *,
        model: str = GEMINI_MODEL,
        base_url: str = GEMINI_BASE_URL,
        timeout: float = LLM_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/models/{self._model}:generateContent"

    def complete(self, prompt: str) -> str:
        body = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            response = self._session.post(
                self.endpoint,
                headers={"x-goog-api-key": self._api_key},
                json=body,
                timeout=self._timeout,
            )
        except requests.Timeout:
            logger.warning("Gemini request timed out after %ss", self._timeout)
            return ""
        except requests.RequestException as exc:
            logger.warning("Gemini request failed: %s", exc)
            return ""

        if not 200 <= response.status_code < 300:
            logger.warning("Gemini endpoint returned HTTP %s", response.status_code)
            return ""

        try:
            payload = response.json()
        except ValueError:
            logger.warning("Gemini returned a non-JSON body")
            return ""

        text = extract_reply_text(payload)
        if not text:
            logger.warning("Gemini reply did not contain candidate text")
        return text


class ProxyMatchingClient(MatchingLLMClient):
    """OpenAI-compatible Chat Completions backend behind a proxy."""

    def __init__(
        self,
        client: OpenAI,
        model: str,
        *,
        temperature: float = LLM_TEMPERATURE,
        timeout: float = LLM_TIMEOUT,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._timeout = timeout

    def complete(self, prompt: str) -> str:
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self._temperature,
                timeout=self._timeout,
            )
        except OpenAIError as exc:
            logger.warning("LLM request failed: %s", exc)
            return ""

        if not response.choices or not response.choices[0].message:
            return ""
        content = getattr(response.choices[0].message, "content", None)
        return content if isinstance(content, str) else ""


def create_matching_llm_client(provider: Optional[str] = None) -> Optional[MatchingLLMClient]:
    """Build the configured backend, or ``None`` when nothing is configured."""
    choice = (provider if provider is not None else LLM_PROVIDER) or ""
    proxy_ready = bool(PROXY_API_KEY and PROXY_BASE_URL)
    if not choice:
        choice = "gemini" if GEMINI_API_KEY else ("proxy" if proxy_ready else "")

    if choice == "gemini" and GEMINI_API_KEY:
        return GeminiMatchingClient(GEMINI_API_KEY)
    if choice == "proxy" and proxy_ready:
        client = OpenAI(api_key=PROXY_API_KEY, base_url=PROXY_BASE_URL)
        return ProxyMatchingClient(client, PROXY_MODEL)
    if choice:
        logger.warning("Matching provider %r is not configured", choice)
    return None


__all__ = [
    "MatchingLLMClient",
    "GeminiMatchingClient",
    "ProxyMatchingClient",
    "create_matching_llm_client",
    "extract_reply_text",
]
