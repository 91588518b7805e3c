"""
Text-Generation Collaborators
=============================
Clients that turn the insight prompt into a JSON report.  Two transports:

  gemini - an LLM called through CrewAI's `LLM` wrapper (GOOGLE_API_KEY).
  edge   - an HTTP "insights-generate" function that owns the model key
           server-side and authenticates the caller with a bearer token.

Every client raises CollaboratorError on failure.  Callers never retry.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional, Protocol

import requests

from config import Settings
from pipeline.prompt_builder import SYSTEM_PROMPT

log = logging.getLogger("insight_agents")


class CollaboratorError(RuntimeError):
    """Missing credentials, transport failure or non-success reply."""


class InsightGenerator(Protocol):
    name: str

    def generate(self, prompt: str) -> Any:
        """Return the raw reply: response text or an already-decoded JSON object."""
        ...


# ── LLM via CrewAI (lazy-init to avoid import-time crashes) ──
def _build_llm(settings: Settings):
    from crewai import LLM

    return LLM(
        model=settings.llm_model,
        api_key=settings.google_api_key,
        temperature=settings.llm_temperature,
    )


class GeminiInsightGenerator:
    name = "gemini"

    def __init__(self, settings: Settings):
        self.settings = settings
        self._llm = None
        self._llm_lock = threading.Lock()

    def _get_llm(self):
        with self._llm_lock:
            if self._llm is None:
                self._llm = _build_llm(self.settings)
            return self._llm

    def generate(self, prompt: str) -> str:
        if not self.settings.google_api_key:
            raise CollaboratorError("GOOGLE_API_KEY is not set")
        try:
            out = self._get_llm().call([
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ])
        except Exception as e:
            raise CollaboratorError(f"LLM call failed: {e}") from e
        text = getattr(out, "raw", out)
        if not isinstance(text, str) or not text.strip():
            raise CollaboratorError("LLM returned an empty response")
        return text


class EdgeFunctionInsightGenerator:
    name = "edge"

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()

    def generate(self, prompt: str) -> Any:
        s = self.settings
        if not s.edge_function_url:
            raise CollaboratorError("INSIGHTS_EDGE_FUNCTION_URL is not set")
        if not s.edge_function_token or not s.user_id:
            raise CollaboratorError("no authenticated user session")

        try:
            resp = self.session.post(
                s.edge_function_url,
                json={"prompt": prompt, "userId": s.user_id},
                headers={"Authorization": f"Bearer {s.edge_function_token}"},
                timeout=s.collaborator_timeout_sec,
            )
        except requests.RequestException as e:
            raise CollaboratorError(f"network error: {e}") from e

        if not 200 <= resp.status_code < 300:
            raise CollaboratorError(f"HTTP {resp.status_code}: {resp.text[:200]}")
        try:
            payload = resp.json()
        except ValueError:
            # Let the response parser decide whether the body is usable
            return resp.text
        if isinstance(payload, dict) and payload.get("error"):
            raise CollaboratorError(f"function error: {payload['error']}")
        return payload


def build_generator(settings: Settings) -> Optional[InsightGenerator]:
    """Pick the collaborator named in settings; None means rule-based only."""
    choice = settings.collaborator
    if choice == "gemini":
        return GeminiInsightGenerator(settings)
    if choice == "edge":
        return EdgeFunctionInsightGenerator(settings)
    if choice not in ("none", "off", "rule_based"):
        log.warning("Unknown INSIGHTS_COLLABORATOR=%r, using rule-based insights", choice)
    return None
