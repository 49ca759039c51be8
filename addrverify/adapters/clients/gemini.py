# addrverify/adapters/clients/gemini.py
from __future__ import annotations

import logging
from typing import Any

import httpx

from ...domain.parsing import parse_verdict
from ...domain.prompt import RESPONSE_SCHEMA, build_prompt
from ...domain.types import Precomputation, VerificationResult
from ...exceptions import ConfigurationError, OracleError

log = logging.getLogger(__name__)


def _candidate_text(data: Any) -> str:
    """Concatenate the text parts of the first candidate. Raises ValueError if absent."""
    if not isinstance(data, dict):
        raise ValueError("gemini_response_not_object")
    candidates = data.get("candidates") or []
    if not isinstance(candidates, list):
        raise ValueError("gemini_candidates_not_list")
    if not candidates:
        feedback = data.get("promptFeedback")
        block = feedback.get("blockReason") if isinstance(feedback, dict) else None
        raise ValueError(f"gemini_no_candidates blockReason={block}")

    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        raise ValueError("gemini_candidate_without_parts")

    texts = []
    for p in parts:
        if not isinstance(p, dict) or not isinstance(p.get("text"), str):
            raise ValueError("gemini_part_without_text")
        texts.append(p["text"])
    text = "".join(texts)
    if not text.strip():
        raise ValueError("gemini_empty_text")
    return text.strip()


class GeminiOracle:
    """
    Direct mode: this process holds the API key and calls the Gemini
    generateContent endpoint with a JSON response schema.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout_s: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY is not configured on the server.")
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.timeout_s = timeout_s
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self.base_url.rstrip('/')}/models/{self.model}:generateContent"

    def request_body(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }

    async def verify(
        self,
        address1: str,
        address2: str,
        precomputation: Precomputation,
    ) -> VerificationResult:
        prompt = build_prompt(address1, address2, precomputation)
        headers = {"x-goog-api-key": self.api_key, "Content-Type": "application/json"}

        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
                r = await client.post(self.url, headers=headers, json=self.request_body(prompt))
                r.raise_for_status()
                data = r.json()
            return parse_verdict(_candidate_text(data))
        except (httpx.HTTPError, ValueError) as e:
            # ValueError covers both r.json() decode errors and schema mismatches
            log.warning("gemini call failed model=%s err=%s: %s", self.model, type(e).__name__, e)
            raise OracleError() from e
