"""Gemini REST adapter (generateContent).

Classification of the reply:
- promptFeedback.blockReason, or finishReason == SAFETY on the first candidate -> SafetyBlocked
- no candidates, or no text in the first candidate -> Empty
- otherwise the joined text parts of the first candidate -> Success

Transport errors and non-200 replies raise UpstreamError. There is no retry.
"""
from __future__ import annotations

from typing import Any, Dict, List

import requests

from ..config import ProxyConfig, key_fingerprint
from ..errors import UpstreamError
from ..logging_util import get_logger
from ..types import CallOutcome, CallSpec, Empty, SafetyBlocked, Success
from .base import BaseUpstream

logger = get_logger(__name__)

SAFETY_FINISH_REASONS = {"SAFETY", "PROHIBITED_CONTENT", "BLOCKLIST", "SPII"}

def spec_to_payload(spec: CallSpec) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "contents": [{"role": m.role, "parts": [{"text": m.text}]} for m in spec.contents],
        "systemInstruction": {"parts": [{"text": spec.system_instruction}]},
    }
    if spec.tools_enabled:
        payload["tools"] = [{"google_search": {}}]
    return payload

def _candidate_text(candidate: Dict[str, Any]) -> str:
    parts: List[Dict[str, Any]] = (candidate.get("content") or {}).get("parts") or []
    return "".join(str(p.get("text") or "") for p in parts if isinstance(p, dict))

def classify_reply(data: Dict[str, Any]) -> CallOutcome:
    feedback = data.get("promptFeedback") or {}
    if feedback.get("blockReason"):
        return SafetyBlocked(reason=str(feedback["blockReason"]))

    candidates = data.get("candidates") or []
    if not candidates:
        return Empty()

    first = candidates[0] or {}
    finish = str(first.get("finishReason") or "")
    if finish in SAFETY_FINISH_REASONS:
        return SafetyBlocked(reason=finish)

    text = _candidate_text(first)
    if not text.strip():
        return Empty()
    return Success(text=text)

class GeminiAdapter(BaseUpstream):
    def __init__(self, config: ProxyConfig):
        self.config = config

    def generate(self, spec: CallSpec) -> CallOutcome:
        api_key = self.config.require_api_key()
        logger.debug("[GEMINI_KEY] len=%d sha8=%s", len(api_key), key_fingerprint(api_key))

        url = f"{self.config.api_base}/models/{spec.model}:generateContent"
        headers = {"Content-Type": "application/json", "x-goog-api-key": api_key}
        payload = spec_to_payload(spec)

        try:
            r = requests.post(url, headers=headers, json=payload, timeout=self.config.timeout)
        except requests.RequestException as e:
            raise UpstreamError(f"request failed: {e}")

        if r.status_code != 200:
            raise UpstreamError(f"http {r.status_code}: {r.text[:800]}")

        try:
            data = r.json()
        except ValueError as e:
            raise UpstreamError(f"invalid JSON from upstream: {e}")

        if not isinstance(data, dict):
            raise UpstreamError(f"unexpected upstream reply type: {type(data).__name__}")

        outcome = classify_reply(data)
        logger.info("Gemini reply classified as %s", type(outcome).__name__)
        return outcome
