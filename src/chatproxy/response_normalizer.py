"""Outcome -> ApiResult mapping.

Policy:
- An empty upstream result is not an error: it is reported at 200 with a
  fixed fallback text.
- Error bodies carry a short label and, where available, the failure message.
  Never a traceback.
- Every result carries the JSON content type and the CORS header.
"""
from __future__ import annotations

from typing import Dict, Union

from .config import DEFAULT_EMPTY_RESULT_TEXT
from .errors import ChatProxyError, ValidationError
from .types import ApiResult, CallOutcome, Empty, Failure, SafetyBlocked, Success

SAFETY_LABEL = "Safety Blocked"
SAFETY_DETAILS = "The query was blocked by content safety filters."
INTERNAL_LABEL = "Internal Server Error"

def response_headers(cors_origin: str = "*") -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": cors_origin,
    }

def normalize_response(
    outcome: Union[CallOutcome, BaseException],
    empty_text: str = DEFAULT_EMPTY_RESULT_TEXT,
    cors_origin: str = "*",
) -> ApiResult:
    headers = response_headers(cors_origin)

    if isinstance(outcome, BaseException):
        if isinstance(outcome, ChatProxyError):
            return error_result(outcome, cors_origin=cors_origin)
        outcome = Failure(message=str(outcome))

    if isinstance(outcome, Success):
        return ApiResult(200, headers, {"text": outcome.text})

    if isinstance(outcome, Empty):
        return ApiResult(200, headers, {"text": empty_text})

    if isinstance(outcome, SafetyBlocked):
        return ApiResult(403, headers, {"error": SAFETY_LABEL, "details": SAFETY_DETAILS})

    if isinstance(outcome, Failure):
        return ApiResult(500, headers, {"error": INTERNAL_LABEL, "details": outcome.message})

    raise TypeError(f"unknown outcome type: {type(outcome).__name__}")

def error_result(err: ChatProxyError, cors_origin: str = "*") -> ApiResult:
    headers = response_headers(cors_origin)

    # Validation failures answer with the label only.
    if isinstance(err, ValidationError):
        return ApiResult(err.status_code, headers, {"error": err.label})

    return ApiResult(500, headers, {"error": INTERNAL_LABEL, "details": str(err)})
