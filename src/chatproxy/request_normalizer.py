"""Inbound request normalization.

Goals:
- Accept a body that is either already parsed (mapping) or raw text/bytes.
- Reject cheaply: the method is checked before the body is touched.
- Produce a ChatRequest or raise one of the ValidationError subclasses.

isSearch is only honoured when it is strictly the boolean true.
"""
from __future__ import annotations

import json
from typing import Any, Mapping, Optional

from .errors import MalformedBodyError, MethodNotAllowedError, MissingBodyError, MissingQueryError
from .logging_util import get_logger
from .types import ChatRequest

logger = get_logger(__name__)

ALLOWED_METHOD = "POST"

def check_method(method: Optional[str]) -> None:
    if method != ALLOWED_METHOD:
        raise MethodNotAllowedError(f"method not allowed: {method!r}")

def decode_body(body: Any) -> Mapping[str, Any]:
    if body is None:
        raise MissingBodyError("request body is absent")

    if isinstance(body, Mapping):
        return body

    if isinstance(body, (bytes, bytearray)):
        try:
            body = bytes(body).decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedBodyError(f"body is not valid UTF-8: {e}")

    if not isinstance(body, str):
        raise MalformedBodyError(f"unsupported body type: {type(body).__name__}")

    if not body.strip():
        raise MissingBodyError("request body is empty")

    try:
        obj = json.loads(body)
    except (ValueError, RecursionError) as e:
        # ValueError covers JSONDecodeError and the int digit limit; RecursionError deep nesting.
        raise MalformedBodyError(f"body is not valid JSON: {e}") from e

    if not isinstance(obj, dict):
        raise MalformedBodyError(f"body must be a JSON object, got {type(obj).__name__}")
    return obj

def normalize_request(method: Optional[str], body: Any) -> ChatRequest:
    check_method(method)
    data = decode_body(body)

    query = data.get("query")
    if not isinstance(query, str) or not query.strip():
        raise MissingQueryError("query is required")

    is_search = data.get("isSearch") is True

    logger.debug("Normalized request: query_len=%d is_search=%s", len(query), is_search)
    return ChatRequest(query=query, is_search=is_search)
