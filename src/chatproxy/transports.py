"""Host calling conventions.

Two conventions are supported; both end up in ChatProxy.handle(method, body):

1) Legacy event (AWS Lambda / Netlify functions v1):
   {"httpMethod": "POST", "body": "{\"query\": \"...\"}", "isBase64Encoded": false}
   The response body is serialized JSON text.

2) Request object (standard request/response style):
   an object or mapping with `method` and an already-parsed `body`.
   The response body stays a mapping; the host serializes it.
"""
from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Dict, Mapping, Optional, Tuple

from .client import ChatProxy
from .types import ApiResult

def _field(obj: Any, name: str, default: Any = None) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)

def parse_legacy_event(event: Mapping[str, Any]) -> Tuple[Optional[str], Any]:
    method = event.get("httpMethod")
    body = event.get("body")
    if body is not None and event.get("isBase64Encoded"):
        try:
            body = base64.b64decode(body)
        except (binascii.Error, ValueError):
            # Let the body check reject it as malformed.
            body = str(body)
    return method, body

def render_legacy_response(result: ApiResult) -> Dict[str, Any]:
    return {
        "statusCode": result.status_code,
        "headers": dict(result.headers),
        "body": json.dumps(dict(result.body), ensure_ascii=False),
    }

def handle_legacy_event(proxy: ChatProxy, event: Mapping[str, Any], request_id: Optional[str] = None) -> Dict[str, Any]:
    method, body = parse_legacy_event(event)
    return render_legacy_response(proxy.handle(method, body, request_id=request_id))

def parse_request_object(request: Any) -> Tuple[Optional[str], Any]:
    return _field(request, "method"), _field(request, "body")

def handle_request_object(proxy: ChatProxy, request: Any, request_id: Optional[str] = None) -> Dict[str, Any]:
    method, body = parse_request_object(request)
    return proxy.handle(method, body, request_id=request_id).to_dict()
