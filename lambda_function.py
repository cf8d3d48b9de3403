"""AWS Lambda / Netlify (v1) entrypoint.

Design goals:
- Keep this file small and stable.
- Delegate all real logic to src/chatproxy so the same core serves Lambda,
  the local server and the CLI.

Expected event shape (legacy, body is a JSON string):
   {"httpMethod": "POST", "body": "{\"query\":\"สวัสดี\",\"isSearch\":false}"}

Return:
- statusCode: 200 / 400 / 403 / 405 / 500
- headers: Content-Type + Access-Control-Allow-Origin
- body: JSON string of {"text": ...} or {"error": ..., "details": ...}
"""
import json
from typing import Any, Dict

from src.chatproxy.client import ChatProxy
from src.chatproxy.config import load_config
from src.chatproxy.logging_util import get_logger
from src.chatproxy.transports import handle_legacy_event

logger = get_logger(__name__)

# Built once per container; the credential is checked per request.
_proxy = ChatProxy(load_config())

def lambda_handler(event: Dict[str, Any], context: Any):
    request_id = getattr(context, "aws_request_id", None)
    try:
        return handle_legacy_event(_proxy, event or {}, request_id=request_id)

    except Exception as e:
        logger.exception("lambda_handler fatal error: %s", e)
        return {
            "statusCode": 500,
            "headers": {"Content-Type": "application/json", "Access-Control-Allow-Origin": "*"},
            "body": json.dumps({"error": "Internal Server Error", "details": str(e)}, ensure_ascii=False),
        }

# Netlify functions v1 look for `handler`.
handler = lambda_handler
