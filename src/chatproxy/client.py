"""ChatProxy: request orchestrator.

Flow (strictly forward, no stage re-entered):
  normalize request -> build call spec -> credential check -> one upstream call -> normalize response

Every failure is converted to an ApiResult here; nothing escapes handle().
"""
from __future__ import annotations

import time
from typing import Any, Optional

from .adapters import BaseUpstream, GeminiAdapter
from .config import ProxyConfig, load_config
from .errors import ChatProxyError, ValidationError
from .logging_util import get_logger, log_step
from .prompt_layers import build_call_spec
from .request_normalizer import normalize_request
from .response_normalizer import error_result, normalize_response
from .types import ApiResult

logger = get_logger(__name__)

class ChatProxy:
    def __init__(self, config: Optional[ProxyConfig] = None, upstream: Optional[BaseUpstream] = None):
        self.config = config or load_config()
        self.upstream = upstream or GeminiAdapter(self.config)

    def handle(self, method: Optional[str], body: Any, request_id: Optional[str] = None) -> ApiResult:
        t0 = time.time()
        try:
            log_step(logger, "1", "normalize request", request_id)
            req = normalize_request(method, body)

            log_step(logger, "2", f"build call spec is_search={req.is_search}", request_id)
            spec = build_call_spec(req, self.config.model)

            log_step(logger, "3", "credential check", request_id)
            self.config.require_api_key()

            log_step(logger, "4", f"call upstream model={spec.model} tools={spec.tools_enabled}", request_id)
            outcome = self.upstream.generate(spec)

            log_step(logger, "5", f"normalize response outcome={type(outcome).__name__}", request_id)
            result = normalize_response(
                outcome,
                empty_text=self.config.empty_result_text,
                cors_origin=self.config.cors_origin,
            )

        except ValidationError as e:
            logger.warning("Rejected request: %s", e)
            result = error_result(e, cors_origin=self.config.cors_origin)

        except ChatProxyError as e:
            logger.error("Upstream/config failure: %s", e)
            result = error_result(e, cors_origin=self.config.cors_origin)

        except Exception as e:
            logger.exception("ChatProxy.handle failed: %s", e)
            result = normalize_response(e, cors_origin=self.config.cors_origin)

        logger.info(
            "request done status=%d elapsed_ms=%d",
            result.status_code,
            int((time.time() - t0) * 1000),
        )
        return result
