"""Local HTTP server for development.

Serves /api/gemini with the request-object convention so local runs go through
exactly the same decision core as the deployed function. Method filtering is
left to the core (405 with the standard body), so the route accepts every method.

Run:
  uvicorn src.chatproxy.server:app --reload --port 8888
"""
from __future__ import annotations

import uuid
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.concurrency import run_in_threadpool

from .client import ChatProxy
from .logging_util import get_logger
from .transports import handle_request_object

logger = get_logger(__name__)

ROUTE = "/api/gemini"
METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

def create_app(proxy: Optional[ChatProxy] = None) -> FastAPI:
    app = FastAPI(
        title="Gemini Chat Proxy",
        description="Local runner for the chat/search proxy function",
        version="0.1.0",
    )
    app.state.proxy = proxy or ChatProxy()

    @app.api_route(ROUTE, methods=METHODS)
    async def gemini(request: Request):
        raw = await request.body()
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
        out = await run_in_threadpool(
            handle_request_object,
            app.state.proxy,
            {"method": request.method, "body": raw or None},
            request_id,
        )
        return JSONResponse(status_code=out["statusCode"], content=out["body"], headers=out["headers"])

    return app

app = create_app()
