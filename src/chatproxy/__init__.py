"""Gemini chat/search proxy core."""
from .client import ChatProxy
from .config import ProxyConfig, load_config
from .types import ApiResult, CallSpec, ChatRequest

__all__ = ["ApiResult", "CallSpec", "ChatProxy", "ChatRequest", "ProxyConfig", "load_config"]
