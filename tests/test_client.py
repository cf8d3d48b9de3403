import json

import pytest

from src.chatproxy.client import ChatProxy
from src.chatproxy.config import ProxyConfig
from src.chatproxy.errors import UpstreamError
from src.chatproxy.prompt_layers import SEARCH_INSTRUCTION
from src.chatproxy.types import Empty, SafetyBlocked, Success


def test_thai_chat_round(make_proxy):
    proxy, stub = make_proxy(Success(text="สวัสดีครับ"))
    r = proxy.handle("POST", json.dumps({"query": "สวัสดี", "isSearch": False}))
    assert r.status_code == 200
    assert r.body == {"text": "สวัสดีครับ"}
    assert len(stub.calls) == 1
    assert stub.calls[0].tools_enabled is False


def test_missing_query_in_search_mode_never_calls_upstream(make_proxy):
    proxy, stub = make_proxy()
    r = proxy.handle("POST", {"isSearch": True})
    assert r.status_code == 400
    assert r.body == {"error": "Missing query"}
    assert stub.calls == []


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "OPTIONS"])
@pytest.mark.parametrize("body", [None, "{bad", {"query": "fine"}])
def test_non_post_is_405_regardless_of_body(make_proxy, method, body):
    proxy, stub = make_proxy()
    r = proxy.handle(method, body)
    assert r.status_code == 405
    assert r.body == {"error": "Method Not Allowed"}
    assert stub.calls == []


@pytest.mark.parametrize("body", [None, "", "{bad json", "[]"])
def test_bad_body_is_400_without_upstream_call(make_proxy, body):
    proxy, stub = make_proxy()
    r = proxy.handle("POST", body)
    assert r.status_code == 400
    assert r.body["error"]
    assert stub.calls == []


def test_search_mode_reaches_upstream_with_tools(make_proxy):
    proxy, stub = make_proxy(Success(text="found"))
    r = proxy.handle("POST", {"query": "latest news", "isSearch": True})
    assert r.status_code == 200
    assert stub.calls[0].tools_enabled is True
    assert stub.calls[0].system_instruction == SEARCH_INSTRUCTION


def test_empty_result_is_200_fallback(make_proxy):
    proxy, _ = make_proxy(Empty())
    r = proxy.handle("POST", {"query": "q"})
    assert r.status_code == 200
    assert r.body == {"text": "no result"}


def test_safety_block_is_403(make_proxy):
    proxy, _ = make_proxy(SafetyBlocked())
    r = proxy.handle("POST", {"query": "q", "isSearch": True})
    assert r.status_code == 403
    assert r.body["error"] == "Safety Blocked"


def test_upstream_error_is_500_with_message(make_proxy):
    proxy, _ = make_proxy(exc=UpstreamError("http 429: quota exceeded"))
    r = proxy.handle("POST", {"query": "q"})
    assert r.status_code == 500
    assert r.body["details"] == "http 429: quota exceeded"


def test_unexpected_exception_is_500(make_proxy):
    proxy, _ = make_proxy(exc=KeyError("candidates"))
    r = proxy.handle("POST", {"query": "q"})
    assert r.status_code == 500
    assert r.body["error"] == "Internal Server Error"


def test_missing_credential_is_500_before_upstream_call(stub):
    proxy = ChatProxy(ProxyConfig(api_key=""), upstream=stub)
    r = proxy.handle("POST", {"query": "q"})
    assert r.status_code == 500
    assert r.body["details"] == "GEMINI_API_KEY environment variable not set."
    assert stub.calls == []


def test_validation_runs_before_credential_check(stub):
    proxy = ChatProxy(ProxyConfig(api_key=""), upstream=stub)
    assert proxy.handle("GET", None).status_code == 405
    assert proxy.handle("POST", {}).status_code == 400


def test_model_comes_from_config(stub):
    proxy = ChatProxy(ProxyConfig(api_key="k", model="gemini-custom"), upstream=stub)
    proxy.handle("POST", {"query": "q", "model": "ignored"})
    assert stub.calls[0].model == "gemini-custom"


def test_deeply_nested_body_is_400_without_upstream_call(make_proxy):
    proxy, stub = make_proxy()
    r = proxy.handle("POST", "[" * 100000 + "]" * 100000)
    assert (r.status_code, r.body) == (400, {"error": "Invalid JSON body"})
    assert stub.calls == []


def test_lowercase_method_is_405(make_proxy):
    proxy, stub = make_proxy()
    assert proxy.handle("post", {"query": "q"}).status_code == 405
    assert stub.calls == []
