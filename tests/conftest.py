import pytest

from src.chatproxy.adapters.base import BaseUpstream
from src.chatproxy.client import ChatProxy
from src.chatproxy.config import ProxyConfig
from src.chatproxy.types import Success


class StubUpstream(BaseUpstream):
    def __init__(self, outcome=None, exc=None):
        self.outcome = outcome if outcome is not None else Success(text="ok")
        self.exc = exc
        self.calls = []

    def generate(self, spec):
        self.calls.append(spec)
        if self.exc is not None:
            raise self.exc
        return self.outcome


@pytest.fixture
def config():
    return ProxyConfig(api_key="test-key", empty_result_text="no result")


@pytest.fixture
def stub():
    return StubUpstream()


@pytest.fixture
def make_proxy(config):
    def _make(outcome=None, exc=None):
        upstream = StubUpstream(outcome=outcome, exc=exc)
        return ChatProxy(config, upstream=upstream), upstream
    return _make
