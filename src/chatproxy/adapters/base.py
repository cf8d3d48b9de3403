"""Upstream adapter interface."""
from __future__ import annotations

from ..types import CallOutcome, CallSpec

class BaseUpstream:
    def generate(self, spec: CallSpec) -> CallOutcome:
        raise NotImplementedError
