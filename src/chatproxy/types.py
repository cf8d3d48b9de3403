"""Shared types and lightweight data containers.

Nothing here outlives a single request/response cycle.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Literal, Mapping, Union

Role = Literal["user"]

@dataclass(frozen=True)
class ChatRequest:
    query: str
    is_search: bool = False

@dataclass(frozen=True)
class Message:
    role: Role
    text: str

@dataclass(frozen=True)
class CallSpec:
    model: str
    contents: List[Message]
    system_instruction: str
    tools_enabled: bool

# Upstream outcomes. Produced by an upstream adapter, consumed by the response normalizer.

@dataclass(frozen=True)
class Success:
    text: str

@dataclass(frozen=True)
class Empty:
    pass

@dataclass(frozen=True)
class SafetyBlocked:
    reason: str = "SAFETY"

@dataclass(frozen=True)
class Failure:
    message: str

CallOutcome = Union[Success, Empty, SafetyBlocked, Failure]

@dataclass(frozen=True)
class ApiResult:
    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Read-only views over private copies.
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        object.__setattr__(self, "body", MappingProxyType(dict(self.body)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "statusCode": self.status_code,
            "headers": dict(self.headers),
            "body": dict(self.body),
        }
