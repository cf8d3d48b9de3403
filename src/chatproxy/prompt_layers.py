"""Prompt assembly and mode selection.

Rules:
- Exactly two modes, switched on ChatRequest.is_search. No other mode exists.
- The user's query is passed through verbatim as the single user message.
- The model comes from configuration, never from the request.
"""
from __future__ import annotations

from typing import Tuple

from .types import CallSpec, ChatRequest, Message

CHAT_INSTRUCTION = (
    "You are a helpful and concise AI assistant. "
    "Respond in Thai and use markdown for formatting."
)

SEARCH_INSTRUCTION = (
    "You are an expert search assistant. "
    "Use Google Search to find up-to-date and relevant information, "
    "cite your sources, and summarize the findings clearly in Thai. "
    "If no search results are found, state that."
)

def select_mode(is_search: bool) -> Tuple[str, bool]:
    if is_search:
        return SEARCH_INSTRUCTION, True
    return CHAT_INSTRUCTION, False

def build_call_spec(req: ChatRequest, model: str) -> CallSpec:
    instruction, tools_enabled = select_mode(req.is_search)
    return CallSpec(
        model=model,
        contents=[Message(role="user", text=req.query)],
        system_instruction=instruction,
        tools_enabled=tools_enabled,
    )
