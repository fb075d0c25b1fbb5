# lapscout/llm/base.py
from __future__ import annotations

from typing import List, Protocol

from pydantic import BaseModel

SYSTEM_PROMPT = """You are a helpful laptop shopping assistant. You provide expert advice on:
- Laptop specifications and their real-world impact
- Brand comparisons and reliability
- Budget recommendations for different use cases
- Performance expectations for various tasks
- Analyzing laptop URLs and specifications when provided

Keep responses conversational, helpful, and specific. Include practical advice and real product recommendations when possible. Format responses with clear sections using markdown when helpful."""

TEMPERATURE = 0.7
MAX_TOKENS = 1000


class ChatMessage(BaseModel):
    role: str  # "user" | "assistant" | "system"
    content: str


class ProviderError(RuntimeError):
    """An LLM provider could not produce an answer (network, quota, bad reply)."""


class MissingApiKeyError(ProviderError):
    """No API key is configured for any LLM provider."""


class LLMProvider(Protocol):
    name: str

    def generate(self, messages: List[ChatMessage]) -> str:
        ...
