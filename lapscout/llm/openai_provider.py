# lapscout/llm/openai_provider.py
from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from openai import OpenAI, OpenAIError

from lapscout.llm.base import MAX_TOKENS, SYSTEM_PROMPT, TEMPERATURE, ChatMessage, MissingApiKeyError, ProviderError


@lru_cache(maxsize=8)
def shared_client(api_key: str, timeout: float = 30.0) -> OpenAI:
    """One client, and so one connection pool, per key for the whole process."""
    return OpenAI(api_key=api_key, timeout=timeout)


class OpenAIProvider:
    name = "openai"

    def __init__(self, api_key: str, model: str = "gpt-4o-mini", timeout: float = 30.0, client: Optional[OpenAI] = None):
        if not api_key and client is None:
            raise MissingApiKeyError("OpenAI API key is required")
        self.model = model
        self.client = client or shared_client(api_key, timeout)

    def generate(self, messages: List[ChatMessage]) -> str:
        payload = [{"role": "system", "content": SYSTEM_PROMPT}]
        payload += [{"role": m.role, "content": m.content} for m in messages if m.role != "system"]
        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                messages=payload,
                temperature=TEMPERATURE,
                max_tokens=MAX_TOKENS,
            )
        except OpenAIError as e:
            raise ProviderError(f"OpenAI request failed: {e}") from e
        text = (resp.choices[0].message.content or "").strip() if resp.choices else ""
        if not text:
            raise ProviderError("OpenAI returned an empty answer")
        return text
