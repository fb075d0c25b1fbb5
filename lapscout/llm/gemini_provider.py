# lapscout/llm/gemini_provider.py
from __future__ import annotations

from typing import List, Optional

import requests

from lapscout.llm.base import MAX_TOKENS, SYSTEM_PROMPT, TEMPERATURE, ChatMessage, MissingApiKeyError, ProviderError

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"


class GeminiProvider:
    name = "gemini"

    def __init__(self, api_key: str, model: str = "gemini-1.5-flash", timeout: float = 30.0,
                 session: Optional[requests.Session] = None):
        if not api_key:
            raise MissingApiKeyError("Gemini API key is required")
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.session = session or requests.Session()

    def _contents(self, messages: List[ChatMessage]) -> List[dict]:
        # Gemini has no system role here: the prompt goes in as the first user turn
        contents = [{"role": "user", "parts": [{"text": SYSTEM_PROMPT}]}]
        for m in messages:
            if m.role == "system":
                continue
            role = "model" if m.role == "assistant" else "user"
            contents.append({"role": role, "parts": [{"text": m.content}]})
        return contents

    def generate(self, messages: List[ChatMessage]) -> str:
        body = {
            "contents": self._contents(messages),
            "generationConfig": {
                "temperature": TEMPERATURE,
                "topK": 40,
                "topP": 0.95,
                "maxOutputTokens": MAX_TOKENS,
            },
        }
        try:
            resp = self.session.post(
                GEMINI_URL.format(model=self.model),
                params={"key": self.api_key},
                json=body,
                timeout=self.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            raise ProviderError(f"Gemini request failed: {e}") from e
        except ValueError as e:
            raise ProviderError(f"Gemini returned bad JSON: {e}") from e

        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            raise ProviderError("Gemini returned no candidates")
        text = (text or "").strip()
        if not text:
            raise ProviderError("Gemini returned an empty answer")
        return text
