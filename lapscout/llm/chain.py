# lapscout/llm/chain.py
from __future__ import annotations

from typing import List, Optional

import requests

from lapscout.config.settings import AssistantConfig
from lapscout.llm.base import ChatMessage, LLMProvider, MissingApiKeyError, ProviderError
from lapscout.llm.gemini_provider import GeminiProvider
from lapscout.llm.openai_provider import OpenAIProvider
from lapscout.utils.logger import logger


class LLMChain:
    """
    Keyed providers in preference order: the configured one first, then
    whichever other provider also has a key.
    """

    def __init__(self, providers: List[LLMProvider]):
        self.providers = providers

    @classmethod
    def from_config(cls, config: AssistantConfig, session: Optional[requests.Session] = None) -> "LLMChain":
        keyed = {}
        if config.openai_api_key:
            keyed["openai"] = OpenAIProvider(config.openai_api_key, model=config.openai_model)
        if config.gemini_api_key:
            keyed["gemini"] = GeminiProvider(config.gemini_api_key, model=config.gemini_model, session=session)
        order = [config.llm_provider] + [n for n in ("openai", "gemini") if n != config.llm_provider]
        return cls([keyed[n] for n in order if n in keyed])

    @property
    def available(self) -> bool:
        return bool(self.providers)

    def generate(self, messages: List[ChatMessage]) -> str:
        if not self.providers:
            raise MissingApiKeyError("No LLM API key configured. Add an OpenAI or Gemini key to use AI features.")
        errors = []
        for p in self.providers:
            try:
                return p.generate(messages)
            except ProviderError as e:
                logger.warning(f"LLM provider {p.name} failed: {e}")
                errors.append(f"{p.name}: {e}")
        raise ProviderError("All LLM providers failed (" + "; ".join(errors) + ")")
