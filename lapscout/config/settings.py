# lapscout/config/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

from dotenv import load_dotenv

load_dotenv()

HEADLESS = os.getenv("HEADLESS", "true").lower() == "true"
FETCH_MODE = os.getenv("FETCH_MODE", "proxy").lower()  # "proxy" | "browser"
PROXY_URL = os.getenv("PROXY_URL", "https://api.allorigins.win/get")
FETCH_TIMEOUT_SEC = float(os.getenv("FETCH_TIMEOUT_SEC", "10"))
RUN_TIMEOUT_SEC = int(os.getenv("RUN_TIMEOUT_SEC", "90"))

LLM_PROVIDER = os.getenv("LLM_PROVIDER", "openai").lower()  # "openai" | "gemini"
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")


@dataclass(frozen=True)
class AssistantConfig:
    """
    Everything the orchestration layer needs at call time.

    Built once from the environment and passed in explicitly; per-request
    overrides (keys typed into the UI, preferred provider, last brand) are
    layered on with ``merged``.
    """

    openai_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    tavily_api_key: Optional[str] = None
    llm_provider: str = "openai"
    openai_model: str = "gpt-4o-mini"
    gemini_model: str = "gemini-1.5-flash"
    fetch_mode: str = "proxy"
    proxy_url: str = "https://api.allorigins.win/get"
    fetch_timeout_sec: float = 10.0
    headless: bool = True
    last_brand: Optional[str] = None

    @classmethod
    def from_env(cls) -> "AssistantConfig":
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            tavily_api_key=os.getenv("TAVILY_API_KEY") or None,
            llm_provider=LLM_PROVIDER,
            openai_model=OPENAI_MODEL,
            gemini_model=GEMINI_MODEL,
            fetch_mode=FETCH_MODE,
            proxy_url=PROXY_URL,
            fetch_timeout_sec=FETCH_TIMEOUT_SEC,
            headless=HEADLESS,
        )

    def merged(self, overrides: Optional[Dict[str, Any]]) -> "AssistantConfig":
        """Return a copy with the non-empty known keys of ``overrides`` applied."""
        if not overrides:
            return self
        known = {f.name for f in fields(self)}
        changes = {k: v for k, v in overrides.items() if k in known and v not in (None, "")}
        return replace(self, **changes) if changes else self

    def has_llm_key(self) -> bool:
        return bool(self.openai_api_key or self.gemini_api_key)
