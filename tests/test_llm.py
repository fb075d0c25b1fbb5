import pytest
import requests

from lapscout.config.settings import AssistantConfig
from lapscout.llm.base import SYSTEM_PROMPT, ChatMessage, MissingApiKeyError, ProviderError
from lapscout.llm.chain import LLMChain
from lapscout.llm.gemini_provider import GeminiProvider
from lapscout.llm.openai_provider import OpenAIProvider


class FakeProvider:
    def __init__(self, name, answer=None):
        self.name = name
        self.answer = answer
        self.calls = 0

    def generate(self, messages):
        self.calls += 1
        if self.answer is None:
            raise ProviderError(f"{self.name} down")
        return self.answer


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.sent = None

    def post(self, url, params=None, json=None, timeout=None):
        self.sent = {"url": url, "params": params, "json": json}
        return self.response


MSGS = [ChatMessage(role="user", content="Which laptop for college?")]


def test_chain_without_keys():
    chain = LLMChain.from_config(AssistantConfig())
    assert not chain.available
    with pytest.raises(MissingApiKeyError):
        chain.generate(MSGS)


def test_chain_falls_through_to_next_provider():
    first, second = FakeProvider("openai"), FakeProvider("gemini", "Get the Air.")
    assert LLMChain([first, second]).generate(MSGS) == "Get the Air."
    assert first.calls == 1 and second.calls == 1


def test_chain_all_failed():
    with pytest.raises(ProviderError) as err:
        LLMChain([FakeProvider("openai"), FakeProvider("gemini")]).generate(MSGS)
    assert not isinstance(err.value, MissingApiKeyError)
    assert "openai" in str(err.value) and "gemini" in str(err.value)


def test_chain_order_prefers_configured_provider():
    cfg = AssistantConfig(openai_api_key="sk-test", gemini_api_key="g-test", llm_provider="gemini")
    chain = LLMChain.from_config(cfg)
    assert [p.name for p in chain.providers] == ["gemini", "openai"]


def test_gemini_request_and_reply():
    session = FakeSession(FakeResponse({"candidates": [{"content": {"parts": [{"text": " Go for 16GB. "}]}}]}))
    provider = GeminiProvider("g-key", session=session)
    history = [ChatMessage(role="assistant", content="Hi!")] + MSGS
    assert provider.generate(history) == "Go for 16GB."
    contents = session.sent["json"]["contents"]
    assert contents[0]["parts"][0]["text"] == SYSTEM_PROMPT
    assert [c["role"] for c in contents] == ["user", "model", "user"]
    assert session.sent["params"] == {"key": "g-key"}


def test_gemini_failures_are_provider_errors():
    with pytest.raises(ProviderError):
        GeminiProvider("g-key", session=FakeSession(FakeResponse({}, status=429))).generate(MSGS)
    with pytest.raises(ProviderError):
        GeminiProvider("g-key", session=FakeSession(FakeResponse({"candidates": []}))).generate(MSGS)
    with pytest.raises(MissingApiKeyError):
        GeminiProvider("")


def test_openai_client_shared_per_key():
    a, b = OpenAIProvider("sk-one"), OpenAIProvider("sk-one", model="gpt-4o")
    assert a.client is b.client
    assert OpenAIProvider("sk-two").client is not a.client
