import random
import time

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

import lapscout.main as main
from lapscout.agent.executor import Assistant
from lapscout.llm.base import MissingApiKeyError, ProviderError


class OfflineFetcher:
    def fetch(self, url):
        return None


class FakeLLM:
    def __init__(self, error):
        self.error = error
        self.available = not isinstance(error, MissingApiKeyError)

    def generate(self, messages):
        raise self.error


@pytest.fixture
def client(monkeypatch):
    def use(llm_error=None):
        llm = FakeLLM(llm_error or MissingApiKeyError("no key"))

        def build(config):
            return Assistant(config, fetcher=OfflineFetcher(), llm=llm,
                             rng=random.Random(1), enrich_images=False)

        monkeypatch.setattr(main, "build_assistant", build)
        return TestClient(main.app)

    return use


def test_health_and_personas(client):
    c = client()
    body = c.get("/healthz").json()
    assert body["ok"] is True
    assert set(body) == {"ok", "fetch_mode", "llm_configured", "search_configured"}

    personas = c.get("/personas").json()
    assert set(personas) == {"Gaming", "Creative", "Programming", "Student", "Portable"}
    assert personas["Student"]["price_penalty"] == 0.30


def test_extract_endpoint(client):
    c = client()
    r = c.post("/extract", json={
        "content": "<span id=\"productTitle\">HP Envy x360 15</span> 16GB RAM $899.99",
        "url": "https://www.amazon.com/dp/B0TEST",
    })
    body = r.json()
    assert body["found"] is True
    assert body["retailer"] == "amazon"
    assert body["fields"]["name"] == "HP Envy x360 15"
    assert body["rules"]["name"] == "amazon.name.product_title"

    assert c.post("/extract", json={"content": "nothing here", "url": ""}).json()["found"] is False


def test_match_endpoint(client):
    body = client().post("/match", json={"query": "macbook air 16gb"}).json()
    assert body["brand"] == "apple"
    assert body["model"] == "air"
    assert body["laptop"]["id"] == "macbook-air-m2"


def test_mock_endpoint_is_seedable(client):
    c = client()
    req = {"url": "https://www.lenovo.com/us/en/p/laptops/thinkpad/x1", "seed": 42}
    first, second = c.post("/mock", json=req).json(), c.post("/mock", json=req).json()
    assert first == second
    assert first["brand"] == "Lenovo"
    assert first["data_source"] == "mock"
    assert "reviewCount" in first


def test_rank_endpoint(client):
    c = client()
    laptops = [
        {"id": "a", "name": "Heavy", "brand": "Dell", "cpu": "Intel Core i5", "ram": "8GB",
         "price": 1800, "weight": "2.5 kg", "battery": "5 hours"},
        {"id": "b", "name": "Light", "brand": "Apple", "cpu": "Apple M2", "ram": "16GB",
         "price": 999, "weight": "1.2 kg", "battery": "18 hours"},
    ]
    ranked = c.post("/rank", json={"laptops": laptops, "persona": "portable"}).json()
    assert [s["laptop"]["id"] for s in ranked] == ["b", "a"]
    assert 0 <= ranked[1]["score"] <= ranked[0]["score"] <= 100

    assert c.post("/rank", json={"laptops": laptops, "persona": "astronaut"}).status_code == 422


def test_validate_url_endpoint(client):
    c = client()
    ok = c.post("/validate-url", json={"url": "https://www.bestbuy.com/site/laptop/123.p"}).json()
    assert ok == {"ok": True, "errors": [], "suggestion": None}

    bad = c.post("/validate-url", json={"url": "not a url"}).json()
    assert bad["ok"] is False
    assert bad["suggestion"].startswith("Please check")


def test_compare_endpoint(client):
    r = client().post("/compare", json={"queries": ["dell xps", "macbook air"], "persona": "Student"})
    assert r.status_code == 200
    body = r.json()
    assert [lp["id"] for lp in body["laptops"]] == ["dell-xps-13-plus-1", "macbook-air-m2-2"]
    assert body["persona"] == "Student"
    assert body["summary_source"] == "heuristic"
    assert body["ranked"][0]["laptop"]["id"] == "macbook-air-m2-2"


def test_chat_without_key(client):
    body = client().post("/chat", json={"message": "how much ram for gaming?"}).json()
    assert body["kind"] == "chat"
    assert body["message"]


def test_explain_error_mapping(client):
    laptop = {"id": "x", "name": "MacBook Air", "brand": "Apple", "cpu": "Apple M2", "ram": "8GB"}

    r = client().post("/explain", json={"laptops": [laptop], "persona": "Student"})
    assert r.status_code == 400

    r = client(ProviderError("rate limited")).post("/explain", json={"laptops": [laptop]})
    assert r.status_code == 503
    assert "try again" in r.json()["detail"]


def test_run_timeout_does_not_wait_for_worker(monkeypatch):
    monkeypatch.setattr(main, "RUN_TIMEOUT_SEC", 0.2)
    started = time.monotonic()
    with pytest.raises(HTTPException) as err:
        main._run("compare", time.sleep, 1.5)
    assert err.value.status_code == 504
    assert time.monotonic() - started < 1.0


def test_compare_times_out_with_504(monkeypatch):
    class SlowAssistant:
        def compare(self, queries, persona):
            time.sleep(1.5)

    monkeypatch.setattr(main, "RUN_TIMEOUT_SEC", 0.2)
    monkeypatch.setattr(main, "build_assistant", lambda config: SlowAssistant())
    started = time.monotonic()
    r = TestClient(main.app).post("/compare", json={"queries": ["dell xps"]})
    assert r.status_code == 504
    assert time.monotonic() - started < 1.0


def test_requests_share_fetcher_and_session():
    first = main.build_assistant(main.BASE_CONFIG)
    second = main.build_assistant(main.BASE_CONFIG.merged({"tavily_api_key": "tvly-test"}))
    assert first.fetcher is second.fetcher is main.FETCHER
    assert second.search.session is main.HTTP_SESSION
