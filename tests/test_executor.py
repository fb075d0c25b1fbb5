import random

import pytest

from lapscout.agent.executor import Assistant
from lapscout.config.settings import AssistantConfig
from lapscout.llm.base import MissingApiKeyError, ProviderError
from lapscout.models.laptop import Persona
from lapscout.skills.search import SearchResult

AMAZON_URL = "https://www.amazon.com/dp/B0B7J1VXYZ"
AMAZON_PAGE = """
<title>Dell XPS 13 Plus Laptop, Intel Core i7-1260P, 16GB LPDDR5 RAM, 512GB SSD : Amazon.com</title>
<span id="productTitle">Dell XPS 13 Plus Laptop - 13.4-inch FHD+</span>
<span class="a-offscreen">$1,249.99</span>
<span>4.3 out of 5 stars</span> <span>1,024 ratings</span>
"""


class FakeFetcher:
    def __init__(self, pages=None, error=None):
        self.pages = pages or {}
        self.error = error
        self.calls = []

    def fetch(self, url):
        self.calls.append(url)
        if self.error:
            raise self.error
        return self.pages.get(url)


class FakeSearch:
    def __init__(self, results):
        self.results = results
        self.queries = []

    def search(self, query, limit=5, include_domains=None):
        self.queries.append((query, limit, include_domains))
        return self.results


class FakeLLM:
    def __init__(self, answer=None, error=None):
        self.answer = answer
        self.error = error
        # a missing key means no provider is configured at all
        self.available = answer is not None or not isinstance(error, MissingApiKeyError)

    def generate(self, messages):
        if self.error:
            raise self.error
        return self.answer


def _assistant(fetcher=None, search=None, llm=None):
    return Assistant(
        AssistantConfig(),
        fetcher=fetcher or FakeFetcher(),
        search=search,
        llm=llm or FakeLLM(error=MissingApiKeyError("no key")),
        rng=random.Random(5),
    )


def _required_fields(lp):
    assert lp.name and lp.brand and lp.cpu and lp.ram


def test_student_comparison_end_to_end():
    result = _assistant().compare(["dell xps", "macbook air"], "Student")
    assert [lp.id for lp in result.laptops] == ["dell-xps-13-plus-1", "macbook-air-m2-2"]
    assert all(lp.data_source == "catalog" for lp in result.laptops)
    assert len(result.ranked) == 2
    assert result.ranked[0].laptop.name == 'MacBook Air 13" M2'
    assert result.ranked[0].score >= result.ranked[1].score
    assert result.persona == Persona.STUDENT
    assert result.summary_source == "heuristic"
    assert "MacBook Air" in result.summary


def test_fetch_failure_degrades_to_mock():
    fetcher = FakeFetcher()
    result = _assistant(fetcher=fetcher).compare(["https://www.dell.com/en-us/shop/latitude-5540"])
    lp = result.laptops[0]
    _required_fields(lp)
    assert lp.data_source == "mock"
    assert lp.brand == "Dell"
    assert lp.id == "latitude-5540-1"
    assert result.ranked == []
    assert fetcher.calls == ["https://www.dell.com/en-us/shop/latitude-5540"]


def test_fetcher_exception_never_escapes():
    result = _assistant(fetcher=FakeFetcher(error=RuntimeError("boom"))).compare(["https://www.hp.com/laptops/envy"])
    _required_fields(result.laptops[0])
    assert result.laptops[0].data_source == "mock"


def test_scraped_page_overrides_mock():
    result = _assistant(fetcher=FakeFetcher({AMAZON_URL: AMAZON_PAGE})).compare([AMAZON_URL])
    lp = result.laptops[0]
    assert lp.data_source == "scraped"
    assert lp.name == "Dell XPS 13 Plus Laptop - 13.4-inch FHD+"
    assert lp.price == 1249.99
    assert lp.cpu == "Intel Core i7-1260P"
    assert lp.ram == "16GB LPDDR5"
    assert lp.ram_gb is None
    assert lp.screen_in == 13.4
    assert lp.seller == "Amazon"
    assert lp.review_count == 1024
    assert lp.specs_raw["price"] == "amazon.price.offscreen"


def test_discover_prefers_structured_snippets():
    url = "https://www.dell.com/en-us/shop/dell-laptops/xps-13-laptop/spd/xps-13-9315"
    search = FakeSearch([
        SearchResult(title="Dell XPS 13 Laptop", url=url,
                     content="Intel Core i7-1360P, 16GB LPDDR5, 512GB SSD, starting at $1,199.99",
                     images=["https://i.dell.com/xps13.jpg"]),
        SearchResult(title="Dell Support", url="https://www.dell.com/support/home"),
    ])
    fetcher = FakeFetcher()
    laptops = _assistant(fetcher=fetcher, search=search).discover("dell", limit=3)

    assert len(laptops) == 1
    lp = laptops[0]
    assert lp.data_source == "structured"
    assert lp.name == "Dell XPS 13 Laptop"
    assert lp.specs_raw["name"] == "search.title"
    assert lp.price == 1199.99
    assert lp.image == "https://i.dell.com/xps13.jpg"
    assert fetcher.calls == []
    assert search.queries[0][2] == ["dell.com"]


def test_discover_without_any_search_uses_placeholders():
    laptops = _assistant().discover("hp", limit=3)
    assert len(laptops) == 3
    assert len({lp.id for lp in laptops}) == 3
    for lp in laptops:
        _required_fields(lp)
        assert lp.brand == "HP"
        assert lp.url.startswith("https://www.hp.com/laptops/")


def test_chat_without_key_uses_offline_reply():
    reply = _assistant().handle_message("what's a good budget laptop?")
    assert reply.kind == "chat"
    assert "budget" in reply.message.lower()


def test_chat_provider_failure_propagates():
    assistant = _assistant(llm=FakeLLM(error=ProviderError("quota")))
    with pytest.raises(ProviderError):
        assistant.handle_message("hello there")


def test_brand_search_message():
    reply = _assistant().handle_message("show me the best hp laptops for students")
    assert reply.kind == "brand_search"
    assert reply.brand == "hp"
    assert reply.persona == Persona.STUDENT
    assert len(reply.laptops) == 3
    assert len(reply.ranked) == 3


def test_compare_message_uses_matcher():
    reply = _assistant().handle_message("thinkpad x1 carbon vs zenbook 14")
    assert reply.kind == "compare"
    assert [lp.brand for lp in reply.laptops] == ["Lenovo", "ASUS"]


def test_ai_summary_and_fallback():
    ok = _assistant(llm=FakeLLM(answer="The Air wins.")).compare(["macbook air", "dell xps"])
    assert ok.summary == "The Air wins." and ok.summary_source == "ai"

    down = _assistant(llm=FakeLLM(error=ProviderError("503"))).compare(["macbook air", "dell xps"])
    assert down.summary_source == "heuristic"


def test_explain_requires_key():
    assistant = _assistant()
    laptops = assistant.compare(["macbook air"]).laptops
    with pytest.raises(MissingApiKeyError):
        assistant.explain(laptops, "Student")


def test_scraped_os_follows_extracted_brand():
    url = "https://www.microcenter.com/product/667788/thinkpad-x1-carbon"
    page = """
    <html><head><title>ThinkPad X1 Carbon Gen 11 Laptop</title>
    <link rel="apple-touch-icon" href="/apple-touch-icon.png"></head>
    <body><p>Intel Core i7-1365U vPro, 16GB LPDDR5, 512GB SSD</p><span>$1,449.99</span></body></html>
    """
    lp = _assistant(fetcher=FakeFetcher({url: page})).compare([url]).laptops[0]
    assert lp.data_source == "scraped"
    assert lp.brand == "Lenovo"
    assert lp.cpu == "Intel Core i7-1365U vPro"
    assert lp.os == "Windows 11"
