from lapscout.skills.search import (
    brand_domain,
    ddg_search,
    is_product_url,
    parse_ddg_html,
    synthetic_product_urls,
)

DDG_HTML = """
<div class="result"><h2 class="result__title">
<a class="result__a" href="//duckduckgo.com/l/?uddg=https%3A%2F%2Fwww.dell.com%2Fen-us%2Fshop%2Fdell-laptops%2Fxps-13-laptop%2Fspd%2Fxps-13-9315&amp;rut=abc">Dell <b>XPS 13</b> Laptop</a>
</h2></div>
<div class="result"><h2 class="result__title">
<a class="result__a" href="https://www.dell.com/en-us/shop/dell-laptops/inspiron-15/spd/inspiron-15-3520#reviews">Inspiron 15</a>
</h2></div>
<a href="https://duckduckgo.com/settings">Settings</a>
<a class="result__a" href="//duckduckgo.com/l/?uddg=https%3A%2F%2Fwww.dell.com%2Fen-us%2Fshop%2Fdell-laptops%2Fxps-13-laptop%2Fspd%2Fxps-13-9315">dup</a>
"""


class FakeFetcher:
    def __init__(self, html):
        self.html = html
        self.calls = []

    def fetch(self, url):
        self.calls.append(url)
        return self.html


def test_parse_ddg_html_decodes_and_dedupes():
    results = parse_ddg_html(DDG_HTML)
    assert [r.url for r in results] == [
        "https://www.dell.com/en-us/shop/dell-laptops/xps-13-laptop/spd/xps-13-9315",
        "https://www.dell.com/en-us/shop/dell-laptops/inspiron-15/spd/inspiron-15-3520",
    ]
    assert results[0].title == "Dell XPS 13 Laptop"


def test_ddg_search_goes_through_fetcher():
    fetcher = FakeFetcher(DDG_HTML)
    results = ddg_search(fetcher, "site:dell.com laptop", max_results=2)
    assert len(results) == 2
    assert fetcher.calls[0].startswith("https://duckduckgo.com/html/?q=site%3Adell.com+laptop")
    assert ddg_search(FakeFetcher(None), "anything") == []


def test_product_url_filter_and_domains():
    assert brand_domain("Dell") == "dell.com"
    assert brand_domain("framework") == "framework.com"
    assert is_product_url("https://www.dell.com/en-us/shop/dell-laptops/xps", "dell.com")
    assert not is_product_url("https://www.dell.com/en-us/support", "dell.com")
    assert not is_product_url("https://www.hp.com/laptops", "dell.com")


def test_synthetic_urls():
    urls = synthetic_product_urls("apple", 2)
    assert urls == ["https://www.apple.com/laptops/macbook-air", "https://www.apple.com/laptops/macbook-pro-14"]
    assert synthetic_product_urls("framework", 3) == ["https://www.framework.com/laptops/laptop"]


def test_ddg_only_reads_result_links():
    html = """
    <a href="https://www.hp.com/us-en/shop/laptops">nav link</a>
    <h2 class="result__title"><a class="result__a" rel="nofollow"
       href="//duckduckgo.com/l/?uddg=https%3A%2F%2Fwww.hp.com%2Fus-en%2Fshop%2Fpdp%2Fhp-envy-x360-laptop&amp;rut=1">HP <b>Envy</b> x360</a></h2>
    """
    results = parse_ddg_html(html)
    assert [(r.title, r.url) for r in results] == [
        ("HP Envy x360", "https://www.hp.com/us-en/shop/pdp/hp-envy-x360-laptop"),
    ]
