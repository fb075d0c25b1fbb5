from lapscout.skills.metadata import get_page_metadata, parse_page_metadata

PAGE = """
<html><head>
<title>Fallback Title</title>
<meta property="og:title" content="ASUS ZenBook 14 OLED &amp; more">
<meta name="description" content="  A   light   laptop ">
<meta property="og:image" content="/images/zenbook-hero.jpg">
<meta name="twitter:image" content="https://cdn.asus.com/zenbook-side.png">
</head><body>
<img src="/static/logo.svg">
<img src="https://cdn.asus.com/product/zenbook-open.webp">
<img src="/images/zenbook-hero.jpg">
</body></html>
"""


class FakeFetcher:
    def __init__(self, html=None):
        self.html = html
        self.calls = []

    def fetch(self, url):
        self.calls.append(url)
        return self.html


def test_parse_page_metadata():
    meta = parse_page_metadata(PAGE, "https://www.asus.com/laptops/zenbook-14/")
    assert meta.title == "ASUS ZenBook 14 OLED & more"
    assert meta.description == "A light laptop"
    assert meta.images == [
        "https://www.asus.com/images/zenbook-hero.jpg",
        "https://cdn.asus.com/zenbook-side.png",
        "https://cdn.asus.com/product/zenbook-open.webp",
    ]


def test_image_cap_and_title_fallback():
    html = "<title>Only Title</title>" + "".join(f'<img src="/images/p{i}.png">' for i in range(15))
    meta = parse_page_metadata(html, "https://example.com/")
    assert meta.title == "Only Title"
    assert len(meta.images) == 10


def test_get_page_metadata_without_page():
    fetcher = FakeFetcher(None)
    meta = get_page_metadata("https://example.com/x", fetcher)
    assert meta.images == [] and meta.title is None
    assert fetcher.calls == ["https://example.com/x"]


def test_lazy_loaded_product_images():
    html = '<img data-src="/media/catalog/product/swift-go.jpg"><img src="/icons/cart.svg">'
    meta = parse_page_metadata(html, "https://store.acer.com/en-us/swift-go-14")
    assert meta.images == ["https://store.acer.com/media/catalog/product/swift-go.jpg"]
    assert meta.title is None
