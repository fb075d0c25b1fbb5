from lapscout.utils.urls import (
    domain_brand,
    find_urls,
    id_from_url,
    is_url,
    seller_from_url,
    slugify,
    suggest_correction,
    validate_laptop_url,
)


def test_url_helpers():
    assert is_url("https://www.bestbuy.com/site/x.p")
    assert not is_url("dell xps 13")
    assert find_urls("compare https://a.com/x, and https://b.com/y.") == ["https://a.com/x", "https://b.com/y"]
    assert domain_brand("https://www.hp.com/us-en/shop/pdp/spectre") == "HP"
    assert domain_brand("https://www.amazon.com/dp/1") is None
    assert seller_from_url("https://www.bestbuy.com/site/x.p") == "Best Buy"
    assert seller_from_url("https://shop.framework.com/x") == "shop"


def test_ids_and_slugs():
    assert id_from_url("https://www.dell.com/en-us/shop/XPS_13_Plus/") == "xps-13-plus"
    assert len(id_from_url("https://example.com/")) == 9
    assert slugify('MacBook Air 13" M2') == "macbook-air-13-m2"
    assert slugify("") == "laptop"


def test_validate_laptop_url():
    ok, errors = validate_laptop_url("https://www.bestbuy.com/site/asus-zenbook-14/6525.p")
    assert ok and errors == []

    ok, errors = validate_laptop_url("https://www.amazon.com/s?k=laptop+search")
    assert not ok
    assert any("search results" in e for e in errors)

    ok, errors = validate_laptop_url("https://www.example.com/kitchen/toaster")
    assert not ok

    ok, errors = validate_laptop_url("not a url")
    assert errors == ["Invalid URL format"]


def test_suggest_correction():
    assert "search URL" in suggest_correction("https://www.amazon.com/s/laptops")
    assert "properly formatted" in suggest_correction("amazon laptops")
    assert suggest_correction("https://www.dell.com/en-us/shop/xps") is None
