import random

from lapscout.skills.mock import PROFILES, generate_mock, infer_os, resolve_brand


def test_os_follows_brand():
    rng = random.Random(1)
    for _ in range(20):
        assert generate_mock(brand="Apple", rng=rng).os == "macOS"
    for brand in ["Dell", "HP", "Lenovo", "ASUS", "Acer", "MSI"]:
        lp = generate_mock(brand=brand, rng=rng)
        assert lp.os == "Windows 11"
        assert lp.brand == brand


def test_same_seed_same_laptop():
    a = generate_mock(url="https://www.dell.com/en-us/shop/xps-13", rng=random.Random(42))
    b = generate_mock(url="https://www.dell.com/en-us/shop/xps-13", rng=random.Random(42))
    assert a == b
    assert a.id == "xps-13"
    assert a.seller == "Dell"
    assert a.data_source == "mock"


def test_brand_consistent_draws():
    rng = random.Random(7)
    for _ in range(30):
        lp = generate_mock(brand="apple", rng=rng)
        p = PROFILES["Apple"]
        assert lp.cpu in p.cpus
        assert lp.ram in p.rams
        assert "Unified Memory" in lp.ram
        assert p.price_range[0] <= lp.price < p.price_range[1]
        assert 4.0 <= lp.rating <= 5.0
        assert 100 <= lp.review_count < 600
        assert lp.name.startswith("Apple ")


def test_brand_resolution():
    assert resolve_brand(url="https://www.lenovo.com/us/en/p/laptops/thinkpad") == "Lenovo"
    assert resolve_brand(url="https://www.bestbuy.com/site/hp-envy-x360/123.p") == "HP"
    assert resolve_brand(brand="msi") == "MSI"
    # unknown brands fall back to the default profile and label
    assert resolve_brand(brand="Framework") == "Dell"
    assert generate_mock(brand="Framework", rng=random.Random(3)).brand == "Dell"


def test_required_fields_present():
    lp = generate_mock(rng=random.Random(0))
    assert lp.name and lp.brand and lp.cpu and lp.ram
    assert lp.ram_gb and lp.storage_gb


def test_infer_os():
    assert infer_os("Lenovo", "ThinkPad X1 Carbon Gen 11") == "Windows 11"
    assert infer_os("Apple", "Laptop") == "macOS"
    assert infer_os(None, "Refurbished MacBook Pro 13") == "macOS"
    assert infer_os("Acer", "Acer Chromebook Spin 714") == "ChromeOS"
