# lapscout/skills/catalog.py
from __future__ import annotations

from typing import List

from lapscout.models.laptop import LaptopSpec

# Reference laptops for fuzzy matching; order matters (first entry is the last-resort answer).
CATALOG: List[LaptopSpec] = [
    LaptopSpec(
        id="macbook-air-m2", name='MacBook Air 13" M2', brand="Apple", price=1099,
        cpu="Apple M2 8-core CPU", ram="8GB Unified Memory", ram_gb=8,
        storage="256GB SSD", storage_gb=256, storage_type="SSD",
        screen='13.6" Liquid Retina (2560x1664)', screen_in=13.6,
        battery="Up to 18 hours", battery_hours=18, weight="2.7 lbs (1.24 kg)", weight_kg=1.24,
        os="macOS Ventura", rating=4.8, review_count=1247, seller="Apple Store",
        availability="In Stock", url="https://www.apple.com/macbook-air/",
    ),
    LaptopSpec(
        id="dell-xps-13-plus", name="Dell XPS 13 Plus", brand="Dell", price=1299,
        cpu="Intel Core i7-1260P", gpu="Intel Iris Xe Graphics", ram="16GB LPDDR5", ram_gb=16,
        storage="512GB PCIe NVMe SSD", storage_gb=512, storage_type="SSD",
        screen='13.4" FHD+ (1920x1200)', screen_in=13.4,
        battery="Up to 12 hours", battery_hours=12, weight="2.73 lbs (1.24 kg)", weight_kg=1.24,
        os="Windows 11 Home", rating=4.5, review_count=892, seller="Dell",
        availability="In Stock", url="https://www.dell.com/en-us/shop/dell-laptops/xps-13-plus-laptop",
    ),
    LaptopSpec(
        id="thinkpad-x1-carbon-gen-11", name="Lenovo ThinkPad X1 Carbon Gen 11", brand="Lenovo", price=1449,
        cpu="Intel Core i7-1365U vPro", gpu="Intel Iris Xe Graphics", ram="16GB LPDDR5", ram_gb=16,
        storage="512GB PCIe Gen4 SSD", storage_gb=512, storage_type="SSD",
        screen='14" WUXGA (1920x1200) IPS', screen_in=14,
        battery="Up to 15 hours", battery_hours=15, weight="2.48 lbs (1.12 kg)", weight_kg=1.12,
        os="Windows 11 Pro", rating=4.6, review_count=634, seller="Lenovo",
        availability="In Stock", url="https://www.lenovo.com/us/en/p/laptops/thinkpad/thinkpadx1/x1-carbon-gen-11",
    ),
    LaptopSpec(
        id="asus-zenbook-14-oled", name="ASUS ZenBook 14 OLED", brand="ASUS", price=899,
        cpu="AMD Ryzen 7 5825U", gpu="AMD Radeon Graphics (integrated)", ram="16GB DDR4", ram_gb=16,
        storage="512GB PCIe SSD", storage_gb=512, storage_type="SSD",
        screen='14" OLED (2880x1800)', screen_in=14,
        battery="Up to 13 hours", battery_hours=13, weight="3.09 lbs (1.4 kg)", weight_kg=1.4,
        os="Windows 11 Home", rating=4.3, review_count=423, seller="ASUS",
        availability="In Stock", url="https://www.asus.com/laptops/for-home/zenbook/zenbook-14-oled/",
    ),
    LaptopSpec(
        id="macbook-pro-14", name='MacBook Pro 14" M2 Pro', brand="Apple", price=1999,
        cpu="Apple M2 Pro 10-core CPU", ram="16GB Unified Memory", ram_gb=16,
        storage="512GB SSD", storage_gb=512, storage_type="SSD",
        screen='14.2" Liquid Retina XDR (3024x1964)', screen_in=14.2,
        battery="Up to 18 hours", battery_hours=18, weight="3.5 lbs (1.6 kg)", weight_kg=1.6,
        os="macOS Ventura", rating=4.9, review_count=567, seller="Apple Store",
        availability="In Stock", url="https://www.apple.com/macbook-pro/",
    ),
    LaptopSpec(
        id="hp-spectre-x360-14", name='HP Spectre x360 14"', brand="HP", price=1199,
        cpu="Intel Core i7-1255U", gpu="Intel Iris Xe Graphics", ram="16GB LPDDR4x", ram_gb=16,
        storage="512GB PCIe NVMe SSD", storage_gb=512, storage_type="SSD",
        screen='13.5" OLED (3000x2000)', screen_in=13.5,
        battery="Up to 11 hours", battery_hours=11, weight="2.95 lbs (1.34 kg)", weight_kg=1.34,
        os="Windows 11 Home", rating=4.4, review_count=298, seller="HP",
        availability="In Stock", url="https://www.hp.com/us-en/shop/pdp/hp-spectre-x360-2-in-1-laptop-14",
    ),
    LaptopSpec(
        id="asus-rog-strix-g16", name="ASUS ROG Strix G16", brand="ASUS", price=1599,
        cpu="Intel Core i9-13980HX", gpu="NVIDIA GeForce RTX 4070", ram="16GB DDR5", ram_gb=16,
        storage="1TB PCIe Gen4 SSD", storage_gb=1024, storage_type="SSD",
        screen='16" QHD+ 240Hz (2560x1600)', screen_in=16,
        battery="Up to 6 hours", battery_hours=6, weight="5.51 lbs (2.5 kg)", weight_kg=2.5,
        os="Windows 11 Home", rating=4.5, review_count=311, seller="ASUS",
        availability="In Stock", url="https://rog.asus.com/laptops/rog-strix/rog-strix-g16-2023/",
    ),
    LaptopSpec(
        id="lenovo-legion-5-pro", name="Lenovo Legion 5 Pro", brand="Lenovo", price=1399,
        cpu="AMD Ryzen 7 7745HX", gpu="NVIDIA GeForce RTX 4060", ram="16GB DDR5", ram_gb=16,
        storage="512GB PCIe SSD", storage_gb=512, storage_type="SSD",
        screen='16" WQXGA 165Hz (2560x1600)', screen_in=16,
        battery="Up to 7 hours", battery_hours=7, weight="5.49 lbs (2.49 kg)", weight_kg=2.49,
        os="Windows 11 Home", rating=4.6, review_count=512, seller="Lenovo",
        availability="In Stock", url="https://www.lenovo.com/us/en/p/laptops/legion-laptops/legion-5-series/legion-pro-5",
    ),
]


def get_catalog() -> List[LaptopSpec]:
    """Fresh copies so callers can re-id and edit freely."""
    return [lp.model_copy(deep=True) for lp in CATALOG]
