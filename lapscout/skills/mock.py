# lapscout/skills/mock.py
"""
Brand-consistent placeholder laptops.

Used when nothing could be extracted or matched, so a comparison slot is
never empty. Every draw goes through the injected ``random.Random``; pass a
seeded one for repeatable output.
"""
from __future__ import annotations

import random
import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from lapscout.models.laptop import LaptopSpec
from lapscout.skills.extractors.rules import KNOWN_BRANDS
from lapscout.utils.logger import logger
from lapscout.utils.urls import domain_brand, id_from_url, seller_from_url, slugify

STORAGES = ("256GB SSD", "512GB SSD", "1TB SSD")
DEFAULT_BRAND = "Dell"


@dataclass(frozen=True)
class BrandProfile:
    cpus: Tuple[str, ...]
    rams: Tuple[str, ...]
    models: Tuple[str, ...]
    price_range: Tuple[int, int]
    gpus: Tuple[Optional[str], ...] = (None,)
    os: str = "Windows 11"
    screen: str = '14" FHD Display'
    screen_in: float = 14.0
    battery: str = "Up to 8 hours"
    battery_hours: float = 8.0
    weight: str = "3.2 lbs"
    weight_kg: float = 1.45
    image: str = ""


PROFILES: Dict[str, BrandProfile] = {
    "Apple": BrandProfile(
        cpus=("Apple M2", "Apple M2 Pro", "Apple M2 Max"),
        rams=("8GB Unified Memory", "16GB Unified Memory", "32GB Unified Memory"),
        models=("MacBook Air", 'MacBook Pro 14"', 'MacBook Pro 16"'),
        price_range=(999, 2499),
        os="macOS",
        screen='13.6" Liquid Retina',
        screen_in=13.6,
        battery="Up to 18 hours",
        battery_hours=18.0,
        weight="2.7 lbs",
        weight_kg=1.24,
        image="https://store.storeimages.cdn-apple.com/4982/as-images.apple.com/is/macbook-air-midnight-select-20220606",
    ),
    "Dell": BrandProfile(
        cpus=("Intel Core i5-1340P", "Intel Core i7-1360P", "AMD Ryzen 7 7730U"),
        rams=("8GB DDR4", "16GB DDR4", "32GB DDR4"),
        models=("XPS 13", "Inspiron 15", "Latitude 5530", "Precision 3570"),
        price_range=(599, 1899),
        gpus=("Intel Iris Xe Graphics", None),
        image="https://i.dell.com/is/image/DellContent/content/dam/ss2/product-images/dell-client-products/notebooks/xps-notebooks/13-9315/media-gallery/xs9315-cnb-00000ff090-gy.psd",
    ),
    "HP": BrandProfile(
        cpus=("Intel Core i5-1235U", "Intel Core i7-1355U", "AMD Ryzen 5 7530U"),
        rams=("8GB DDR4", "16GB DDR4", "32GB DDR4"),
        models=("Pavilion 15", "Envy x360", "Spectre x360", "EliteBook 850"),
        price_range=(549, 1699),
        gpus=("Intel Iris Xe Graphics", None),
        image="https://ssl-product-images.www8-hp.com/digmedialib/prodimg/lowres/c07929143.png",
    ),
    "Lenovo": BrandProfile(
        cpus=("Intel Core i5-1335U", "Intel Core i7-1365U", "AMD Ryzen 7 7730U"),
        rams=("8GB DDR4", "16GB DDR4", "32GB LPDDR5"),
        models=("ThinkPad X1 Carbon", "IdeaPad 5", "Yoga 7i", "Legion 5"),
        price_range=(599, 1799),
        gpus=("Intel Iris Xe Graphics", None),
        image="https://psref.lenovo.com/images/products/ThinkPad_X1_Carbon_Gen_11.png",
    ),
    "ASUS": BrandProfile(
        cpus=("Intel Core i7-13700H", "AMD Ryzen 7 7735HS", "AMD Ryzen 9 7940HS"),
        rams=("8GB DDR5", "16GB DDR5", "32GB DDR5"),
        models=("ZenBook 14", "VivoBook 15", "ROG Zephyrus G14", "TUF Gaming A15"),
        price_range=(549, 1599),
        gpus=("NVIDIA GeForce RTX 4050", "NVIDIA GeForce RTX 4060", None),
        image="https://dlcdnwebimgs.asus.com/gain/319D3969-6292-4C76-A571-C76C5B4EC1F1/w800/h450",
    ),
    "Acer": BrandProfile(
        cpus=("Intel Core i5-1335U", "Intel Core i7-13620H", "AMD Ryzen 5 7520U"),
        rams=("8GB LPDDR5", "16GB DDR5", "32GB DDR5"),
        models=("Swift 3", "Aspire 5", "Nitro 5", "Predator Helios 16"),
        price_range=(599, 1499),
        gpus=("NVIDIA GeForce RTX 4050", None),
        weight="3.5 lbs",
        weight_kg=1.59,
        image="https://static.acer.com/up/Resource/Acer/Laptops/Swift_3/Images/20220321/Acer-Swift3-SF314-512-gallery-01.png",
    ),
    "MSI": BrandProfile(
        cpus=("Intel Core i7-13620H", "Intel Core i9-13900H", "AMD Ryzen 7 7735HS"),
        rams=("16GB DDR5", "32GB DDR5"),
        models=("Modern 14", "Prestige 14", "Katana 15", "Stealth 16"),
        price_range=(599, 1499),
        gpus=("NVIDIA GeForce RTX 4060", "NVIDIA GeForce RTX 4070", None),
        screen='15.6" FHD 144Hz',
        screen_in=15.6,
        weight="4.6 lbs",
        weight_kg=2.09,
        image="https://asset.msi.com/resize/image/global/product/product_1644834398c4c42fab070cf998d19362002869808d.png62405b38c58fe0f07fcef2367d8a9ba1/1024.png",
    ),
}


def resolve_brand(url: Optional[str] = None, brand: Optional[str] = None) -> str:
    """Brand with a profile; anything unknown becomes the default brand."""
    for cand in (brand, domain_brand(url or "")):
        if not cand:
            continue
        label = KNOWN_BRANDS.get(cand.strip().lower(), cand.strip())
        if label in PROFILES:
            return label
    # brand word somewhere in the URL path ("/hp-envy-x360/...")
    m = re.search(r'\b(' + '|'.join(k.lower() for k in PROFILES) + r')\b', (url or "").lower())
    if m:
        return KNOWN_BRANDS[m.group(1)]
    return DEFAULT_BRAND


def infer_os(brand: Optional[str], name: Optional[str]) -> str:
    """Operating system a laptop ships with, from its maker and model name."""
    n = (name or "").lower()
    if (brand or "").lower() == "apple" or "macbook" in n:
        return "macOS"
    if "chromebook" in n:
        return "ChromeOS"
    return "Windows 11"


def _first_number(text: str) -> Optional[float]:
    m = re.search(r'(\d+)', text)
    return float(m.group(1)) if m else None


def generate_mock(
    url: Optional[str] = None,
    brand: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> LaptopSpec:
    rng = rng or random.Random()
    label = resolve_brand(url, brand)
    profile = PROFILES[label]

    cpu = rng.choice(profile.cpus)
    ram = rng.choice(profile.rams)
    storage = rng.choice(STORAGES)
    model = rng.choice(profile.models)
    gpu = rng.choice(profile.gpus)
    lo, hi = profile.price_range
    price = rng.randrange(lo, hi)
    rating = round(min(5.0, 4.0 + rng.random()), 1)
    reviews = rng.randrange(100, 600)

    name = f"{label} {model}"
    if url:
        lid = id_from_url(url)
    else:
        lid = f"{slugify(name)}-{rng.randrange(16 ** 6):06x}"

    storage_gb = _first_number(storage)
    if storage_gb is not None and "TB" in storage:
        storage_gb *= 1024

    laptop = LaptopSpec(
        id=lid,
        url=url or "",
        name=name,
        brand=label,
        price=float(price),
        currency="$",
        image=profile.image,
        images=[profile.image] if profile.image else [],
        cpu=cpu,
        gpu=gpu,
        ram=ram,
        ram_gb=_first_number(ram),
        storage=storage,
        storage_gb=storage_gb,
        storage_type="SSD",
        screen=profile.screen,
        screen_in=profile.screen_in,
        battery=profile.battery,
        battery_hours=profile.battery_hours,
        weight=profile.weight,
        weight_kg=profile.weight_kg,
        os=profile.os,
        rating=rating,
        review_count=reviews,
        seller=seller_from_url(url) if url else "Unknown Store",
        availability="Available Online",
        data_source="mock",
    )
    logger.debug(f"Mock laptop for {url or brand or '<none>'}: {laptop.name} @ {laptop.price}")
    return laptop
