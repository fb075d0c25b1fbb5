# lapscout/utils/urls.py
from __future__ import annotations

import re
import uuid
from typing import List, Optional, Tuple
from urllib.parse import urlparse

URL_RE = re.compile(r'https?://[^\s<>"\')\]]+', re.I)

SUPPORTED_RETAILERS = [
    "amazon.com", "amazon.co.uk", "amazon.ca", "amazon.de", "amazon.fr",
    "bestbuy.com", "newegg.com", "apple.com", "dell.com", "hp.com",
    "lenovo.com", "asus.com", "acer.com", "msi.com", "microsoft.com",
    "samsung.com", "costco.com", "walmart.com", "target.com", "microcenter.com",
]

LAPTOP_KEYWORDS = [
    "laptop", "notebook", "macbook", "thinkpad", "inspiron", "xps",
    "pavilion", "envy", "spectre", "zenbook", "vivobook", "ideapad",
    "legion", "rog", "surface", "chromebook", "ultrabook",
]

# domain substring -> brand
DOMAIN_BRANDS = {
    "apple.com": "Apple",
    "dell.com": "Dell",
    "hp.com": "HP",
    "lenovo.com": "Lenovo",
    "asus.com": "ASUS",
    "acer.com": "Acer",
    "msi.com": "MSI",
    "samsung.com": "Samsung",
    "microsoft.com": "Microsoft",
}

# host substring -> seller label
SELLERS = [
    ("amazon.", "Amazon"),
    ("bestbuy.", "Best Buy"),
    ("newegg.", "Newegg"),
    ("apple.com", "Apple Store"),
    ("dell.com", "Dell"),
    ("hp.com", "HP"),
    ("lenovo.com", "Lenovo"),
    ("asus.com", "ASUS"),
    ("acer.com", "Acer"),
    ("msi.com", "MSI"),
]


def _host(url: str) -> str:
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


def is_url(text: str) -> bool:
    try:
        u = urlparse((text or "").strip())
    except ValueError:
        return False
    return u.scheme in ("http", "https") and bool(u.netloc)


def find_urls(text: str) -> List[str]:
    return [u.rstrip(".,;") for u in URL_RE.findall(text or "")]


def domain_brand(url: str) -> Optional[str]:
    host = _host(url)
    if not host:
        return None
    for domain, brand in DOMAIN_BRANDS.items():
        if host == domain or host.endswith("." + domain):
            return brand
    return None


def seller_from_url(url: str) -> str:
    host = _host(url)
    if not host:
        return "Unknown Store"
    for key, label in SELLERS:
        if key in host:
            return label
    parts = host.replace("www.", "").split(".")
    return parts[0] if parts and parts[0] else "Unknown Store"


def id_from_url(url: str) -> str:
    """Slug from the last path segment; random token when the URL has none."""
    try:
        path = urlparse(url or "").path
    except ValueError:
        path = ""
    last = path.rstrip("/").split("/")[-1] if path else ""
    slug = re.sub(r'[^a-z0-9]+', '-', last.lower()).strip('-')
    return slug or uuid.uuid4().hex[:9]


def slugify(text: str, max_len: int = 50) -> str:
    slug = re.sub(r'[^a-z0-9]+', '-', (text or "").lower()).strip('-')
    return slug[:max_len].rstrip('-') or "laptop"


def validate_laptop_url(url: str) -> Tuple[bool, List[str]]:
    errors: List[str] = []
    try:
        u = urlparse(url or "")
    except ValueError:
        return False, ["Invalid URL format"]
    if not u.scheme or not u.netloc:
        return False, ["Invalid URL format"]

    host = (u.hostname or "").lower()
    path = u.path.lower()
    search = u.query.lower()

    if u.scheme not in ("http", "https"):
        errors.append("URL must use HTTP or HTTPS protocol")

    known = any(host == r or host.endswith("." + r) for r in SUPPORTED_RETAILERS)
    keyworded = any(k in path or k in search for k in LAPTOP_KEYWORDS)
    if not known and not keyworded:
        errors.append("URL does not appear to be from a laptop retailer or contain laptop-related content")

    if "/reviews/" in path or "/forum/" in path:
        errors.append("URL appears to be a review or forum page, not a product page")

    if "search" in search or "/search/" in path:
        errors.append("URL appears to be a search results page, not a specific product")

    return not errors, errors


def suggest_correction(url: str) -> Optional[str]:
    if not is_url(url):
        return "Please check that the URL is properly formatted (starts with http:// or https://)"
    path = urlparse(url).path
    if "/s/" in path or "/search/" in path:
        return "This looks like a search URL. Please find the specific laptop product page instead."
    if "/reviews/" in path:
        return "This appears to be a review page. Please use the main product page URL instead."
    return None
