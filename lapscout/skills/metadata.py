# lapscout/skills/metadata.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from lapscout.skills.extractors.rules import clean_text
from lapscout.skills.fetch import PageFetcher
from lapscout.utils.logger import logger

MAX_IMAGES = 10

_PRODUCT_IMG = re.compile(r'(\.(png|jpe?g|webp|avif)|/images?/|content/dam|product)', re.I)


@dataclass
class PageMetadata:
    title: Optional[str] = None
    description: Optional[str] = None
    images: List[str] = field(default_factory=list)


def _meta(soup: BeautifulSoup, attr: str, name: str) -> List[str]:
    return [
        tag["content"].strip()
        for tag in soup.find_all("meta", attrs={attr: name})
        if tag.get("content")
    ]


def _images(soup: BeautifulSoup, base_url: str) -> List[str]:
    found: List[str] = []

    def add(u: str):
        absolute = urljoin(base_url, u.strip())
        if absolute.startswith("http") and absolute not in found:
            found.append(absolute)

    for u in _meta(soup, "property", "og:image") + _meta(soup, "name", "twitter:image"):
        add(u)
    for img in soup.select("img[src], img[data-src]"):
        src = img.get("src") or img.get("data-src") or ""
        if _PRODUCT_IMG.search(src):
            add(src)
    return found[:MAX_IMAGES]


def parse_page_metadata(html: str, url: str) -> PageMetadata:
    soup = BeautifulSoup(html or "", "html.parser")
    title = next(iter(_meta(soup, "property", "og:title")), None)
    if title is None and soup.title is not None:
        title = soup.title.get_text()
    desc = next(iter(_meta(soup, "property", "og:description") + _meta(soup, "name", "description")), None)
    return PageMetadata(
        title=clean_text(title) or None if title else None,
        description=clean_text(desc) if desc else None,
        images=_images(soup, url),
    )


def get_page_metadata(url: str, fetcher: PageFetcher) -> PageMetadata:
    html = fetcher.fetch(url)
    if not html:
        logger.debug(f"No metadata for {url}")
        return PageMetadata()
    return parse_page_metadata(html, url)
