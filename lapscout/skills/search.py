# lapscout/skills/search.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence
from urllib.parse import parse_qs, quote_plus, urlparse

import requests
from bs4 import BeautifulSoup

from lapscout.skills.fetch import PageFetcher
from lapscout.skills.mock import PROFILES
from lapscout.utils.logger import logger
from lapscout.utils.urls import slugify

TAVILY_URL = "https://api.tavily.com/search"

BRAND_DOMAINS: Dict[str, str] = {
    "apple": "apple.com",
    "dell": "dell.com",
    "hp": "hp.com",
    "lenovo": "lenovo.com",
    "asus": "asus.com",
    "acer": "acer.com",
    "msi": "msi.com",
    "microsoft": "microsoft.com",
    "samsung": "samsung.com",
}

PRODUCT_URL_RE = re.compile(
    r'\b(laptop|laptops|macbook|notebook|xps|thinkpad|spectre|zenbook|vivobook|ideapad)\b', re.I
)


@dataclass
class SearchResult:
    title: str
    url: str
    content: Optional[str] = None
    score: Optional[float] = None
    images: List[str] = field(default_factory=list)


def brand_domain(brand: str) -> str:
    b = (brand or "").strip().lower()
    return BRAND_DOMAINS.get(b, f"{b}.com")


def _dedupe(items: List[SearchResult]) -> List[SearchResult]:
    seen = set()
    out = []
    for x in items:
        k = x.url.split("#")[0]
        if k in seen:
            continue
        seen.add(k)
        out.append(x)
    return out


def is_product_url(url: str, domain: str) -> bool:
    return domain in url and bool(PRODUCT_URL_RE.search(url))


class TavilySearch:
    """Keyed web search returning ranked results with text snippets."""

    def __init__(self, api_key: str, timeout: float = 15.0, session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def search(
        self,
        query: str,
        limit: int = 5,
        include_domains: Optional[Sequence[str]] = None,
    ) -> List[SearchResult]:
        body = {
            "api_key": self.api_key,
            "query": query,
            "search_depth": "basic",
            "include_answer": False,
            "include_images": True,
            "max_results": min(max(limit, 1), 10),
        }
        if include_domains:
            body["include_domains"] = list(include_domains)

        logger.info(f"Tavily search: {query!r} domains={list(include_domains or [])}")
        try:
            resp = self.session.post(TAVILY_URL, json=body, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            logger.warning(f"Tavily search failed: {e}")
            return []
        except ValueError as e:
            logger.warning(f"Tavily returned bad JSON: {e}")
            return []

        images = [i for i in (data.get("images") or []) if isinstance(i, str)]
        out: List[SearchResult] = []
        for r in data.get("results") or []:
            url = r.get("url")
            if not isinstance(url, str) or not url:
                continue
            out.append(SearchResult(
                title=r.get("title") or "",
                url=url,
                content=r.get("content"),
                score=r.get("score"),
                images=images[:3],
            ))
        return _dedupe(out)


def parse_ddg_html(html: str, max_results: int = 5) -> List[SearchResult]:
    """Result anchors of the DuckDuckGo HTML endpoint, redirect links decoded."""
    soup = BeautifulSoup(html or "", "html.parser")
    # 'a.result__a' is the result link; anything else on the page is chrome
    anchors = soup.select("a.result__a") or soup.select("h2.result__title a[href]")

    out: List[SearchResult] = []
    for a in anchors:
        href = (a.get("href") or "").strip()
        real = parse_qs(urlparse(href).query).get("uddg")
        url = real[0] if real else href
        if not url.startswith("http") or "duckduckgo.com" in url:
            continue
        out.append(SearchResult(title=a.get_text(" ", strip=True), url=url.split("#")[0]))
    return _dedupe(out)[:max_results]


def ddg_search(fetcher: PageFetcher, query: str, max_results: int = 5) -> List[SearchResult]:
    """
    DuckDuckGo HTML endpoint (no JS), loaded through the page fetcher.
    """
    q = (query or "").strip()
    url = f"https://duckduckgo.com/html/?q={quote_plus(q)}"
    logger.info(f"DDG search: {url}")
    html = fetcher.fetch(url)
    if not html:
        logger.warning("DuckDuckGo returned nothing.")
        return []
    # collect a bit more, callers filter by domain
    return parse_ddg_html(html, max_results * 3)


def synthetic_product_urls(brand: str, limit: int = 3) -> List[str]:
    """Plausible product URLs on the brand's own site, one per known model line."""
    domain = brand_domain(brand)
    profile = next((p for k, p in PROFILES.items() if k.lower() == (brand or "").lower()), None)
    models = profile.models if profile else ("laptop",)
    urls = [f"https://www.{domain}/laptops/{slugify(m)}" for m in models]
    return urls[:limit]
