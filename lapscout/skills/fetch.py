# lapscout/skills/fetch.py
from __future__ import annotations

from typing import Optional, Protocol

import requests
from playwright.sync_api import Error as PlaywrightError

from lapscout.browser.controller import BrowserController
from lapscout.config.settings import AssistantConfig
from lapscout.utils.logger import logger


class PageFetcher(Protocol):
    def fetch(self, url: str) -> Optional[str]:
        ...


class ProxyFetcher:
    """
    Fetch a page through a CORS-style relay: ``GET <proxy>?url=<target>``
    answering ``{"contents": "<html>"}``. Any failure is "no page".
    """

    def __init__(self, proxy_url: str, timeout: float = 10.0, session: Optional[requests.Session] = None):
        self.proxy_url = proxy_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, url: str) -> Optional[str]:
        try:
            resp = self.session.get(self.proxy_url, params={"url": url}, timeout=self.timeout)
            resp.raise_for_status()
            contents = resp.json().get("contents")
        except requests.RequestException as e:
            logger.warning(f"Proxy fetch failed for {url}: {e}")
            return None
        except ValueError as e:
            logger.warning(f"Proxy returned bad JSON for {url}: {e}")
            return None
        if not contents:
            logger.warning(f"Proxy returned no contents for {url}")
            return None
        return contents


class BrowserFetcher:
    """Load pages in headless Chromium; one short-lived browser per fetch."""

    def __init__(self, headless: bool = True, timeout: float = 10.0):
        self.headless = headless
        self.timeout = timeout

    def fetch(self, url: str) -> Optional[str]:
        try:
            with BrowserController(headless=self.headless, nav_timeout_ms=int(self.timeout * 2000)) as bc:
                return bc.html(url)
        except (PlaywrightError, RuntimeError) as e:
            logger.warning(f"Browser fetch failed for {url}: {e}")
            return None


def make_fetcher(config: AssistantConfig, session: Optional[requests.Session] = None) -> PageFetcher:
    if config.fetch_mode == "browser":
        logger.info("Using headless browser for page fetches")
        return BrowserFetcher(headless=config.headless, timeout=config.fetch_timeout_sec)
    return ProxyFetcher(config.proxy_url, timeout=config.fetch_timeout_sec, session=session)
