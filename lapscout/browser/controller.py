# lapscout/browser/controller.py
from __future__ import annotations

from typing import Optional

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36"
)
LAUNCH_ARGS = ["--no-sandbox", "--disable-dev-shm-usage", "--disable-blink-features=AutomationControlled"]

# elements whose presence means the product block has rendered
PRODUCT_READY = "#productTitle, h1, [itemprop='price'], .priceView-hero-price"


class BrowserController:
    """Headless Chromium session used to load product pages the proxy cannot reach."""

    def __init__(self, headless: bool = True, nav_timeout_ms: int = 20_000):
        self.headless = headless
        self.nav_timeout_ms = nav_timeout_ms
        self._pw = None
        self.browser = None
        self.context = None
        self.page = None

    def __enter__(self):
        self._pw = sync_playwright().start()
        self.browser = self._pw.chromium.launch(headless=self.headless, args=LAUNCH_ARGS)
        self.context = self.browser.new_context(
            user_agent=USER_AGENT,
            locale="en-US",
            timezone_id="America/New_York",
            viewport={"width": 1366, "height": 900},
            extra_http_headers={"Accept-Language": "en-US,en;q=0.9"},
        )
        # images and fonts are not needed to read specs
        self.context.route(
            "**/*.{png,jpg,jpeg,webp,gif,woff,woff2}",
            lambda route: route.abort(),
        )
        self.page = self.context.new_page()
        self.page.set_default_navigation_timeout(self.nav_timeout_ms)
        return self

    def __exit__(self, exc_type, exc, tb):
        try:
            if self.context:
                self.context.close()
            if self.browser:
                self.browser.close()
        finally:
            if self._pw:
                self._pw.stop()

    def goto(self, url: str, wait_until: str = "domcontentloaded"):
        if not self.page:
            raise RuntimeError("BrowserController: page not initialized")
        return self.page.goto(url, wait_until=wait_until)

    def html(self, url: str, ready_selector: Optional[str] = PRODUCT_READY) -> str:
        """Page HTML once the product block is there (or the wait runs out)."""
        resp = self.goto(url)
        if resp is not None and not resp.ok:
            raise RuntimeError(f"HTTP {resp.status} for {url}")
        if ready_selector:
            try:
                self.page.wait_for_selector(ready_selector, timeout=self.nav_timeout_ms // 2)
            except PlaywrightTimeoutError:
                # client-rendered pages sometimes never show the block; read what is there
                pass
        return self.page.content()
