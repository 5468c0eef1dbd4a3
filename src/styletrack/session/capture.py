"""Page capture: rendered markup of the tracked page on demand."""

from __future__ import annotations

import logging
from typing import Protocol

import httpx
from playwright.sync_api import Browser, Page, Playwright, sync_playwright
from playwright.sync_api import Error as PlaywrightError

from styletrack.config import TrackerConfig
from styletrack.errors import CaptureError

logger = logging.getLogger(__name__)


class PageCapture(Protocol):
    """Protocol for collaborators that return the page's current markup."""

    def content(self) -> str: ...

    def reload(self) -> None: ...

    def close(self) -> None: ...


class PlaywrightCapture:
    """Headless Chromium capture of the fully rendered document.

    The browser is launched lazily on first use and kept open until
    :meth:`close`, so later captures reuse the same page.
    """

    def __init__(
        self,
        url: str,
        *,
        wait_until: str = "networkidle",
        headless: bool = True,
        viewport: tuple[int, int] = (1440, 900),
        timeout_ms: int = 60000,
    ) -> None:
        self.url = url
        self.wait_until = wait_until
        self.headless = headless
        self.viewport = viewport
        self.timeout_ms = timeout_ms
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._page: Page | None = None

    def _ensure_page(self) -> Page:
        if self._page is not None:
            return self._page
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(headless=self.headless)
            width, height = self.viewport
            page = self._browser.new_page(viewport={"width": width, "height": height})
            logger.info("Navigating to %s", self.url)
            page.goto(self.url, wait_until=self.wait_until, timeout=self.timeout_ms)
        except PlaywrightError as exc:
            self.close()
            raise CaptureError(f"Could not load {self.url}: {exc}") from exc
        self._page = page
        return page

    def content(self) -> str:
        page = self._ensure_page()
        try:
            return page.content()
        except PlaywrightError as exc:
            raise CaptureError(f"Could not read {self.url}: {exc}") from exc

    def reload(self) -> None:
        page = self._ensure_page()
        logger.info("Reloading %s", self.url)
        try:
            page.reload(wait_until=self.wait_until, timeout=self.timeout_ms)
        except PlaywrightError as exc:
            raise CaptureError(f"Could not reload {self.url}: {exc}") from exc

    def close(self) -> None:
        if self._browser is not None:
            self._browser.close()
        if self._playwright is not None:
            self._playwright.stop()
        self._page = None
        self._browser = None
        self._playwright = None


class HttpCapture:
    """Plain HTTP fetch of the page, for pages whose styles are served as-is."""

    def __init__(
        self, url: str, *, client: httpx.Client | None = None, timeout_ms: int = 60000
    ) -> None:
        self.url = url
        self._client = client or httpx.Client(
            timeout=timeout_ms / 1000, follow_redirects=True
        )

    def content(self) -> str:
        logger.info("Fetching %s", self.url)
        try:
            response = self._client.get(self.url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise CaptureError(f"Could not fetch {self.url}: {exc}") from exc
        return response.text

    def reload(self) -> None:
        # Every content() call is already a fresh request.
        logger.debug("reload requested for %s", self.url)

    def close(self) -> None:
        self._client.close()


def open_capture(config: TrackerConfig) -> PageCapture:
    """Build the capture collaborator selected by ``config.capture``."""
    if config.capture == "http":
        return HttpCapture(config.url, timeout_ms=config.timeout_ms)
    if config.capture == "browser":
        return PlaywrightCapture(
            config.url,
            wait_until=config.wait_until,
            headless=config.headless,
            viewport=(config.viewport_width, config.viewport_height),
            timeout_ms=config.timeout_ms,
        )
    raise ValueError(f"Unknown capture backend: {config.capture!r}")
