"""Headless rendering of client-side documentation pages with Playwright.

Swagger UI keeps the full spec it renders in memory, so for Swagger pages
the spec is pulled out of the page and converted to Markdown. Any other
page falls back to its visible text.
"""

import logging
import re
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, sync_playwright
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from ....core.domain import RenderResult
from ....core.domain.exceptions import RenderFailedError, RendererUnavailableError, RenderingError
from ....core.ports import HeadlessRendererPort
from ....core.services.openapi_parser import openapi_to_markdown
from ....core.services.swagger_detector import parse_spec_text

logger = logging.getLogger(__name__)

LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]
VIEWPORT = {"width": 1920, "height": 1080}
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Bump whenever SPEC_EXTRACTION_SCRIPT changes its lookup order or output
SPEC_EXTRACTION_SCRIPT_VERSION = 1

# Evaluated in the page. Returns the spec as a JSON string, or null.
# Swagger UI stores specs as Immutable.js maps, hence toJS().
SPEC_EXTRACTION_SCRIPT = """
(() => {
    const toPlainJS = (obj) => {
        if (!obj) return obj;
        if (typeof obj.toJS === 'function') return obj.toJS();
        return obj;
    };
    const looksLikeSpec = (obj) => obj && (obj.openapi || obj.swagger || obj.paths);
    const ui = window.ui;

    if (ui && typeof ui.spec === 'function') {
        const spec = toPlainJS(ui.spec());
        if (looksLikeSpec(spec)) return JSON.stringify(spec);
    }

    if (ui && ui.specSelectors) {
        if (typeof ui.specSelectors.specJson === 'function') {
            const spec = toPlainJS(ui.specSelectors.specJson());
            if (looksLikeSpec(spec)) return JSON.stringify(spec);
        }
        if (typeof ui.specSelectors.specStr === 'function') {
            const specStr = ui.specSelectors.specStr();
            if (specStr && typeof specStr === 'string') return specStr;
        }
    }

    if (ui && typeof ui.getSpec === 'function') {
        const spec = toPlainJS(ui.getSpec());
        if (spec) return JSON.stringify(spec);
    }

    if (window.spec) return JSON.stringify(toPlainJS(window.spec));

    if (window.swaggerUi && window.swaggerUi.api) return JSON.stringify(window.swaggerUi.api);

    for (const key of Object.keys(window)) {
        try {
            const obj = window[key];
            if (obj && typeof obj === 'object' && (obj.openapi || obj.swagger) && obj.paths) {
                return JSON.stringify(obj);
            }
        } catch (e) {}
    }

    return null;
})()
"""

PAGE_TEXT_SCRIPT = """
(() => {
    const clone = document.body.cloneNode(true);
    clone.querySelectorAll('script, style, noscript').forEach(el => el.remove());
    return clone.innerText || clone.textContent || '';
})()
"""

SWAGGER_TEXT_SCRIPT = """
(() => {
    const clone = document.body.cloneNode(true);
    clone.querySelectorAll('script, style, noscript, svg, link, meta, button').forEach(el => el.remove());
    return clone.innerText || clone.textContent || '';
})()
"""

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F]")
_MULTIPLE_BREAKS = re.compile(r"\n{3,}")
_HORIZONTAL_SPACE = re.compile(r"[ \t]+")


def clean_swagger_text(text: str) -> str:
    """Strip control characters, collapse spaces and drop empty lines."""
    text = _MULTIPLE_BREAKS.sub("\n\n", text)
    text = _CONTROL_CHARS.sub("", text)
    text = _HORIZONTAL_SPACE.sub(" ", text)
    return "\n".join(line.strip() for line in text.split("\n") if line.strip())


def _spec_to_markdown(raw_spec: str) -> str:
    return openapi_to_markdown(parse_spec_text(raw_spec))


class PlaywrightRenderer(HeadlessRendererPort):
    """Renders pages in headless Chromium via Playwright's sync API.

    A fresh browser is launched per render and always closed afterwards.
    """

    def __init__(self) -> None:
        self._available: bool | None = None

    def is_available(self) -> bool:
        """Check once whether a Chromium build is installed for Playwright."""
        if self._available is None:
            self._available = self._check_browser()
            logger.info("Headless rendering available: %s", self._available)
        return self._available

    def _check_browser(self) -> bool:
        try:
            with sync_playwright() as playwright:
                return Path(playwright.chromium.executable_path).exists()
        except PlaywrightError as e:
            logger.debug("Playwright driver could not start: %s", e)
            return False

    def _ensure_available(self) -> None:
        if not self.is_available():
            raise RendererUnavailableError(
                "Chromium for Playwright is not installed. Run: playwright install chromium"
            )

    @contextmanager
    def _open_page(self, url: str, timeout: float) -> Iterator[Page]:
        try:
            with sync_playwright() as playwright:
                browser = playwright.chromium.launch(headless=True, args=LAUNCH_ARGS)
                try:
                    context = browser.new_context(viewport=VIEWPORT, user_agent=USER_AGENT)
                    page = context.new_page()
                    page.set_default_timeout(timeout * 1000)
                    yield page
                finally:
                    browser.close()
        except PlaywrightError as e:
            raise RenderFailedError(
                f"Failed to render page: {e}", cause=e, context={"url": url}
            ) from e

    def _navigate(
        self,
        page: Page,
        url: str,
        timeout: float,
        wait_for_selector: str | None,
        extra_wait: float,
    ) -> None:
        page.goto(url, wait_until="networkidle", timeout=timeout * 1000)

        if wait_for_selector:
            try:
                page.wait_for_selector(wait_for_selector, timeout=timeout * 1000 / 2)
            except PlaywrightTimeoutError:
                logger.debug("Selector %s not found on %s, continuing", wait_for_selector, url)

        if extra_wait > 0:
            page.wait_for_timeout(extra_wait * 1000)

    def _failure(self, url: str, error: RenderingError) -> RenderResult:
        logger.warning("Rendering %s failed: %s", url, error.message)
        method = "unavailable" if isinstance(error, RendererUnavailableError) else "playwright"
        return RenderResult(success=False, method=method, error=error.message)

    def render_page(
        self,
        url: str,
        timeout: float = 30.0,
        *,
        wait_for_selector: str | None = None,
        extra_wait: float = 2.0,
        extract_text: bool = True,
    ) -> RenderResult:
        """Render a page and return its HTML and, optionally, visible text.

        Args:
            url: Page to render.
            timeout: Navigation timeout in seconds.
            wait_for_selector: CSS selector to wait for (half the timeout).
            extra_wait: Seconds to let scripts settle after load.
            extract_text: Whether to extract visible text.

        Returns:
            RenderResult; failures are reported in ``error``.
        """
        try:
            self._ensure_available()
            with self._open_page(url, timeout) as page:
                self._navigate(page, url, timeout, wait_for_selector, extra_wait)
                html = page.content()
                text = page.evaluate(PAGE_TEXT_SCRIPT) if extract_text else None
        except RenderingError as e:
            return self._failure(url, e)

        return RenderResult(success=True, html=html, text=text.strip() if text else None)

    def render_swagger_aware(
        self,
        url: str,
        timeout: float = 30.0,
        *,
        wait_for_selector: str | None = None,
        extra_wait: float = 2.0,
    ) -> RenderResult:
        """Render a page, preferring the Swagger UI in-memory spec.

        When the page exposes an OpenAPI spec, ``text`` is its Markdown
        rendering and ``html`` the raw spec. Otherwise ``text`` is the
        cleaned visible text of the page.
        """
        try:
            self._ensure_available()
            with self._open_page(url, timeout) as page:
                self._navigate(page, url, timeout, wait_for_selector, extra_wait)
                raw_spec: str | None = page.evaluate(SPEC_EXTRACTION_SCRIPT)

                if raw_spec:
                    markdown = _spec_to_markdown(raw_spec)
                    if markdown:
                        logger.info("Extracted in-memory OpenAPI spec from %s", url)
                        return RenderResult(
                            success=True, html=raw_spec, text=markdown, spec_found=True
                        )

                html = page.content()
                text = page.evaluate(SWAGGER_TEXT_SCRIPT)
        except RenderingError as e:
            return self._failure(url, e)

        return RenderResult(success=True, html=html, text=clean_swagger_text(text or ""))

    def get_status(self) -> dict[str, Any]:
        """Report availability, browser version and executable path."""
        if not self.is_available():
            return {"available": False}

        try:
            with sync_playwright() as playwright:
                browser = playwright.chromium.launch(headless=True)
                try:
                    return {
                        "available": True,
                        "version": browser.version,
                        "executable_path": playwright.chromium.executable_path,
                    }
                finally:
                    browser.close()
        except PlaywrightError as e:
            logger.debug("Could not query browser version: %s", e)
            return {"available": True}
