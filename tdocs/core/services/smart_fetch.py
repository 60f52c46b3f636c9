"""Fetch documentation with fallbacks for client-rendered pages.

Decision pipeline:
1. Plain HTTP GET. JSON payloads are rendered (OpenAPI specs as Markdown).
2. Anything that is not an HTML single-page-app shell is returned as-is.
3. Swagger/OpenAPI pages are resolved to their spec, which is rendered.
4. Otherwise the page is rendered in a headless browser when one exists.
5. As a last resort the original HTML is returned for the HTML chunker.
"""

import json
import logging
import re

from ..domain import (
    ContentType,
    FetchMethod,
    HeadlessSupport,
    SmartFetchOptions,
    SmartFetchResult,
)
from ..domain.exceptions import (
    InvalidSpecError,
    RenderFailedError,
    RendererUnavailableError,
    RenderingError,
    SpecError,
    SpecNotFoundError,
    TDocsError,
)
from ..ports import HeadlessRendererPort, HttpTransportPort
from . import patterns
from .openapi_parser import is_valid_openapi_spec, openapi_to_markdown
from .swagger_detector import SwaggerSpecLocator, detect_swagger

logger = logging.getLogger(__name__)

HTML_MARKERS = re.compile(r"<(!DOCTYPE|html|head|body|div)", re.IGNORECASE)
MARKDOWN_HEADER = re.compile(r"^#{1,6}\s", re.MULTILINE)

# Visible text below this share of the markup means a JS-rendered shell
MIN_TEXT_RATIO = 0.05

# Only script and style bodies are discounted from the text ratio
SCRIPT_BLOCKS = re.compile(r"<script[\s\S]*?</script>", re.IGNORECASE)
STYLE_BLOCKS = re.compile(r"<style[\s\S]*?</style>", re.IGNORECASE)

SPA_INDICATORS = (
    re.compile(r"swagger-ui|SwaggerUIBundle", re.IGNORECASE),
    re.compile(r"react|vue|angular|ember", re.IGNORECASE),
    re.compile(r"""<div\s+id=["'](?:app|root)["']""", re.IGNORECASE),
    re.compile(r"window\.__INITIAL_STATE__", re.IGNORECASE),
    re.compile(r"data-reactroot|ng-app|v-app", re.IGNORECASE),
)


def detect_content_type(content: str) -> ContentType:
    """Classify a text payload as JSON, HTML, Markdown or plain text."""
    trimmed = content.strip()

    if trimmed.startswith(("{", "[")):
        try:
            json.loads(trimmed)
            return ContentType.JSON
        except ValueError:
            pass

    if HTML_MARKERS.search(trimmed):
        return ContentType.HTML

    if MARKDOWN_HEADER.search(trimmed) or patterns.FENCED_CODE.search(trimmed):
        return ContentType.MARKDOWN

    return ContentType.TEXT


def looks_like_spa(html: str) -> bool:
    """Guess whether HTML is a client-rendered application shell.

    Args:
        html: Page HTML.

    Returns:
        True when visible text is under 5% of the markup or a framework or
        Swagger UI signature is present.
    """
    if not html:
        return False

    without_scripts = STYLE_BLOCKS.sub("", SCRIPT_BLOCKS.sub("", html))
    text_only = " ".join(patterns.ALL_TAGS.sub(" ", without_scripts).split())
    ratio = len(text_only) / len(html)

    return ratio < MIN_TEXT_RATIO or any(pattern.search(html) for pattern in SPA_INDICATORS)


class SmartFetchService:
    """Fetches a documentation URL using the best available strategy."""

    def __init__(
        self,
        http: HttpTransportPort,
        renderer: HeadlessRendererPort | None = None,
        locator: SwaggerSpecLocator | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            http: HTTP transport for page and spec requests.
            renderer: Optional headless browser for SPA fallback.
            locator: Spec locator; built on ``http`` when omitted.
        """
        self.http = http
        self.renderer = renderer
        self.locator = locator or SwaggerSpecLocator(http)

    def fetch(self, url: str, options: SmartFetchOptions | None = None) -> SmartFetchResult:
        """Fetch a URL and extract searchable content.

        Args:
            url: Documentation URL.
            options: Timeouts and strategy switches.

        Returns:
            SmartFetchResult. ``success`` is False only when the direct
            request failed.
        """
        options = options or SmartFetchOptions()

        try:
            http_result = self._fetch_direct(url, options)
        except TDocsError as e:
            logger.error("Direct fetch of %s failed: %s", url, e.message)
            return SmartFetchResult(
                success=False,
                url=url,
                content_type=ContentType.UNKNOWN,
                method=FetchMethod.DIRECT,
                error=str(e),
                cause=e,
            )

        html = http_result.content or ""
        if http_result.content_type is not ContentType.HTML or not looks_like_spa(html):
            return http_result

        logger.info("%s looks like a client-rendered page", url)

        if options.try_openapi_spec:
            try:
                return self._try_swagger_extraction(url, html, options)
            except SpecError as e:
                logger.info("Swagger extraction skipped for %s: %s", url, e.message)
            except Exception as e:
                logger.warning("Swagger extraction failed for %s: %s", url, e)

        if options.use_headless_fallback:
            try:
                return self._try_headless_render(url, options)
            except RenderingError as e:
                logger.warning("Headless rendering skipped for %s: %s", url, e.message)
            except Exception as e:
                logger.warning("Headless rendering failed for %s: %s", url, e)

        return http_result

    def _fetch_direct(self, url: str, options: SmartFetchOptions) -> SmartFetchResult:
        data = self.http.get(url, timeout=options.http_timeout, headers=options.headers)

        if isinstance(data, str):
            return SmartFetchResult(
                success=True,
                url=url,
                content=data,
                content_type=detect_content_type(data),
                method=FetchMethod.DIRECT,
            )

        dumped = json.dumps(data, indent=2, ensure_ascii=False)
        if is_valid_openapi_spec(data):
            return SmartFetchResult(
                success=True,
                url=url,
                content=openapi_to_markdown(data) or dumped,
                content_type=ContentType.OPENAPI,
                method=FetchMethod.DIRECT,
            )

        return SmartFetchResult(
            success=True,
            url=url,
            content=dumped,
            content_type=ContentType.JSON,
            method=FetchMethod.DIRECT,
        )

    def _load_spec(self, url: str, spec_url: str, timeout: float) -> SmartFetchResult:
        spec = self.locator.fetch_openapi_spec(spec_url, timeout)
        if spec is None or not is_valid_openapi_spec(spec):
            raise InvalidSpecError(
                "Document is not an OpenAPI spec",
                context={"spec_url": spec_url},
            )
        return SmartFetchResult(
            success=True,
            url=url,
            content=openapi_to_markdown(spec),
            content_type=ContentType.OPENAPI,
            method=FetchMethod.OPENAPI_SPEC,
            spec_url=spec_url,
        )

    def _try_swagger_extraction(
        self, url: str, html: str, options: SmartFetchOptions
    ) -> SmartFetchResult:
        detection = detect_swagger(html, url)
        if not detection.is_swagger:
            raise SpecNotFoundError("Page is not a Swagger/OpenAPI UI", context={"url": url})

        if detection.spec_url:
            try:
                return self._load_spec(url, detection.spec_url, options.http_timeout)
            except InvalidSpecError as e:
                logger.warning("Referenced spec %s is unusable: %s", detection.spec_url, e.message)

        if options.try_common_endpoints:
            found = self.locator.discover_common_spec_endpoints(url, options.http_timeout / 2)
            if found is not None:
                return self._load_spec(url, found.spec_url, options.http_timeout)

        raise SpecNotFoundError("OpenAPI spec not found", context={"url": url})

    def _try_headless_render(self, url: str, options: SmartFetchOptions) -> SmartFetchResult:
        if self.renderer is None or not self.renderer.is_available():
            raise RendererUnavailableError("No headless browser available")

        result = self.renderer.render_swagger_aware(url, options.headless_timeout)
        if not result.success or not result.text:
            raise RenderFailedError(result.error or "Rendering produced no text", context={"url": url})

        logger.info("Rendered %s headlessly (spec found: %s)", url, result.spec_found)
        return SmartFetchResult(
            success=True,
            url=url,
            content=result.text,
            content_type=ContentType.TEXT,
            method=FetchMethod.HEADLESS,
        )

    def check_headless_support(self) -> HeadlessSupport:
        """Report whether SPA rendering is possible in this environment."""
        if self.renderer is not None and self.renderer.is_available():
            return HeadlessSupport(
                available=True,
                method="playwright",
                message="Playwright is available for rendering single-page apps",
            )
        return HeadlessSupport(
            available=False,
            method="none",
            message=(
                "No headless renderer available. Install Playwright for SPA support: "
                "pip install playwright && playwright install chromium"
            ),
        )
