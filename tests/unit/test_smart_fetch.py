"""Unit tests for the smart fetch decision pipeline."""

from unittest.mock import MagicMock

import pytest

from tdocs.core.domain import ContentType, FetchMethod, RenderResult, SmartFetchOptions
from tdocs.core.domain.exceptions import HttpConnectionError, HttpStatusError
from tdocs.core.services.smart_fetch import (
    SmartFetchService,
    detect_content_type,
    looks_like_spa,
)
from tdocs.core.services.swagger_detector import SwaggerSpecLocator

pytestmark = pytest.mark.unit

PAGE_URL = "https://api.example.com/swagger-ui/index.html"
SPEC_URL = "https://api.example.com/v3/api-docs"

SWAGGER_PAGE = """<!DOCTYPE html>
<html><head><link rel="stylesheet" href="swagger-ui.css"></head>
<body><div id="swagger-ui"></div>
<script src="swagger-ui-bundle.js"></script>
<script>window.ui = SwaggerUIBundle({url: "/v3/api-docs", dom_id: '#swagger-ui'});</script>
</body></html>"""

SPA_SHELL = '<html><body><div id="root"></div><script src="/static/app.js"></script></body></html>'

STATIC_PAGE = (
    "<html><body>"
    + "<p>Plenty of readable documentation text lives here.</p>" * 20
    + "</body></html>"
)


def _get_by_url(pages):
    """Build a ``get`` side effect serving fixed payloads by URL."""

    def get(url, **kwargs):
        if url in pages:
            return pages[url]
        raise HttpStatusError("Not found", status_code=404)

    return get


class TestDetectContentType:
    """Tests for detect_content_type."""

    @pytest.mark.parametrize(
        ("content", "expected"),
        [
            ('[{"a": 1}]', ContentType.JSON),
            ("<div>hello</div>", ContentType.HTML),
            ("# Title\ntext", ContentType.MARKDOWN),
            ("```\ncode\n```", ContentType.MARKDOWN),
            ("plain words", ContentType.TEXT),
            ("{broken", ContentType.TEXT),
        ],
    )
    def test_classification(self, content, expected):
        """Payloads are classified JSON, HTML, Markdown, then text."""
        assert detect_content_type(content) is expected


class TestLooksLikeSpa:
    """Tests for looks_like_spa."""

    def test_empty_html(self):
        """Empty HTML is not an SPA."""
        assert not looks_like_spa("")

    def test_framework_shell(self):
        """A root mount point with no text is an SPA."""
        assert looks_like_spa(SPA_SHELL)

    def test_swagger_ui(self):
        """Swagger UI pages are SPAs."""
        assert looks_like_spa(SWAGGER_PAGE)

    def test_static_page(self):
        """Text-heavy static pages are not SPAs."""
        assert not looks_like_spa(STATIC_PAGE)

    def test_script_heavy_page(self):
        """Markup dominated by scripts has too little visible text."""
        html = "<html><body><p>Hi</p><script>" + "x=1;" * 500 + "</script></body></html>"
        assert looks_like_spa(html)

    def test_noscript_text_counts_as_visible(self):
        """Only script and style bodies are discounted from the text ratio."""
        notice = "Enable JavaScript to read these docs. " * 40
        html = f"<html><body><noscript>{notice}</noscript></body></html>"
        assert not looks_like_spa(html)


class TestDirectFetch:
    """Tests for content served directly."""

    def test_markdown(self, mock_http):
        """Markdown is returned as fetched."""
        mock_http.get.return_value = "# Title\nSome docs"

        result = SmartFetchService(mock_http).fetch("https://x.io/README.md")

        assert result.success
        assert result.method is FetchMethod.DIRECT
        assert result.content_type is ContentType.MARKDOWN
        assert result.content == "# Title\nSome docs"
        mock_http.get.assert_called_once_with("https://x.io/README.md", timeout=10.0, headers={})

    def test_openapi_json(self, mock_http, petstore_spec):
        """A JSON spec is rendered to Markdown."""
        mock_http.get.return_value = petstore_spec

        result = SmartFetchService(mock_http).fetch("https://x.io/openapi.json")

        assert result.content_type is ContentType.OPENAPI
        assert result.content.startswith("# Petstore")

    def test_plain_json(self, mock_http):
        """Other JSON is pretty-printed."""
        mock_http.get.return_value = {"message": "hello"}

        result = SmartFetchService(mock_http).fetch("https://x.io/data.json")

        assert result.content_type is ContentType.JSON
        assert result.content == '{\n  "message": "hello"\n}'

    def test_static_html(self, mock_http):
        """Static HTML pages are returned without fallbacks."""
        mock_http.get.return_value = STATIC_PAGE

        result = SmartFetchService(mock_http).fetch("https://x.io/guide.html")

        assert result.content_type is ContentType.HTML
        assert result.method is FetchMethod.DIRECT
        mock_http.head.assert_not_called()

    def test_direct_failure(self, mock_http):
        """A failed direct request is the only unsuccessful outcome."""
        error = HttpConnectionError("Connection refused")
        mock_http.get.side_effect = error

        result = SmartFetchService(mock_http).fetch("https://x.io/docs")

        assert not result.success
        assert result.content_type is ContentType.UNKNOWN
        assert result.error == "Connection refused"
        assert result.cause is error


class TestSwaggerExtraction:
    """Tests for resolving Swagger UI pages to their spec."""

    def test_referenced_spec(self, mock_http, petstore_spec):
        """The spec referenced by SwaggerUIBundle is fetched and rendered."""
        mock_http.get.side_effect = _get_by_url({PAGE_URL: SWAGGER_PAGE, SPEC_URL: petstore_spec})

        result = SmartFetchService(mock_http).fetch(PAGE_URL)

        assert result.success
        assert result.method is FetchMethod.OPENAPI_SPEC
        assert result.content_type is ContentType.OPENAPI
        assert result.spec_url == SPEC_URL
        assert "#### `GET /pets`" in result.content

    def test_common_endpoints_when_referenced_spec_is_invalid(self, mock_http, petstore_spec):
        """Conventional endpoints are tried when the referenced spec is unusable."""
        fallback_url = "https://api.example.com/openapi.json"
        mock_http.get.side_effect = _get_by_url(
            {PAGE_URL: SWAGGER_PAGE, SPEC_URL: {"unrelated": True}, fallback_url: petstore_spec}
        )

        def head(url, **kwargs):
            if url == fallback_url:
                return {"Content-Type": "application/json"}
            raise HttpStatusError("Not found", status_code=404)

        mock_http.head.side_effect = head

        result = SmartFetchService(mock_http).fetch(PAGE_URL)

        assert result.method is FetchMethod.OPENAPI_SPEC
        assert result.spec_url == fallback_url
        mock_http.head.assert_called_with(fallback_url, timeout=5.0, accept_only_200=True)

    def test_headless_after_spec_not_found(self, mock_http, mock_renderer):
        """Without a spec the page is rendered headlessly."""
        mock_http.get.side_effect = _get_by_url({PAGE_URL: SWAGGER_PAGE})
        mock_http.head.side_effect = HttpStatusError("Not found", status_code=404)
        mock_renderer.render_swagger_aware.return_value = RenderResult(
            success=True, text="Rendered docs", spec_found=False
        )

        result = SmartFetchService(mock_http, mock_renderer).fetch(PAGE_URL)

        assert result.method is FetchMethod.HEADLESS
        assert result.content_type is ContentType.TEXT
        assert result.content == "Rendered docs"
        mock_renderer.render_swagger_aware.assert_called_once_with(PAGE_URL, 30.0)


class TestHeadlessFallback:
    """Tests for the headless rendering fallback."""

    def test_spa_rendered(self, mock_http, mock_renderer):
        """Non-Swagger SPAs go straight to the renderer."""
        mock_http.get.return_value = SPA_SHELL
        mock_renderer.render_swagger_aware.return_value = RenderResult(success=True, text="App text")

        result = SmartFetchService(mock_http, mock_renderer).fetch("https://x.io/app")

        assert result.method is FetchMethod.HEADLESS
        assert result.content == "App text"
        mock_http.head.assert_not_called()

    def test_render_failure_returns_html(self, mock_http, mock_renderer):
        """A failed render falls back to the original HTML."""
        mock_http.get.return_value = SPA_SHELL
        mock_renderer.render_swagger_aware.return_value = RenderResult(
            success=False, error="Timeout"
        )

        result = SmartFetchService(mock_http, mock_renderer).fetch("https://x.io/app")

        assert result.success
        assert result.method is FetchMethod.DIRECT
        assert result.content == SPA_SHELL

    def test_unavailable_renderer_skipped(self, mock_http, mock_renderer):
        """An unavailable renderer is never asked to render."""
        mock_http.get.return_value = SPA_SHELL
        mock_renderer.is_available.return_value = False

        result = SmartFetchService(mock_http, mock_renderer).fetch("https://x.io/app")

        assert result.content_type is ContentType.HTML
        mock_renderer.render_swagger_aware.assert_not_called()

    def test_fallbacks_disabled(self, mock_http, mock_renderer):
        """Disabled strategies are skipped entirely."""
        mock_http.get.return_value = SWAGGER_PAGE
        options = SmartFetchOptions(try_openapi_spec=False, use_headless_fallback=False)

        result = SmartFetchService(mock_http, mock_renderer).fetch(PAGE_URL, options)

        assert result.content == SWAGGER_PAGE
        assert mock_http.get.call_count == 1
        mock_renderer.render_swagger_aware.assert_not_called()


class TestUnexpectedStrategyFailures:
    """Tests that failures after the direct fetch never abort the fetch."""

    def test_malformed_spec_url_falls_back_to_html(self, mock_http):
        """An unresolvable embedded spec URL ends in the terminal fallback."""
        page = (
            '<html><body><div id="swagger-ui"></div>'
            '<script>SwaggerUIBundle({url: "http://[broken/openapi.json"})</script>'
            "</body></html>"
        )
        mock_http.get.side_effect = _get_by_url({PAGE_URL: page})
        mock_http.head.side_effect = HttpStatusError("Not found", status_code=404)

        result = SmartFetchService(mock_http).fetch(PAGE_URL)

        assert result.success
        assert result.method is FetchMethod.DIRECT
        assert result.content == page

    def test_locator_error_moves_to_headless(self, mock_http, mock_renderer):
        """Any exception in spec extraction hands over to the renderer."""
        mock_http.get.return_value = SWAGGER_PAGE
        locator = MagicMock(spec=SwaggerSpecLocator)
        locator.fetch_openapi_spec.side_effect = ValueError("unexpected payload")
        mock_renderer.render_swagger_aware.return_value = RenderResult(success=True, text="Docs")

        result = SmartFetchService(mock_http, mock_renderer, locator=locator).fetch(PAGE_URL)

        assert result.method is FetchMethod.HEADLESS
        assert result.content == "Docs"

    def test_renderer_error_returns_html(self, mock_http, mock_renderer):
        """Any exception from the renderer falls through to the raw HTML."""
        mock_http.get.return_value = SPA_SHELL
        mock_renderer.render_swagger_aware.side_effect = RuntimeError("browser crashed")

        result = SmartFetchService(mock_http, mock_renderer).fetch("https://x.io/app")

        assert result.success
        assert result.method is FetchMethod.DIRECT
        assert result.content == SPA_SHELL


class TestCheckHeadlessSupport:
    """Tests for check_headless_support."""

    def test_available(self, mock_http, mock_renderer):
        """An available renderer is reported as Playwright."""
        support = SmartFetchService(mock_http, mock_renderer).check_headless_support()

        assert support.available
        assert support.method == "playwright"

    def test_missing(self, mock_http):
        """Without a renderer, installation instructions are given."""
        support = SmartFetchService(mock_http).check_headless_support()

        assert not support.available
        assert support.method == "none"
        assert "playwright install chromium" in support.message
