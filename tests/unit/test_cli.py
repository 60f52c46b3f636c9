"""Unit tests for the typer CLI."""

from unittest.mock import MagicMock

import pytest
from typer.testing import CliRunner

from tdocs.adapters.inbound.cli import commands
from tdocs.adapters.outbound.rendering.playwright_renderer import PlaywrightRenderer
from tdocs.core.domain import ContentType, FetchMethod, RenderResult, SearchOutput, SmartFetchResult
from tdocs.core.domain.exceptions import MissingDocsUrlError
from tdocs.core.services.docs_search import DocsSearchService

pytestmark = pytest.mark.unit

DOCS_URL = "https://docs.example.com/api"
PAGE_URL = "https://api.example.com/swagger-ui/index.html"
SPEC_URL = "https://api.example.com/v3/api-docs"

runner = CliRunner()


@pytest.fixture
def service(monkeypatch):
    """Replace the search service factory with a mock."""
    mock = MagicMock(spec=DocsSearchService)
    factory = MagicMock(return_value=mock)
    monkeypatch.setattr(commands, "get_search_service", factory)
    mock.factory = factory
    return mock


class TestSearchCommand:
    """Tests for `tdocs search`."""

    def test_prints_results(self, service):
        service.search.return_value = SearchOutput(
            query="auth",
            docs_url=DOCS_URL,
            results=["Send a bearer token."],
            total_chunks=4,
            matched_chunks=1,
        )

        result = runner.invoke(commands.app, ["search", "auth", "-n", "2"])

        assert result.exit_code == 0
        assert "bearer token" in result.output
        service.search.assert_called_once_with("auth", 2)

    def test_url_override_passed_to_factory(self, service):
        service.search.return_value = SearchOutput(
            query="auth", docs_url="https://other.example.com", results=["x"], matched_chunks=0
        )

        runner.invoke(commands.app, ["search", "auth", "--url", "https://other.example.com"])

        service.factory.assert_called_once_with("https://other.example.com")

    def test_fetch_error_exits_nonzero(self, service):
        service.search.return_value = SearchOutput(
            query="auth",
            docs_url=DOCS_URL,
            results=[],
            summary="Invalid or expired JWT token. Check TDOCS_JWT_TOKEN.",
            error="Request failed with status code 401",
        )

        result = runner.invoke(commands.app, ["search", "auth"])

        assert result.exit_code == 1

    def test_max_results_range_enforced(self, service):
        result = runner.invoke(commands.app, ["search", "auth", "-n", "11"])

        assert result.exit_code != 0
        service.search.assert_not_called()

    def test_configuration_error_exits_nonzero(self, monkeypatch):
        monkeypatch.setattr(
            commands,
            "get_search_service",
            MagicMock(side_effect=MissingDocsUrlError("TDOCS_DOCS_URL is not configured")),
        )

        result = runner.invoke(commands.app, ["search", "auth"])

        assert result.exit_code == 1
        assert "TDOCS_CFG_002" in result.output


class TestFetchCommand:
    """Tests for `tdocs fetch`."""

    @pytest.fixture
    def fetcher(self, monkeypatch):
        mock = MagicMock()
        monkeypatch.setattr(commands, "get_smart_fetch_service", lambda: mock)
        return mock

    def test_summary_lists_endpoints(self, fetcher, petstore_spec):
        """--summary prints the compact endpoint list of the spec used."""
        fetcher.fetch.return_value = SmartFetchResult(
            success=True,
            url=PAGE_URL,
            content="# Petstore",
            content_type=ContentType.OPENAPI,
            method=FetchMethod.OPENAPI_SPEC,
            spec_url=SPEC_URL,
        )
        fetcher.locator.fetch_openapi_spec.return_value = petstore_spec

        result = runner.invoke(commands.app, ["fetch", PAGE_URL, "--summary"])

        assert result.exit_code == 0
        assert "List pets" in result.output
        assert fetcher.locator.fetch_openapi_spec.call_args.args[0] == SPEC_URL

    def test_summary_skipped_without_spec(self, fetcher):
        fetcher.fetch.return_value = SmartFetchResult(
            success=True, url=PAGE_URL, content="plain words", content_type=ContentType.TEXT
        )

        result = runner.invoke(commands.app, ["fetch", PAGE_URL, "--summary"])

        assert result.exit_code == 0
        fetcher.locator.fetch_openapi_spec.assert_not_called()

    def test_failed_fetch_exits_nonzero(self, fetcher):
        fetcher.fetch.return_value = SmartFetchResult(
            success=False, url=PAGE_URL, error="Connection refused"
        )

        result = runner.invoke(commands.app, ["fetch", PAGE_URL, "--summary"])

        assert result.exit_code == 1
        fetcher.locator.fetch_openapi_spec.assert_not_called()


class TestRenderCommand:
    """Tests for `tdocs render`."""

    @pytest.fixture
    def renderer(self, monkeypatch):
        mock = MagicMock(spec=PlaywrightRenderer)
        monkeypatch.setattr(commands, "get_renderer", lambda: mock)
        return mock

    def test_rendered_page(self, renderer):
        renderer.render_page.return_value = RenderResult(
            success=True, html="<html><body>Hello</body></html>", text="Hello"
        )

        result = runner.invoke(commands.app, ["render", PAGE_URL, "--show-content"])

        assert result.exit_code == 0
        assert "Hello" in result.output
        assert renderer.render_page.call_args.args[0] == PAGE_URL

    def test_render_failure_exits_nonzero(self, renderer):
        renderer.render_page.return_value = RenderResult(
            success=False, method="unavailable", error="Chromium is not installed"
        )

        result = runner.invoke(commands.app, ["render", PAGE_URL])

        assert result.exit_code == 1
