"""Unit tests for settings and the text helpers they rely on."""

import io

import pytest
from rich.console import Console

from tdocs.common.utils import clean_text, mask_token
from tdocs.config.settings import Settings, log_startup
from tdocs.core.domain.exceptions import (
    InvalidConfigurationError,
    MissingDocsUrlError,
    MissingTokenError,
)

pytestmark = pytest.mark.unit

TOKEN = "eyJhbGciOiJIUzI1NiJ9.payload.signature"


@pytest.fixture
def clean_env(monkeypatch):
    """Remove any TDOCS_* variables inherited from the shell."""
    for name in (
        "TDOCS_DOCS_URL",
        "TDOCS_JWT_TOKEN",
        "TDOCS_DEFAULT_MAX_RESULTS",
        "TDOCS_REQUEST_TIMEOUT",
        "TDOCS_HEADLESS_TIMEOUT",
        "TDOCS_USE_HEADLESS_FALLBACK",
        "TDOCS_LOG_LEVEL",
        "TDOCS_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestCleanText:
    """Tests for clean_text."""

    def test_removes_bom_and_replacement_chars(self):
        assert clean_text("\ufeffhello\ufffd") == "hello"

    def test_none_is_empty(self):
        assert clean_text(None) == ""

    def test_strip_is_optional(self):
        assert clean_text("  token \n") == "  token \n"
        assert clean_text("  token \n", strip=True) == "token"

    def test_nfkc_normalization(self):
        """Compatibility characters are folded unless disabled."""
        assert clean_text("\ufb01le") == "file"
        assert clean_text("\ufb01le", normalize=False) == "\ufb01le"


class TestMaskToken:
    """Tests for mask_token."""

    def test_short_token_fully_hidden(self):
        assert mask_token("short") == "***"
        assert mask_token("x" * 14) == "***"

    def test_long_token_keeps_edges(self):
        assert mask_token(TOKEN) == "eyJhbGciOi...ture"


class TestSettings:
    """Tests for loading settings from the environment."""

    def test_defaults(self, clean_env):
        """Unset variables fall back to defaults."""
        settings = Settings(_env_file=None)

        assert settings.docs_url == ""
        assert settings.default_max_results == 3
        assert settings.request_timeout == 10.0
        assert settings.headless_timeout == 30.0
        assert settings.use_headless_fallback is True
        assert settings.log_level == "INFO"

    def test_reads_prefixed_variables(self, clean_env):
        """TDOCS_* variables populate the settings."""
        clean_env.setenv("TDOCS_DOCS_URL", "https://docs.example.com")
        clean_env.setenv("TDOCS_JWT_TOKEN", TOKEN)
        clean_env.setenv("TDOCS_USE_HEADLESS_FALLBACK", "false")

        settings = Settings(_env_file=None)

        assert settings.docs_url == "https://docs.example.com"
        assert settings.jwt_token == TOKEN
        assert settings.use_headless_fallback is False

    def test_secrets_are_sanitized(self, clean_env):
        """BOMs and trailing newlines are removed from the URL and token."""
        clean_env.setenv("TDOCS_JWT_TOKEN", f"\ufeff{TOKEN}\n")
        assert Settings(_env_file=None).jwt_token == TOKEN

    @pytest.mark.parametrize(("raw", "expected"), [("0", 1), ("5", 5), ("50", 10)])
    def test_max_results_clamped(self, clean_env, raw, expected):
        """The default result count is clamped to 1..10."""
        clean_env.setenv("TDOCS_DEFAULT_MAX_RESULTS", raw)
        assert Settings(_env_file=None).default_max_results == expected

    def test_minimum_request_timeout(self, clean_env):
        """Request timeouts below one second are raised to one second."""
        clean_env.setenv("TDOCS_REQUEST_TIMEOUT", "0.1")
        assert Settings(_env_file=None).request_timeout == 1.0


class TestValidateRequired:
    """Tests for Settings.validate_required."""

    def test_missing_url(self, clean_env):
        settings = Settings(_env_file=None, jwt_token=TOKEN)
        with pytest.raises(MissingDocsUrlError):
            settings.validate_required()

    def test_non_http_url(self, clean_env):
        settings = Settings(_env_file=None, docs_url="ftp://docs.example.com", jwt_token=TOKEN)
        with pytest.raises(InvalidConfigurationError) as exc_info:
            settings.validate_required()
        assert exc_info.value.extra_context == {"docs_url": "ftp://docs.example.com"}

    def test_missing_token(self, clean_env):
        settings = Settings(_env_file=None, docs_url="https://docs.example.com")
        with pytest.raises(MissingTokenError):
            settings.validate_required()

    def test_complete_settings_pass(self, clean_env):
        settings = Settings(_env_file=None, docs_url="https://docs.example.com", jwt_token=TOKEN)
        settings.validate_required()


class TestLogStartup:
    """Tests for the startup banner."""

    def test_token_is_masked(self, clean_env):
        """The banner shows the URL but never the full token."""
        settings = Settings(_env_file=None, docs_url="https://docs.example.com", jwt_token=TOKEN)
        buffer = io.StringIO()

        log_startup(settings, Console(file=buffer, width=120))

        output = buffer.getvalue()
        assert "https://docs.example.com" in output
        assert "eyJhbGciOi...ture" in output
        assert TOKEN not in output

    def test_missing_values_flagged(self, clean_env):
        buffer = io.StringIO()
        log_startup(Settings(_env_file=None), Console(file=buffer, width=120))
        assert "not set" in buffer.getvalue()
