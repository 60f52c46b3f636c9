"""Configuration management for TDocs."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..common.utils import clean_text, mask_token
from ..core.domain.exceptions import (
    InvalidConfigurationError,
    MissingDocsUrlError,
    MissingTokenError,
)

MIN_MAX_RESULTS = 1
MAX_MAX_RESULTS = 10
MIN_REQUEST_TIMEOUT = 1.0


def _sanitize_secret(value: str) -> str:
    """Remove BOM characters and whitespace from secrets.

    Secrets copied into ``.env`` files often carry a BOM or a trailing
    newline, which breaks the Authorization header.
    """
    return clean_text(value, normalize=False, strip=True)


class Settings(BaseSettings):
    """Application settings loaded from ``TDOCS_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TDOCS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Documentation source
    docs_url: str = ""
    jwt_token: str = ""

    @field_validator("docs_url", "jwt_token", mode="after")
    @classmethod
    def sanitize_secrets(cls, value: str) -> str:
        """Remove BOM and whitespace from the URL and token."""
        return _sanitize_secret(value)

    # Search settings
    default_max_results: int = 3

    @field_validator("default_max_results", mode="after")
    @classmethod
    def clamp_max_results(cls, value: int) -> int:
        """Clamp the default result count to 1..10."""
        return min(max(value, MIN_MAX_RESULTS), MAX_MAX_RESULTS)

    # Fetch settings (seconds)
    request_timeout: float = 10.0
    headless_timeout: float = 30.0
    use_headless_fallback: bool = True

    @field_validator("request_timeout", mode="after")
    @classmethod
    def enforce_min_timeout(cls, value: float) -> float:
        """Never allow a request timeout below one second."""
        return max(value, MIN_REQUEST_TIMEOUT)

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    def validate_required(self) -> None:
        """Ensure the settings needed to search documentation are present.

        Raises:
            MissingDocsUrlError: If TDOCS_DOCS_URL is empty.
            InvalidConfigurationError: If TDOCS_DOCS_URL is not an http(s) URL.
            MissingTokenError: If TDOCS_JWT_TOKEN is empty.
        """
        if not self.docs_url:
            raise MissingDocsUrlError("TDOCS_DOCS_URL is not configured")
        if not self.docs_url.startswith(("http://", "https://")):
            raise InvalidConfigurationError(
                "TDOCS_DOCS_URL must start with http:// or https://",
                context={"docs_url": self.docs_url},
            )
        if not self.jwt_token:
            raise MissingTokenError("TDOCS_JWT_TOKEN is not configured")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded on first use."""
    return Settings()


def log_startup(settings: Settings, console: Console | None = None) -> None:
    """Print the loaded configuration with the token masked.

    Args:
        settings: Settings to display.
        console: Rich console to print to (defaults to stderr).
    """
    console = console or Console(stderr=True)

    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    table.add_row("Docs URL:", settings.docs_url or "[red]not set[/red]")
    table.add_row("JWT Token:", mask_token(settings.jwt_token) if settings.jwt_token else "[red]not set[/red]")
    table.add_row("Max Results:", str(settings.default_max_results))
    table.add_row("Timeout:", f"{settings.request_timeout:g}s")
    table.add_row("Headless:", "enabled" if settings.use_headless_fallback else "disabled")

    console.print(Panel(table, title="TDocs - Documentation Search", border_style="blue"))
