"""Configuration-related exceptions for TDocs."""

from .base import TDocsError


class ConfigurationError(TDocsError):
    """Configuration or environment variable errors.

    Raised when required configuration is missing or invalid.
    """

    error_code = "TDOCS_CFG_001"


class MissingDocsUrlError(ConfigurationError):
    """TDOCS_DOCS_URL is not configured."""

    error_code = "TDOCS_CFG_002"


class MissingTokenError(ConfigurationError):
    """TDOCS_JWT_TOKEN is not configured."""

    error_code = "TDOCS_CFG_003"


class InvalidConfigurationError(ConfigurationError):
    """Configuration value is invalid."""

    error_code = "TDOCS_CFG_004"
