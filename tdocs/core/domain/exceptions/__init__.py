"""Custom exception hierarchy for TDocs.

Families map to HTTP status codes in ``tdocs.common.exception_handler``:
validation 400, transport 502 (timeouts 504), rendering 503, everything
else 500. Error codes follow ``TDOCS_<FAMILY>_<NNN>``.

Import from this package directly:

    from tdocs.core.domain.exceptions import TDocsError, HttpStatusError
"""

# Base classes
from .base import ExceptionContext, TDocsError

# Configuration exceptions
from .configuration import (
    ConfigurationError,
    InvalidConfigurationError,
    MissingDocsUrlError,
    MissingTokenError,
)

# Rendering exceptions
from .rendering import (
    RenderFailedError,
    RendererUnavailableError,
    RenderingError,
)

# Retrieval exceptions
from .retrieval import (
    FetchFailedError,
    RetrievalError,
)

# Spec exceptions
from .spec import (
    InvalidSpecError,
    SpecError,
    SpecNotFoundError,
)

# Transport exceptions
from .transport import (
    HttpConnectionError,
    HttpStatusError,
    HttpTimeoutError,
    TransportError,
)

# Validation exceptions
from .validation import (
    EmptyQueryError,
    InvalidMaxResultsError,
    ValidationError,
)

__all__ = [
    # Base
    "ExceptionContext",
    "TDocsError",
    # Configuration
    "ConfigurationError",
    "MissingDocsUrlError",
    "MissingTokenError",
    "InvalidConfigurationError",
    # Transport
    "TransportError",
    "HttpConnectionError",
    "HttpTimeoutError",
    "HttpStatusError",
    # Spec
    "SpecError",
    "SpecNotFoundError",
    "InvalidSpecError",
    # Rendering
    "RenderingError",
    "RendererUnavailableError",
    "RenderFailedError",
    # Validation
    "ValidationError",
    "EmptyQueryError",
    "InvalidMaxResultsError",
    # Retrieval
    "RetrievalError",
    "FetchFailedError",
]
