"""Models describing how a documentation URL was fetched."""

from dataclasses import dataclass, field
from enum import Enum

from .document import Document


class ContentType(str, Enum):
    """Kind of content produced by the fetch pipeline."""

    MARKDOWN = "markdown"
    HTML = "html"
    JSON = "json"
    OPENAPI = "openapi"
    TEXT = "text"
    UNKNOWN = "unknown"


class FetchMethod(str, Enum):
    """Strategy that produced a fetch result."""

    DIRECT = "direct"
    OPENAPI_SPEC = "openapi_spec"
    HEADLESS = "headless"
    HTML_EXTRACT = "html_extract"


class SpecType(str, Enum):
    """Serialization of an OpenAPI spec document."""

    JSON = "json"
    YAML = "yaml"


@dataclass
class SmartFetchResult:
    """Terminal outcome of the fetch decision pipeline.

    Exactly one is produced per fetch. ``success`` is False only when every
    strategy failed.

    Attributes:
        success: Whether usable content was obtained.
        url: The documentation URL that was requested.
        content_type: Kind of content in ``content``.
        method: Strategy that produced the content.
        content: Extracted text, Markdown or HTML.
        error: Failure reason when unsuccessful.
        spec_url: Absolute URL of the OpenAPI spec, when one was used.
        cause: Exception that made the direct fetch fail.
    """

    success: bool
    url: str
    content_type: ContentType = ContentType.UNKNOWN
    method: FetchMethod = FetchMethod.DIRECT
    content: str | None = None
    error: str | None = None
    spec_url: str | None = None
    cause: Exception | None = field(default=None, repr=False, compare=False)

    def to_document(self) -> Document:
        """Wrap the fetched content as a Document for searching."""
        return Document(
            content=self.content or "",
            content_type=self.content_type.value,
            url=self.url,
        )


@dataclass(frozen=True)
class SmartFetchOptions:
    """Tuning knobs for SmartFetchService.fetch.

    Timeouts are expressed in seconds.
    """

    http_timeout: float = 10.0
    headless_timeout: float = 30.0
    try_openapi_spec: bool = True
    use_headless_fallback: bool = True
    try_common_endpoints: bool = True
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class SwaggerDetectionResult:
    """Whether a page is a Swagger/OpenAPI UI and where its spec lives."""

    is_swagger: bool
    spec_url: str | None = None
    spec_type: SpecType | None = None
    detection_method: str | None = None


@dataclass(frozen=True)
class SpecLocation:
    """A spec endpoint that answered an existence check."""

    spec_url: str
    spec_type: SpecType


@dataclass
class RenderResult:
    """Result returned by a headless renderer.

    Attributes:
        success: Whether the page could be rendered.
        method: Engine used ("playwright" or "unavailable").
        html: Rendered HTML, or the raw spec JSON when a spec was recovered.
        text: Visible text, or spec Markdown when a spec was recovered.
        error: Failure reason when unsuccessful.
        spec_found: True when ``text`` is a rendered OpenAPI spec.
    """

    success: bool
    method: str = "playwright"
    html: str | None = None
    text: str | None = None
    error: str | None = None
    spec_found: bool = False


@dataclass
class HeadlessSupport:
    """Availability report for headless rendering."""

    available: bool
    method: str
    message: str
