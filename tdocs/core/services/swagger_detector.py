"""Swagger/OpenAPI UI detection and spec discovery.

Swagger UI, ReDoc and Stoplight pages are rendered client-side, so the HTML
returned by a plain GET carries almost no documentation. The spec they
render from is usually reachable directly: either referenced in the page
bootstrap script or served from one of a handful of conventional paths.
"""

import json
import logging
import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import urljoin, urlsplit

import yaml

from ..domain import SpecLocation, SpecType, SwaggerDetectionResult
from ..domain.exceptions import TDocsError
from ..ports import HttpTransportPort
from .html_chunker import decode_html_entities

logger = logging.getLogger(__name__)

SWAGGER_UI_MARKER = re.compile(r"swagger-ui|swagger-ui-bundle|SwaggerUIBundle", re.IGNORECASE)
REDOC_MARKER = re.compile(r"redoc|ReDoc", re.IGNORECASE)
STOPLIGHT_MARKER = re.compile(r"stoplight", re.IGNORECASE)

# Tried in order, first match wins
SPEC_URL_PATTERNS = (
    re.compile(r"""SwaggerUIBundle\s*\(\s*\{[^}]*url\s*:\s*["']([^"']+)["']""", re.IGNORECASE),
    re.compile(r"""swagger-ui[^>]*url\s*=\s*["']([^"']+)["']""", re.IGNORECASE),
    re.compile(r"""spec\s*:\s*["']([^"']+)["']""", re.IGNORECASE),
    re.compile(r"""configUrl\s*:\s*["']([^"']+)["']""", re.IGNORECASE),
    re.compile(r'''"url"\s*:\s*"([^"]+\.(?:json|yaml|yml))"''', re.IGNORECASE),
    re.compile(r"""data-url\s*=\s*["']([^"']+)["']""", re.IGNORECASE),
)

ROOT_SPEC_ENDPOINTS = (
    "/swagger.json",
    "/swagger.yaml",
    "/openapi.json",
    "/openapi.yaml",
    "/docs.json",
    "/spec.json",
    "/api-docs",
    "/api-docs.json",
    "/api-docs.yaml",
    "/v3/api-docs",
    "/v3/api-docs.json",
    "/v2/api-docs",
    "/v2/api-docs.json",
    "/docs/openapi.json",
    "/docs/swagger.json",
    "/api/swagger.json",
    "/api/openapi.json",
    "/api/docs.json",
    "/.well-known/openapi.json",
    "/.well-known/openapi.yaml",
)

# Appended to the current path; "../" entries go against its parent
RELATIVE_SPEC_SUFFIXES = (
    "docs.json",
    "swagger.json",
    "openapi.json",
    "spec.json",
    "api-docs.json",
    "docs.yaml",
    "swagger.yaml",
    "openapi.yaml",
    "../swagger.json",
    "../openapi.json",
    "../docs.json",
    "../api-docs.json",
)

SIBLING_SPEC_FILES = ("swagger.json", "openapi.json", "docs.json", "api-docs.json", "spec.json")
PREFIX_SPEC_FILES = ("swagger.json", "openapi.json", "docs.json", "api-docs.json")

SPEC_ACCEPT_HEADER = "application/json, application/yaml, text/yaml, */*"


def _spec_type_for_url(url: str) -> SpecType:
    if url.endswith((".yaml", ".yml")):
        return SpecType.YAML
    return SpecType.JSON


def detect_swagger(html: str, page_url: str) -> SwaggerDetectionResult:
    """Detect a Swagger UI, ReDoc or Stoplight page and locate its spec.

    Args:
        html: Page HTML as returned by the server.
        page_url: URL the page was fetched from; relative spec URLs are
            resolved against it.

    Returns:
        SwaggerDetectionResult; ``spec_url`` is only set when the page
        references its spec explicitly.
    """
    is_swagger = bool(
        SWAGGER_UI_MARKER.search(html) or REDOC_MARKER.search(html) or STOPLIGHT_MARKER.search(html)
    )
    if not is_swagger:
        return SwaggerDetectionResult(is_swagger=False)

    for pattern in SPEC_URL_PATTERNS:
        match = pattern.search(html)
        if match and match.group(1):
            spec_url = _resolve_url(page_url, decode_html_entities(match.group(1)))
            logger.debug("Spec URL %s found with pattern %s", spec_url, pattern.pattern)
            return SwaggerDetectionResult(
                is_swagger=True,
                spec_url=spec_url,
                spec_type=_spec_type_for_url(spec_url),
                detection_method="pattern_match",
            )

    return SwaggerDetectionResult(is_swagger=True)


def _resolve_url(page_url: str, raw_url: str) -> str:
    try:
        return urljoin(page_url, raw_url)
    except ValueError:
        # Malformed reference, e.g. an unclosed IPv6 bracket
        logger.debug("Could not resolve spec URL %s against %s", raw_url, page_url)
        return raw_url


def _origin(url: str) -> str:
    parts = urlsplit(url)
    host = parts.netloc.rsplit("@", 1)[-1]
    return f"{parts.scheme}://{host}"


def _join(origin: str, segments: list[str], file_name: str) -> str:
    return "/".join([origin, *segments, file_name])


def generate_spec_urls(base_url: str) -> list[str]:
    """Build candidate spec URLs relative to a documentation page.

    For ``https://host/api/v1/docs`` this yields ``/api/v1/docs/<file>``,
    ``/api/v1/<file>`` (parent and sibling files) and ``/api/v1/<file>``
    (first two segments), without duplicates and in that order.

    Args:
        base_url: Absolute URL of the documentation page.

    Returns:
        Candidate URLs, most specific first.
    """
    origin = _origin(base_url)
    segments = [segment for segment in urlsplit(base_url).path.split("/") if segment]
    parent = segments[:-1]

    urls: list[str] = []
    for suffix in RELATIVE_SPEC_SUFFIXES:
        if suffix.startswith("../"):
            urls.append(_join(origin, parent, suffix[3:]))
        else:
            urls.append(_join(origin, segments, suffix))

    if segments:
        urls.extend(_join(origin, parent, file_name) for file_name in SIBLING_SPEC_FILES)

    if len(segments) >= 2:
        urls.extend(_join(origin, segments[:2], file_name) for file_name in PREFIX_SPEC_FILES)

    return list(dict.fromkeys(urls))


def _header(headers: Mapping[str, str], name: str) -> str:
    for key, value in headers.items():
        if key.lower() == name:
            return value or ""
    return ""


class SwaggerSpecLocator:
    """Finds and downloads OpenAPI specs over HTTP."""

    def __init__(self, http: HttpTransportPort) -> None:
        """Initialize the locator.

        Args:
            http: Transport used for HEAD checks and spec downloads.
        """
        self.http = http

    def discover_common_spec_endpoints(
        self, base_url: str, timeout: float = 5.0
    ) -> SpecLocation | None:
        """Look for a spec at conventional locations.

        Candidates derived from the page path are tried first, then the
        well-known endpoints at the root of the host.

        Args:
            base_url: Documentation page URL.
            timeout: Per-request timeout in seconds.

        Returns:
            The first candidate that answers 200 with a spec-like content
            type or file extension, or None.
        """
        origin = _origin(base_url)
        candidates = generate_spec_urls(base_url)
        candidates.extend(f"{origin}{endpoint}" for endpoint in ROOT_SPEC_ENDPOINTS)

        for spec_url in candidates:
            result = self._try_spec(spec_url, timeout)
            if result is not None:
                logger.info("Found spec endpoint %s", spec_url)
                return result

        logger.debug("No spec endpoint answered for %s (%d candidates)", base_url, len(candidates))
        return None

    def _try_spec(self, spec_url: str, timeout: float) -> SpecLocation | None:
        try:
            headers = self.http.head(spec_url, timeout=timeout, accept_only_200=True)
        except TDocsError as e:
            logger.debug("HEAD %s failed: %s", spec_url, e)
            return None

        content_type = _header(headers, "content-type").lower()
        if "yaml" in content_type or "yml" in content_type:
            return SpecLocation(spec_url=spec_url, spec_type=SpecType.YAML)
        if "json" in content_type:
            return SpecLocation(spec_url=spec_url, spec_type=SpecType.JSON)

        if spec_url.endswith((".json", ".yaml", ".yml")):
            return SpecLocation(spec_url=spec_url, spec_type=_spec_type_for_url(spec_url))
        return None

    def fetch_openapi_spec(self, spec_url: str, timeout: float = 10.0) -> dict[str, Any] | None:
        """Download and parse a spec document.

        Args:
            spec_url: Absolute spec URL.
            timeout: Request timeout in seconds.

        Returns:
            The parsed spec. YAML text that does not parse to a mapping is
            returned as ``{"_rawYaml": text}``. None when the download fails.
        """
        try:
            data = self.http.get(spec_url, timeout=timeout, headers={"Accept": SPEC_ACCEPT_HEADER})
        except TDocsError as e:
            logger.warning("Could not fetch spec %s: %s", spec_url, e)
            return None

        if isinstance(data, Mapping):
            return dict(data)
        if isinstance(data, str):
            return parse_spec_text(data)
        return None


def parse_spec_text(text: str) -> dict[str, Any]:
    """Parse a spec served as text, trying JSON before YAML."""
    try:
        parsed = json.loads(text)
    except ValueError:
        try:
            parsed = yaml.safe_load(text)
        except yaml.YAMLError:
            logger.debug("Spec is neither JSON nor YAML, keeping raw text")
            return {"_rawYaml": text}

    if isinstance(parsed, Mapping):
        return dict(parsed)
    return {"_rawYaml": text}
