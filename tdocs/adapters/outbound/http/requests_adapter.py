"""HTTP transport adapter built on a requests Session."""

import logging
from collections.abc import Mapping
from typing import Any

import requests

from ....core.domain.exceptions import (
    HttpConnectionError,
    HttpStatusError,
    HttpTimeoutError,
    TransportError,
)
from ....core.ports import HttpTransportPort

logger = logging.getLogger(__name__)

# Seconds
DEFAULT_TIMEOUT = 10.0


class RequestsHttpAdapter(HttpTransportPort):
    """Authenticated HTTP client for documentation hosts.

    Every request carries ``Authorization: Bearer <token>`` and a JSON
    content type. Responses served as JSON are decoded before returning.
    """

    def __init__(
        self,
        jwt_token: str = "",
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            jwt_token: Bearer token sent with every request.
            timeout: Default timeout in seconds.
            session: Pre-configured session (a new one is created if omitted).
        """
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if jwt_token:
            self.session.headers.update({"Authorization": f"Bearer {jwt_token}"})

    def __enter__(self) -> "RequestsHttpAdapter":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close session."""
        self.close()

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            self.session.close()

    def get(
        self,
        url: str,
        *,
        timeout: float | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> str | dict[str, Any] | list[Any]:
        """GET a URL and return its body.

        Args:
            url: URL to fetch.
            timeout: Timeout in seconds (adapter default when None).
            headers: Extra headers for this request.

        Returns:
            Decoded JSON for JSON responses, otherwise the response text.

        Raises:
            HttpConnectionError: If the host cannot be reached.
            HttpTimeoutError: If the request times out.
            HttpStatusError: If the response status is 4xx/5xx.
        """
        response = self._request(
            "GET", url, timeout=timeout, headers=dict(headers) if headers else None
        )

        content_type = response.headers.get("Content-Type", "")
        if "json" in content_type.lower():
            try:
                return response.json()
            except ValueError:
                logger.debug("Response from %s claims JSON but does not parse", url)
        return response.text

    def head(
        self,
        url: str,
        *,
        timeout: float | None = None,
        accept_only_200: bool = True,
    ) -> Mapping[str, str]:
        """HEAD a URL and return its response headers.

        Args:
            url: URL to check.
            timeout: Timeout in seconds (adapter default when None).
            accept_only_200: Treat any status other than 200 as an error.

        Raises:
            HttpStatusError: On an unaccepted status code.
        """
        response = self._request("HEAD", url, timeout=timeout, allow_redirects=True)
        if accept_only_200 and response.status_code != 200:
            raise HttpStatusError(
                f"Unexpected status {response.status_code} for {url}",
                status_code=response.status_code,
                context={"url": url},
            )
        return response.headers

    def _request(
        self, method: str, url: str, *, timeout: float | None, **kwargs: Any
    ) -> requests.Response:
        effective_timeout = timeout if timeout is not None else self.timeout
        context = {"url": url, "method": method}

        try:
            response = self.session.request(method, url, timeout=effective_timeout, **kwargs)
            response.raise_for_status()
        except requests.Timeout as e:
            raise HttpTimeoutError(
                f"Request timed out after {effective_timeout:g}s", cause=e, context=context
            ) from e
        except requests.ConnectionError as e:
            raise HttpConnectionError(f"Connection failed: {e}", cause=e, context=context) from e
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else 0
            raise HttpStatusError(
                f"Request failed with status code {status_code}",
                status_code=status_code,
                cause=e,
                context=context,
            ) from e
        except requests.RequestException as e:
            raise TransportError(f"Request failed: {e}", cause=e, context=context) from e

        return response
