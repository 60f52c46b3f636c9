"""HTTP Transport Port Interface."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class HttpTransportPort(ABC):
    """Abstract interface for the HTTP client used by the fetch pipeline.

    Implementations raise ``HttpConnectionError``, ``HttpTimeoutError`` or
    ``HttpStatusError`` so callers can tell the failure families apart.
    """

    @abstractmethod
    def get(
        self,
        url: str,
        *,
        timeout: float | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> str | dict[str, Any] | list[Any]:
        """Fetch a URL; JSON bodies are returned already decoded."""
        ...

    @abstractmethod
    def head(
        self,
        url: str,
        *,
        timeout: float | None = None,
        accept_only_200: bool = True,
    ) -> Mapping[str, str]:
        """Issue an existence check and return the response headers."""
        ...
