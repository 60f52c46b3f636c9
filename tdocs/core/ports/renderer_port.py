"""Headless Renderer Port Interface."""

from abc import ABC, abstractmethod

from ..domain import RenderResult


class HeadlessRendererPort(ABC):
    """Abstract interface for a headless browser capable of rendering SPAs."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether a browser engine is installed (cheap, cacheable)."""
        ...

    @abstractmethod
    def render_swagger_aware(
        self,
        url: str,
        timeout: float = 30.0,
        *,
        wait_for_selector: str | None = None,
        extra_wait: float = 2.0,
    ) -> RenderResult:
        """Render a page, preferring the in-memory Swagger spec over page text."""
        ...
