"""Port interfaces implemented by outbound adapters."""

from .http_port import HttpTransportPort
from .renderer_port import HeadlessRendererPort

__all__ = ["HttpTransportPort", "HeadlessRendererPort"]
