"""HTTP transport built on httpx."""

from .client import close_all_clients, get_httpx_client
from .sse import iter_sse_events
from .transport import HttpxTransport

__all__ = ["close_all_clients", "get_httpx_client", "iter_sse_events", "HttpxTransport"]
