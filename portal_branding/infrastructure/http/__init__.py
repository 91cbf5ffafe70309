"""HTTP transport infrastructure."""

from .session import build_http_client

__all__ = ["build_http_client"]
