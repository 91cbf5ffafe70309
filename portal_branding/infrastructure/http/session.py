"""Async HTTP client construction for the branding backend."""

from __future__ import annotations

from typing import Any

import httpx

from portal_branding.core.config import Settings


def build_http_client(settings: Settings, **overrides: Any) -> httpx.AsyncClient:
    client_kwargs: dict[str, Any] = {
        "timeout": httpx.Timeout(settings.timeout_seconds),
        "headers": {"Accept": "application/json"},
    }
    client_kwargs.update(overrides)
    return httpx.AsyncClient(**client_kwargs)
