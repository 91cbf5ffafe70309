"""Simple dependency container for wiring the branding client."""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from functools import lru_cache
from typing import AsyncIterator, Iterable, Optional

import httpx

from portal_branding.core.config import Settings, get_settings
from portal_branding.core.logging_config import configure_logging
from portal_branding.infrastructure.http import build_http_client
from portal_branding.modules.branding import (
    AssetClient,
    AssetType,
    FallbackDefaults,
    MutationGateway,
    ResolutionCoordinator,
)
from portal_branding.modules.branding.gateway import CapabilityPredicate, CredentialProvider


def _no_credentials() -> Optional[str]:
    return None


@dataclass(slots=True)
class BrandingSession:
    """Everything one consumer needs; torn down together when the consumer goes away."""

    client: AssetClient
    coordinator: ResolutionCoordinator
    gateway: MutationGateway


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    defaults: FallbackDefaults = field(init=False)

    def __post_init__(self) -> None:
        self.defaults = FallbackDefaults.from_settings(self.settings)

    def init_infrastructure(self) -> None:
        """Ensure process-wide concerns (logging) are initialised."""
        configure_logging(self.settings)

    @asynccontextmanager
    async def session(
        self,
        *,
        credentials: CredentialProvider = _no_credentials,
        capability: Optional[CapabilityPredicate] = None,
        asset_types: Optional[Iterable[AssetType]] = None,
        http: Optional[httpx.AsyncClient] = None,
    ) -> AsyncIterator[BrandingSession]:
        owns_http = http is None
        http_client = build_http_client(self.settings) if http is None else http
        client = AssetClient.from_settings(http_client, self.settings)
        session = BrandingSession(
            client=client,
            coordinator=ResolutionCoordinator(client, self.defaults, asset_types),
            gateway=MutationGateway(
                client,
                credentials,
                capability,
                max_logo_bytes=self.settings.max_logo_bytes,
            ),
        )
        try:
            yield session
        finally:
            session.coordinator.close()
            if owns_http:
                await http_client.aclose()


@lru_cache()
def get_container() -> ApplicationContainer:
    container = ApplicationContainer(settings=get_settings())
    container.init_infrastructure()
    return container


__all__ = ["ApplicationContainer", "BrandingSession", "get_container"]
