from __future__ import annotations

import pytest

from fake_backend import ASSETS_PATH, BASE_URL, BrandingStore, create_access_token, create_backend
from portal_branding.core.config import BackendSettings, FallbackSettings, Settings
from portal_branding.core.container import ApplicationContainer
from portal_branding.modules.branding import FallbackDefaults

FALLBACK_ASSET_BASE = "https://portal.example.test/assets"
FALLBACK_LOGO = FALLBACK_ASSET_BASE + "/images/logos/cx-text.svg"
FALLBACK_FOOTER = "© 2024 Eclipse Tractus-X. All rights reserved."


@pytest.fixture
def store() -> BrandingStore:
    return BrandingStore()


@pytest.fixture
def backend_app(store):
    return create_backend(store)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        environment="test",
        backend=BackendSettings(base_url=BASE_URL, assets_path=ASSETS_PATH),
        fallback=FallbackSettings(asset_base=FALLBACK_ASSET_BASE),
    )


@pytest.fixture
def defaults(settings) -> FallbackDefaults:
    return FallbackDefaults.from_settings(settings)


@pytest.fixture
def container(settings) -> ApplicationContainer:
    return ApplicationContainer(settings=settings)


@pytest.fixture
def admin_token() -> str:
    return create_access_token("operator-1", "admin")


@pytest.fixture
def viewer_token() -> str:
    return create_access_token("viewer-1", "viewer")
