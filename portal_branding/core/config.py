"""Client configuration using pydantic settings with structured sections."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_FOOTER_TEXT = "© 2024 Eclipse Tractus-X. All rights reserved."
DEFAULT_LOGO_PATH = "/images/logos/cx-text.svg"


class BackendSettings(BaseModel):
    base_url: str = "http://localhost:8080"
    assets_path: str = "/api/administration/branding/assets"
    timeout_seconds: float = Field(default=10.0, gt=0)


class FallbackSettings(BaseModel):
    asset_base: str = ""
    logo_url: Optional[str] = None
    footer_text: str = DEFAULT_FOOTER_TEXT

    @property
    def resolved_logo_url(self) -> str:
        if self.logo_url and self.logo_url.strip():
            return self.logo_url
        return f"{self.asset_base.rstrip('/')}{DEFAULT_LOGO_PATH}"


class UploadSettings(BaseModel):
    max_logo_bytes: int = Field(default=2 * 1024 * 1024, gt=0)


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    """Top-level client settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Portal Branding Client"

    backend: BackendSettings = BackendSettings()
    fallback: FallbackSettings = FallbackSettings()
    upload: UploadSettings = UploadSettings()
    logging: LoggingSettings = LoggingSettings()

    @property
    def assets_url(self) -> str:
        return self.backend.base_url.rstrip("/") + "/" + self.backend.assets_path.strip("/")

    @property
    def timeout_seconds(self) -> float:
        return self.backend.timeout_seconds

    @property
    def logo_fallback_url(self) -> str:
        return self.fallback.resolved_logo_url

    @property
    def footer_fallback_text(self) -> str:
        return self.fallback.footer_text

    @property
    def max_logo_bytes(self) -> int:
        return self.upload.max_logo_bytes


@lru_cache()
def get_settings() -> Settings:
    return Settings()
