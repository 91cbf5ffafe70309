"""Domain models for branding assets and their resolution state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Union

from portal_branding.core.config import Settings


class AssetType(str, Enum):
    LOGO = "logo"
    FOOTER = "footer"


class Source(str, Enum):
    REMOTE = "remote"
    FALLBACK = "fallback"


# Field that carries the displayable value for each asset type.
FIELD_SELECTORS: dict[AssetType, str] = {
    AssetType.LOGO: "url",
    AssetType.FOOTER: "text",
}


@dataclass(slots=True)
class BrandingAsset:
    asset_type: AssetType
    content_type: Optional[str] = None
    file_name: Optional[str] = None
    text: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "BrandingAsset":
        if not isinstance(payload, Mapping):
            raise TypeError(f"expected an asset object, got {type(payload).__name__}")
        return cls(
            asset_type=AssetType(payload["assetType"]),
            content_type=payload.get("contentType"),
            file_name=payload.get("fileName"),
            text=payload.get("text"),
            url=payload.get("url"),
        )

    def to_payload(self) -> dict[str, Any]:
        data: dict[str, Any] = {"assetType": self.asset_type.value}
        for key, value in (
            ("contentType", self.content_type),
            ("fileName", self.file_name),
            ("text", self.text),
            ("url", self.url),
        ):
            if value is not None:
                data[key] = value
        return data

    def selected_value(self) -> Any:
        return getattr(self, FIELD_SELECTORS[self.asset_type])


@dataclass(slots=True)
class AssetCollection:
    assets: list[BrandingAsset] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "AssetCollection":
        if not isinstance(payload, Mapping):
            raise TypeError(f"expected an asset collection object, got {type(payload).__name__}")
        items = payload.get("assets") or []
        return cls(assets=[BrandingAsset.from_payload(item) for item in items])

    def get(self, asset_type: AssetType) -> BrandingAsset | None:
        for asset in self.assets:
            if asset.asset_type == asset_type:
                return asset
        return None


@dataclass(slots=True)
class AssetPayload:
    """Body of a write: binary file content for logos, literal text for footers."""

    content: Optional[bytes] = None
    file_name: Optional[str] = None
    content_type: Optional[str] = None
    text: Optional[str] = None

    @classmethod
    def from_file(cls, content: bytes, file_name: str, content_type: str) -> "AssetPayload":
        return cls(content=content, file_name=file_name, content_type=content_type)

    @classmethod
    def from_text(cls, text: str) -> "AssetPayload":
        return cls(text=text)

    @property
    def is_file(self) -> bool:
        return self.content is not None


@dataclass(frozen=True, slots=True)
class Success:
    asset: BrandingAsset


@dataclass(frozen=True, slots=True)
class Absent:
    pass


@dataclass(frozen=True, slots=True)
class Failure:
    error: BaseException

    @property
    def message(self) -> str:
        return str(self.error) or type(self.error).__name__


FetchOutcome = Union[Success, Absent, Failure]


@dataclass(frozen=True, slots=True)
class FallbackDefaults:
    logo_url: str
    footer_text: str

    def __post_init__(self) -> None:
        for asset_type in AssetType:
            value = self.value_for(asset_type)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"fallback for {asset_type.value} must be a non-empty string")

    @classmethod
    def from_settings(cls, settings: Settings) -> "FallbackDefaults":
        return cls(
            logo_url=settings.logo_fallback_url,
            footer_text=settings.footer_fallback_text,
        )

    def value_for(self, asset_type: AssetType) -> str:
        if asset_type is AssetType.LOGO:
            return self.logo_url
        if asset_type is AssetType.FOOTER:
            return self.footer_text
        raise ValueError(f"no fallback configured for {asset_type!r}")


@dataclass(frozen=True, slots=True)
class ResolutionOutcome:
    display_value: str
    source: Source
    error: Optional[str] = None


@dataclass(frozen=True, slots=True)
class BatchState:
    loading: bool
    per_type_outcome: Mapping[AssetType, ResolutionOutcome]
    aggregate_error: Optional[str] = None
    round_id: int = 0

    def display_value(self, asset_type: AssetType) -> str:
        return self.per_type_outcome[asset_type].display_value


@dataclass(frozen=True, slots=True)
class SpecificAssetState:
    asset_type: AssetType
    asset: Optional[BrandingAsset]
    error: Optional[str] = None


@dataclass(frozen=True, slots=True)
class MutationResult:
    asset_type: AssetType
    asset: Optional[BrandingAsset] = None
    refresh_required: bool = True
