"""Branding asset domain exports."""

from .client import AssetClient
from .coordinator import AssetReader, ResolutionCoordinator
from .exceptions import (
    AuthError,
    BrandingError,
    CapabilityError,
    InvalidPayloadError,
    PreconditionError,
    SessionClosedError,
    TransportError,
    ValidationError,
)
from .gateway import MutationGateway, role_capability
from .models import (
    Absent,
    AssetCollection,
    AssetPayload,
    AssetType,
    BatchState,
    BrandingAsset,
    Failure,
    FallbackDefaults,
    FetchOutcome,
    MutationResult,
    ResolutionOutcome,
    Source,
    SpecificAssetState,
    Success,
)
from .resolver import resolve, resolve_outcome

__all__ = [
    "Absent",
    "AssetClient",
    "AssetCollection",
    "AssetPayload",
    "AssetReader",
    "AssetType",
    "AuthError",
    "BatchState",
    "BrandingAsset",
    "BrandingError",
    "CapabilityError",
    "Failure",
    "FallbackDefaults",
    "FetchOutcome",
    "InvalidPayloadError",
    "MutationGateway",
    "MutationResult",
    "PreconditionError",
    "ResolutionCoordinator",
    "ResolutionOutcome",
    "SessionClosedError",
    "Source",
    "SpecificAssetState",
    "Success",
    "TransportError",
    "ValidationError",
    "resolve",
    "resolve_outcome",
    "role_capability",
]
