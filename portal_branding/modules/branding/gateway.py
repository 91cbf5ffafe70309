"""Credential-gated write operations for branding assets."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Collection, Iterable, Optional, Protocol

from .exceptions import CapabilityError, InvalidPayloadError, PreconditionError
from .models import AssetPayload, AssetType, BrandingAsset, MutationResult

logger = logging.getLogger(__name__)

CredentialProvider = Callable[[], Optional[str]]
CapabilityPredicate = Callable[[], bool]

DEFAULT_MAX_LOGO_BYTES = 2 * 1024 * 1024


class AssetWriter(Protocol):
    async def upload(self, asset_type: AssetType, payload: AssetPayload, token: Optional[str]) -> BrandingAsset:
        ...

    async def update(self, asset_type: AssetType, payload: AssetPayload, token: Optional[str]) -> BrandingAsset:
        ...

    async def remove(self, asset_type: AssetType, token: Optional[str]) -> None:
        ...


def role_capability(roles_provider: Callable[[], Iterable[str]], allowed_roles: Collection[str]) -> CapabilityPredicate:
    """Build a capability check from the role set the identity layer supplies."""
    allowed = frozenset(allowed_roles)

    def _check() -> bool:
        return any(role in allowed for role in roles_provider() or ())

    return _check


@dataclass(slots=True)
class MutationGateway:
    """Attaches the caller's credential to writes and refuses them early when it cannot succeed.

    The capability predicate only approximates authorization; the backend's
    401/403 answer (``AuthError``) stays authoritative. Successful writes do
    not refresh resolved branding: callers invoke ``refresh`` themselves,
    once after a batch of writes if they like.
    """

    writer: AssetWriter
    credentials: CredentialProvider
    capability: Optional[CapabilityPredicate] = None
    max_logo_bytes: int = DEFAULT_MAX_LOGO_BYTES

    def can_manage(self) -> bool:
        try:
            token = self.credentials()
            if not token:
                return False
            return self.capability() if self.capability is not None else True
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("Error checking branding assets permission: %s", exc)
            return False

    async def upload(self, asset_type: AssetType, payload: AssetPayload) -> MutationResult:
        token = self._authorize(f"upload {asset_type.value} asset")
        self._check_payload(asset_type, payload)
        asset = await self.writer.upload(asset_type, payload, token)
        logger.info("Uploaded %s branding asset", asset_type.value)
        return MutationResult(asset_type=asset_type, asset=asset)

    async def update(self, asset_type: AssetType, payload: AssetPayload) -> MutationResult:
        token = self._authorize(f"update {asset_type.value} asset")
        self._check_payload(asset_type, payload)
        asset = await self.writer.update(asset_type, payload, token)
        logger.info("Updated %s branding asset", asset_type.value)
        return MutationResult(asset_type=asset_type, asset=asset)

    async def remove(self, asset_type: AssetType) -> MutationResult:
        token = self._authorize(f"delete {asset_type.value} asset")
        await self.writer.remove(asset_type, token)
        logger.info("Deleted %s branding asset", asset_type.value)
        return MutationResult(asset_type=asset_type)

    async def upload_logo(self, content: bytes, file_name: str, content_type: str) -> MutationResult:
        return await self.upload(AssetType.LOGO, AssetPayload.from_file(content, file_name, content_type))

    async def set_footer_text(self, text: str, *, create: bool = False) -> MutationResult:
        payload = AssetPayload.from_text(text)
        if create:
            return await self.upload(AssetType.FOOTER, payload)
        return await self.update(AssetType.FOOTER, payload)

    def _authorize(self, action: str) -> str:
        token = self.credentials()
        if not token:
            raise PreconditionError(f"Cannot {action}: no credential available")
        if self.capability is not None and not self.capability():
            raise CapabilityError(f"Cannot {action}: caller may not manage branding assets")
        return token

    def _check_payload(self, asset_type: AssetType, payload: AssetPayload) -> None:
        if asset_type is AssetType.LOGO:
            if not payload.is_file:
                raise InvalidPayloadError("Logo uploads require file content")
            if not (payload.content_type or "").startswith("image/"):
                raise InvalidPayloadError("Please select a valid image file.")
            if len(payload.content or b"") > self.max_logo_bytes:
                raise InvalidPayloadError(f"File size must not exceed {self.max_logo_bytes} bytes.")
        elif asset_type is AssetType.FOOTER:
            if payload.text is None or not payload.text.strip():
                raise InvalidPayloadError("Footer text must not be empty")
