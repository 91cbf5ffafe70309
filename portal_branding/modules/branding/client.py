"""HTTP client for the branding assets endpoints."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

import httpx

from portal_branding.core.config import Settings

from .exceptions import AuthError, PreconditionError, TransportError, ValidationError
from .models import AssetCollection, AssetPayload, AssetType, BrandingAsset

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True)
class AssetClient:
    http: httpx.AsyncClient
    assets_url: str

    @classmethod
    def from_settings(cls, http: httpx.AsyncClient, settings: Settings) -> "AssetClient":
        return cls(http, settings.assets_url)

    async def list_all(self) -> AssetCollection:
        response = await self._send("GET", self.assets_url, action="list branding assets")
        _raise_for_status(response, "list branding assets")
        return _decode(response, "list branding assets", AssetCollection.from_payload)

    async def get_by_type(self, asset_type: AssetType) -> BrandingAsset | None:
        action = f"fetch {asset_type.value} asset"
        response = await self._send("GET", self._type_url(asset_type), action=action)
        if response.status_code == 404:
            return None
        _raise_for_status(response, action)
        return _decode(response, action, BrandingAsset.from_payload)

    async def upload(self, asset_type: AssetType, payload: AssetPayload, token: Optional[str]) -> BrandingAsset:
        action = f"upload {asset_type.value} asset"
        headers = _auth_headers(token, action)
        response = await self._send(
            "POST",
            self.assets_url,
            action=action,
            headers=headers,
            files=_multipart(asset_type, payload),
        )
        _raise_for_status(response, action)
        return _decode(response, action, BrandingAsset.from_payload)

    async def update(self, asset_type: AssetType, payload: AssetPayload, token: Optional[str]) -> BrandingAsset:
        action = f"update {asset_type.value} asset"
        headers = _auth_headers(token, action)
        response = await self._send(
            "PUT",
            self._type_url(asset_type),
            action=action,
            headers=headers,
            files=_multipart(asset_type, payload),
        )
        _raise_for_status(response, action)
        return _decode(response, action, BrandingAsset.from_payload)

    async def remove(self, asset_type: AssetType, token: Optional[str]) -> None:
        action = f"delete {asset_type.value} asset"
        headers = _auth_headers(token, action)
        response = await self._send("DELETE", self._type_url(asset_type), action=action, headers=headers)
        _raise_for_status(response, action)

    def _type_url(self, asset_type: AssetType) -> str:
        return f"{self.assets_url.rstrip('/')}/{asset_type.value}"

    async def _send(self, method: str, url: str, *, action: str, **kwargs: Any) -> httpx.Response:
        logger.debug("%s %s", method, url)
        try:
            return await self.http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise TransportError(f"Failed to {action}: {exc}") from exc


def _auth_headers(token: Optional[str], action: str) -> dict[str, str]:
    if not token:
        raise PreconditionError(f"Cannot {action}: no credential available")
    return {"Authorization": f"Bearer {token}"}


def _multipart(asset_type: AssetType, payload: AssetPayload) -> dict[str, tuple[Any, ...]]:
    # Every part goes through ``files`` so httpx always encodes multipart/form-data.
    parts: dict[str, tuple[Any, ...]] = {"AssetType": (None, asset_type.value.encode("utf-8"))}
    if payload.is_file:
        parts["File"] = (
            payload.file_name or asset_type.value,
            payload.content,
            payload.content_type or "application/octet-stream",
        )
    if payload.text is not None:
        parts["Text"] = (None, payload.text.encode("utf-8"))
    return parts


def _raise_for_status(response: httpx.Response, action: str) -> None:
    if response.is_success:
        return

    status = response.status_code
    body = response.text
    reason = response.reason_phrase or "error"
    if status == 400:
        raise ValidationError(body or f"Failed to {action}: {reason}", status=status, body=body)
    message = f"Failed to {action}: {status} {reason}"
    if body:
        message = f"{message} - {body}"
    if status in (401, 403):
        raise AuthError(message, status=status, body=body)
    raise TransportError(message, status=status, body=body)


def _decode(response: httpx.Response, action: str, parse: Callable[[Any], T]) -> T:
    try:
        return parse(response.json())
    except (ValueError, KeyError, TypeError) as exc:
        raise TransportError(
            f"Failed to {action}: unexpected response body",
            status=response.status_code,
            body=response.text,
        ) from exc
