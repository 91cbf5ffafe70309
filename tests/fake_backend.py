"""In-process branding backend used by the tests."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import httpx
from fastapi import Depends, FastAPI, File, Form, HTTPException, Request, Response, UploadFile, status
from fastapi.responses import PlainTextResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

SECRET_KEY = "branding-test-secret"
ALGORITHM = "HS256"
ASSETS_PATH = "/api/administration/branding/assets"
BASE_URL = "http://testserver"
ADMIN_ROLES = {"admin", "super_admin"}
MAX_LOGO_BYTES = 2 * 1024 * 1024


def create_access_token(subject: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    payload = {
        "sub": subject,
        "role": role,
        "exp": datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=30)),
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


@dataclass
class RecordedRequest:
    method: str
    path: str
    authorization: Optional[str]


@dataclass
class BrandingStore:
    assets: dict[str, dict[str, Any]] = field(default_factory=dict)
    failures: dict[str, int] = field(default_factory=dict)
    delays: dict[str, float] = field(default_factory=dict)
    requests: list[RecordedRequest] = field(default_factory=list)
    revision: int = 0

    def put_logo(self, url: str, file_name: str = "logo.svg", content_type: str = "image/svg+xml") -> None:
        self.assets["logo"] = {
            "assetType": "logo",
            "contentType": content_type,
            "fileName": file_name,
            "url": url,
        }

    def put_footer(self, text: str) -> None:
        self.assets["footer"] = {"assetType": "footer", "contentType": "text/plain", "text": text}


def create_backend(store: BrandingStore) -> FastAPI:
    app = FastAPI(title="Branding backend (test)")
    security = HTTPBearer(auto_error=False)

    @app.middleware("http")
    async def record_request(request: Request, call_next):
        store.requests.append(
            RecordedRequest(request.method, request.url.path, request.headers.get("authorization"))
        )
        return await call_next(request)

    def require_admin(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> dict:
        if credentials is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
        try:
            payload = jwt.decode(credentials.credentials, SECRET_KEY, algorithms=[ALGORITHM])
        except JWTError as exc:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials") from exc
        if payload.get("role") not in ADMIN_ROLES:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Branding management requires admin role")
        return payload

    async def store_asset(asset_type: str, upload: Optional[UploadFile], text: Optional[str]) -> Response | dict:
        if asset_type not in ("logo", "footer"):
            return PlainTextResponse(f"Unsupported asset type: {asset_type}", status_code=400)
        if asset_type == "logo":
            if upload is None:
                return PlainTextResponse("File is required for logo assets", status_code=400)
            if not (upload.content_type or "").startswith("image/"):
                return PlainTextResponse("Logo must be an image", status_code=415)
            content = await upload.read()
            if len(content) > MAX_LOGO_BYTES:
                return PlainTextResponse("Logo exceeds size limit", status_code=413)
            store.revision += 1
            store.put_logo(
                f"{BASE_URL}/files/{upload.filename}?rev={store.revision}",
                file_name=upload.filename or "logo",
                content_type=upload.content_type,
            )
        else:
            if text is None:
                return PlainTextResponse("Text is required for footer assets", status_code=400)
            store.put_footer(text)
        return store.assets[asset_type]

    @app.get(ASSETS_PATH)
    async def list_assets():
        if "*" in store.failures:
            raise HTTPException(status_code=store.failures["*"], detail="backend unavailable")
        return {"assets": list(store.assets.values())}

    @app.get(ASSETS_PATH + "/{asset_type}")
    async def get_asset(asset_type: str):
        delay = store.delays.get(asset_type)
        if delay:
            await asyncio.sleep(delay)
        if asset_type in store.failures:
            return PlainTextResponse("backend exploded", status_code=store.failures[asset_type])
        asset = store.assets.get(asset_type)
        if asset is None:
            raise HTTPException(status_code=404, detail="Asset not found")
        return asset

    @app.post(ASSETS_PATH, status_code=201)
    async def upload_asset(
        asset_type: str = Form(..., alias="AssetType"),
        upload: Optional[UploadFile] = File(None, alias="File"),
        text: Optional[str] = Form(None, alias="Text"),
        _admin: dict = Depends(require_admin),
    ):
        return await store_asset(asset_type, upload, text)

    @app.put(ASSETS_PATH + "/{asset_type}")
    async def update_asset(
        asset_type: str,
        form_type: str = Form(..., alias="AssetType"),
        upload: Optional[UploadFile] = File(None, alias="File"),
        text: Optional[str] = Form(None, alias="Text"),
        _admin: dict = Depends(require_admin),
    ):
        if form_type != asset_type:
            return PlainTextResponse("AssetType does not match path", status_code=400)
        return await store_asset(asset_type, upload, text)

    @app.delete(ASSETS_PATH + "/{asset_type}", status_code=204)
    async def delete_asset(asset_type: str, _admin: dict = Depends(require_admin)):
        if store.assets.pop(asset_type, None) is None:
            raise HTTPException(status_code=404, detail="Asset not found")
        return Response(status_code=204)

    return app


def asgi_client(app: FastAPI) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url=BASE_URL)
