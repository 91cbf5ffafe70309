"""
Operator command line for portal branding assets.

Examples:
    portal-branding --server http://127.0.0.1:8080 show
    portal-branding --token "$TOKEN" upload-logo ./logo.svg
    portal-branding --token "$TOKEN" set-footer "© 2025 Example Corp."
    portal-branding --token "$TOKEN" delete logo
"""

from __future__ import annotations

import argparse
import asyncio
import json
import mimetypes
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

import httpx

from portal_branding import __version__
from portal_branding.core.config import Settings, get_settings
from portal_branding.core.container import ApplicationContainer, BrandingSession
from portal_branding.modules.branding import (
    AssetPayload,
    AssetType,
    BrandingError,
    MutationResult,
    TransportError,
)

TOKEN_ENV = "BRANDING_TOKEN"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="portal-branding", description="Inspect and manage portal branding assets")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--server", help="Backend base URL (overrides BACKEND__BASE_URL)")
    parser.add_argument("--token", default=os.environ.get(TOKEN_ENV), help=f"Bearer token (default: ${TOKEN_ENV})")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("show", help="Show the logo and footer the portal would display")
    subparsers.add_parser("list", help="List configured branding assets")

    upload = subparsers.add_parser("upload-logo", help="Upload a logo image")
    upload.add_argument("path", type=Path)
    upload.add_argument("--content-type", help="Override the guessed image content type")
    upload.add_argument("--update", action="store_true", help="Replace the existing logo instead of creating one")

    footer = subparsers.add_parser("set-footer", help="Set the footer text")
    footer.add_argument("text")
    footer.add_argument("--create", action="store_true", help="Create the footer asset instead of updating it")

    delete = subparsers.add_parser("delete", help="Delete a branding asset")
    delete.add_argument("asset_type", type=AssetType, choices=list(AssetType), metavar="{logo,footer}")
    return parser


def settings_for(args: argparse.Namespace, base: Optional[Settings] = None) -> Settings:
    settings = base or get_settings()
    if args.server:
        backend = settings.backend.model_copy(update={"base_url": args.server})
        settings = settings.model_copy(update={"backend": backend})
    return settings


async def run(
    args: argparse.Namespace,
    container: ApplicationContainer,
    http: Optional[httpx.AsyncClient] = None,
) -> int:
    async with container.session(credentials=lambda: args.token, http=http) as session:
        if args.command == "show":
            await _show(session)
        elif args.command == "list":
            collection = await session.client.list_all()
            _print_json({"assets": [asset.to_payload() for asset in collection.assets]})
        elif args.command == "upload-logo":
            await _upload_logo(session, args)
        elif args.command == "set-footer":
            result = await session.gateway.set_footer_text(args.text, create=args.create)
            _print_result(result)
        elif args.command == "delete":
            result = await session.gateway.remove(args.asset_type)
            _print_result(result)
    return 0


async def _show(session: BrandingSession) -> None:
    state = await session.coordinator.refresh()
    payload = {
        asset_type.value: {
            "value": outcome.display_value,
            "source": outcome.source.value,
            **({"error": outcome.error} if outcome.error else {}),
        }
        for asset_type, outcome in state.per_type_outcome.items()
    }
    if state.aggregate_error:
        payload["error"] = state.aggregate_error
    _print_json(payload)


async def _upload_logo(session: BrandingSession, args: argparse.Namespace) -> None:
    path: Path = args.path
    if not path.is_file():
        raise SystemExit(f"logo file not found: {path}")
    content_type = args.content_type or mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    with path.open("rb") as fh:
        content = fh.read()
    if args.update:
        result = await session.gateway.update(AssetType.LOGO, AssetPayload.from_file(content, path.name, content_type))
    else:
        result = await session.gateway.upload_logo(content, path.name, content_type)
    _print_result(result)


def _print_result(result: MutationResult) -> None:
    payload = {"assetType": result.asset_type.value, "refreshRequired": result.refresh_required}
    if result.asset is not None:
        payload["asset"] = result.asset.to_payload()
    _print_json(payload)


def _print_json(payload: dict) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    container = ApplicationContainer(settings=settings_for(args))
    container.init_infrastructure()
    try:
        return asyncio.run(run(args, container))
    except TransportError as exc:
        status = f"{exc.status} " if exc.status is not None else ""
        print(f"error: {status}{exc}", file=sys.stderr)
        return 1
    except BrandingError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit("aborted by user")
