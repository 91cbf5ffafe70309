import asyncio
import json

import pytest

from conftest import FALLBACK_LOGO
from fake_backend import asgi_client
from portal_branding import cli
from portal_branding.core.config import Settings
from portal_branding.modules.branding import AssetType, AuthError


def _run(args, container, backend_app):
    async def runner():
        async with asgi_client(backend_app) as http:
            return await cli.run(args, container, http=http)

    return asyncio.run(runner())


def test_parser_reads_token_from_environment(monkeypatch):
    monkeypatch.setenv(cli.TOKEN_ENV, "env-token")
    args = cli.build_parser().parse_args(["delete", "logo"])
    assert args.token == "env-token"
    assert args.asset_type is AssetType.LOGO


def test_parser_rejects_unknown_asset_type():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["delete", "banner"])


def test_server_option_overrides_backend_url():
    args = cli.build_parser().parse_args(["--server", "https://other.example.test", "show"])
    settings = cli.settings_for(args, Settings(_env_file=None))
    assert settings.assets_url == "https://other.example.test/api/administration/branding/assets"


def test_show_prints_resolved_branding(store, backend_app, container, capsys):
    store.put_footer("Copyright 2025")
    args = cli.build_parser().parse_args(["show"])

    assert _run(args, container, backend_app) == 0

    output = json.loads(capsys.readouterr().out)
    assert output["logo"] == {"value": FALLBACK_LOGO, "source": "fallback"}
    assert output["footer"] == {"value": "Copyright 2025", "source": "remote"}


def test_set_footer_and_list(store, backend_app, container, admin_token, capsys):
    parser = cli.build_parser()
    _run(parser.parse_args(["--token", admin_token, "set-footer", "Operated by Example Corp.", "--create"]), container, backend_app)
    created = json.loads(capsys.readouterr().out)
    assert created["refreshRequired"] is True
    assert created["asset"]["text"] == "Operated by Example Corp."

    _run(parser.parse_args(["list"]), container, backend_app)
    listed = json.loads(capsys.readouterr().out)
    assert listed["assets"] == [store.assets["footer"]]


def test_upload_logo_from_file(tmp_path, store, backend_app, container, admin_token, capsys):
    logo = tmp_path / "brand.png"
    logo.write_bytes(b"\x89PNG\r\n\x1a\n" + b"1" * 32)
    args = cli.build_parser().parse_args(["--token", admin_token, "upload-logo", str(logo)])

    _run(args, container, backend_app)

    output = json.loads(capsys.readouterr().out)
    assert output["assetType"] == "logo"
    assert store.assets["logo"]["fileName"] == "brand.png"


def test_delete_with_viewer_token_fails(store, backend_app, container, viewer_token):
    store.put_logo("https://cdn.example.test/logo.svg")
    args = cli.build_parser().parse_args(["--token", viewer_token, "delete", "logo"])

    with pytest.raises(AuthError):
        _run(args, container, backend_app)
    assert "logo" in store.assets


def test_main_reports_missing_token(monkeypatch, capsys):
    monkeypatch.delenv(cli.TOKEN_ENV, raising=False)

    exit_code = cli.main(["--server", "http://127.0.0.1:9", "set-footer", "Copyright 2025"])

    assert exit_code == 1
    assert "no credential available" in capsys.readouterr().err
