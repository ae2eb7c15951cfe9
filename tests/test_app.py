import asyncio

import pytest

from uploader_bot import cli
from uploader_bot.app import UploaderApp
from uploader_bot.config import ConfigError

CONFIG = """
[uploader.telegram]
api_token = "123:abc"
bot_username = "TestUploaderBot"

[uploader.content]
default_tag = "#MyTag"

[uploader.admin]
password = "s3cret"

[uploader.channels]
sponsored = ["@chan_one"]

[uploader.storage]
path = "{db}"
"""


def _write_config(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(CONFIG.format(db=(tmp_path / "db" / "app.db").as_posix()), encoding="utf-8")
    return path


def test_build_wires_shared_components(tmp_path, fake_client, monkeypatch):
    monkeypatch.delenv("UPLOADER_DB_PATH", raising=False)
    app = UploaderApp.build(_write_config(tmp_path), client=fake_client)

    try:
        assert app.ctx.client is fake_client
        assert app.ctx.config.path == tmp_path / "config.toml"
        assert (tmp_path / "db" / "app.db").exists()
        tables = {
            row["name"]
            for row in app.conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        }
        assert {"files", "links"} <= tables
    finally:
        asyncio.run(app.close())


def test_run_probes_token_then_dispatches(tmp_path, fake_client, make_update, monkeypatch):
    monkeypatch.delenv("UPLOADER_DB_PATH", raising=False)
    app = UploaderApp.build(_write_config(tmp_path), client=fake_client)
    stop = asyncio.Event()

    async def updates(offset=0):
        yield make_update("/help")
        stop.set()
        yield make_update("ignored")

    fake_client.updates = updates

    async def run_test():
        try:
            await app.run(stop)
        finally:
            await app.close()

    asyncio.run(run_test())
    assert len(fake_client.texts()) == 1


def test_build_rejects_missing_config(tmp_path):
    with pytest.raises(ConfigError):
        UploaderApp.build(tmp_path / "absent.toml")


def test_cli_exits_nonzero_on_bad_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert cli.main(["--config", str(tmp_path / "absent.toml")]) == 1


def test_cli_exits_nonzero_when_token_probe_fails(tmp_path, fake_client, monkeypatch):
    config_path = _write_config(tmp_path)
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("UPLOADER_DB_PATH", raising=False)

    async def rejected():
        raise cli.TransportError("getMe failed (401): Unauthorized")

    fake_client.get_me = rejected
    real_build = UploaderApp.build
    monkeypatch.setattr(
        UploaderApp, "build", classmethod(lambda cls, path: real_build(path, client=fake_client))
    )

    assert cli.main(["--config", str(config_path)]) == 1
