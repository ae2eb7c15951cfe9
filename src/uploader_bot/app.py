"""Bot bootstrap: wire the stores, repositories and transport together."""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from pathlib import Path

from .config import ConfigStore, load_config, resolve_config_path
from .context import BotContext
from .dispatcher import Dispatcher
from .intake import ContentIntake
from .membership import MembershipGate
from .scheduler import EphemeralScheduler
from .sessions import AdminSessions
from .storage import FileRepository, LinkRepository, open_database
from .telegram.client import TelegramClient

logger = logging.getLogger(__name__)


class UploaderApp:
    """Owns every long-lived resource for one bot process."""

    def __init__(self, ctx: BotContext, conn: sqlite3.Connection) -> None:
        self.ctx = ctx
        self.conn = conn
        self.dispatcher = Dispatcher(ctx)

    @classmethod
    def build(
        cls,
        config_path: str | Path | None = None,
        *,
        client: TelegramClient | None = None,
    ) -> "UploaderApp":
        """
        Load config and open storage. Failures here are startup-fatal.

        :raises ConfigError: invalid or incomplete config.
        :raises sqlite3.Error: database could not be opened or migrated.
        """
        path = resolve_config_path(config_path)
        config = load_config(path)
        conn = open_database(config.database_path())
        logger.info("Opened database at %s", config.database_path())

        client = client or TelegramClient(config.api_token)
        store = ConfigStore(config, path)
        db_lock = asyncio.Lock()
        files = FileRepository(conn, db_lock)
        links = LinkRepository(conn, db_lock)

        ctx = BotContext(
            client=client,
            config=store,
            sessions=AdminSessions(),
            gate=MembershipGate(store, client),
            files=files,
            intake=ContentIntake(store, files, links),
            scheduler=EphemeralScheduler(client),
        )
        return cls(ctx, conn)

    async def run(self, stop: asyncio.Event) -> None:
        """Verify the token, then dispatch until ``stop`` is set."""
        me = await self.ctx.client.get_me()
        logger.info("Authorized on account %s", me.get("username"))
        await self.dispatcher.run(stop)

    async def close(self) -> None:
        await self.ctx.scheduler.shutdown()
        await self.ctx.client.close()
        self.conn.close()


__all__ = ["UploaderApp"]
