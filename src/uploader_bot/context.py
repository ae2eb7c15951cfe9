"""Collaborators shared by every handler, built once in :mod:`uploader_bot.app`."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .config import ConfigStore
from .intake import ContentIntake
from .membership import MembershipGate
from .scheduler import EphemeralScheduler
from .sessions import AdminSessions
from .storage import FileRepository
from .telegram.client import TelegramClient, TransportError

logger = logging.getLogger(__name__)


@dataclass
class BotContext:
    """
    Owned instances the dispatcher hands to handlers.

    Attributes:
        client: Telegram transport.
        config: Live configuration store.
        sessions: Authenticated admin ids.
        gate: Sponsored-channel membership check.
        files: Content repository (lookups for ``/start``).
        intake: Upload storage and link issuance.
        scheduler: Deferred deletion of delivered videos.
    """

    client: TelegramClient
    config: ConfigStore
    sessions: AdminSessions
    gate: MembershipGate
    files: FileRepository
    intake: ContentIntake
    scheduler: EphemeralScheduler

    async def reply(
        self,
        chat_id: int,
        text: str,
        *,
        parse_mode: str | None = None,
        reply_markup: Optional[Dict[str, Any]] = None,
    ) -> int | None:
        """Send ``text``; failures are logged and yield ``None``."""
        try:
            return await self.client.send_message(
                chat_id, text, parse_mode=parse_mode, reply_markup=reply_markup
            )
        except TransportError as exc:
            logger.error("reply to chat %s failed: %s", chat_id, exc)
            return None

    async def is_admin(self, user_id: int) -> bool:
        return await self.sessions.is_authenticated(user_id)


__all__ = ["BotContext"]
