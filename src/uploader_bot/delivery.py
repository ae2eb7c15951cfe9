"""
Send stored content back to a user.

- ``document`` / ``photo``: one message with caption.
- ``video``: video + warning notice; both are deleted after the configured
  delay by :class:`~uploader_bot.scheduler.EphemeralScheduler`.
"""

from __future__ import annotations

import logging
from typing import List

from .context import BotContext
from .storage import FileRecord
from .telegram.client import TransportError

logger = logging.getLogger(__name__)


class DeliveryError(Exception):
    """Stored content could not be sent."""


async def deliver(ctx: BotContext, chat_id: int, record: FileRecord) -> List[int]:
    """
    Send ``record`` to ``chat_id`` according to its kind.

    :returns: Ids of the messages sent.
    :raises DeliveryError: unknown kind.
    :raises TransportError: a send failed.
    """
    if record.kind == "document":
        return [await ctx.client.send_document(chat_id, record.file_id, record.caption)]

    if record.kind == "photo":
        return [await ctx.client.send_photo(chat_id, record.file_id, record.caption)]

    if record.kind == "video":
        cfg = await ctx.config.read()
        video_id = await ctx.client.send_video(chat_id, record.file_id, record.caption)
        try:
            warning_id = await ctx.client.send_message(
                chat_id, cfg.messages.warning_text(cfg.delete_delay)
            )
        except TransportError:
            # The video is out; it still has to go even without the notice.
            ctx.scheduler.schedule(chat_id, [video_id], cfg.delete_delay)
            raise
        message_ids = [video_id, warning_id]
        ctx.scheduler.schedule(chat_id, message_ids, cfg.delete_delay)
        return message_ids

    raise DeliveryError(f"unknown file type {record.kind}")


__all__ = ["DeliveryError", "deliver"]
