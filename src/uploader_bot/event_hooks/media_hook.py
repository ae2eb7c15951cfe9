"""
Handle admin uploads (document, video, photo).
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from uploader_bot import texts
from uploader_bot.context import BotContext
from uploader_bot.storage import StorageError
from uploader_bot.telegram.types import Message

logger = logging.getLogger(__name__)


def extract_media(message: Message) -> Optional[Tuple[str, str]]:
    """
    Return ``(file_id, kind)`` for the first attachment found.

    Checked in order: document, video, photo. For photos Telegram sends every
    size; the last one is the largest.
    """
    if message.document is not None:
        return message.document.file_id, "document"
    if message.video is not None:
        return message.video.file_id, "video"
    if message.photo:
        return message.photo[-1].file_id, "photo"
    return None


def has_media(message: Message) -> bool:
    return extract_media(message) is not None


async def handle(ctx: BotContext, message: Message) -> None:
    """
    Store an admin's upload and reply with its share link.

    Non-admins are ignored without a reply.
    """
    if message.from_user is None or not await ctx.is_admin(message.from_user.id):
        return

    media = extract_media(message)
    if media is None:
        return
    file_id, kind = media

    try:
        issued = await ctx.intake.ingest(file_id, kind, message.caption)
    except StorageError as exc:
        logger.error("failed to save file: %s", exc)
        await ctx.reply(message.chat.id, texts.UPLOAD_FAILED)
        return

    await ctx.reply(message.chat.id, texts.link_created(issued.url))
    await ctx.reply(message.chat.id, texts.caption_prompt(issued.key, issued.caption))
