from __future__ import annotations

import logging

from . import Command, register
from ... import texts
from ...context import BotContext
from ...storage import StorageError
from ...telegram.types import Message

logger = logging.getLogger(__name__)


@register
class SetCaptionCommand:
    """``/setcaption <key> <caption...>``; the caption keeps its inner spacing."""

    command = Command.SETCAPTION
    admin_only = True

    @staticmethod
    async def handle(ctx: BotContext, message: Message, args: str) -> None:
        chat_id = message.chat.id
        raw = args.lstrip(" \t")
        fields = raw.split()
        if not fields:
            await ctx.reply(chat_id, texts.SETCAPTION_USAGE)
            return

        key = fields[0]
        caption = raw[len(key):].lstrip(" \t")
        if not caption.strip():
            await ctx.reply(chat_id, texts.SETCAPTION_EMPTY)
            return

        try:
            await ctx.intake.update_caption(key, caption)
        except StorageError as exc:
            logger.error("update caption failed for %s: %s", key, exc)
            await ctx.reply(chat_id, texts.SETCAPTION_FAILED)
            return

        await ctx.reply(chat_id, texts.caption_updated(key))
