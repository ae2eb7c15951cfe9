from __future__ import annotations

import logging

from . import Command, register
from ... import texts
from ...context import BotContext
from ...delivery import DeliveryError, deliver
from ...storage import StorageError
from ...telegram import keyboards
from ...telegram.client import TransportError
from ...telegram.types import Message

logger = logging.getLogger(__name__)


@register
class StartCommand:
    """
    ``/start`` greets; ``/start <key>`` releases content to channel members.
    """

    command = Command.START
    admin_only = False

    @staticmethod
    async def handle(ctx: BotContext, message: Message, args: str) -> None:
        chat_id = message.chat.id
        parts = args.split()
        cfg = await ctx.config.read()

        if not parts:
            await ctx.reply(
                chat_id,
                f"{cfg.messages.welcome}\n\n{texts.GUIDE_SHORT}",
                reply_markup=keyboards.guide_keyboard(),
            )
            return

        if not await ctx.gate.is_member(message.from_user.id):
            await ctx.reply(
                chat_id,
                cfg.messages.join,
                reply_markup=keyboards.join_keyboard(cfg.sponsored_channels),
            )
            return

        key = parts[0]
        try:
            record = await ctx.files.get(key)
        except StorageError as exc:
            logger.error("failed to fetch file key %s: %s", key, exc)
            await ctx.reply(chat_id, cfg.messages.apology)
            return

        if record is None:
            await ctx.reply(chat_id, cfg.messages.not_found)
            return

        try:
            await deliver(ctx, chat_id, record)
        except (DeliveryError, TransportError) as exc:
            logger.error("failed to send file %s: %s", key, exc)
