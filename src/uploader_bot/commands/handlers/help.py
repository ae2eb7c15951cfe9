from __future__ import annotations

from . import Command, register
from ... import texts
from ...context import BotContext
from ...telegram import keyboards
from ...telegram.types import Message


@register
class HelpCommand:
    """Send the full upload/download guide."""

    command = Command.HELP
    admin_only = False

    @staticmethod
    async def handle(ctx: BotContext, message: Message, args: str) -> None:
        await ctx.reply(
            message.chat.id,
            texts.FULL_GUIDE,
            parse_mode="Markdown",
            reply_markup=keyboards.guide_keyboard(),
        )
