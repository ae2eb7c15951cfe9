"""
Admin login/logout.

Sessions are not tied to the password: rotating it in the config file does not
log anyone out.
"""

from __future__ import annotations

import hmac
import logging

from . import Command, register
from ... import texts
from ...context import BotContext
from ...telegram.types import Message

logger = logging.getLogger(__name__)


def password_matches(candidate: str, secret: str) -> bool:
    """Byte-for-byte comparison in constant time."""
    return hmac.compare_digest(candidate.encode("utf-8"), secret.encode("utf-8"))


@register
class LoginCommand:
    command = Command.LOGIN
    admin_only = False

    @staticmethod
    async def handle(ctx: BotContext, message: Message, args: str) -> None:
        chat_id = message.chat.id
        parts = args.split()
        if len(parts) != 1:
            await ctx.reply(chat_id, texts.LOGIN_USAGE)
            return

        cfg = await ctx.config.read()
        if not password_matches(parts[0], cfg.admin_password):
            logger.warning("Rejected admin login from %s", message.from_user.id)
            await ctx.reply(chat_id, texts.LOGIN_INVALID)
            return

        await ctx.sessions.set_authenticated(message.from_user.id, True)
        await ctx.reply(chat_id, texts.LOGIN_OK)


@register
class LogoutCommand:
    command = Command.LOGOUT
    admin_only = False

    @staticmethod
    async def handle(ctx: BotContext, message: Message, args: str) -> None:
        chat_id = message.chat.id
        if not await ctx.is_admin(message.from_user.id):
            await ctx.reply(chat_id, texts.LOGOUT_NOT_LOGGED_IN)
            return

        await ctx.sessions.set_authenticated(message.from_user.id, False)
        await ctx.reply(chat_id, texts.LOGOUT_OK)
