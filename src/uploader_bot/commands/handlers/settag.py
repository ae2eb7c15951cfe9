from __future__ import annotations

import dataclasses
import logging
from typing import List, Optional, Tuple

from . import Command, register
from ... import texts
from ...config import UploaderConfig
from ...context import BotContext
from ...telegram.types import Message

logger = logging.getLogger(__name__)

TAG_MARKER = "@"


def _set_default_tag(args: List[str]):
    def _update(cfg: UploaderConfig) -> Tuple[str, Optional[UploaderConfig]]:
        if len(args) != 1 or not args[0].startswith(TAG_MARKER):
            return texts.SETTAG_USAGE, None
        updated = dataclasses.replace(cfg, default_tag=args[0])
        return texts.tag_updated(updated.default_tag), updated

    return _update


@register
class SetTagCommand:
    """Replace the default caption tag and persist the config."""

    command = Command.SETTAG
    admin_only = True

    @staticmethod
    async def handle(ctx: BotContext, message: Message, args: str) -> None:
        chat_id = message.chat.id
        result = await ctx.config.update(_set_default_tag(args.split()))
        if result.response:
            await ctx.reply(chat_id, result.response)
        if not result.durable:
            logger.error("failed to persist config: %s", result.error)
            await ctx.reply(chat_id, texts.PERSIST_FAILED)
