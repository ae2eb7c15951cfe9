"""
Event dispatcher
================

Single consumer of the update stream. One update is handled to completion
before the next is pulled; a stop request is honoured only between updates.

Classification order:
1. callback query -> :mod:`event_hooks.callback_hook`
2. bot command    -> :func:`commands.dispatch`
3. document/video/photo -> :mod:`event_hooks.media_hook`
4. anything else  -> dropped
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import AsyncIterator

from . import commands
from .context import BotContext
from .event_hooks import callback_hook, media_hook
from .telegram.client import TransportError
from .telegram.types import Update

logger = logging.getLogger(__name__)


class EventKind(Enum):
    CALLBACK = "callback"
    COMMAND = "command"
    MEDIA = "media"
    OTHER = "other"


def classify(update: Update) -> EventKind:
    if update.callback_query is not None:
        return EventKind.CALLBACK
    message = update.message
    if message is None:
        return EventKind.OTHER
    if message.command() is not None:
        return EventKind.COMMAND
    if media_hook.has_media(message):
        return EventKind.MEDIA
    return EventKind.OTHER


class Dispatcher:
    """Routes each inbound update to exactly one handler."""

    def __init__(self, ctx: BotContext) -> None:
        self.ctx = ctx

    async def dispatch(self, update: Update) -> EventKind:
        """Handle one update. Handler errors are logged, never raised."""
        kind = classify(update)
        try:
            if kind is EventKind.CALLBACK:
                await callback_hook.handle(self.ctx, update.callback_query)
            elif kind is EventKind.COMMAND:
                await commands.dispatch(self.ctx, update.message)
            elif kind is EventKind.MEDIA:
                await media_hook.handle(self.ctx, update.message)
        except Exception:
            logger.exception("Handler for update %s (%s) failed", update.update_id, kind.value)
        return kind

    async def run(self, stop: asyncio.Event, updates: AsyncIterator[Update] | None = None) -> None:
        """
        Consume updates until ``stop`` is set.

        :param stop: Cooperative shutdown signal, checked between updates.
        :param updates: Update source; defaults to the client's long poll.
        :raises TransportError: the update stream failed or ended.
        """
        source = updates if updates is not None else self.ctx.client.updates()
        stream = source.__aiter__()
        cfg = await self.ctx.config.read()
        logger.info("Bot %s ready", cfg.bot_username)

        next_update: asyncio.Future | None = None
        try:
            while not stop.is_set():
                next_update = asyncio.ensure_future(stream.__anext__())
                stop_wait = asyncio.ensure_future(stop.wait())
                try:
                    await asyncio.wait(
                        {next_update, stop_wait}, return_when=asyncio.FIRST_COMPLETED
                    )
                finally:
                    stop_wait.cancel()

                if not next_update.done():
                    break

                try:
                    update = next_update.result()
                except StopAsyncIteration:
                    raise TransportError("updates stream closed") from None

                await self.dispatch(update)
        finally:
            # The poll must be unwound before the generator can be closed.
            if next_update is not None and not next_update.done():
                next_update.cancel()
                await asyncio.gather(next_update, return_exceptions=True)
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()

        logger.info("shutdown requested")


__all__ = ["Dispatcher", "EventKind", "classify"]
