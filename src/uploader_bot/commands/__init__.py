"""Command dispatch utilities."""

from __future__ import annotations

import logging
from typing import NamedTuple

from ..context import BotContext
from ..telegram.types import Message
from .handlers import Command, CommandHandler, all_commands, get as get_handler

logger = logging.getLogger(__name__)


class CommandInvocation(NamedTuple):
    """Resolved command data for downstream consumers."""

    handler: CommandHandler
    command: Command
    args: str


def resolve_command(message: Message) -> CommandInvocation | None:
    """Return the handler, command, and raw args if ``message`` is a known command."""

    parsed = message.command()
    if parsed is None:
        return None

    token, args = parsed
    command = Command.parse(token)
    if command is None:
        return None

    handler = get_handler(command)
    if handler is None:
        return None

    return CommandInvocation(handler=handler, command=command, args=args)


async def dispatch(ctx: BotContext, message: Message) -> bool:
    """
    Execute the command carried by ``message``.

    Unknown commands and admin-only commands from non-admins are dropped
    without a reply. Returns True if a handler ran.
    """

    if message.from_user is None:
        return False

    invocation = resolve_command(message)
    if not invocation:
        return False

    handler, command, args = invocation
    if handler.admin_only and not await ctx.is_admin(message.from_user.id):
        logger.debug("Dropping /%s from non-admin %s", command.value, message.from_user.id)
        return False

    logger.info("Dispatching command '/%s' from %s", command.value, message.from_user.id)
    await handler.handle(ctx, message, args)
    return True


__all__ = ["Command", "CommandInvocation", "all_commands", "dispatch", "resolve_command"]
