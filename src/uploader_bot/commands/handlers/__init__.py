"""
Auto-discovery & registry for command handlers.

Any file inside commands/handlers/ that defines:
    from . import Command, register

    @register
    class MyCommandHandler:
        command = Command.MY_COMMAND
        admin_only = False

        @staticmethod
        async def handle(ctx: BotContext, message: Message, args: str): ...

is picked up automatically at import-time.

NOTE: If adding a new handler, ensure:
1. Its command is a member of the ``Command`` enum below (unknown tokens are
   never looked up dynamically).
2. It implements the CommandHandler protocol (see below).
3. It is placed in this directory (commands/handlers/).
"""
from __future__ import annotations

from enum import Enum
from importlib import import_module
from pathlib import Path
from pkgutil import iter_modules
from typing import TYPE_CHECKING, Dict, Protocol

if TYPE_CHECKING:
    from ...context import BotContext
    from ...telegram.types import Message


class Command(str, Enum):
    """Every command the bot answers to. Matching is case-sensitive."""

    START = "start"
    HELP = "help"
    LOGIN = "login"
    LOGOUT = "logout"
    SETCAPTION = "setcaption"
    SETTAG = "settag"

    @classmethod
    def parse(cls, token: str) -> "Command | None":
        try:
            return cls(token)
        except ValueError:
            return None


class CommandHandler(Protocol):
    """Protocol for command handler classes."""

    command: Command
    admin_only: bool

    @staticmethod
    async def handle(ctx: "BotContext", message: "Message", args: str) -> None:
        """Coroutine invoked when the command is dispatched.

        :param ctx: Shared bot collaborators.
        :param message: Incoming command message (sender guaranteed).
        :param args: Raw argument string after the command token.
        """


_REGISTRY: Dict[Command, CommandHandler] = {}


def register(cls: CommandHandler):
    """Decorator that registers a ``CommandHandler`` implementation.

    :param cls: Class implementing the handler protocol.
    :returns: The class unchanged.
    """
    if cls.command in _REGISTRY:
        raise ValueError(f"Duplicate handler for /{cls.command.value}")
    _REGISTRY[cls.command] = cls
    return cls


def get(command: Command) -> CommandHandler | None:
    """Return handler class for ``command`` or ``None``."""
    return _REGISTRY.get(command)


def all_commands() -> Dict[Command, CommandHandler]:
    """Return copy of the command registry."""
    return dict(_REGISTRY)


# ------------------------------------------------------------------ #
# Auto-import sibling modules to populate registry
# ------------------------------------------------------------------ #
_pkg_path = Path(__file__).resolve().parent
for _, modname, _ in iter_modules([str(_pkg_path)]):
    if modname != "__init__":
        import_module(f"{__name__}.{modname}")
