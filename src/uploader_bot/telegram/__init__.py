"""Telegram transport: Bot API client, update model, keyboards."""

from .client import TelegramAPIError, TelegramClient, TransportError
from .types import CallbackQuery, Chat, Media, Message, MessageEntity, Update, User

__all__ = [
    "CallbackQuery",
    "Chat",
    "Media",
    "Message",
    "MessageEntity",
    "TelegramAPIError",
    "TelegramClient",
    "TransportError",
    "Update",
    "User",
]
