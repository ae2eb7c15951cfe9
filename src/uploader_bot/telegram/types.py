"""
Telegram update model
=====================

Thin, immutable views over the Bot API JSON. Only the fields the bot reads
are parsed; everything else is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True, slots=True)
class User:
    id: int

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "User":
        return cls(id=int(data["id"]))


@dataclass(frozen=True, slots=True)
class Chat:
    id: int
    type: str = "private"

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Chat":
        return cls(id=int(data["id"]), type=str(data.get("type", "private")))


@dataclass(frozen=True, slots=True)
class MessageEntity:
    type: str
    offset: int
    length: int

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "MessageEntity":
        return cls(
            type=str(data.get("type", "")),
            offset=int(data.get("offset", 0)),
            length=int(data.get("length", 0)),
        )


@dataclass(frozen=True, slots=True)
class Media:
    """A document, video, or photo size attached to a message."""

    file_id: str
    file_unique_id: str | None = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Media":
        return cls(file_id=str(data["file_id"]), file_unique_id=data.get("file_unique_id"))


@dataclass(frozen=True, slots=True)
class Message:
    message_id: int
    chat: Chat
    from_user: User | None = None
    text: str = ""
    caption: str = ""
    entities: Tuple[MessageEntity, ...] = ()
    document: Media | None = None
    video: Media | None = None
    photo: Tuple[Media, ...] = ()

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Message":
        sender = data.get("from")
        document = data.get("document")
        video = data.get("video")
        return cls(
            message_id=int(data["message_id"]),
            chat=Chat.from_api(data["chat"]),
            from_user=User.from_api(sender) if sender else None,
            text=data.get("text") or "",
            caption=data.get("caption") or "",
            entities=tuple(MessageEntity.from_api(e) for e in data.get("entities") or ()),
            document=Media.from_api(document) if document else None,
            video=Media.from_api(video) if video else None,
            photo=tuple(Media.from_api(p) for p in data.get("photo") or ()),
        )

    def command(self) -> Optional[Tuple[str, str]]:
        """
        Return ``(name, raw_args)`` when the message starts with a bot command.

        Mirrors the Bot API rule: the first entity must be a ``bot_command``
        at offset 0. A ``@botname`` suffix is dropped from the name.
        """
        if not self.entities:
            return None
        first = self.entities[0]
        if first.type != "bot_command" or first.offset != 0:
            return None
        token = self.text[1 : first.length]
        name = token.split("@", 1)[0]
        args = self.text[first.length :].strip()
        return name, args


@dataclass(frozen=True, slots=True)
class CallbackQuery:
    id: str
    from_user: User
    data: str = ""
    message: Message | None = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "CallbackQuery":
        message = data.get("message")
        return cls(
            id=str(data["id"]),
            from_user=User.from_api(data["from"]),
            data=data.get("data") or "",
            message=Message.from_api(message) if message and "chat" in message else None,
        )


@dataclass(frozen=True, slots=True)
class Update:
    update_id: int
    message: Message | None = None
    callback_query: CallbackQuery | None = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Update":
        message = data.get("message")
        callback = data.get("callback_query")
        return cls(
            update_id=int(data["update_id"]),
            message=Message.from_api(message) if message else None,
            callback_query=CallbackQuery.from_api(callback) if callback else None,
        )


__all__ = [
    "CallbackQuery",
    "Chat",
    "Media",
    "Message",
    "MessageEntity",
    "Update",
    "User",
]
