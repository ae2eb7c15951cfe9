"""
Telegram Bot API client
=======================

Minimal aiohttp wrapper over the HTTP Bot API. Each call raises
:class:`TransportError` on network/HTTP failure and :class:`TelegramAPIError`
when Telegram answers ``ok: false``. No retries happen here.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncIterator, Dict, Optional

import aiohttp

from .types import Update

logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.telegram.org"
POLL_TIMEOUT = 30
REQUEST_TIMEOUT = 15


class TransportError(Exception):
    """A Bot API request could not be completed."""


class TelegramAPIError(TransportError):
    """Telegram rejected the request (``ok: false``)."""

    def __init__(self, method: str, description: str, error_code: int | None = None):
        super().__init__(f"{method} failed ({error_code}): {description}")
        self.method = method
        self.description = description
        self.error_code = error_code


class TelegramClient:
    """Async Bot API client bound to a single token."""

    def __init__(
        self,
        token: str,
        *,
        session: aiohttp.ClientSession | None = None,
        base_url: str = API_BASE_URL,
        poll_timeout: int = POLL_TIMEOUT,
        request_timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self._token = token
        self._session = session
        self._owns_session = session is None
        self._base_url = base_url.rstrip("/")
        self.poll_timeout = poll_timeout
        self.request_timeout = request_timeout

    # ---------- plumbing --------------------------------------------- #

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    async def call(
        self,
        method: str,
        payload: Dict[str, Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> Any:
        """
        Invoke ``method`` with a JSON ``payload`` and return its ``result``.

        :raises TelegramAPIError: Telegram answered ``ok: false``.
        :raises TransportError: network failure, timeout or malformed reply.
        """
        url = f"{self._base_url}/bot{self._token}/{method}"
        client_timeout = aiohttp.ClientTimeout(total=timeout or self.request_timeout)
        try:
            async with self._get_session().post(
                url, json=payload or {}, timeout=client_timeout
            ) as resp:
                body = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            # ValueError covers undecodable and non-JSON bodies (e.g. a proxy error page).
            raise TransportError(f"{method} request failed: {exc!r}") from exc

        if not isinstance(body, dict):
            raise TransportError(f"{method} returned a non-object body")
        if not body.get("ok"):
            raise TelegramAPIError(
                method, str(body.get("description", "unknown error")), body.get("error_code")
            )
        return body.get("result")

    # ---------- inbound ---------------------------------------------- #

    async def get_me(self) -> Dict[str, Any]:
        return await self.call("getMe")

    async def updates(self, offset: int = 0) -> AsyncIterator[Update]:
        """
        Long-poll ``getUpdates`` and yield updates in order, forever.

        Errors end the iteration by propagating to the consumer.
        """
        while True:
            batch = await self.call(
                "getUpdates",
                {"offset": offset, "timeout": self.poll_timeout},
                timeout=self.poll_timeout + self.request_timeout,
            )
            for raw in batch or ():
                offset = max(offset, int(raw["update_id"]) + 1)
                try:
                    update = Update.from_api(raw)
                except (KeyError, TypeError, ValueError) as exc:
                    logger.warning("Skipping malformed update %s: %s", raw.get("update_id"), exc)
                    continue
                yield update

    # ---------- outbound --------------------------------------------- #

    async def _send(self, method: str, payload: Dict[str, Any]) -> int:
        result = await self.call(method, payload)
        return int(result["message_id"])

    async def send_message(
        self,
        chat_id: int,
        text: str,
        *,
        parse_mode: str | None = None,
        reply_markup: Optional[Dict[str, Any]] = None,
    ) -> int:
        payload: Dict[str, Any] = {"chat_id": chat_id, "text": text}
        if parse_mode:
            payload["parse_mode"] = parse_mode
        if reply_markup:
            payload["reply_markup"] = reply_markup
        return await self._send("sendMessage", payload)

    async def send_document(self, chat_id: int, file_id: str, caption: str = "") -> int:
        return await self._send(
            "sendDocument", {"chat_id": chat_id, "document": file_id, "caption": caption}
        )

    async def send_photo(self, chat_id: int, file_id: str, caption: str = "") -> int:
        return await self._send(
            "sendPhoto", {"chat_id": chat_id, "photo": file_id, "caption": caption}
        )

    async def send_video(self, chat_id: int, file_id: str, caption: str = "") -> int:
        return await self._send(
            "sendVideo", {"chat_id": chat_id, "video": file_id, "caption": caption}
        )

    async def delete_message(self, chat_id: int, message_id: int) -> None:
        await self.call("deleteMessage", {"chat_id": chat_id, "message_id": message_id})

    async def answer_callback_query(self, callback_query_id: str, text: str = "") -> None:
        payload: Dict[str, Any] = {"callback_query_id": callback_query_id}
        if text:
            payload["text"] = text
        await self.call("answerCallbackQuery", payload)

    async def get_chat_member_status(self, chat: str | int, user_id: int) -> str:
        """Return the member ``status`` string of ``user_id`` in ``chat``."""
        result = await self.call("getChatMember", {"chat_id": chat, "user_id": user_id})
        return str((result or {}).get("status", ""))


__all__ = ["TelegramAPIError", "TelegramClient", "TransportError"]
