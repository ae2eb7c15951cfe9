"""
Sponsored-channel membership gate
=================================

A user may download content only while they belong to **every** configured
channel. Channels are checked one by one in config order; the first failed
or non-member lookup stops the check and denies access.
"""

from __future__ import annotations

import logging
from typing import Protocol

from .config import ConfigStore
from .telegram.client import TransportError

logger = logging.getLogger(__name__)

PASSING_STATUSES = frozenset({"member", "administrator", "creator"})

_URL_PREFIXES = ("https://t.me/", "http://t.me/")


class RosterClient(Protocol):
    async def get_chat_member_status(self, chat: str | int, user_id: int) -> str: ...


def normalize_channel(channel: str) -> str:
    """Reduce ``@name``, ``https://t.me/name/`` and friends to ``name``."""
    channel = channel.strip()
    channel = channel.removeprefix("@")
    for prefix in _URL_PREFIXES:
        channel = channel.removeprefix(prefix)
    channel = channel.removesuffix("/")
    return channel.strip()


class MembershipGate:
    """Checks a user's status in each sponsored channel."""

    def __init__(self, config: ConfigStore, client: RosterClient) -> None:
        self._config = config
        self._client = client

    async def is_member(self, user_id: int) -> bool:
        channels = (await self._config.read()).sponsored_channels
        if not channels:
            return True

        for channel in channels:
            if not await self._has_passing_status(channel, user_id):
                return False
        return True

    async def _has_passing_status(self, channel: str, user_id: int) -> bool:
        normalized = normalize_channel(channel)
        if not normalized:
            return False

        try:
            status = await self._client.get_chat_member_status(f"@{normalized}", user_id)
        except TransportError as exc:
            logger.error("get chat member %s for %s failed: %s", channel, user_id, exc)
            return False

        return status in PASSING_STATUSES


__all__ = ["MembershipGate", "PASSING_STATUSES", "RosterClient", "normalize_channel"]
