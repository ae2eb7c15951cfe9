"""In-memory admin sessions; a restart logs every admin out."""

from __future__ import annotations

import logging
from typing import Set

from .locks import ReadWriteLock

logger = logging.getLogger(__name__)


class AdminSessions:
    """Set of Telegram user ids that logged in with the admin password."""

    def __init__(self) -> None:
        self._admins: Set[int] = set()
        self._lock = ReadWriteLock()

    async def is_authenticated(self, user_id: int) -> bool:
        async with self._lock.read():
            return user_id in self._admins

    async def set_authenticated(self, user_id: int, active: bool) -> None:
        """
        Add or remove ``user_id``. Both directions are idempotent.

        :param user_id: Telegram user id.
        :param active: ``True`` to log in, ``False`` to log out.
        """
        async with self._lock.write():
            if active:
                self._admins.add(user_id)
            else:
                self._admins.discard(user_id)
        logger.info("Admin session for %s %s", user_id, "opened" if active else "closed")


__all__ = ["AdminSessions"]
