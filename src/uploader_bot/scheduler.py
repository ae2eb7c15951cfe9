"""
Deferred message deletion.

Each delivery of perishable content arms one background task that sleeps for
the configured delay and then deletes the delivered messages. Tasks are not
persisted: anything still pending at shutdown is cancelled and lost.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol, Sequence, Set

from .telegram.client import TransportError

logger = logging.getLogger(__name__)


class DeletingClient(Protocol):
    async def delete_message(self, chat_id: int, message_id: int) -> None: ...


class EphemeralScheduler:
    """Fire-and-forget deletion timers running beside the dispatch loop."""

    def __init__(self, client: DeletingClient) -> None:
        self._client = client
        self._tasks: Set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def schedule(
        self, chat_id: int, message_ids: Sequence[int], delay: float
    ) -> asyncio.Task[None]:
        """
        Delete ``message_ids`` from ``chat_id`` after ``delay`` seconds.

        Must be called from inside the running event loop.
        """
        ids = tuple(message_ids)
        task = asyncio.create_task(
            self._delete_later(chat_id, ids, delay),
            name=f"delete-{chat_id}-{'-'.join(map(str, ids))}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._forget)
        logger.debug("Scheduled deletion of %s in chat %s after %ss", ids, chat_id, delay)
        return task

    async def _delete_later(self, chat_id: int, message_ids: Sequence[int], delay: float) -> None:
        await asyncio.sleep(delay)
        for message_id in message_ids:
            try:
                await self._client.delete_message(chat_id, message_id)
            except TransportError as exc:
                logger.warning("delete message %s in chat %s failed: %s", message_id, chat_id, exc)

    def _forget(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Deletion task %s failed", task.get_name(), exc_info=exc)

    async def shutdown(self) -> None:
        """Cancel every pending deletion and wait for the tasks to unwind."""
        tasks = list(self._tasks)
        if tasks:
            logger.info("Abandoning %d scheduled deletion(s)", len(tasks))
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)


__all__ = ["DeletingClient", "EphemeralScheduler"]
