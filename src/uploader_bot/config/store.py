"""
Live configuration store
========================

Every read and write of the running settings goes through :class:`ConfigStore`:

- ``read()`` returns the current immutable snapshot under a shared lock.
- ``update(fn)`` runs ``fn`` under the exclusive lock and, when ``fn`` returns
  a new config, swaps it in and writes it to disk before releasing the lock.

A failed write is reported through :class:`UpdateResult` but the new value
stays live; the bot keeps running on the unpersisted settings.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Dict, NamedTuple, Optional, Tuple

from ..locks import ReadWriteLock
from .core import UploaderConfig
from .loader import store_raw_config

logger = logging.getLogger(__name__)


def _changed(old: Dict[str, Any], new: Dict[str, Any]) -> Dict[str, Any]:
    """Return the parts of ``new`` that differ from ``old``, keeping nesting."""
    diff: Dict[str, Any] = {}
    for key, value in new.items():
        before = old.get(key)
        if isinstance(value, dict) and isinstance(before, dict):
            nested = _changed(before, value)
            if nested:
                diff[key] = nested
        elif value != before:
            diff[key] = value
    return diff


ConfigUpdater = Callable[[UploaderConfig], Tuple[str, Optional[UploaderConfig]]]


class UpdateResult(NamedTuple):
    """Outcome of :meth:`ConfigStore.update`."""

    response: str
    changed: bool
    error: Exception | None = None

    @property
    def durable(self) -> bool:
        """``False`` when a change is live in memory but was not written."""
        return self.error is None


class ConfigStore:
    """Read/write-locked holder of the running :class:`UploaderConfig`."""

    def __init__(
        self,
        config: UploaderConfig,
        path: str | Path,
        *,
        writer: Callable[[Path, dict], None] = store_raw_config,
    ) -> None:
        self._config = config
        self._path = Path(path)
        self._writer = writer
        self._lock = ReadWriteLock()

    @property
    def path(self) -> Path:
        return self._path

    async def read(self) -> UploaderConfig:
        async with self._lock.read():
            return self._config

    async def update(self, updater: ConfigUpdater) -> UpdateResult:
        """
        Apply ``updater`` to the live config.

        :param updater: Receives the current snapshot and returns
            ``(response, new_config)``; ``new_config`` is ``None`` when nothing
            changed. Exceptions raised by it propagate with no change applied.
        :returns: :class:`UpdateResult` carrying the updater's response and any
            persistence error.
        """
        async with self._lock.write():
            response, new_config = updater(self._config)
            if new_config is None:
                return UpdateResult(response, changed=False)

            old_config, self._config = self._config, new_config
            # An existing file only receives the keys this update changed.
            payload = new_config.to_raw()
            if self._path.exists():
                payload = _changed(old_config.to_raw(), payload)
            try:
                await asyncio.to_thread(self._writer, self._path, payload)
            except Exception as exc:
                logger.error("Failed to persist config to %s: %s", self._path, exc)
                return UpdateResult(response, changed=True, error=exc)

            logger.info("Persisted config to %s", self._path)
            return UpdateResult(response, changed=True)


__all__ = ["ConfigStore", "ConfigUpdater", "UpdateResult"]
