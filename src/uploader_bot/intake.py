"""
Content intake & link issuance
==============================
1. Normalize the caption (mentions -> default tag).
2. Store the content row; the repository mints the opaque key.
3. Build ``https://t.me/<bot>?start=<key>`` and record it as a link.

Step 3's write is best effort: retrieval resolves by key, so a share link is
valid as soon as step 2 succeeds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .captions import normalize_caption
from .config import ConfigStore
from .storage import FileRepository, LinkRepository, StorageError

logger = logging.getLogger(__name__)

DEFAULT_KIND = "document"


@dataclass(frozen=True, slots=True)
class IssuedLink:
    key: str
    url: str
    caption: str
    link_saved: bool


def build_share_url(bot_username: str, key: str) -> str:
    return f"https://t.me/{bot_username}?start={key}"


class ContentIntake:
    """Turns an admin upload into a stored record plus a share link."""

    def __init__(self, config: ConfigStore, files: FileRepository, links: LinkRepository) -> None:
        self._config = config
        self._files = files
        self._links = links

    async def normalize(self, caption: str) -> str:
        cfg = await self._config.read()
        return normalize_caption(caption, cfg.default_tag)

    async def ingest(self, file_id: str, kind: str, raw_caption: str) -> IssuedLink:
        """
        Store an upload and issue its share link.

        :raises StorageError: the content row could not be created.
        """
        cfg = await self._config.read()
        caption = normalize_caption(raw_caption, cfg.default_tag) or cfg.default_tag
        kind = kind or DEFAULT_KIND

        key = await self._files.create(file_id, kind, caption)
        url = build_share_url(cfg.public_username, key)

        link_saved = True
        try:
            await self._links.create(key, url)
        except StorageError as exc:
            link_saved = False
            logger.error("failed to save link for %s: %s", key, exc)

        logger.info("Stored %s as %s", kind, key)
        return IssuedLink(key=key, url=url, caption=caption, link_saved=link_saved)

    async def update_caption(self, key: str, raw_caption: str) -> str:
        """
        Normalize and store a new caption for ``key``.

        :returns: The caption as stored.
        :raises StorageError: the update failed.
        """
        caption = await self.normalize(raw_caption)
        updated = await self._files.update_caption(key, caption)
        if not updated:
            logger.info("Caption update for unknown key %s matched no rows", key)
        return caption


__all__ = ["ContentIntake", "DEFAULT_KIND", "IssuedLink", "build_share_url"]
