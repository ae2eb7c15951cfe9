from __future__ import annotations

import re

MENTION_RE = re.compile(r"@\w+", re.ASCII)


def normalize_caption(caption: str, default_tag: str) -> str:
    """
    Replace every ``@mention`` in ``caption`` with ``default_tag``.

    Empty captions, and captions that end up without the tag, collapse to the
    tag alone.
    """
    if not caption:
        return default_tag
    cleaned = MENTION_RE.sub(lambda _: default_tag, caption)
    if default_tag not in cleaned:
        return default_tag
    return cleaned


__all__ = ["MENTION_RE", "normalize_caption"]
