"""Inline keyboards sent with the guide and join messages."""

from __future__ import annotations

from typing import Any, Dict, Iterable

from ..membership import normalize_channel

GUIDE_UPLOAD = "guide_upload"
GUIDE_LINK = "guide_link"


def guide_keyboard() -> Dict[str, Any]:
    return {
        "inline_keyboard": [
            [
                {"text": "📤 How to upload", "callback_data": GUIDE_UPLOAD},
                {"text": "🔗 How to get link", "callback_data": GUIDE_LINK},
            ]
        ]
    }


def join_keyboard(channels: Iterable[str]) -> Dict[str, Any] | None:
    """One URL button per channel; ``None`` when no channel is usable."""
    rows = []
    for channel in channels:
        label = channel.strip()
        target = normalize_channel(label)
        if not target:
            continue
        rows.append([{"text": label, "url": f"https://t.me/{target}"}])
    if not rows:
        return None
    return {"inline_keyboard": rows}


__all__ = ["GUIDE_LINK", "GUIDE_UPLOAD", "guide_keyboard", "join_keyboard"]
