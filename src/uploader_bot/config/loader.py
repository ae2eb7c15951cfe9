from __future__ import annotations

import os
import tempfile
import tomllib
from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any, Dict

import tomlkit


DEFAULT_CONFIG_PATH = Path("config.toml")


def resolve_config_path(path: str | Path | None = None) -> Path:
    """Return ``path``, else ``$CONFIG_PATH``, else ``config.toml``."""
    if path is not None:
        return Path(path)
    env = os.getenv("CONFIG_PATH", "").strip()
    return Path(env) if env else DEFAULT_CONFIG_PATH


def load_raw_config(path: str | Path | None = None) -> Dict[str, Any]:
    """
    Load the bot config (config.toml by default).

    The bot cannot run without one, so a missing file raises
    :class:`FileNotFoundError`.
    """
    target = resolve_config_path(path)
    with target.open("rb") as handle:
        return tomllib.load(handle)


def _merge(doc: MutableMapping, data: Mapping[str, Any]) -> None:
    for key, value in data.items():
        current = doc.get(key)
        if isinstance(value, Mapping) and isinstance(current, MutableMapping):
            _merge(current, value)
        else:
            doc[key] = value


def store_raw_config(path: str | Path, data: Dict[str, Any]) -> None:
    """
    Write ``data`` to ``path`` as TOML, replacing the file atomically.

    An existing file is parsed with tomlkit and updated in place, so operator
    comments and unrelated keys survive. The result goes to a sibling temp
    file first and is swapped in with :func:`os.replace`.
    """
    target = Path(path)
    if target.exists():
        doc = tomlkit.parse(target.read_text(encoding="utf-8"))
        _merge(doc, data)
    else:
        doc = tomlkit.document()
        doc.update(data)
    payload = tomlkit.dumps(doc).encode("utf-8")

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=target.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_name, 0o600)
        os.replace(tmp_name, target)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "load_raw_config",
    "resolve_config_path",
    "store_raw_config",
]
