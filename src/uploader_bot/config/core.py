import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Tuple

from .loader import load_raw_config

logger = logging.getLogger(__name__)

DB_PATH_ENV = "UPLOADER_DB_PATH"

_DEFAULT_DELETE_DELAY = 30
_DEFAULT_DB_PATH = "data/uploader.db"


class ConfigError(ValueError):
    """Raised when the config file is missing required settings."""


def _clean_channels(raw: Iterable[Any]) -> Tuple[str, ...]:
    seen: list[str] = []
    for entry in raw or ():
        channel = str(entry).strip()
        if channel and channel not in seen:
            seen.append(channel)
    return tuple(seen)


@dataclass(frozen=True)
class Messages:
    """User-facing texts. Empty overrides fall back to these defaults."""

    welcome: str = "Hi! Open a file link to download its content."
    join: str = "Please join the channels below first:"
    not_found: str = "File not found or the link has expired."
    warning: str = "⚠️ This video will be deleted in {delay} seconds. Save it if you need it."
    apology: str = "Something went wrong, please try again."

    @classmethod
    def from_raw(cls, raw: Dict[str, Any] | None) -> "Messages":
        raw = raw or {}
        defaults = cls()
        overrides = {}
        for name in ("welcome", "join", "not_found", "warning", "apology"):
            value = str(raw.get(name) or "").strip()
            overrides[name] = value or getattr(defaults, name)
        return cls(**overrides)

    def warning_text(self, delay: int) -> str:
        try:
            return self.warning.format(delay=delay)
        except (KeyError, IndexError, ValueError):
            logger.warning("Malformed warning template; sending it unformatted")
            return self.warning


@dataclass(frozen=True)
class UploaderConfig:
    """
    Immutable snapshot of the live bot settings.

    Attributes:
        api_token: Telegram Bot API token.
        bot_username: Public bot handle used to build share links.
        default_tag: Caption fallback and mention replacement.
        admin_password: Shared secret accepted by ``/login``.
        delete_delay: Seconds before delivered videos are deleted.
        db_path: SQLite database location (see :meth:`database_path`).
        sponsored_channels: Channels a user must join before downloading.
        messages: User-facing texts.
    """

    api_token: str
    bot_username: str
    admin_password: str
    sponsored_channels: Tuple[str, ...]
    default_tag: str = ""
    delete_delay: int = _DEFAULT_DELETE_DELAY
    db_path: str = _DEFAULT_DB_PATH
    messages: Messages = field(default_factory=Messages)

    @classmethod
    def from_raw(cls, config: Dict[str, Any] | None) -> "UploaderConfig":
        cfg = (config or {}).get("uploader", {})
        telegram_cfg = cfg.get("telegram", {})
        content_cfg = cfg.get("content", {})
        admin_cfg = cfg.get("admin", {})
        storage_cfg = cfg.get("storage", {})
        channels_cfg = cfg.get("channels", {})

        try:
            delete_delay = int(content_cfg.get("delete_delay") or _DEFAULT_DELETE_DELAY)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid delete_delay: {exc}") from exc
        if delete_delay < 0:
            raise ConfigError("delete_delay must not be negative")

        loaded = cls(
            api_token=str(telegram_cfg.get("api_token") or "").strip(),
            bot_username=str(telegram_cfg.get("bot_username") or "").strip(),
            admin_password=str(admin_cfg.get("password") or ""),
            sponsored_channels=_clean_channels(channels_cfg.get("sponsored", ())),
            default_tag=str(content_cfg.get("default_tag") or ""),
            delete_delay=delete_delay,
            db_path=str(storage_cfg.get("path") or _DEFAULT_DB_PATH),
            messages=Messages.from_raw(cfg.get("messages")),
        )
        loaded.validate()
        return loaded

    def validate(self) -> None:
        required = [
            ("telegram.api_token", self.api_token),
            ("telegram.bot_username", self.bot_username),
            ("admin.password", self.admin_password),
            ("channels.sponsored", self.sponsored_channels),
        ]
        missing = [name for name, val in required if not val]
        if missing:
            raise ConfigError(f"Config missing required fields: {', '.join(missing)}")

    def to_raw(self) -> Dict[str, Any]:
        """Return the TOML-ready mapping that :meth:`from_raw` accepts."""
        return {
            "uploader": {
                "telegram": {
                    "api_token": self.api_token,
                    "bot_username": self.bot_username,
                },
                "content": {
                    "default_tag": self.default_tag,
                    "delete_delay": self.delete_delay,
                },
                "admin": {"password": self.admin_password},
                "storage": {"path": self.db_path},
                "channels": {"sponsored": list(self.sponsored_channels)},
                "messages": {
                    "welcome": self.messages.welcome,
                    "join": self.messages.join,
                    "not_found": self.messages.not_found,
                    "warning": self.messages.warning,
                    "apology": self.messages.apology,
                },
            }
        }

    def database_path(self) -> Path:
        """Storage location; ``$UPLOADER_DB_PATH`` wins over the file value."""
        env = os.getenv(DB_PATH_ENV, "").strip()
        return Path(env or self.db_path)

    @property
    def public_username(self) -> str:
        return self.bot_username.lstrip("@")


def load_config(path: str | Path | None = None) -> UploaderConfig:
    """Read and validate the config file."""
    try:
        raw = load_raw_config(path)
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {exc.filename}") from exc
    except ValueError as exc:  # tomllib.TOMLDecodeError
        raise ConfigError(f"Config file is not valid TOML: {exc}") from exc
    return UploaderConfig.from_raw(raw)


__all__ = ["ConfigError", "Messages", "UploaderConfig", "load_config", "DB_PATH_ENV"]
