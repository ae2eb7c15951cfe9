"""Application configuration"""

import logging
import os

from .core import ConfigError, Messages, UploaderConfig, load_config
from .loader import DEFAULT_CONFIG_PATH, load_raw_config, resolve_config_path, store_raw_config
from .store import ConfigStore, UpdateResult

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | None = None) -> None:
    """Configure root logging once for the process."""
    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(format=LOG_FORMAT, datefmt=DATE_FORMAT, level=level_name)
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)


__all__ = [
    "ConfigError",
    "ConfigStore",
    "DEFAULT_CONFIG_PATH",
    "Messages",
    "UpdateResult",
    "UploaderConfig",
    "load_config",
    "load_raw_config",
    "resolve_config_path",
    "setup_logging",
    "store_raw_config",
]
