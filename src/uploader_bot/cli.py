"""
Command-line entry point.

    $ CONFIG_PATH=/etc/uploader/config.toml uploader-bot

Runs until SIGINT/SIGTERM. Exit status is 1 when startup fails or the update
stream dies, 0 on a requested shutdown.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sqlite3
import sys

from dotenv import load_dotenv

from .app import UploaderApp
from .config import ConfigError, setup_logging
from .telegram.client import TransportError

logger = logging.getLogger(__name__)


def _install_signal_handlers(stop: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:  # pragma: no cover - Windows
            signal.signal(sig, lambda *_: loop.call_soon_threadsafe(stop.set))


async def _serve(config_path: str | None) -> int:
    try:
        app = UploaderApp.build(config_path)
    except ConfigError as exc:
        logger.error("failed to initialize bot: %s", exc)
        return 1
    except sqlite3.Error as exc:
        logger.error("failed to open database: %s", exc)
        return 1

    stop = asyncio.Event()
    _install_signal_handlers(stop)
    try:
        await app.run(stop)
    except TransportError as exc:
        logger.error("bot stopped: %s", exc)
        return 1
    finally:
        await app.close()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="uploader-bot", description="Telegram file uploader bot")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.toml (defaults to $CONFIG_PATH, then ./config.toml)",
    )
    parser.add_argument("--log-level", default=None, help="Override $LOG_LEVEL")
    args = parser.parse_args(argv)

    load_dotenv()
    setup_logging(args.log_level)
    return asyncio.run(_serve(args.config))


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
