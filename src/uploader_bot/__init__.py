"""Telegram bot that stores admin uploads behind share links gated by channel membership."""

__version__ = "0.1.0"
