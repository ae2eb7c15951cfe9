"""Handlers for non-command updates: guide buttons and admin uploads."""
