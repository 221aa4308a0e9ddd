"""Websocket log subscriptions, address derivation, BNB formatting, caches, debug logs and UI state helpers for the BNB Smart Chain."""

__version__ = "0.1.0"