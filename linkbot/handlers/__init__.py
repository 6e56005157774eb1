"""Matcher handlers for the web services linkbot knows about."""

from linkbot.handlers.base import CachedHandler, Handler

__all__ = ["CachedHandler", "Handler"]
