"""Chat transports."""

from linkbot.channels.base import BaseTransport

__all__ = ["BaseTransport"]
