"""Inbound and outbound chat message types."""

from linkbot.bus.events import InboundMessage, OutboundCommand, Reply

__all__ = ["InboundMessage", "OutboundCommand", "Reply"]
