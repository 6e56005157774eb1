"""Base class for anything that reacts to inbound messages."""

from __future__ import annotations

from abc import ABC, abstractmethod

from linkbot.bus.events import InboundMessage, OutboundCommand


class Subscriber(ABC):
    """
    Receives every inbound message, in registration order.

    ``on_message`` returns a command to send, ``None`` for no action, or
    raises a ``DispatchError`` to report a failure for this message only.
    """

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    def on_message(self, msg: InboundMessage) -> OutboundCommand | None:
        """React to one inbound message."""
