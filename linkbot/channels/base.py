"""Base transport interface for chat networks."""

from __future__ import annotations

from abc import ABC, abstractmethod

from linkbot.bus.events import InboundMessage, OutboundCommand


class BaseTransport(ABC):
    """
    Abstract base class for chat transports.

    A transport connects and registers before the bot loop starts, then hands
    out inbound messages one at a time and sends commands back.
    """

    name: str = "base"

    @abstractmethod
    def connect(self) -> None:
        """Connect to the network and register our identity."""

    @abstractmethod
    def receive(self) -> InboundMessage | None:
        """
        Block until the next inbound message is available.

        Returns:
            The message, or None once the stream has ended.

        Raises:
            TransportError: If the connection fails.
        """

    @abstractmethod
    def send(self, command: OutboundCommand) -> None:
        """
        Send one command.

        Raises:
            TransportError: If the command could not be sent.
        """

    @abstractmethod
    def close(self) -> None:
        """Disconnect and release the connection."""

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Whether the transport currently has a live connection."""
