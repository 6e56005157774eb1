"""Bot loop: reads messages from the transport and fans them out to subscribers."""

from __future__ import annotations

from typing import Iterable

from loguru import logger

from linkbot.bot.subscriber import Subscriber
from linkbot.bus.events import InboundMessage, OutboundCommand, Reply
from linkbot.channels.base import BaseTransport
from linkbot.errors import DispatchError, TransportError, UpstreamContractViolation


class Bot:
    """
    The bot loop owns the transport connection.

    For each inbound message it:
    1. Calls every subscriber, in registration order
    2. Sends each produced command straight away
    3. Logs (and optionally relays) subscriber failures, then carries on

    Transport errors end the loop. So do upstream contract violations, which
    mean a service changed under us.
    """

    def __init__(
        self,
        transport: BaseTransport,
        subscribers: Iterable[Subscriber] = (),
        relay_errors: bool = True,
    ):
        self.transport = transport
        self.subscribers: list[Subscriber] = list(subscribers)
        self.relay_errors = relay_errors

    def add_subscriber(self, subscriber: Subscriber) -> None:
        self.subscribers.append(subscriber)
        logger.debug(f"Subscriber registered: {subscriber.name}")

    def run_forever(self) -> None:
        """Process messages until the transport ends the stream.

        Raises ``TransportError`` if the transport fails.
        """
        logger.info(f"Bot loop started with {len(self.subscribers)} subscriber(s)")
        while self.run_once():
            pass
        logger.info("Transport closed the stream, bot loop finished")

    def run_once(self) -> bool:
        """Process one inbound message. Returns False at end of stream."""
        msg = self.transport.receive()
        if msg is None:
            return False
        self.dispatch(msg)
        return True

    def dispatch(self, msg: InboundMessage) -> None:
        """Fan one message out to every subscriber."""
        for subscriber in self.subscribers:
            try:
                command = subscriber.on_message(msg)
            except (TransportError, UpstreamContractViolation):
                raise
            except DispatchError as e:
                self._on_dispatch_error(subscriber, msg, e)
                continue
            except Exception:
                logger.exception(f"Subscriber {subscriber.name} crashed on: {msg.to_line()}")
                continue

            if command is not None:
                self._send(command)

    def _on_dispatch_error(self, subscriber: Subscriber, msg: InboundMessage, error: DispatchError) -> None:
        logger.warning(f"{subscriber.name} failed on {msg.to_line()!r}: {error}")
        if self.relay_errors and error.target:
            self._send(Reply(error.target, str(error)))

    def _send(self, command: OutboundCommand) -> None:
        logger.debug(f"Sending to {command.target}: {command.text}")
        self.transport.send(command)
