"""IRC transport built on the irc library."""

from __future__ import annotations

import functools
import ssl
from collections import deque

import irc.client
import irc.connection
from loguru import logger

from linkbot.bus.events import InboundMessage, OutboundCommand
from linkbot.channels.base import BaseTransport
from linkbot.config.schema import IrcConfig
from linkbot.errors import TransportError

# Room left for ":nick!user@host PRIVMSG target :" within the 512-byte line limit.
IRC_MAX_TEXT_BYTES = 400

_EVENT_COMMANDS = {
    "pubmsg": "PRIVMSG",
    "privmsg": "PRIVMSG",
    "pubnotice": "NOTICE",
    "privnotice": "NOTICE",
}
_IGNORED_EVENTS = {"all_raw_messages", "ping", "pong"}


def _split_text(text: str, max_bytes: int = IRC_MAX_TEXT_BYTES) -> list[str]:
    """Split text into chunks that fit one IRC line, preferring spaces."""
    text = " ".join(text.splitlines())
    chunks: list[str] = []
    while len(text.encode("utf-8")) > max_bytes:
        cut = max_bytes
        while len(text[:cut].encode("utf-8")) > max_bytes:
            cut -= 1
        pos = text.rfind(" ", 0, cut)
        if pos <= 0:
            pos = cut
        chunks.append(text[:pos])
        text = text[pos:].lstrip()
    if text:
        chunks.append(text)
    return chunks


def event_to_message(event: irc.client.Event) -> InboundMessage | None:
    """Convert an irc library event into an InboundMessage."""
    if event.type in _IGNORED_EVENTS:
        return None

    command = _EVENT_COMMANDS.get(event.type, event.type.upper())
    arguments = list(event.arguments or [])
    args: tuple[str, ...] = (event.target,) if event.target else ()
    if command in ("PRIVMSG", "NOTICE"):
        suffix = arguments[0] if arguments else None
    else:
        suffix = arguments[-1] if arguments else None

    source = None
    if event.source:
        source = irc.client.NickMask(event.source).nick or None

    return InboundMessage(command=command, args=args, suffix=suffix, source=source)


class IrcTransport(BaseTransport):
    """
    IRC connection driven one message at a time.

    The reactor is pumped only from ``receive``, so everything stays on the
    caller's thread.
    """

    name = "irc"

    def __init__(self, config: IrcConfig, reactor: irc.client.Reactor | None = None):
        self.config = config
        self.reactor = reactor or irc.client.Reactor()
        self._connection: irc.client.ServerConnection | None = None
        self._pending: deque[InboundMessage] = deque()
        self._closed = False
        self.reactor.add_global_handler("welcome", self._on_welcome, -10)
        self.reactor.add_global_handler("disconnect", self._on_disconnect, -10)
        self.reactor.add_global_handler("all_events", self._on_event, 0)

    def _connect_factory(self) -> irc.connection.Factory:
        if not self.config.use_ssl:
            return irc.connection.Factory()
        context = ssl.create_default_context()
        return irc.connection.Factory(
            wrapper=functools.partial(context.wrap_socket, server_hostname=self.config.server)
        )

    def connect(self) -> None:
        logger.info(
            f"Connecting to {self.config.server}:{self.config.port} as {self.config.nickname}"
            f"{' (TLS)' if self.config.use_ssl else ''}"
        )
        try:
            self._connection = self.reactor.server().connect(
                self.config.server,
                self.config.port,
                self.config.nickname,
                password=self.config.password or None,
                username=self.config.username or self.config.nickname,
                ircname=self.config.realname or self.config.nickname,
                connect_factory=self._connect_factory(),
            )
        except irc.client.ServerConnectionError as e:
            raise TransportError(f"Could not connect to {self.config.server}: {e}") from e
        self._closed = False

    def _on_welcome(self, connection, event) -> None:
        logger.info(f"Registered on {self.config.server} as {connection.get_nickname()}")
        for channel in self.config.channels:
            connection.join(channel)
            logger.info(f"Joining {channel}")

    def _on_disconnect(self, connection, event) -> None:
        reason = event.arguments[0] if event.arguments else ""
        logger.warning(f"Disconnected from {self.config.server}: {reason}")
        self._closed = True

    def _on_event(self, connection, event) -> None:
        msg = event_to_message(event)
        if msg is not None:
            self._pending.append(msg)

    def receive(self) -> InboundMessage | None:
        if self._connection is None:
            raise TransportError("IRC transport is not connected")
        while not self._pending:
            if self._closed:
                return None
            try:
                self.reactor.process_once(timeout=self.config.poll_interval)
            except (OSError, irc.client.IRCError) as e:
                raise TransportError(f"IRC connection failed: {e}") from e
        return self._pending.popleft()

    def send(self, command: OutboundCommand) -> None:
        if self._connection is None:
            raise TransportError("IRC transport is not connected")
        try:
            for chunk in _split_text(command.text):
                self._connection.privmsg(command.target, chunk)
        except (irc.client.ServerNotConnectedError, irc.client.MessageTooLong, OSError) as e:
            raise TransportError(f"Failed to send to {command.target}: {e}") from e

    def close(self) -> None:
        if self._connection is not None and self._connection.is_connected():
            logger.info(f"Disconnecting from {self.config.server}")
            self._connection.disconnect(self.config.quit_message)
        self._closed = True

    @property
    def is_connected(self) -> bool:
        return self._connection is not None and self._connection.is_connected()
