"""Message types passed between the chat transport and subscribers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias


@dataclass(frozen=True)
class InboundMessage:
    """Message received from the chat transport."""

    command: str  # PRIVMSG, NOTICE, JOIN, ...
    args: tuple[str, ...] = field(default_factory=tuple)  # Address arguments, e.g. ("#channel",)
    suffix: str | None = None  # Free text after the address arguments
    source: str | None = None  # Sender nickname, when the message has one

    @property
    def first_arg(self) -> str | None:
        return self.args[0] if self.args else None

    def to_line(self) -> str:
        """Render the message roughly as it appeared on the wire, for logs."""
        parts = []
        if self.source:
            parts.append(f":{self.source}")
        parts.append(self.command)
        parts.extend(self.args)
        if self.suffix is not None:
            parts.append(f":{self.suffix}")
        return " ".join(parts)


@dataclass(frozen=True)
class Reply:
    """Text to send to a channel or a user."""

    target: str
    text: str


# Reply is the only command subscribers can produce today.
OutboundCommand: TypeAlias = Reply
