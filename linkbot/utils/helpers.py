"""Helpers for addressing replies on IRC."""

from __future__ import annotations

from linkbot.bus.events import InboundMessage
from linkbot.errors import NoReplyTarget

CHANNEL_PREFIXES = ("#", "&")
_CHANNEL_FORBIDDEN = {" ", "\x07", ","}


def is_channel(name: str) -> bool:
    """Whether ``name`` is a channel name (as opposed to a nickname)."""
    if not name or name[0] not in CHANNEL_PREFIXES:
        return False
    return not any(c in _CHANNEL_FORBIDDEN for c in name[1:])


def get_reply_target(msg: InboundMessage) -> str | None:
    """
    Decide where a reply to ``msg`` should go.

    Messages sent to a channel are answered in the channel; anything else was
    addressed to us directly, so the answer goes back to the sender.
    """
    first = msg.first_arg
    if first is not None and is_channel(first):
        return first
    return msg.source or None


def require_reply_target(msg: InboundMessage) -> str:
    target = get_reply_target(msg)
    if target is None:
        raise NoReplyTarget()
    return target
