"""Subscriber that runs regex matchers over message text and collates handler results."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

from loguru import logger

from linkbot.bot.result import Result, collate
from linkbot.bot.subscriber import Subscriber
from linkbot.bus.events import InboundMessage, Reply
from linkbot.errors import HandlerError, HandlerFailure, NoMessageText
from linkbot.handlers.base import Handler
from linkbot.utils.helpers import require_reply_target


@dataclass(frozen=True)
class Matcher:
    """A pattern with exactly one capture group, and the handler for each capture."""

    pattern: re.Pattern[str]
    handler: Handler

    def __post_init__(self) -> None:
        if isinstance(self.pattern, str):
            object.__setattr__(self, "pattern", re.compile(self.pattern))
        if self.pattern.groups != 1:
            raise ValueError(
                f"Matcher pattern must have exactly one capture group, "
                f"got {self.pattern.groups}: {self.pattern.pattern!r}"
            )

    def captures(self, text: str) -> Iterator[str]:
        """Yield the capture of every non-overlapping match in ``text``."""
        for match in self.pattern.finditer(text):
            capture = match.group(1)
            # The group may not take part in a match, e.g. inside an alternation.
            if capture is not None:
                yield capture

    def apply(self, text: str) -> Result:
        """Run the handler on every capture in ``text`` and collate the outcomes."""
        return collate(self._outcomes(text))

    def _outcomes(self, text: str) -> Iterator[Result]:
        for capture in self.captures(text):
            try:
                yield Result.ok(self.handler.handle(capture))
            except HandlerError as e:
                logger.debug(f"Handler {self.handler.name} failed for {capture!r}: {e}")
                yield Result.fail(str(e))


class RegexMatch(Subscriber):
    """
    Registry of matchers applied to every PRIVMSG.

    All matchers run in registration order; their results are collated into
    one reply, or into one diagnostic if any handler failed.
    """

    COMMAND = "PRIVMSG"

    def __init__(self, matchers: list[Matcher] | None = None):
        self._matchers: list[Matcher] = list(matchers or [])

    def add(self, matcher: Matcher) -> None:
        self._matchers.append(matcher)
        logger.debug(f"Matcher registered: {matcher.pattern.pattern} -> {matcher.handler.name}")

    def add_pattern(self, pattern: str | re.Pattern[str], handler: Handler) -> Matcher:
        matcher = Matcher(pattern, handler)
        self.add(matcher)
        return matcher

    @property
    def matchers(self) -> tuple[Matcher, ...]:
        return tuple(self._matchers)

    def __len__(self) -> int:
        return len(self._matchers)

    def on_message(self, msg: InboundMessage) -> Reply | None:
        if msg.command != self.COMMAND:
            return None

        target = require_reply_target(msg)
        if msg.suffix is None:
            raise NoMessageText()

        result = collate(matcher.apply(msg.suffix) for matcher in self._matchers)
        if not result:
            raise HandlerFailure(result.message, target=target)
        if not result.message:
            return None
        return Reply(target, result.message)
