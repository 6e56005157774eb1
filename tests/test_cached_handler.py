import pytest

from linkbot.bot.regex_match import RegexMatch
from linkbot.bus.events import InboundMessage
from linkbot.errors import HandlerError, HandlerFailure, UpstreamContractViolation
from linkbot.handlers.base import CachedHandler


class _CountingHandler(CachedHandler):
    name = "counting"

    def __init__(self, responses):
        super().__init__()
        self.responses = list(responses)
        self.upstream_calls = 0

    def fetch(self, key: str) -> str:
        self.upstream_calls += 1
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def test_second_lookup_is_served_from_cache():
    handler = _CountingHandler(["X"])

    assert handler.handle("abc") == "X"
    assert handler.handle("abc") == "X"
    assert handler.upstream_calls == 1
    assert handler.hits == 1
    assert handler.misses == 1
    assert handler.cached("abc") == "X"


def test_failed_lookup_is_retried():
    handler = _CountingHandler([HandlerError("HTTP Error (503)"), "X"])

    with pytest.raises(HandlerError):
        handler.handle("abc")
    assert handler.cached("abc") is None
    assert len(handler) == 0

    assert handler.handle("abc") == "X"
    assert handler.upstream_calls == 2


def test_contract_violation_is_not_cached():
    handler = _CountingHandler([UpstreamContractViolation("svc", "missing field"), "X"])

    with pytest.raises(UpstreamContractViolation):
        handler.handle("abc")
    assert handler.cached("abc") is None


def test_distinct_keys_are_fetched_separately():
    handler = _CountingHandler(["X", "Y"])

    assert handler.handle("a") == "X"
    assert handler.handle("b") == "Y"
    assert len(handler) == 2


def test_duplicate_keys_in_one_message_hit_upstream_once():
    handler = _CountingHandler(["Title"])
    registry = RegexMatch()
    registry.add_pattern(r"v=(\w+)", handler)

    reply = registry.on_message(InboundMessage("PRIVMSG", ("#chan",), "v=abc and again v=abc", source="alice"))

    assert reply.text == "Title; Title"
    assert handler.upstream_calls == 1


def test_failure_in_one_message_does_not_poison_the_next():
    handler = _CountingHandler([HandlerError("Connection failed."), "Title"])
    registry = RegexMatch()
    registry.add_pattern(r"v=(\w+)", handler)
    msg = InboundMessage("PRIVMSG", ("#chan",), "v=abc", source="alice")

    with pytest.raises(HandlerFailure, match="Connection failed."):
        registry.on_message(msg)
    assert registry.on_message(msg).text == "Title"
