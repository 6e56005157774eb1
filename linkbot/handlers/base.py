"""Base classes for matcher handlers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from loguru import logger


class Handler(ABC):
    """
    Turns one captured string into display text.

    Raise ``HandlerError`` for failures worth reporting to the user. Raise
    ``UpstreamContractViolation`` when a service answers with an unexpected
    shape; that one is not recovered.
    """

    name: str = "handler"

    @abstractmethod
    def handle(self, capture: str) -> str:
        """Produce display text for ``capture``."""


class CachedHandler(Handler):
    """
    Handler whose results never change once observed, e.g. a video title.

    Each key is fetched upstream at most once per process. Failed lookups are
    not stored, so the key is fetched again next time.
    """

    def __init__(self) -> None:
        self._cache: dict[str, str] = {}
        self.hits = 0
        self.misses = 0

    @abstractmethod
    def fetch(self, key: str) -> str:
        """Look ``key`` up upstream and format the result."""

    def handle(self, capture: str) -> str:
        cached = self._cache.get(capture)
        if cached is not None:
            self.hits += 1
            logger.debug(f"{self.name} cache hit for {capture!r}")
            return cached

        self.misses += 1
        value = self.fetch(capture)
        self._cache[capture] = value
        logger.debug(f"{self.name} cached {capture!r} ({len(self._cache)} entries)")
        return value

    def cached(self, key: str) -> str | None:
        return self._cache.get(key)

    def __len__(self) -> int:
        return len(self._cache)
