"""Result type for handler outcomes and the collation that merges them."""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Iterable

SEPARATOR = "; "


@dataclass(frozen=True, slots=True)
class Result:
    """Outcome of one handler call, or of a whole collation.

    Supports boolean evaluation and tuple unpacking::

        ok, text = Result.fail("HTTP Not Found")
    """

    success: bool
    message: str = ""

    @classmethod
    def ok(cls, message: str = "") -> Result:
        return cls(success=True, message=message)

    @classmethod
    def fail(cls, message: str = "") -> Result:
        return cls(success=False, message=message)

    def __bool__(self) -> bool:
        return self.success

    def __iter__(self):
        yield self.success
        yield self.message


def collate_results(acc: Result, item: Result) -> Result:
    """
    Fold one outcome into the running collation.

    Failures take priority and are never shown alongside successes: the first
    failure drops everything collected so far, later failures are appended and
    later successes are ignored. Empty successes add nothing.
    """
    if acc.success:
        if not item.success:
            return item
        if not item.message:
            return acc
        if not acc.message:
            return Result.ok(item.message)
        return Result.ok(f"{acc.message}{SEPARATOR}{item.message}")

    if item.success:
        return acc
    return Result.fail(f"{acc.message}{SEPARATOR}{item.message}")


def collate(results: Iterable[Result]) -> Result:
    """Collate outcomes left to right, starting from an empty success."""
    return reduce(collate_results, results, Result.ok(""))
