"""Reading fields out of upstream JSON responses.

Services are expected to keep their response schema. A missing or
mistyped field raises ``UpstreamContractViolation`` rather than a
recoverable handler error.
"""

from __future__ import annotations

import json
from typing import Any

from linkbot.errors import UpstreamContractViolation


def parse_json(text: str, service: str = "upstream") -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise UpstreamContractViolation(service, f"invalid JSON: {e}") from e


def _format_path(path: tuple[str | int, ...]) -> str:
    out = "$"
    for key in path:
        out += f"[{key}]" if isinstance(key, int) else f".{key}"
    return out


def require(
    tree: Any,
    *path: str | int,
    kind: type | tuple[type, ...] = object,
    service: str = "upstream",
) -> Any:
    """
    Walk ``path`` (object keys and array indices) through ``tree``.

    Raises:
        UpstreamContractViolation: If a step is missing or the final value is
            not an instance of ``kind``.
    """
    node = tree
    for depth, key in enumerate(path):
        where = _format_path(path[: depth + 1])
        if isinstance(key, int):
            if not isinstance(node, list):
                raise UpstreamContractViolation(service, f"{where}: parent is not an array")
            if not -len(node) <= key < len(node):
                raise UpstreamContractViolation(service, f"{where}: index out of range")
        else:
            if not isinstance(node, dict):
                raise UpstreamContractViolation(service, f"{where}: parent is not an object")
            if key not in node:
                raise UpstreamContractViolation(service, f"{where}: missing field")
        node = node[key]

    # bool is an int subclass, never accept it where a number is wanted
    if isinstance(node, bool) and kind in (int, float, (int, float)):
        raise UpstreamContractViolation(service, f"{_format_path(path)}: expected number, got bool")
    if not isinstance(node, kind):
        expected = kind.__name__ if isinstance(kind, type) else "/".join(k.__name__ for k in kind)
        raise UpstreamContractViolation(
            service, f"{_format_path(path)}: expected {expected}, got {type(node).__name__}"
        )
    return node
