"""XKCD comic titles."""

from __future__ import annotations

from linkbot.errors import HandlerError, HttpNotFound
from linkbot.handlers.base import CachedHandler
from linkbot.utils.http import HttpClient
from linkbot.utils.jsonpath import parse_json, require

PATTERN = r"xkcd\.com/(\d+)"


class XkcdHandler(CachedHandler):
    name = "xkcd"

    def __init__(self, http: HttpClient, api_base: str = "https://xkcd.com"):
        super().__init__()
        self.http = http
        self.api_base = api_base.rstrip("/")

    def fetch(self, number: str) -> str:
        try:
            body = self.http.get(f"{self.api_base}/{int(number)}/info.0.json")
        except HttpNotFound as e:
            raise HandlerError(f"No xkcd comic #{number}") from e
        data = parse_json(body, self.name)
        num = require(data, "num", kind=int, service=self.name)
        title = require(data, "safe_title", kind=str, service=self.name)
        return f"xkcd {num}: {title}"
