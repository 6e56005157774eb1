"""Gfycat clip titles and view counts."""

from __future__ import annotations

from linkbot.errors import HandlerError, HttpNotFound
from linkbot.handlers.base import CachedHandler
from linkbot.utils.http import HttpClient
from linkbot.utils.jsonpath import parse_json, require

PATTERN = r"gfycat\.com/(?:gifs/detail/)?([A-Za-z]+)"


class GfycatHandler(CachedHandler):
    name = "gfycat"

    def __init__(self, http: HttpClient, api_base: str = "https://api.gfycat.com/v1"):
        super().__init__()
        self.http = http
        self.api_base = api_base.rstrip("/")

    def fetch(self, gfy_id: str) -> str:
        try:
            body = self.http.get(f"{self.api_base}/gfycats/{gfy_id}")
        except HttpNotFound as e:
            raise HandlerError(f"No gfycat clip {gfy_id}") from e
        data = parse_json(body, self.name)
        title = require(data, "gfyItem", "title", kind=str, service=self.name)
        views = require(data, "gfyItem", "views", kind=int, service=self.name)
        if not title:
            title = require(data, "gfyItem", "gfyName", kind=str, service=self.name)
        return f'"{title}" ({views:,} views)'
