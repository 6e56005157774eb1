"""YouTube video titles, channels and durations."""

from __future__ import annotations

import re

from linkbot.errors import HandlerError, UpstreamContractViolation
from linkbot.handlers.base import CachedHandler
from linkbot.utils.http import HttpClient
from linkbot.utils.jsonpath import parse_json, require

PATTERN = r"(?:youtube\.com/watch\?\S*?v=|youtu\.be/)([\w-]+)"

_ISO_DURATION = re.compile(
    r"^P(?:(?P<days>\d+)D)?(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+)S)?)?$"
)


def parse_duration(value: str) -> int:
    """Parse an ISO 8601 duration such as ``PT1H2M3S`` into seconds."""
    match = _ISO_DURATION.match(value)
    if not match or value in ("P", "PT") or value.endswith("T"):
        raise UpstreamContractViolation("youtube", f"unparsable duration {value!r}")
    parts = {k: int(v) for k, v in match.groupdict(default="0").items()}
    return ((parts["days"] * 24 + parts["hours"]) * 60 + parts["minutes"]) * 60 + parts["seconds"]


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


def format_duration(seconds: int) -> str:
    """Human duration using the largest units: ``1 hour 2 minutes``, ``3 minutes``, ``45 seconds``."""
    if seconds <= 0:
        return "live"
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return _plural(hours, "hour") + (f" {_plural(minutes, 'minute')}" if minutes else "")
    if minutes:
        return _plural(minutes, "minute")
    return _plural(secs, "second")


class YouTubeHandler(CachedHandler):
    """Describe a video by title, channel and length."""

    name = "youtube"

    def __init__(self, http: HttpClient, api_key: str, api_base: str = "https://www.googleapis.com/youtube/v3"):
        super().__init__()
        self.http = http
        self.api_key = api_key
        self.api_base = api_base.rstrip("/")

    def fetch(self, video_id: str) -> str:
        body = self.http.get(
            f"{self.api_base}/videos",
            params={"part": "snippet,contentDetails", "id": video_id, "key": self.api_key},
        )
        data = parse_json(body, self.name)

        items = require(data, "items", kind=list, service=self.name)
        if not items:
            raise HandlerError(f"No YouTube video with id {video_id}")

        title = require(items, 0, "snippet", "title", kind=str, service=self.name)
        channel = require(items, 0, "snippet", "channelTitle", kind=str, service=self.name)
        duration = require(items, 0, "contentDetails", "duration", kind=str, service=self.name)
        return f'"{title}" by {channel} ({format_duration(parse_duration(duration))})'
