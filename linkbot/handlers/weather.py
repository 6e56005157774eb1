"""Current weather by place name, from OpenWeatherMap."""

from __future__ import annotations

import math

from linkbot.errors import HandlerError, HttpNotFound
from linkbot.handlers.base import Handler
from linkbot.utils.http import HttpClient
from linkbot.utils.jsonpath import parse_json, require

PATTERN = r"^!weather\s+(\S.*?)\s*$"

UNIT_SYMBOLS = {"metric": "°C", "imperial": "°F", "standard": " K"}


class WeatherHandler(Handler):
    """
    Report current conditions for a place.

    Not cached: unlike a video title, the weather changes.
    """

    name = "weather"

    def __init__(
        self,
        http: HttpClient,
        api_key: str,
        api_base: str = "https://api.openweathermap.org/data/2.5",
        units: str = "metric",
    ):
        if units not in UNIT_SYMBOLS:
            raise ValueError(f"units must be one of {', '.join(UNIT_SYMBOLS)}, got {units!r}")
        self.http = http
        self.api_key = api_key
        self.api_base = api_base.rstrip("/")
        self.units = units

    def handle(self, place: str) -> str:
        try:
            body = self.http.get(
                f"{self.api_base}/weather",
                params={"q": place, "appid": self.api_key, "units": self.units},
            )
        except HttpNotFound as e:
            raise HandlerError(f"No weather found for {place}") from e
        data = parse_json(body, self.name)

        city = require(data, "name", kind=str, service=self.name)
        description = require(data, "weather", 0, "description", kind=str, service=self.name)
        temperature = require(data, "main", "temp", kind=(int, float), service=self.name)
        # Some places (open sea, disputed areas) come back without a country
        sys_info = data.get("sys")
        country = sys_info.get("country") if isinstance(sys_info, dict) else None

        where = f"{city}, {country}" if country else city
        return f"Weather in {where}: {description}, {math.floor(temperature + 0.5)}{UNIT_SYMBOLS[self.units]}"
