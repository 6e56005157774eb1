import json
import re

import pytest

from linkbot.errors import HandlerError, HttpNotFound, UpstreamContractViolation
from linkbot.handlers import gfycat, weather, xkcd, youtube


class _FakeHttp:
    def __init__(self, body=None, error=None):
        self.body = body
        self.error = error
        self.calls = []

    def get(self, url, params=None):
        self.calls.append((url, params))
        if self.error is not None:
            raise self.error
        return self.body if isinstance(self.body, str) else json.dumps(self.body)


def _video(title="Title", channel="Channel", duration="PT3M12S"):
    return {
        "items": [
            {
                "snippet": {"title": title, "channelTitle": channel},
                "contentDetails": {"duration": duration},
            }
        ]
    }


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", ["dQw4w9WgXcQ"]),
        ("youtube.com/watch?feature=share&v=a-b_c", ["a-b_c"]),
        ("see youtu.be/abc123 and youtu.be/xyz", ["abc123", "xyz"]),
        ("youtube.com/channel/foo", []),
    ],
)
def test_youtube_pattern(text, expected):
    assert re.findall(youtube.PATTERN, text) == expected


def test_youtube_lookup_formats_and_caches():
    http = _FakeHttp(_video())
    handler = youtube.YouTubeHandler(http, api_key="k", api_base="https://yt.example/v3/")

    assert handler.handle("abc123") == '"Title" by Channel (3 minutes)'
    assert handler.handle("abc123") == '"Title" by Channel (3 minutes)'

    assert len(http.calls) == 1
    url, params = http.calls[0]
    assert url == "https://yt.example/v3/videos"
    assert params == {"part": "snippet,contentDetails", "id": "abc123", "key": "k"}


def test_youtube_unknown_video_is_a_handler_error():
    handler = youtube.YouTubeHandler(_FakeHttp({"items": []}), api_key="k")
    with pytest.raises(HandlerError, match="No YouTube video"):
        handler.handle("nope")
    assert handler.cached("nope") is None


def test_youtube_missing_field_is_a_contract_violation():
    body = _video()
    del body["items"][0]["contentDetails"]
    handler = youtube.YouTubeHandler(_FakeHttp(body), api_key="k")
    with pytest.raises(UpstreamContractViolation, match="contentDetails"):
        handler.handle("abc")


@pytest.mark.parametrize(
    ("value", "seconds"),
    [("PT3M12S", 192), ("PT45S", 45), ("PT1H2M3S", 3723), ("P1DT1H", 90000), ("P0D", 0)],
)
def test_parse_duration(value, seconds):
    assert youtube.parse_duration(value) == seconds


@pytest.mark.parametrize("value", ["3:12", "PT", "P", "PT3X"])
def test_parse_duration_rejects_garbage(value):
    with pytest.raises(UpstreamContractViolation):
        youtube.parse_duration(value)


@pytest.mark.parametrize(
    ("seconds", "text"),
    [
        (45, "45 seconds"),
        (1, "1 second"),
        (192, "3 minutes"),
        (60, "1 minute"),
        (3600, "1 hour"),
        (3723, "1 hour 2 minutes"),
        (7320, "2 hours 2 minutes"),
        (0, "live"),
    ],
)
def test_format_duration(seconds, text):
    assert youtube.format_duration(seconds) == text


def test_xkcd_lookup():
    http = _FakeHttp({"num": 353, "safe_title": "Python", "title": "Python"})
    handler = xkcd.XkcdHandler(http)

    assert re.findall(xkcd.PATTERN, "https://xkcd.com/353/") == ["353"]
    assert handler.handle("353") == "xkcd 353: Python"
    assert http.calls[0][0] == "https://xkcd.com/353/info.0.json"


def test_xkcd_missing_comic():
    handler = xkcd.XkcdHandler(_FakeHttp(error=HttpNotFound()))
    with pytest.raises(HandlerError, match="No xkcd comic #404"):
        handler.handle("404")


def test_gfycat_lookup_falls_back_to_name():
    http = _FakeHttp({"gfyItem": {"title": "", "gfyName": "HappyDog", "views": 12345}})
    handler = gfycat.GfycatHandler(http)

    assert re.findall(gfycat.PATTERN, "gfycat.com/gifs/detail/HappyDog") == ["HappyDog"]
    assert handler.handle("HappyDog") == '"HappyDog" (12,345 views)'


def test_gfycat_wrong_type_is_a_contract_violation():
    handler = gfycat.GfycatHandler(_FakeHttp({"gfyItem": {"title": "t", "views": "many"}}))
    with pytest.raises(UpstreamContractViolation):
        handler.handle("x")


def test_weather_lookup_is_not_cached():
    body = {
        "name": "Oslo",
        "sys": {"country": "NO"},
        "weather": [{"description": "light rain"}],
        "main": {"temp": 6.7},
    }
    http = _FakeHttp(body)
    handler = weather.WeatherHandler(http, api_key="k", units="metric")

    assert handler.handle("Oslo") == "Weather in Oslo, NO: light rain, 7°C"
    handler.handle("Oslo")

    assert len(http.calls) == 2
    assert http.calls[0][1] == {"q": "Oslo", "appid": "k", "units": "metric"}


def test_weather_pattern_captures_the_place():
    assert re.findall(weather.PATTERN, "!weather  New York  ") == ["New York"]
    assert re.findall(weather.PATTERN, "what's the !weather") == []


def test_weather_unknown_place():
    handler = weather.WeatherHandler(_FakeHttp(error=HttpNotFound()), api_key="k")
    with pytest.raises(HandlerError, match="No weather found for Atlantis"):
        handler.handle("Atlantis")


@pytest.mark.parametrize(("temp", "shown"), [(6.5, "7°C"), (7.5, "8°C"), (-0.4, "0°C"), (-2.5, "-2°C"), (21, "21°C")])
def test_weather_rounds_half_up(temp, shown):
    body = {"name": "Oslo", "weather": [{"description": "clear sky"}], "main": {"temp": temp}}
    handler = weather.WeatherHandler(_FakeHttp(body), api_key="k")

    assert handler.handle("Oslo") == f"Weather in Oslo: clear sky, {shown}"


def test_weather_rejects_unknown_units_up_front():
    with pytest.raises(ValueError, match="kelvin"):
        weather.WeatherHandler(_FakeHttp(), api_key="k", units="kelvin")
