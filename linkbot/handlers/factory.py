"""Build the matcher registry from configuration."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from linkbot.bot.regex_match import RegexMatch
from linkbot.config.loader import load_secret
from linkbot.config.schema import Config
from linkbot.errors import ConfigMissing
from linkbot.handlers import gfycat, weather, xkcd, youtube
from linkbot.utils.http import HttpClient


def resolve_api_key(name: str, api_key: str, api_key_file: str, base_dir: Path | None = None) -> str:
    """Return the inline key, else the key stored in ``api_key_file``.

    Raises:
        ConfigMissing: If neither is set.
    """
    if api_key:
        return api_key
    key = load_secret(api_key_file, base_dir) if api_key_file else None
    if not key:
        raise ConfigMissing(name, f"{api_key_file} not found" if api_key_file else "no key file set")
    return key


def build_registry(config: Config, http: HttpClient, base_dir: Path | None = None) -> RegexMatch:
    """
    Register a matcher for every enabled service.

    Services that need a credential are skipped, with a warning, when the
    credential is missing.
    """
    services = config.services
    registry = RegexMatch()

    if services.youtube.enabled:
        try:
            key = resolve_api_key(
                "YouTube API key", services.youtube.api_key, services.youtube.api_key_file, base_dir
            )
            registry.add_pattern(youtube.PATTERN, youtube.YouTubeHandler(http, key, services.youtube.api_base))
            logger.info("YouTube lookups enabled")
        except ConfigMissing as e:
            logger.warning(f"YouTube lookups disabled: {e}")

    if services.xkcd.enabled:
        registry.add_pattern(xkcd.PATTERN, xkcd.XkcdHandler(http, services.xkcd.api_base))
        logger.info("XKCD lookups enabled")

    if services.weather.enabled:
        try:
            key = resolve_api_key(
                "Weather API key", services.weather.api_key, services.weather.api_key_file, base_dir
            )
            registry.add_pattern(
                weather.PATTERN,
                weather.WeatherHandler(http, key, services.weather.api_base, services.weather.units),
            )
            logger.info("Weather lookups enabled")
        except ConfigMissing as e:
            logger.warning(f"Weather lookups disabled: {e}")

    if services.gfycat.enabled:
        registry.add_pattern(gfycat.PATTERN, gfycat.GfycatHandler(http, services.gfycat.api_base))
        logger.info("Gfycat lookups enabled")

    if not len(registry):
        logger.warning("No matchers registered")
    return registry
