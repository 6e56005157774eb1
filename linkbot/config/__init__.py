"""Configuration module for linkbot."""

from linkbot.config.loader import get_config_path, load_config, load_secret
from linkbot.config.schema import Config

__all__ = ["Config", "load_config", "get_config_path", "load_secret"]
