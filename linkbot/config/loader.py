"""Configuration loading utilities."""

import json
import re
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import ValidationError
from pydantic_settings import EnvSettingsSource

from linkbot.config.schema import Config

DEFAULT_CONFIG_FILE = "config.json"

# Top-level keys of the old flat layout, which described only the IRC connection.
_LEGACY_IRC_KEYS = {
    "nickname": "nickname",
    "username": "username",
    "realname": "realname",
    "password": "password",
    "server": "server",
    "port": "port",
    "channels": "channels",
    "use_ssl": "use_ssl",
}


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.cwd() / DEFAULT_CONFIG_FILE


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from file or create default.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Loaded configuration object.
    """
    path = config_path or get_config_path()

    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
            data = _migrate_config(convert_keys(data))
            return Config(**_deep_merge(data, _env_overrides()))
        except (json.JSONDecodeError, ValidationError, ValueError) as e:
            logger.warning(f"Failed to load config from {path}: {e}")
            logger.warning("Using default configuration.")
    else:
        logger.warning(f"No config file at {path}, using default configuration.")

    return Config()


def save_config(config: Config, config_path: Path | None = None) -> None:
    """
    Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Optional path to save to. Uses default if not provided.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = convert_to_camel(config.model_dump())

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def load_secret(path: str | Path, base_dir: Path | None = None) -> str | None:
    """Read a secret from a file, stripped. Returns None if the file is missing or blank."""
    secret_path = Path(path).expanduser()
    if not secret_path.is_absolute() and base_dir is not None:
        secret_path = base_dir / secret_path
    try:
        value = secret_path.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.warning(f"Could not read {secret_path}: {e}")
        return None
    return value or None


def _env_overrides() -> dict[str, Any]:
    """Settings given through LINKBOT_* environment variables, nested by "__"."""
    return EnvSettingsSource(Config)()


def _deep_merge(base: dict, override: dict) -> dict:
    """Merge `override` into a copy of `base`, recursing into nested dicts."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _migrate_config(data: dict) -> dict:
    """Migrate old config formats to current."""
    irc = data.setdefault("irc", {})
    for old_key, new_key in _LEGACY_IRC_KEYS.items():
        if old_key in data:
            value = data.pop(old_key)
            irc.setdefault(new_key, value)
    if not irc:
        data.pop("irc")
    return data


def convert_keys(data: Any) -> Any:
    """Convert camelCase keys to snake_case for Pydantic."""
    if isinstance(data, dict):
        return {camel_to_snake(k): convert_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_keys(item) for item in data]
    return data


def convert_to_camel(data: Any) -> Any:
    """Convert snake_case keys to camelCase."""
    if isinstance(data, dict):
        return {snake_to_camel(k): convert_to_camel(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_to_camel(item) for item in data]
    return data


def camel_to_snake(name: str) -> str:
    """Convert camelCase to snake_case."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def snake_to_camel(name: str) -> str:
    """Convert snake_case to camelCase."""
    components = name.split("_")
    return components[0] + "".join(x.title() for x in components[1:])
