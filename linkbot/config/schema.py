"""Configuration schema using Pydantic."""

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class IrcConfig(BaseModel):
    """IRC connection configuration."""
    server: str = "irc.libera.chat"
    port: int = 6697
    use_ssl: bool = True
    nickname: str = "linkbot"
    username: str = ""  # Defaults to the nickname
    realname: str = ""  # Defaults to the nickname
    password: str = ""  # Server password, if the network needs one
    channels: list[str] = Field(default_factory=list)  # Joined after registration
    quit_message: str = "linkbot shutting down"
    poll_interval: float = 0.2  # Seconds per reactor pump while waiting for input

    @field_validator("port")
    @classmethod
    def _valid_port(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError(f"port out of range: {v}")
        return v


class BotConfig(BaseModel):
    """Dispatch and logging behaviour."""
    relay_errors: bool = True  # Send handler failures back to the channel/user
    log_level: str = "INFO"
    log_file: str = ""  # Extra log sink, rotated by size when set


class HttpConfig(BaseModel):
    """Outbound HTTP settings shared by all services."""
    timeout: float = 10.0
    user_agent: str = "linkbot (+https://github.com/linkbot/linkbot)"


class YouTubeConfig(BaseModel):
    """YouTube video lookups."""
    enabled: bool = True
    api_key: str = ""
    api_key_file: str = "youtube_api_key.txt"
    api_base: str = "https://www.googleapis.com/youtube/v3"


class XkcdConfig(BaseModel):
    """XKCD comic lookups."""
    enabled: bool = True
    api_base: str = "https://xkcd.com"


class WeatherConfig(BaseModel):
    """Current weather lookups via OpenWeatherMap."""
    enabled: bool = True
    api_key: str = ""
    api_key_file: str = "weather_api_key.txt"
    api_base: str = "https://api.openweathermap.org/data/2.5"
    units: str = "metric"  # metric | imperial | standard

    @field_validator("units")
    @classmethod
    def _valid_units(cls, v: str) -> str:
        if v not in ("metric", "imperial", "standard"):
            raise ValueError(f"units must be metric, imperial or standard, got {v!r}")
        return v


class GfycatConfig(BaseModel):
    """Gfycat clip lookups."""
    enabled: bool = True
    api_base: str = "https://api.gfycat.com/v1"


class ServicesConfig(BaseModel):
    """Configuration for the web services linkbot looks things up in."""
    youtube: YouTubeConfig = Field(default_factory=YouTubeConfig)
    xkcd: XkcdConfig = Field(default_factory=XkcdConfig)
    weather: WeatherConfig = Field(default_factory=WeatherConfig)
    gfycat: GfycatConfig = Field(default_factory=GfycatConfig)


class Config(BaseSettings):
    """Root configuration for linkbot."""
    irc: IrcConfig = Field(default_factory=IrcConfig)
    bot: BotConfig = Field(default_factory=BotConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    services: ServicesConfig = Field(default_factory=ServicesConfig)

    model_config = SettingsConfigDict(
        env_prefix="LINKBOT_",
        env_nested_delimiter="__",
    )
