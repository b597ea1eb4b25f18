"""
GAME SDK - Configuration

Configuration values are plain dataclasses passed explicitly to the
clients and plugin registries that need them.
"""

import logging
import os
from dataclasses import dataclass

from game_sdk.exceptions import ConfigurationError


# Environment variables
ENV_GAME_API_KEY = "GAME_API_KEY"
ENV_GAME_API_URL = "GAME_API_URL"
ENV_TELEGRAM_BOT_TOKEN = "TELEGRAM_BOT_TOKEN"
ENV_DISCORD_BOT_TOKEN = "DISCORD_BOT_TOKEN"

DEFAULT_TIMEOUT = 30.0


class Endpoints:
    """Fixed base URLs and paths of the remote APIs."""

    # GAME backend
    GAME_API = "https://game-api.virtuals.io/api"
    GAME_FUNCTIONS = "/functions"
    GAME_SIMULATE = "/simulate"
    GAME_REACT = "/react/{platform}"
    GAME_DEPLOY = "/deploy"

    # Telegram Bot API
    TELEGRAM_API = "https://api.telegram.org"

    # Discord REST
    DISCORD_API = "https://discord.com/api/v10"


def _require(value: str, name: str) -> str:
    if not value:
        raise ConfigurationError(
            f"{name} is required. Provide it as a parameter or set "
            f"the {name} environment variable."
        )
    return value


@dataclass
class GameConfig:
    """
    Configuration for the GAME backend client.

    Attributes:
        api_key: GAME API key sent as the x-api-key header
        base_url: Base URL for the API
        timeout: Request timeout in seconds
        debug: Enable debug logging
    """
    api_key: str
    base_url: str = Endpoints.GAME_API
    timeout: float = DEFAULT_TIMEOUT
    debug: bool = False

    def __post_init__(self):
        _require(self.api_key, ENV_GAME_API_KEY)
        self.base_url = self.base_url.rstrip("/")
        if self.debug:
            logging.getLogger("game_sdk").setLevel(logging.DEBUG)

    @classmethod
    def from_env(cls, **overrides) -> "GameConfig":
        """Build a config from GAME_API_KEY and GAME_API_URL."""
        values = {
            "api_key": os.environ.get(ENV_GAME_API_KEY, ""),
            "base_url": os.environ.get(ENV_GAME_API_URL, Endpoints.GAME_API),
        }
        values.update(overrides)
        return cls(**values)


@dataclass
class TelegramConfig:
    """Configuration for the Telegram function registry."""
    bot_token: str
    base_url: str = Endpoints.TELEGRAM_API

    def __post_init__(self):
        _require(self.bot_token, ENV_TELEGRAM_BOT_TOKEN)
        self.base_url = self.base_url.rstrip("/")

    @property
    def bot_url(self) -> str:
        """Base URL with the bot token path segment."""
        return f"{self.base_url}/bot{self.bot_token}"

    @classmethod
    def from_env(cls, **overrides) -> "TelegramConfig":
        values = {"bot_token": os.environ.get(ENV_TELEGRAM_BOT_TOKEN, "")}
        values.update(overrides)
        return cls(**values)


@dataclass
class DiscordConfig:
    """Configuration for the Discord function registry."""
    bot_token: str
    base_url: str = Endpoints.DISCORD_API

    def __post_init__(self):
        _require(self.bot_token, ENV_DISCORD_BOT_TOKEN)
        self.base_url = self.base_url.rstrip("/")

    @property
    def authorization(self) -> str:
        return f"Bot {self.bot_token}"

    @classmethod
    def from_env(cls, **overrides) -> "DiscordConfig":
        values = {"bot_token": os.environ.get(ENV_DISCORD_BOT_TOKEN, "")}
        values.update(overrides)
        return cls(**values)
