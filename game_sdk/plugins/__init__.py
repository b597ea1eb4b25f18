"""Function registries for chat platforms."""

from game_sdk.plugins.discord import DiscordPlugin
from game_sdk.plugins.telegram import TelegramPlugin, WebhookMessage

__all__ = ["DiscordPlugin", "TelegramPlugin", "WebhookMessage"]
