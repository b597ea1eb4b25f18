"""Shared pytest fixtures for testing."""

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from game_sdk.config import DiscordConfig, GameConfig, TelegramConfig
from game_sdk.functions import ArgumentType, Function, FunctionArgument, FunctionConfig
from game_sdk.invoker import FunctionInvoker
from game_sdk.plugins import DiscordPlugin, TelegramPlugin
from game_sdk.transport import HttpxTransport, TransportResponse

BOT_TOKEN = "test-bot-token"
TELEGRAM_URL = f"https://api.telegram.org/bot{BOT_TOKEN}"
DISCORD_URL = "https://discord.com/api/v10"
GAME_URL = "https://game-api.virtuals.io/api"


# =============================================================================
# Transport Fixtures
# =============================================================================


@pytest.fixture
def mock_transport():
    """Transport double answering 200 with an empty Telegram result."""
    transport = AsyncMock()
    transport.request.return_value = TransportResponse(
        status_code=200,
        data={"ok": True, "result": {}},
    )
    return transport


@pytest.fixture
def feedback():
    """Feedback callback recorder."""
    return MagicMock()


@pytest.fixture
def invoker(mock_transport, feedback):
    return FunctionInvoker(transport=mock_transport, feedback=feedback)


@pytest_asyncio.fixture
async def http_invoker():
    """Invoker over a real httpx transport, for use with respx."""
    transport = HttpxTransport(timeout=5.0)
    yield FunctionInvoker(transport=transport)
    await transport.close()


# =============================================================================
# Plugin Fixtures
# =============================================================================


@pytest.fixture
def telegram_config():
    return TelegramConfig(bot_token=BOT_TOKEN)


@pytest.fixture
def telegram(telegram_config, invoker):
    return TelegramPlugin(telegram_config, invoker=invoker)


@pytest.fixture
def http_telegram(telegram_config, http_invoker):
    return TelegramPlugin(telegram_config, invoker=http_invoker)


@pytest.fixture
def discord(invoker):
    return DiscordPlugin(DiscordConfig(bot_token=BOT_TOKEN), invoker=invoker)


@pytest.fixture
def game_config():
    return GameConfig(api_key="test-api-key")


# =============================================================================
# Function Fixtures
# =============================================================================


@pytest.fixture
def echo_function():
    """Function with one argument of each declared type."""
    return Function(
        fn_name="echo",
        fn_description="Echo values back",
        args=[
            FunctionArgument("name", "A name", ArgumentType.STRING),
            FunctionArgument("tags", "Some tags", ArgumentType.ARRAY),
            FunctionArgument("loud", "Shout it", ArgumentType.BOOLEAN),
            FunctionArgument("times", "Repeat count", ArgumentType.NUMBER),
        ],
        config=FunctionConfig(
            method="POST",
            url="https://echo.example.com/{{name}}",
            headers={"X-Name": "{{name}}"},
            payload={
                "name": "{{name}}",
                "tags": "{{tags}}",
                "loud": "{{loud}}",
                "times": 3,
                "static": {"nested": ["kept"]},
            },
        ),
    )
