"""
GAME SDK for Python

Templated HTTP functions for hosted GAME agents, with ready-made
function registries for Telegram and Discord.

Quick Start:

    import asyncio
    from game_sdk import FunctionInvoker, TelegramPlugin

    async def main():
        telegram = TelegramPlugin("your-bot-token")
        send_message = telegram.get_function("send_message")

        async with FunctionInvoker() as invoker:
            result = await invoker.invoke(send_message, "12345", "Hello!")
            print(result.ok, result.unwrap())

    asyncio.run(main())

"""

__version__ = "0.1.0"

from game_sdk.agent import Agent
from game_sdk.config import DiscordConfig, Endpoints, GameConfig, TelegramConfig
from game_sdk.exceptions import (
    APIError,
    ArgumentCountError,
    ArgumentError,
    ArgumentTypeError,
    AuthenticationError,
    ConfigurationError,
    GameSDKError,
    InvalidPayloadError,
    RequestFailedError,
    TransportError,
    UnknownFunctionError,
)
from game_sdk.functions import ArgumentType, Function, FunctionArgument, FunctionConfig
from game_sdk.game_client import GameClient
from game_sdk.invoker import Failure, FunctionInvoker, InvocationResult, Success
from game_sdk.plugins import DiscordPlugin, TelegramPlugin, WebhookMessage
from game_sdk.templating import interpolate
from game_sdk.transport import HttpxTransport, Transport, TransportResponse

__all__ = [
    # Version
    "__version__",
    # Functions
    "ArgumentType",
    "Function",
    "FunctionArgument",
    "FunctionConfig",
    "interpolate",
    # Invocation
    "FunctionInvoker",
    "InvocationResult",
    "Success",
    "Failure",
    "Transport",
    "TransportResponse",
    "HttpxTransport",
    # Plugins
    "TelegramPlugin",
    "DiscordPlugin",
    "WebhookMessage",
    # GAME backend
    "Agent",
    "GameClient",
    # Configuration
    "GameConfig",
    "TelegramConfig",
    "DiscordConfig",
    "Endpoints",
    # Exceptions
    "GameSDKError",
    "ConfigurationError",
    "ArgumentError",
    "ArgumentCountError",
    "ArgumentTypeError",
    "UnknownFunctionError",
    "RequestFailedError",
    "InvalidPayloadError",
    "TransportError",
    "APIError",
    "AuthenticationError",
]
