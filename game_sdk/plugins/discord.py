"""Discord REST functions for GAME agents."""

import logging
from typing import Callable, Dict, List, Optional, Union

from game_sdk.config import DiscordConfig
from game_sdk.exceptions import UnknownFunctionError
from game_sdk.functions import Function, FunctionArgument, FunctionConfig
from game_sdk.invoker import FunctionInvoker

logger = logging.getLogger(__name__)

PLATFORM = "discord"


class DiscordPlugin:
    """
    Discord function registry.

    Every descriptor authenticates with ``Authorization: Bot <token>``.

    Usage:
        plugin = DiscordPlugin(DiscordConfig.from_env())
        pin = plugin.get_function("pin_message")
        await plugin.invoker.execute(pin, "channel-id", "message-id")
    """

    def __init__(
        self,
        config: Union[DiscordConfig, str],
        invoker: Optional[FunctionInvoker] = None,
    ):
        self.config = config if isinstance(config, DiscordConfig) else DiscordConfig(bot_token=config)
        self._owns_invoker = invoker is None
        self.invoker = invoker if invoker is not None else FunctionInvoker()
        self._factories: Dict[str, Callable[[], Function]] = {
            "send_message": self.send_message,
            "add_reaction": self.add_reaction,
            "pin_message": self.pin_message,
            "delete_message": self.delete_message,
        }

    async def close(self) -> None:
        """Close the invoker if this plugin created it."""
        if self._owns_invoker:
            await self.invoker.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @property
    def function_names(self) -> List[str]:
        return list(self._factories)

    def get_functions(self) -> Dict[str, str]:
        return {name: factory().fn_description for name, factory in self._factories.items()}

    def get_function(self, name: str) -> Function:
        factory = self._factories.get(name)
        if factory is None:
            raise UnknownFunctionError(name, platform=PLATFORM)
        return factory()

    def _headers(self, json_body: bool = False) -> Dict[str, str]:
        headers = {"Authorization": self.config.authorization}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _channel_url(self, path: str = "") -> str:
        return f"{self.config.base_url}/channels/{{{{channel_id}}}}{path}"

    def _channel_arg(self, purpose: str) -> FunctionArgument:
        return FunctionArgument("channel_id", f"ID of the Discord channel {purpose}.")

    def send_message(self) -> Function:
        return Function(
            fn_name="send_message",
            fn_description="Send a text message to a Discord channel.",
            args=[
                self._channel_arg("to send the message to"),
                FunctionArgument("content", "Content of the message to send."),
            ],
            config=FunctionConfig(
                method="POST",
                url=self._channel_url("/messages"),
                platform=PLATFORM,
                headers=self._headers(json_body=True),
                payload={"content": "{{content}}"},
                success_feedback="Message sent successfully.",
                error_feedback="Failed to send message: {{response.message}}",
            ),
        )

    def add_reaction(self) -> Function:
        return Function(
            fn_name="add_reaction",
            fn_description="Add a reaction emoji to a message.",
            args=[
                self._channel_arg("containing the message"),
                FunctionArgument("message_id", "ID of the message to add a reaction to."),
                FunctionArgument("emoji", "Emoji to add as a reaction (Unicode or custom emoji)."),
            ],
            config=FunctionConfig(
                method="PUT",
                url=self._channel_url("/messages/{{message_id}}/reactions/{{emoji}}/@me"),
                platform=PLATFORM,
                headers=self._headers(),
                success_feedback="Reaction added successfully.",
                error_feedback="Failed to add reaction: {{response.message}}",
            ),
        )

    def pin_message(self) -> Function:
        return Function(
            fn_name="pin_message",
            fn_description="Pin a message in a Discord channel.",
            args=[
                self._channel_arg("containing the message"),
                FunctionArgument("message_id", "ID of the message to pin."),
            ],
            config=FunctionConfig(
                method="PUT",
                url=self._channel_url("/pins/{{message_id}}"),
                platform=PLATFORM,
                headers=self._headers(),
                success_feedback="Message pinned successfully.",
                error_feedback="Failed to pin message: {{response.message}}",
            ),
        )

    def delete_message(self) -> Function:
        return Function(
            fn_name="delete_message",
            fn_description="Delete a message from a Discord channel.",
            args=[
                self._channel_arg("containing the message"),
                FunctionArgument("message_id", "ID of the message to delete."),
            ],
            config=FunctionConfig(
                method="DELETE",
                url=self._channel_url("/messages/{{message_id}}"),
                platform=PLATFORM,
                headers=self._headers(),
                success_feedback="Message deleted successfully.",
                error_feedback="Failed to delete message: {{response.message}}",
            ),
        )
