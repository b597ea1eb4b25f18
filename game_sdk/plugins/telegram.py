"""Telegram Bot API functions for GAME agents."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from game_sdk.config import TelegramConfig
from game_sdk.exceptions import InvalidPayloadError, UnknownFunctionError
from game_sdk.functions import ArgumentType, Function, FunctionArgument, FunctionConfig
from game_sdk.invoker import FunctionInvoker

logger = logging.getLogger(__name__)

PLATFORM = "telegram"
JSON_HEADERS = {"Content-Type": "application/json"}


class TelegramChat(BaseModel):
    """Chat an update belongs to."""
    id: int
    type: Optional[str] = None
    title: Optional[str] = None
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class TelegramUser(BaseModel):
    """Sender of a message."""
    id: int
    is_bot: bool = False
    first_name: str = ""
    last_name: Optional[str] = None
    username: Optional[str] = None
    language_code: Optional[str] = None


class TelegramMessage(BaseModel):
    """Incoming message. Only ``chat`` and ``text`` are required here."""
    model_config = ConfigDict(populate_by_name=True)

    message_id: Optional[int] = None
    chat: TelegramChat
    text: str
    date: Optional[int] = None
    from_user: Optional[TelegramUser] = Field(default=None, alias="from")


class TelegramUpdate(BaseModel):
    """Webhook update envelope."""
    update_id: Optional[int] = None
    message: Optional[TelegramMessage] = None


@dataclass
class WebhookMessage:
    """Chat and text extracted from a webhook update."""
    chat_id: Union[int, str]
    text: str


class TelegramPlugin:
    """
    Telegram function registry.

    Builds function descriptors for the Telegram Bot API with the bot
    token baked into their URLs. Descriptors are plain data and run through
    a FunctionInvoker.

    Usage:
        plugin = TelegramPlugin(TelegramConfig(bot_token="123:abc"))
        send_message = plugin.get_function("send_message")
        result = await plugin.invoker.invoke(send_message, "12345", "Hello")
    """

    def __init__(
        self,
        config: Union[TelegramConfig, str],
        invoker: Optional[FunctionInvoker] = None,
    ):
        self.config = config if isinstance(config, TelegramConfig) else TelegramConfig(bot_token=config)
        self._owns_invoker = invoker is None
        self.invoker = invoker if invoker is not None else FunctionInvoker()
        self._factories: Dict[str, Callable[[], Function]] = {
            "send_message": self.send_message,
            "send_media": self.send_media,
            "create_poll": self.create_poll,
            "update_pinned_message": self.update_pinned_message,
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
        """Return each supported function name with its description."""
        return {name: factory().fn_description for name, factory in self._factories.items()}

    def get_function(self, name: str) -> Function:
        """
        Build the descriptor registered under ``name``.

        Raises:
            UnknownFunctionError: If no such function exists
        """
        factory = self._factories.get(name)
        if factory is None:
            raise UnknownFunctionError(name, platform=PLATFORM)
        return factory()

    def _url(self, method: str) -> str:
        return f"{self.config.bot_url}/{method}"

    # =========================================================================
    # Function descriptors
    # =========================================================================

    def send_message(self) -> Function:
        """https://core.telegram.org/bots/api#sendmessage"""
        return Function(
            fn_name="send_message",
            fn_description=(
                "Send a text message that is contextually appropriate and adds value to "
                "the conversation. Consider chat type (private/group) and ongoing "
                "discussion context."
            ),
            args=[
                FunctionArgument(
                    "chat_id",
                    "Unique identifier for the target chat or username of the target channel",
                ),
                FunctionArgument(
                    "text",
                    "Message text to send. Should be contextually relevant and maintain conversation flow.",
                ),
            ],
            config=FunctionConfig(
                method="POST",
                url=self._url("sendMessage"),
                platform=PLATFORM,
                headers=dict(JSON_HEADERS),
                payload={"chat_id": "{{chat_id}}", "text": "{{text}}"},
                success_feedback="Message sent successfully. Message ID: {{response.result.message_id}}",
                error_feedback="Failed to send message: {{response.description}}",
            ),
        )

    def send_media(self) -> Function:
        """sendPhoto, sendVideo, sendDocument or sendAudio, picked by media_type."""
        return Function(
            fn_name="send_media",
            fn_description=(
                "Send a media message (photo, document, video, etc.) with optional caption. "
                "Use when visual or document content adds value to the conversation."
            ),
            args=[
                FunctionArgument("chat_id", "Target chat identifier where media will be sent"),
                FunctionArgument(
                    "media_type",
                    "Type of media to send: 'photo', 'document', 'video', 'audio'. "
                    "Choose appropriate type for content.",
                ),
                FunctionArgument(
                    "media",
                    "File ID or URL of the media to send. Ensure content is appropriate and relevant.",
                ),
                FunctionArgument(
                    "caption",
                    "Optional text caption accompanying the media. Should provide context or "
                    "explanation when needed, or follows up the conversation.",
                ),
            ],
            config=FunctionConfig(
                method="POST",
                url=self._url("send{{media_type}}"),
                platform=PLATFORM,
                headers=dict(JSON_HEADERS),
                payload={
                    "chat_id": "{{chat_id}}",
                    "{{media_type}}": "{{media}}",
                    "caption": "{{caption}}",
                },
                success_feedback=(
                    "Media sent successfully. Type: {{media_type}}, "
                    "Message ID: {{response.result.message_id}}"
                ),
                error_feedback="Failed to send media: {{response.description}}",
            ),
        )

    def create_poll(self) -> Function:
        """https://core.telegram.org/bots/api#sendpoll"""
        return Function(
            fn_name="create_poll",
            fn_description=(
                "Create an interactive poll to gather user opinions or make group decisions. "
                "Useful for engagement and collecting feedback."
            ),
            args=[
                FunctionArgument("chat_id", "Chat where the poll will be created"),
                FunctionArgument("question", "Main poll question. Should be clear and specific."),
                FunctionArgument(
                    "options",
                    "List of answer options. Make options clear and mutually exclusive.",
                    ArgumentType.ARRAY,
                ),
                FunctionArgument(
                    "is_anonymous",
                    "Whether poll responses are anonymous. Consider privacy and group dynamics.",
                    ArgumentType.BOOLEAN,
                ),
            ],
            config=FunctionConfig(
                method="POST",
                url=self._url("sendPoll"),
                platform=PLATFORM,
                headers=dict(JSON_HEADERS),
                payload={
                    "chat_id": "{{chat_id}}",
                    "question": "{{question}}",
                    "options": "{{options}}",
                    "is_anonymous": "{{is_anonymous}}",
                },
                success_feedback="Poll created successfully. Poll ID: {{response.result.poll.id}}",
                error_feedback="Failed to create poll: {{response.description}}",
            ),
        )

    def update_pinned_message(self) -> Function:
        """https://core.telegram.org/bots/api#pinchatmessage"""
        return Function(
            fn_name="update_pinned_message",
            fn_description=(
                "Pin an important message in a chat. Use for announcements, important "
                "information, or group rules."
            ),
            args=[
                FunctionArgument("chat_id", "Chat where the message will be pinned"),
                FunctionArgument(
                    "message_id",
                    "ID of the message to pin. Ensure message contains valuable information worth pinning.",
                ),
                FunctionArgument(
                    "disable_notification",
                    "Whether to send notification about pinned message. Consider group size "
                    "and message importance.",
                    ArgumentType.BOOLEAN,
                ),
            ],
            config=FunctionConfig(
                method="POST",
                url=self._url("pinChatMessage"),
                platform=PLATFORM,
                headers=dict(JSON_HEADERS),
                payload={
                    "chat_id": "{{chat_id}}",
                    "message_id": "{{message_id}}",
                    "disable_notification": "{{disable_notification}}",
                },
                success_feedback="Message pinned successfully",
                error_feedback="Failed to pin message: {{response.description}}",
            ),
        )

    def delete_message(self) -> Function:
        """https://core.telegram.org/bots/api#deletemessage"""
        return Function(
            fn_name="delete_message",
            fn_description=(
                "Delete a message from a chat. Use for moderation or cleaning up outdated information."
            ),
            args=[
                FunctionArgument("chat_id", "Chat containing the message to delete"),
                FunctionArgument(
                    "message_id",
                    "ID of the message to delete. Consider impact before deletion.",
                ),
            ],
            config=FunctionConfig(
                method="POST",
                url=self._url("deleteMessage"),
                platform=PLATFORM,
                headers=dict(JSON_HEADERS),
                payload={"chat_id": "{{chat_id}}", "message_id": "{{message_id}}"},
                success_feedback="Message deleted successfully",
                error_feedback="Failed to delete message: {{response.description}}",
            ),
        )

    def _set_webhook(self) -> Function:
        return Function(
            fn_name="set_webhook",
            fn_description="Register the URL Telegram delivers bot updates to.",
            args=[FunctionArgument("url", "HTTPS URL that receives updates")],
            config=FunctionConfig(
                method="POST",
                url=self._url("setWebhook"),
                platform=PLATFORM,
                headers=dict(JSON_HEADERS),
                payload={"url": "{{url}}"},
            ),
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    async def delete_messages(
        self,
        chat_id: Union[int, str],
        message_ids: List[Union[int, str]],
    ) -> Dict[Union[int, str], bool]:
        """
        Delete several messages, one request each.

        A failed deletion is recorded as False and does not stop the
        remaining ones.

        Returns:
            Mapping of message ID to whether it was deleted
        """
        function = self.delete_message()
        results: Dict[Union[int, str], bool] = {}

        for message_id in message_ids:
            result = await self.invoker.invoke(function, str(chat_id), str(message_id))
            results[message_id] = result.ok
            if result.ok:
                logger.debug(f"Deleted message {message_id}")
            else:
                logger.error(f"Failed to delete message {message_id}: {result.reason}")

        return results

    async def set_webhook(self, webhook_url: str) -> bool:
        """
        Point the bot's updates at ``webhook_url``.

        Returns:
            True if Telegram accepted the webhook
        """
        result = await self.invoker.invoke(self._set_webhook(), webhook_url)
        if result.ok:
            logger.info(f"Webhook set successfully: {result.body}")
            return True

        reason = result.reason
        if isinstance(reason, dict):
            reason = reason.get("description", reason)
        logger.error(f"Failed to set webhook: {reason}")
        return False

    def parse_webhook(self, update: Dict[str, Any]) -> WebhookMessage:
        """
        Extract the chat ID and text from a webhook update.

        Raises:
            InvalidPayloadError: If the update has no message text or chat
        """
        try:
            envelope = TelegramUpdate.model_validate(update)
        except ValidationError as e:
            raise InvalidPayloadError(details={"errors": e.errors(include_url=False)}) from e

        message = envelope.message
        if message is None or not message.text:
            raise InvalidPayloadError()

        logger.debug(f"Received webhook message in chat {message.chat.id}")
        return WebhookMessage(chat_id=message.chat.id, text=message.text)
