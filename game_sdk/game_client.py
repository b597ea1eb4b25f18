"""Client for the hosted GAME backend."""

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from game_sdk.config import Endpoints, GameConfig
from game_sdk.exceptions import TransportError, from_response
from game_sdk.functions import Function
from game_sdk.transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)

CustomFunction = Union[Function, Dict[str, Any]]


def serialize_functions(functions: Sequence[CustomFunction]) -> List[Dict[str, Any]]:
    """Export custom functions in the GAME wire format."""
    return [fn.to_dict() if isinstance(fn, Function) else dict(fn) for fn in functions]


class GameClient:
    """
    GAME backend API client.

    Usage:
        client = GameClient(GameConfig(api_key="your-api-key"))

        # Default Twitter functions offered by the backend
        functions = await client.get_functions()

        # Try an agent configuration without deploying it
        result = await client.simulate(
            session_id="session-1",
            goal="search for best songs",
            description="Music fan",
            world_info="",
            functions=["post_tweet"],
            custom_functions=[],
        )
    """

    def __init__(
        self,
        config: Union[GameConfig, str],
        transport: Optional[Transport] = None,
    ):
        """
        Initialize the client.

        Args:
            config: GameConfig, or an API key for the default configuration
            transport: HTTP transport (default: HttpxTransport)
        """
        self.config = config if isinstance(config, GameConfig) else GameConfig(api_key=config)
        self.transport = transport or HttpxTransport(timeout=self.config.timeout)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if close is not None:
            await close()

    def _headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self.config.api_key,
            "Content-Type": "application/json",
        }

    async def request(
        self,
        method: str,
        path: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Make an API request.

        Request bodies are wrapped as ``{"data": ...}`` and the ``data``
        member of the response is returned.

        Raises:
            APIError: On non-2xx responses
            TransportError: When no response was received
        """
        url = f"{self.config.base_url}{path}"
        body = {"data": data} if data is not None else None

        try:
            response = await self.transport.request(method, url, headers=self._headers(), json=body)
        except TransportError as e:
            logger.error(f"{method} {path} failed: {e.message}")
            raise

        if not response.ok:
            logger.error(f"{method} {path} returned HTTP {response.status_code}: {response.data}")
            raise from_response(response.status_code, response.data)

        if isinstance(response.data, dict):
            return response.data.get("data")
        return response.data

    async def get_functions(self) -> Dict[str, str]:
        """
        Get all default functions.

        Returns:
            Mapping of function name to description
        """
        data = await self.request("GET", Endpoints.GAME_FUNCTIONS)
        return {fn["fn_name"]: fn["fn_description"] for fn in data or []}

    async def simulate(
        self,
        session_id: str,
        goal: str,
        description: str,
        world_info: str,
        functions: List[str],
        custom_functions: Sequence[CustomFunction],
    ) -> Any:
        """Simulate an agent configuration."""
        return await self.request(
            "POST",
            Endpoints.GAME_SIMULATE,
            data={
                "sessionId": session_id,
                "goal": goal,
                "description": description,
                "worldInfo": world_info,
                "functions": list(functions),
                "customFunctions": serialize_functions(custom_functions),
            },
        )

    async def react(
        self,
        session_id: str,
        platform: str,
        goal: str,
        description: str,
        world_info: str,
        functions: List[str],
        custom_functions: Sequence[CustomFunction],
        event: Optional[str] = None,
        task: Optional[str] = None,
        tweet_id: Optional[str] = None,
    ) -> Any:
        """
        React to an event on a platform.

        Args:
            session_id: Simulation session
            platform: Platform name, e.g. "twitter" or "telegram"
            event: Event description to react to
            task: Task to carry out
            tweet_id: Tweet the reaction refers to
        """
        payload: Dict[str, Any] = {
            "sessionId": session_id,
            "goal": goal,
            "description": description,
            "worldInfo": world_info,
            "functions": list(functions),
            "customFunctions": serialize_functions(custom_functions),
        }
        if event:
            payload["event"] = event
        if task:
            payload["task"] = task
        if tweet_id:
            payload["tweetId"] = tweet_id

        return await self.request(
            "POST",
            Endpoints.GAME_REACT.format(platform=platform),
            data=payload,
        )

    async def deploy(
        self,
        goal: str,
        description: str,
        world_info: str,
        functions: List[str],
        custom_functions: Sequence[CustomFunction],
        main_heartbeat: int,
        reaction_heartbeat: int,
    ) -> Any:
        """Deploy an agent configuration."""
        return await self.request(
            "POST",
            Endpoints.GAME_DEPLOY,
            data={
                "goal": goal,
                "description": description,
                "worldInfo": world_info,
                "functions": list(functions),
                "customFunctions": serialize_functions(custom_functions),
                "gameState": {
                    "mainHeartbeat": main_heartbeat,
                    "reactionHeartbeat": reaction_heartbeat,
                },
            },
        )
