"""Hosted GAME agent configuration."""

import json
from typing import Any, Dict, List, Optional, Union

from game_sdk.config import GameConfig
from game_sdk.functions import Function
from game_sdk.game_client import GameClient, serialize_functions


class Agent:
    """
    A hosted agent: goal, description and world info plus the functions
    it may call.

    Example:
        agent = Agent(
            api_key="your-api-key",
            goal="search for best songs",
            description="Test Description",
            world_info="Test World Info",
        )
        agent.use_default_twitter_functions(["post_tweet"])
        agent.add_custom_function(telegram.get_function("send_message"))
        await agent.simulate_twitter(session_id="session-1")
    """

    def __init__(
        self,
        api_key: Optional[Union[str, GameConfig]] = None,
        goal: str = "",
        description: str = "",
        world_info: str = "",
        main_heartbeat: int = 15,
        reaction_heartbeat: int = 5,
        game_client: Optional[GameClient] = None,
    ):
        self.goal = goal
        self.description = description
        self.world_info = world_info
        self.main_heartbeat = main_heartbeat
        self.reaction_heartbeat = reaction_heartbeat
        self.enabled_functions: List[str] = []
        self.custom_functions: List[Function] = []
        self._owns_client = game_client is None
        if game_client is None:
            game_client = GameClient(api_key if api_key is not None else GameConfig.from_env())
        self.game_client = game_client

    async def close(self) -> None:
        """Close the GAME client if this agent created it."""
        if self._owns_client:
            await self.game_client.close()

    async def __aenter__(self) -> "Agent":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def set_goal(self, goal: str) -> None:
        self.goal = goal

    def set_description(self, description: str) -> None:
        self.description = description

    def set_world_info(self, world_info: str) -> None:
        self.world_info = world_info

    def set_main_heartbeat(self, main_heartbeat: int) -> None:
        self.main_heartbeat = main_heartbeat

    def set_reaction_heartbeat(self, reaction_heartbeat: int) -> None:
        self.reaction_heartbeat = reaction_heartbeat

    def get_goal(self) -> str:
        return self.goal

    def get_description(self) -> str:
        return self.description

    def get_world_info(self) -> str:
        return self.world_info

    async def list_available_default_twitter_functions(self) -> Dict[str, str]:
        """Default functions the backend offers, name to description."""
        return await self.game_client.get_functions()

    def use_default_twitter_functions(self, functions: List[str]) -> None:
        """Enable default functions by name, replacing the current selection."""
        self.enabled_functions = list(functions)

    def add_custom_function(self, custom_function: Function) -> None:
        self.custom_functions.append(custom_function)

    async def simulate_twitter(self, session_id: str) -> Any:
        return await self.game_client.simulate(
            session_id=session_id,
            goal=self.goal,
            description=self.description,
            world_info=self.world_info,
            functions=self.enabled_functions,
            custom_functions=self.custom_functions,
        )

    async def react(
        self,
        session_id: str,
        platform: str,
        tweet_id: Optional[str] = None,
        event: Optional[str] = None,
        task: Optional[str] = None,
    ) -> Any:
        return await self.game_client.react(
            session_id=session_id,
            platform=platform,
            goal=self.goal,
            description=self.description,
            world_info=self.world_info,
            functions=self.enabled_functions,
            custom_functions=self.custom_functions,
            event=event,
            task=task,
            tweet_id=tweet_id,
        )

    async def deploy_twitter(self) -> Any:
        """Deploy the agent configuration for Twitter."""
        return await self.game_client.deploy(
            goal=self.goal,
            description=self.description,
            world_info=self.world_info,
            functions=self.enabled_functions,
            custom_functions=self.custom_functions,
            main_heartbeat=self.main_heartbeat,
            reaction_heartbeat=self.reaction_heartbeat,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "goal": self.goal,
            "description": self.description,
            "worldInfo": self.world_info,
            "functions": list(self.enabled_functions),
            "customFunctions": serialize_functions(self.custom_functions),
        }

    def export(self) -> str:
        """Serialize the configuration as an indented JSON document."""
        return json.dumps(self.to_dict(), indent=4)
