import logging
from typing import AsyncIterator, List, Optional

from ..config import Settings
from ..engine import BaseEngine, EngineFactory
from ..exceptions import ChatError, InvalidInputError
from ..models import Message, Result, Session, ToolDescriptor
from ..tools import MCPToolClient
from .coordinator import ChatCoordinator


class ChatFacade:
    """
    Command/query surface used by the UI layer.

    Fallible operations return a Result instead of raising.
    """

    def __init__(self, coordinator: ChatCoordinator, logger: Optional[logging.Logger] = None):
        self.coordinator = coordinator
        self.logger = logger or logging.getLogger("ChatFacade")

    @classmethod
    def from_settings(
        cls, settings: Settings, logger: Optional[logging.Logger] = None
    ) -> "ChatFacade":
        engine: BaseEngine = EngineFactory.create_engine(
            settings.engine_type, settings.get_llm_config()
        )
        tool_client = MCPToolClient(settings.mcp_server_url, logger=logger)
        coordinator = ChatCoordinator(
            engine=engine,
            tool_client=tool_client,
            attach_tool_results=settings.attach_tool_results,
            logger=logger,
        )
        return cls(coordinator, logger=logger)

    async def connect(self) -> Result[None]:
        try:
            await self.coordinator.connect()
            return Result.success()
        except ChatError as e:
            self.logger.error(f"Failed to connect: {e}")
            return Result.failure(e)

    async def disconnect(self) -> Result[None]:
        try:
            await self.coordinator.disconnect()
            return Result.success()
        except ChatError as e:
            self.logger.error(f"Failed to disconnect: {e}")
            return Result.failure(e)

    async def send_message(self, text: str) -> Result[Message]:
        if not isinstance(text, str) or not text.strip():
            return Result.failure(InvalidInputError("Message cannot be empty"))
        try:
            return Result.success(await self.coordinator.send_message(text))
        except ChatError as e:
            self.logger.error(f"Failed to send message: {e}")
            return Result.failure(e)

    def session_stream(self) -> AsyncIterator[Session]:
        return self.coordinator.store.stream()

    def current_session(self) -> Session:
        return self.coordinator.session

    async def list_tools(self) -> Result[List[ToolDescriptor]]:
        try:
            return Result.success(await self.coordinator.refresh_tools())
        except ChatError as e:
            self.logger.error(f"Failed to load tools: {e}")
            return Result.failure(e)

    async def aclose(self) -> None:
        await self.coordinator.tool_client.disconnect()
        await self.coordinator.engine.aclose()
