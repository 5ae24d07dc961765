import asyncio
import logging
import time
from typing import Callable, Dict, List, Optional, Sequence

import logfire

from ..engine import BaseEngine, CompletionResponse, ProviderMessage, ProviderTool
from ..exceptions import InvalidInputError, ProviderError
from ..models import (
    Message,
    MessageRole,
    Session,
    ToolDescriptor,
    ToolInvocation,
    ToolResult,
)
from ..tools import MCPToolClient, to_provider_schema
from .session import SessionStore

NO_RESPONSE_TEXT = "No response"

# The provider has no system turn inside the message list
PROVIDER_ROLES: Dict[MessageRole, str] = {
    MessageRole.USER: "user",
    MessageRole.ASSISTANT: "assistant",
    MessageRole.SYSTEM: "user",
}


def to_provider_messages(messages: Sequence[Message]) -> List[ProviderMessage]:
    return [
        ProviderMessage(role=PROVIDER_ROLES[message.role], content=message.content)
        for message in messages
    ]


def to_provider_tools(tools: Sequence[ToolDescriptor]) -> Optional[List[ProviderTool]]:
    """Map advertised tools to the provider catalog, or None when there are none."""
    if not tools:
        return None
    return [
        ProviderTool(
            name=tool.name,
            description=tool.description,
            input_schema=to_provider_schema(tool),
        )
        for tool in tools
    ]


class ChatCoordinator:
    """
    Coordinates a chat session between the completion engine and the MCP server.

    Owns the only write access to the SessionStore. Sends are serialized so
    that overlapping calls never interleave their session mutations.
    """

    def __init__(
        self,
        engine: BaseEngine,
        tool_client: MCPToolClient,
        store: Optional[SessionStore] = None,
        attach_tool_results: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        self.engine = engine
        self.tool_client = tool_client
        self.logger = logger or logging.getLogger("ChatCoordinator")
        self.store = store or SessionStore(logger=self.logger)
        self.attach_tool_results = attach_tool_results
        self._send_lock = asyncio.Lock()

    @property
    def session(self) -> Session:
        return self.store.current()

    async def connect(self) -> None:
        """
        Connect to the MCP server and load its tools.

        Raises:
            ServerConnectionError: If the channel cannot be established
        """
        try:
            tools = await self.tool_client.connect()
        except Exception:
            self.store.update(lambda session: session.with_connection(False))
            raise

        self.store.update(
            lambda session: session.with_connection(True).with_tools(tools)
        )
        self.logger.info(f"Connected with {len(tools)} tools available")

    async def disconnect(self) -> None:
        await self.tool_client.disconnect()
        self.store.update(lambda session: session.with_connection(False))
        self.logger.info("Disconnected from MCP server")

    async def refresh_tools(self) -> List[ToolDescriptor]:
        tools = await self.tool_client.list_tools()
        self.store.update(lambda session: session.with_tools(tools))
        return tools

    async def send_message(
        self, text: str, on_chunk: Optional[Callable[[str], None]] = None
    ) -> Message:
        """
        Send a user message and append the assistant's reply.

        Args:
            text: The user's message
            on_chunk: Optional callback receiving reply text as it streams in

        Returns:
            The assistant message appended to the session

        Raises:
            InvalidInputError: If the text is empty or blank
            ProviderError: If the completion call fails
        """
        if not text or not text.strip():
            raise InvalidInputError("Message cannot be empty")

        async with self._send_lock:
            with logfire.span(
                "chat_coordinator.send_message",
                session_id=self.session.session_id,
            ):
                return await self._send_message(text, on_chunk)

    async def _send_message(
        self, text: str, on_chunk: Optional[Callable[[str], None]]
    ) -> Message:
        start_time = time.time()
        user_message = Message(content=text, role=MessageRole.USER)
        session = self.store.update(lambda s: s.with_message(user_message))

        messages = to_provider_messages(session.messages)
        tools = to_provider_tools(session.available_tools)

        try:
            if on_chunk is not None:
                response = await self.engine.stream_message(messages, on_chunk, tools=tools)
            else:
                response = await self.engine.send_message(messages, tools=tools)
        except ProviderError:
            raise
        except Exception as e:
            self.logger.error(f"Completion call failed: {e}", exc_info=True)
            raise ProviderError(str(e)) from e

        reply_text = response.first_text()
        if reply_text is None:
            reply_text = NO_RESPONSE_TEXT

        tool_results = await self._run_tools(response)

        assistant_message = Message(content=reply_text, role=MessageRole.ASSISTANT)
        self.store.update(lambda s: s.with_message(assistant_message))

        if self.attach_tool_results:
            for result in tool_results:
                self.store.update(lambda s, r=result: s.with_message(self._result_message(r)))

        self.logger.info(
            f"Message exchange completed in {time.time() - start_time:.2f}s, "
            f"tool calls: {len(tool_results)}"
        )
        return assistant_message

    def _invocations(self, response: CompletionResponse) -> List[ToolInvocation]:
        return [
            ToolInvocation(name=block.name, arguments=block.input)
            for block in response.tool_uses()
        ]

    async def _run_tools(self, response: CompletionResponse) -> List[ToolResult]:
        results: List[ToolResult] = []
        for invocation in self._invocations(response):
            result = await self.tool_client.call_tool(invocation.name, invocation.arguments)
            if result.is_error:
                self.logger.warning(f"Tool {invocation.name} failed: {result.result}")
            results.append(result)
        return results

    @staticmethod
    def _result_message(result: ToolResult) -> Message:
        prefix = "Tool error" if result.is_error else "Tool result"
        return Message(
            content=f"[{prefix}: {result.tool_name}]\n{result.result}",
            role=MessageRole.SYSTEM,
        )
