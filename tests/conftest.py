"""
Pytest configuration and fixtures for chat session testing
"""

import asyncio
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import logfire
import pytest
import pytest_asyncio

# Add the src directory to the path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from mcp_chat.app import ChatCoordinator, ChatFacade, SessionStore  # noqa: E402
from mcp_chat.engine import (  # noqa: E402
    BaseEngine,
    CompletionResponse,
    ProviderMessage,
    ProviderTool,
)
from mcp_chat.exceptions import ServerConnectionError  # noqa: E402
from mcp_chat.models import ToolDescriptor, ToolResult  # noqa: E402

logfire.configure(send_to_logfire=False, console=False)


def text_block(text: str) -> Dict[str, Any]:
    return {"type": "text", "text": text}


def tool_use_block(name: str, arguments: Dict[str, Any], block_id: str = "toolu_1") -> Dict[str, Any]:
    return {"type": "tool_use", "id": block_id, "name": name, "input": arguments}


def make_response(*blocks: Dict[str, Any]) -> CompletionResponse:
    return CompletionResponse(
        id="msg_test",
        role="assistant",
        content=list(blocks),
        model="claude-test",
        stop_reason="end_turn",
    )


class FakeEngine(BaseEngine):
    """Completion engine returning queued responses and recording every call."""

    def __init__(self, responses: Optional[List[Any]] = None, delay: float = 0.0):
        self.responses = list(responses or [])
        self.delay = delay
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    async def _next(self) -> CompletionResponse:
        if self.delay:
            await asyncio.sleep(self.delay)
        response = self.responses.pop(0) if self.responses else make_response(text_block("ok"))
        if isinstance(response, Exception):
            raise response
        return response

    async def send_message(
        self,
        messages: List[ProviderMessage],
        tools: Optional[List[ProviderTool]] = None,
    ) -> CompletionResponse:
        self.calls.append({"messages": messages, "tools": tools, "streaming": False})
        return await self._next()

    async def stream_message(
        self,
        messages: List[ProviderMessage],
        on_chunk: Callable[[str], None],
        tools: Optional[List[ProviderTool]] = None,
    ) -> CompletionResponse:
        self.calls.append({"messages": messages, "tools": tools, "streaming": True})
        response = await self._next()
        for block in response.content:
            if block.is_text:
                for word in block.text.split(" "):
                    on_chunk(word)
        return response

    async def aclose(self) -> None:
        self.closed = True


class FakeToolClient:
    """In-memory stand-in for MCPToolClient."""

    def __init__(
        self,
        tools: Optional[List[ToolDescriptor]] = None,
        fail_connect: bool = False,
        results: Optional[Dict[str, ToolResult]] = None,
    ):
        self.tools = list(tools or [])
        self.fail_connect = fail_connect
        self.results = results or {}
        self.is_connected = False
        self.calls: List[tuple] = []
        self.disconnect_count = 0

    async def connect(self) -> List[ToolDescriptor]:
        if self.fail_connect:
            raise ServerConnectionError("Failed to connect to MCP server ws://test")
        self.is_connected = True
        return await self.list_tools()

    async def disconnect(self) -> None:
        self.disconnect_count += 1
        self.is_connected = False

    async def list_tools(self) -> List[ToolDescriptor]:
        return list(self.tools)

    async def call_tool(self, tool_name: str, arguments: Dict[str, Any]) -> ToolResult:
        self.calls.append((tool_name, arguments))
        return self.results.get(
            tool_name, ToolResult(tool_name=tool_name, result=f"{tool_name} done")
        )


@pytest.fixture
def search_tool():
    return ToolDescriptor(
        name="search",
        description="Search the web",
        input_schema={"type": "object", "properties": {"q": {"type": "string"}}},
    )


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def fake_tool_client():
    return FakeToolClient()


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def coordinator(fake_engine, fake_tool_client, store):
    return ChatCoordinator(engine=fake_engine, tool_client=fake_tool_client, store=store)


@pytest.fixture
def facade(coordinator):
    return ChatFacade(coordinator)


@pytest_asyncio.fixture
async def connected_coordinator(fake_engine, search_tool, store):
    """Coordinator connected to a tool client advertising one tool"""
    tool_client = FakeToolClient(tools=[search_tool])
    coordinator = ChatCoordinator(engine=fake_engine, tool_client=tool_client, store=store)
    await coordinator.connect()
    yield coordinator


