import asyncio
import logging
from contextlib import AsyncExitStack
from typing import Any, Dict, List, Optional

import logfire
from mcp import ClientSession
from mcp.client.websocket import websocket_client
from mcp.types import (
    ClientRequest,
    Implementation,
    ListToolsRequest,
    TextContent,
)
from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import ServerConnectionError, ToolCallError
from ..models import ToolDescriptor, ToolResult
from .adapters import parse_tool_entries

CLIENT_INFO = Implementation(name="mcp-chat", version="0.1.0")


class RawToolListing(BaseModel):
    """``tools/list`` result kept as raw entries so each one is parsed on its own."""

    model_config = ConfigDict(extra="allow")

    tools: List[Any] = Field(default_factory=list)


class MCPToolClient:
    """
    Client for a single MCP server reached over a persistent WebSocket.

    Requests are JSON-RPC messages with ids; the MCP ``ClientSession`` keeps the
    table of pending requests and routes each response to its caller.
    """

    def __init__(self, server_url: str, logger: Optional[logging.Logger] = None):
        self.server_url = server_url
        self.logger = logger or logging.getLogger("MCPToolClient")
        self._channel_task: Optional[asyncio.Task] = None
        self._stop_event: Optional[asyncio.Event] = None
        self._session: Optional[ClientSession] = None
        self.is_connected = False
        self.logger.info("MCPToolClient instance created.")

    async def _open_session(self, stack: AsyncExitStack) -> ClientSession:
        read_stream, write_stream = await stack.enter_async_context(
            websocket_client(self.server_url)
        )
        session = await stack.enter_async_context(
            ClientSession(read_stream, write_stream, client_info=CLIENT_INFO)
        )
        init_result = await session.initialize()
        if init_result.capabilities.tools is None:
            self.logger.warning(
                f"Server at {self.server_url} does not advertise tool support"
            )
        return session

    async def _run_channel(self, ready: asyncio.Future, stop: asyncio.Event) -> None:
        """
        Own the channel for its whole lifetime.

        The websocket and session contexts hold task groups that must be
        exited in the task that entered them.
        """
        try:
            async with AsyncExitStack() as stack:
                session = await self._open_session(stack)
                ready.set_result(session)
                await stop.wait()
        except Exception as e:
            if not ready.done():
                ready.set_exception(e)
                return
            self.logger.warning(f"MCP channel to {self.server_url} closed with error: {e}")
        finally:
            if not ready.done():
                ready.cancel()
            if self._stop_event is stop:
                self._session = None
                self.is_connected = False

    async def connect(self) -> List[ToolDescriptor]:
        """
        Open the channel, perform the initialize handshake and list tools.

        Returns:
            Tools advertised right after the handshake (empty if listing failed)

        Raises:
            ServerConnectionError: If the channel or the handshake fails
        """
        if self.is_connected:
            await self.disconnect()

        self.logger.info(f"Connecting to MCP server: {self.server_url}")
        ready = asyncio.get_running_loop().create_future()
        stop = asyncio.Event()
        task = asyncio.create_task(self._run_channel(ready, stop))
        with logfire.span("mcp_tool_client.connect", server_url=self.server_url):
            try:
                session = await ready
            except asyncio.CancelledError:
                stop.set()
                task.cancel()
                raise
            except Exception as e:
                self.logger.error(
                    f"Error connecting to MCP server {self.server_url}: {e}",
                    exc_info=True,
                )
                await task
                raise ServerConnectionError(
                    f"Failed to connect to MCP server {self.server_url}: {e}"
                ) from e

        self._channel_task = task
        self._stop_event = stop
        self._session = session
        self.is_connected = True
        self.logger.info(f"Connected to MCP server: {self.server_url}")
        return await self.list_tools()

    async def disconnect(self) -> None:
        task, stop = self._channel_task, self._stop_event
        self._channel_task = None
        self._stop_event = None
        self._session = None
        self.is_connected = False
        if task is not None and stop is not None:
            stop.set()
            await task
            self.logger.info(f"Disconnected from MCP server: {self.server_url}")

    async def list_tools(self) -> List[ToolDescriptor]:
        if not self._session:
            self.logger.warning("MCP session not connected. Cannot list tools.")
            return []

        with logfire.span("mcp_tool_client.list_tools"):
            try:
                listing = await self._session.send_request(
                    ClientRequest(ListToolsRequest(method="tools/list")),
                    RawToolListing,
                )
                tools = parse_tool_entries(listing.tools)
            except Exception as e:
                self.logger.error(f"Error listing tools: {e}", exc_info=True)
                return []

        self.logger.info(f"Found {len(tools)} tools on {self.server_url}")
        return tools

    async def call_tool(self, tool_name: str, arguments: Dict[str, Any]) -> ToolResult:
        """
        Call a tool and return its text output.

        Failures never raise: they come back as a ToolResult flagged as an
        error whose text describes the failure.
        """
        self.logger.info(f"Calling tool {tool_name} with parameters: {arguments}")
        with logfire.span("mcp_tool_client.call_tool", tool_name=tool_name):
            try:
                return await self._call_tool(tool_name, arguments)
            except Exception as e:
                self.logger.error(f"Error calling tool {tool_name}: {e}", exc_info=True)
                return ToolResult(
                    tool_name=tool_name,
                    result=f"Error calling tool {tool_name}: {e}",
                    is_error=True,
                )

    async def _call_tool(self, tool_name: str, arguments: Dict[str, Any]) -> ToolResult:
        if not self._session:
            raise ToolCallError(tool_name, "MCP session not connected")

        result = await self._session.call_tool(tool_name, arguments)
        text = "\n".join(
            block.text for block in result.content if isinstance(block, TextContent)
        )
        self.logger.info(f"Tool {tool_name} executed. Error flag: {result.isError}")
        return ToolResult(tool_name=tool_name, result=text, is_error=bool(result.isError))
