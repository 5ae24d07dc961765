"""
Tests for the UI-facing command/query surface
"""

import pytest

from conftest import FakeToolClient, make_response, text_block
from mcp_chat.app import ChatCoordinator, ChatFacade
from mcp_chat.config import Settings
from mcp_chat.engine.implementations import AnthropicEngine
from mcp_chat.exceptions import InvalidInputError, ProviderError, ServerConnectionError
from mcp_chat.tools import MCPToolClient


@pytest.mark.asyncio
async def test_empty_input_returns_failure_and_leaves_session(facade, fake_engine, store):
    before = store.current()

    result = await facade.send_message("")

    assert result.is_failure
    assert isinstance(result.error, InvalidInputError)
    assert store.current() == before
    assert fake_engine.calls == []


@pytest.mark.asyncio
async def test_send_message_returns_assistant_message(facade, fake_engine):
    fake_engine.queue(make_response(text_block("hi there")))

    result = await facade.send_message("hello")

    assert result.is_success
    assert result.value.content == "hi there"


@pytest.mark.asyncio
async def test_provider_failure_returns_failure(facade, fake_engine, store):
    fake_engine.queue(ProviderError("Completion request failed"))

    result = await facade.send_message("hello")

    assert isinstance(result.error, ProviderError)
    assert result.value is None
    assert len(store.current().messages) == 1


@pytest.mark.asyncio
async def test_connect_result(facade, store):
    result = await facade.connect()

    assert result.is_success
    assert result.value is None
    assert store.current().is_connected is True


@pytest.mark.asyncio
async def test_connect_failure_result(fake_engine, store):
    coordinator = ChatCoordinator(
        engine=fake_engine, tool_client=FakeToolClient(fail_connect=True), store=store
    )
    facade = ChatFacade(coordinator)

    result = await facade.connect()

    assert result.is_failure
    assert isinstance(result.error, ServerConnectionError)
    assert store.current().is_connected is False


@pytest.mark.asyncio
async def test_list_tools_result(fake_engine, store, search_tool):
    coordinator = ChatCoordinator(
        engine=fake_engine, tool_client=FakeToolClient(tools=[search_tool]), store=store
    )
    facade = ChatFacade(coordinator)

    result = await facade.list_tools()

    assert result.value == [search_tool]
    assert store.current().available_tools == (search_tool,)


@pytest.mark.asyncio
async def test_session_stream_replays_current_session(facade, store):
    await facade.send_message("hello")

    updates = facade.session_stream()
    session = await updates.__anext__()
    await updates.aclose()

    assert session == store.current()
    assert len(session.messages) == 2


@pytest.mark.asyncio
async def test_disconnect_and_close(facade, fake_engine, fake_tool_client, store):
    await facade.connect()

    result = await facade.disconnect()
    await facade.aclose()

    assert result.is_success
    assert store.current().is_connected is False
    assert fake_engine.closed is True
    assert fake_tool_client.disconnect_count == 2


def test_from_settings_wires_real_adapters():
    settings = Settings(
        _env_file=None,
        claude_api_key="test-key",
        mcp_server_url="ws://tools.test/mcp",
        attach_tool_results=True,
    )

    facade = ChatFacade.from_settings(settings)

    assert isinstance(facade.coordinator.engine, AnthropicEngine)
    assert isinstance(facade.coordinator.tool_client, MCPToolClient)
    assert facade.coordinator.tool_client.server_url == "ws://tools.test/mcp"
    assert facade.coordinator.attach_tool_results is True
