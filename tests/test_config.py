import pytest

from mcp_chat.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in [
        "MCP_SERVER_URL",
        "CLAUDE_API_KEY",
        "ANTHROPIC_API_KEY",
        "CLAUDE_MODEL",
        "MAX_TOKENS",
        "ENGINE_TYPE",
        "ATTACH_TOOL_RESULTS",
    ]:
        monkeypatch.delenv(name, raising=False)


def test_defaults_when_environment_is_empty():
    settings = Settings(_env_file=None)

    assert settings.mcp_server_url == "ws://localhost:8765/mcp"
    assert settings.claude_api_key == ""
    assert settings.max_tokens == 1024
    assert settings.attach_tool_results is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MCP_SERVER_URL", "wss://tools.example.com/mcp")
    monkeypatch.setenv("CLAUDE_API_KEY", "sk-test")
    monkeypatch.setenv("MAX_TOKENS", "2048")
    monkeypatch.setenv("ATTACH_TOOL_RESULTS", "true")

    settings = Settings(_env_file=None)

    assert settings.mcp_server_url == "wss://tools.example.com/mcp"
    assert settings.claude_api_key == "sk-test"
    assert settings.max_tokens == 2048
    assert settings.attach_tool_results is True


def test_anthropic_key_alias(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-alias")

    assert Settings(_env_file=None).claude_api_key == "sk-alias"


def test_llm_config():
    settings = Settings(_env_file=None, claude_api_key="sk-test", claude_model="claude-test")

    config = settings.get_llm_config()

    assert config["api_key"] == "sk-test"
    assert config["llm_model"] == "claude-test"
    assert config["max_tokens"] == 1024


def test_unsupported_engine_type():
    settings = Settings(_env_file=None, engine_type="openai")

    with pytest.raises(ValueError):
        settings.get_llm_config()
