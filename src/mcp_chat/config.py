from typing import Any, Dict, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Load environment variables from .env and system environment
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Server settings
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=8000, validation_alias="PORT")

    # Debug mode
    debug: bool = Field(default=False, validation_alias="DEBUG")

    # MCP tool server
    mcp_server_url: str = Field(
        default="ws://localhost:8765/mcp", validation_alias="MCP_SERVER_URL"
    )

    # LLM settings
    engine_type: str = Field(default="anthropic", validation_alias="ENGINE_TYPE")
    max_tokens: int = Field(default=1024, validation_alias="MAX_TOKENS")

    # Claude settings
    claude_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("CLAUDE_API_KEY", "ANTHROPIC_API_KEY"),
    )
    claude_model: str = Field(
        default="claude-3-5-sonnet-20241022", validation_alias="CLAUDE_MODEL"
    )
    claude_base_url: Optional[str] = Field(
        default=None, validation_alias="CLAUDE_BASE_URL"
    )

    # Append tool output to the visible conversation as system messages
    attach_tool_results: bool = Field(
        default=False, validation_alias="ATTACH_TOOL_RESULTS"
    )

    # Logfire settings
    logfire_enabled: bool = Field(default=False, validation_alias="LOGFIRE_ENABLED")
    logfire_token: Optional[str] = Field(default=None, validation_alias="LOGFIRE_TOKEN")
    logfire_service_name: str = Field(
        default="mcp-chat", validation_alias="LOGFIRE_SERVICE_NAME"
    )

    def get_llm_config(self) -> Dict[str, Any]:
        """Return the engine-specific configuration dictionary."""
        llm_engine = self.engine_type.lower()
        if llm_engine == "anthropic":
            return {
                "api_key": self.claude_api_key,
                "llm_model": self.claude_model,
                "max_tokens": self.max_tokens,
                "base_url": self.claude_base_url,
            }
        else:
            raise ValueError(f"Unsupported ENGINE_TYPE: {self.engine_type}")


def get_settings() -> Settings:
    """Instantiate and return the Settings object."""
    return Settings()
