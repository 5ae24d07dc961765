"""
Provider-side schema for the Anthropic Messages API.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProviderMessage(BaseModel):
    """One entry of the request's message list."""

    role: str
    content: str


class ProviderTool(BaseModel):
    """One entry of the request's tool catalog."""

    name: str
    description: str = ""
    input_schema: Dict[str, Any] = Field(default_factory=dict)


class ContentBlock(BaseModel):
    """A response content block: either text or a tool-use directive."""

    model_config = ConfigDict(extra="ignore")

    type: str
    text: Optional[str] = None
    id: Optional[str] = None
    name: Optional[str] = None
    input: Dict[str, Any] = Field(default_factory=dict)

    @property
    def is_text(self) -> bool:
        return self.type == "text" and self.text is not None

    @property
    def is_tool_use(self) -> bool:
        return self.type == "tool_use" and bool(self.name)


class CompletionResponse(BaseModel):
    """Decoded provider response."""

    model_config = ConfigDict(extra="ignore")

    id: str
    type: str = "message"
    role: str
    content: List[ContentBlock] = Field(default_factory=list)
    model: str
    stop_reason: Optional[str] = None

    def first_text(self) -> Optional[str]:
        return next((block.text for block in self.content if block.is_text), None)

    def tool_uses(self) -> List[ContentBlock]:
        return [block for block in self.content if block.is_tool_use]
