"""
Domain models for the chat session.

Every model is frozen: the session is only ever changed by building a new
value with ``model_copy(update=...)``.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Generic, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MessageRole(str, Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class Message(BaseModel):
    """A single turn in the conversation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    content: str
    role: MessageRole
    timestamp: datetime = Field(default_factory=utc_now)


class ToolDescriptor(BaseModel):
    """A tool advertised by the MCP server."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    description: str = ""
    input_schema: Dict[str, Any] = Field(default_factory=dict)


class ToolInvocation(BaseModel):
    """A tool call requested by the provider."""

    model_config = ConfigDict(frozen=True)

    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class ToolResult(BaseModel):
    """Outcome of a tool call."""

    model_config = ConfigDict(frozen=True)

    tool_name: str
    result: str
    is_error: bool = False


class Session(BaseModel):
    """Full state of the chat conversation."""

    model_config = ConfigDict(frozen=True)

    session_id: str = Field(default_factory=new_id)
    messages: Tuple[Message, ...] = ()
    available_tools: Tuple[ToolDescriptor, ...] = ()
    is_connected: bool = False

    def with_message(self, message: Message) -> "Session":
        return self.model_copy(update={"messages": self.messages + (message,)})

    def with_tools(self, tools) -> "Session":
        return self.model_copy(update={"available_tools": tuple(tools)})

    def with_connection(self, is_connected: bool) -> "Session":
        return self.model_copy(update={"is_connected": is_connected})


@dataclass(frozen=True)
class Result(Generic[T]):
    """Explicit success/failure outcome returned to the UI layer."""

    value: Optional[T] = None
    error: Optional[Exception] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> "Result[T]":
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None
