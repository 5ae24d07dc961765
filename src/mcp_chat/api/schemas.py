from typing import List, Optional

from pydantic import BaseModel, Field

from ..models import Message, Session, ToolDescriptor


class SendMessageInput(BaseModel):
    content: str = Field(..., description="The user's message")


class MessageResponse(BaseModel):
    message: Message


class StatusResponse(BaseModel):
    success: bool
    is_connected: bool
    error: Optional[str] = None


class ToolsResponse(BaseModel):
    tools: List[ToolDescriptor]
    count: int


class SessionResponse(BaseModel):
    session: Session
