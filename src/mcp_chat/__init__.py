from .app import ChatCoordinator, ChatFacade, SessionStore
from .models import Message, MessageRole, Result, Session, ToolDescriptor, ToolResult

__version__ = "0.1.0"

__all__ = [
    "ChatCoordinator",
    "ChatFacade",
    "SessionStore",
    "Message",
    "MessageRole",
    "Result",
    "Session",
    "ToolDescriptor",
    "ToolResult",
]
