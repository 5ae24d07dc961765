"""
Chat Session Package

Holds the session orchestration layer:
- SessionStore owns the session and publishes its updates
- ChatCoordinator sequences a message exchange across the completion
  engine and the MCP tool server
- ChatFacade is the narrow command/query surface the UI calls
"""

from .coordinator import ChatCoordinator
from .facade import ChatFacade
from .session import SessionStore

__all__ = [
    "ChatCoordinator",
    "ChatFacade",
    "SessionStore",
]
