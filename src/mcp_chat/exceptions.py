class ChatError(Exception):
    """Base exception for chat orchestration errors."""

    pass


class InvalidInputError(ChatError):
    """Raised when user input is rejected before reaching any transport."""

    pass


class ServerConnectionError(ChatError):
    """Raised when the MCP channel cannot be established or the handshake fails."""

    pass


class ProviderError(ChatError):
    """Raised when a completion call fails at the network or decode level."""

    pass


class ToolCallError(ChatError):
    """Raised inside the tool client when a tool call fails."""

    def __init__(self, tool_name: str, message: str):
        super().__init__(message)
        self.tool_name = tool_name
