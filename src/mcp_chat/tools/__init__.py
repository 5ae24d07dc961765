from .adapters import MCPToolAdapter, parse_tool_entries, to_provider_schema
from .client import MCPToolClient

__all__ = [
    "MCPToolClient",
    "MCPToolAdapter",
    "parse_tool_entries",
    "to_provider_schema",
]
