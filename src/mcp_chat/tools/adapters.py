"""
Tool descriptor adapters.

Converts tool entries reported by an MCP server into ``ToolDescriptor``
values. Parsing is tolerant: a malformed field degrades to its empty default
instead of discarding the entry or the whole listing.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from mcp.types import Tool as MCPTool

from ..models import ToolDescriptor

logger = logging.getLogger("ToolAdapters")


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_schema(value: Any) -> Dict[str, Any]:
    if isinstance(value, dict):
        return value
    if hasattr(value, "model_json_schema"):
        try:
            return value.model_json_schema()
        except Exception:
            return {}
    return {}


class MCPToolAdapter:
    """Adapter for a single MCP tool entry (typed or raw) to a ToolDescriptor."""

    def __init__(self, entry: Any):
        self._entry = entry

    def _field(self, *names: str) -> Any:
        for name in names:
            if isinstance(self._entry, dict):
                if name in self._entry:
                    return self._entry[name]
            elif hasattr(self._entry, name):
                return getattr(self._entry, name)
        return None

    def to_descriptor(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=_as_str(self._field("name")),
            description=_as_str(self._field("description")),
            input_schema=_as_schema(self._field("inputSchema", "input_schema")),
        )


def parse_tool_entries(entries: Optional[Iterable[Any]]) -> List[ToolDescriptor]:
    """Parse every entry of a tool listing, keeping malformed ones with defaults."""
    descriptors: List[ToolDescriptor] = []
    for entry in entries or []:
        if not isinstance(entry, (dict, MCPTool)):
            logger.warning(f"Unexpected tool entry type: {type(entry).__name__}")
        descriptors.append(MCPToolAdapter(entry).to_descriptor())
    return descriptors


def to_provider_schema(descriptor: ToolDescriptor) -> Dict[str, Any]:
    """Input schema for the provider's tool catalog; never empty."""
    schema = dict(descriptor.input_schema)
    schema.setdefault("type", "object")
    return schema
