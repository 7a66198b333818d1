"""Tool registry: read-only slug -> ToolDefinition lookup."""

from typing import Dict, Iterable, List, Optional

from toolstream.models.tool import ToolDefinition
from toolstream.services.tool_catalog import BUILTIN_TOOLS


class ToolRegistry:
    """Static mapping from tool slug to its definition."""

    def __init__(self, tools: Iterable[ToolDefinition]):
        self._tools: Dict[str, ToolDefinition] = {}
        for tool in tools:
            if tool.slug in self._tools:
                raise ValueError(f"Duplicate tool slug: {tool.slug}")
            self._tools[tool.slug] = tool

    def lookup(self, slug: Optional[str]) -> Optional[ToolDefinition]:
        """Return the tool registered under slug, or None."""
        if not slug:
            return None
        return self._tools.get(slug)

    def list_tools(self) -> List[ToolDefinition]:
        """All tools in registration order."""
        return list(self._tools.values())

    def __contains__(self, slug: str) -> bool:
        return slug in self._tools

    def __len__(self) -> int:
        return len(self._tools)


default_registry = ToolRegistry(BUILTIN_TOOLS)
