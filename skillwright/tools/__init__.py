"""Tools exposed to callers. Each operation is a tool with name, schema, and callable."""
from skillwright.tools.registry import get_tool_registry

# Import tools so they register themselves
import skillwright.tools.skill_tools  # noqa: F401

__all__ = ["get_tool_registry"]
