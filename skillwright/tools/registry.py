"""Central registry: register tools, list definitions, execute by name."""
from typing import Any, Callable

from skillwright.logging_utils import get_logger, log_tool_call_end, log_tool_call_start
from skillwright.tools.base import ToolDefinition

logger = get_logger(__name__)

# List of (tool_definition, callable)
_registry: list[tuple[ToolDefinition, Callable[..., str]]] = []


def register(definition: ToolDefinition, callable_fn: Callable[..., str]) -> None:
    """Register a tool. definition is the tool dict; callable_fn(**kwargs) -> str.
    Registering a name twice replaces the earlier tool.
    """
    name = definition.get("function", {}).get("name")
    _registry[:] = [
        (d, fn) for d, fn in _registry if d.get("function", {}).get("name") != name
    ]
    _registry.append((definition, callable_fn))


def get_tool_definitions() -> list[ToolDefinition]:
    return [defn for defn, _ in _registry]


def get_tool_names() -> list[str]:
    return [defn["function"]["name"] for defn, _ in _registry]


def execute(tool_name: str, arguments: dict[str, Any]) -> str:
    """Execute a tool by name with the given arguments. Returns the tool's string result,
    "Error: ..." if the tool raised, or "Unknown tool: ..." if no tool has that name.
    """
    for definition, callable_fn in _registry:
        if definition.get("function", {}).get("name") == tool_name:
            log_tool_call_start(logger, tool_name=tool_name, arguments=arguments)
            try:
                result = callable_fn(**arguments)
            except Exception as e:
                error = f"Error: {e!s}"
                log_tool_call_end(logger, tool_name=tool_name, success=False, error=error)
                return error
            result = result if isinstance(result, str) else str(result)
            log_tool_call_end(logger, tool_name=tool_name, success=True, result_length=len(result))
            return result
    return f"Unknown tool: {tool_name}"


def get_tool_registry() -> "ToolRegistry":
    """Return the singleton registry instance (for any code that wants a class interface)."""
    return _ToolRegistryInstance


class ToolRegistry:
    """Thin wrapper over module-level registry."""

    def get_tool_definitions(self) -> list[ToolDefinition]:
        return get_tool_definitions()

    def get_tool_names(self) -> list[str]:
        return get_tool_names()

    def execute(self, tool_name: str, arguments: dict[str, Any]) -> str:
        return execute(tool_name, arguments)


_ToolRegistryInstance = ToolRegistry()
