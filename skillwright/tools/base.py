"""Tool protocol: name, description, JSON schema for parameters, and callable."""
from typing import Any, Callable

# Function-tool definition shape: {"type": "function", "function": {"name", "description", "parameters"}}
# The callable receives the parsed arguments and returns a JSON string result.
ToolDefinition = dict[str, Any]


def make_tool(
    name: str,
    description: str,
    parameters: dict[str, Any],
    callable_fn: Callable[..., str],
) -> tuple[ToolDefinition, Callable[..., str]]:
    """Build a tool definition and the callable that executes it.
    parameters: JSON Schema for the function (e.g. {"type": "object", "properties": {...}, "required": [...]}).
    callable_fn: receives kwargs matching the schema, returns a string.
    """
    definition: ToolDefinition = {
        "type": "function",
        "function": {
            "name": name,
            "description": description,
            "parameters": parameters,
        },
    }
    return definition, callable_fn


def require_string(arguments: dict[str, Any], key: str, *, max_length: int | None = None) -> str:
    """Return arguments[key] as a non-empty string or raise ValueError."""
    value = arguments.get(key)
    if not isinstance(value, str):
        raise ValueError(f"{key} is required and must be a string")
    if not value.strip():
        raise ValueError(f"{key} cannot be empty")
    if max_length is not None and len(value) > max_length:
        raise ValueError(f"{key} exceeds maximum length of {max_length} characters")
    return value


def optional_unit_float(arguments: dict[str, Any], key: str, default: float) -> float:
    """Return arguments[key] as a float in [0, 1], or default when absent."""
    value = arguments.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 <= value <= 1:
        raise ValueError(f"{key} must be a number between 0 and 1")
    return float(value)


def optional_string_list(arguments: dict[str, Any], key: str) -> list[str]:
    value = arguments.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{key} must be a list of strings")
    return value
