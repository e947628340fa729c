from abc import ABC, abstractmethod
from typing import Any

from ..exceptions import ToolValidationError

_JSON_TYPES: dict[str, tuple[type, ...]] = {
    "string": (str,),
    "integer": (int,),
    "number": (int, float),
    "boolean": (bool,),
    "array": (list, tuple),
    "object": (dict,),
}


def _type_names(prop: dict[str, Any]) -> list[str]:
    expected = prop.get("type")
    if isinstance(expected, list):
        return expected
    return [expected] if expected else []


def _matches(value: Any, types: list[str]) -> bool:
    allowed = tuple(t for name in types for t in _JSON_TYPES.get(name, ()))
    if not allowed:
        return True
    if isinstance(value, bool):
        return bool in allowed
    return isinstance(value, allowed)


class BaseTool(ABC):
    """Abstract base class for all tools.

    A tool wraps one core operation behind a name, a description and a JSON
    schema the LLM sees. Tools return plain JSON-serializable values; a
    returned ``{"error": ...}`` dict is a recoverable error, a raised
    AgentError aborts the call.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the tool name."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Return the tool description."""
        pass

    @property
    @abstractmethod
    def parameters(self) -> dict[str, Any]:
        """Return the JSON schema for tool parameters."""
        pass

    @abstractmethod
    def execute(self, **kwargs) -> Any:
        """Execute the tool with the given arguments."""
        pass

    def validate_arguments(self, arguments: dict[str, Any]) -> None:
        """Check arguments against the parameter schema.

        Only the subset of JSON schema the tools use is checked: required
        keys, unknown keys, primitive types, array item types and enums. None is accepted for
        optional parameters.

        Raises:
            ToolValidationError: Listing every problem found.
        """
        schema = self.parameters
        properties: dict[str, Any] = schema.get("properties", {})
        errors = [
            f"missing required argument '{key}'"
            for key in schema.get("required", [])
            if arguments.get(key) is None
        ]

        for key, value in arguments.items():
            prop = properties.get(key)
            if prop is None:
                errors.append(f"unknown argument '{key}'")
                continue
            if value is None:
                continue
            types = _type_names(prop)
            if not _matches(value, types):
                errors.append(f"argument '{key}' must be of type {'/'.join(types)}")
                continue
            item_types = _type_names(prop.get("items", {}))
            if isinstance(value, (list, tuple)) and not all(_matches(v, item_types) for v in value):
                errors.append(f"items of argument '{key}' must be of type {'/'.join(item_types)}")
                continue
            if "enum" in prop and value not in prop["enum"]:
                errors.append(f"argument '{key}' must be one of {', '.join(map(str, prop['enum']))}")

        if errors:
            raise ToolValidationError(self.name, errors)

    def to_schema(self) -> dict[str, Any]:
        """Return the tool schema for LLM function calling."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }
