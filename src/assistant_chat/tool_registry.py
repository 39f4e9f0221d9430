"""
Simple tool registry for automatic schema generation and tool execution.

Minimal implementation for mapping callables to Assistants API function
schemas and resolving the tool calls a run is waiting on.
"""

import inspect
import json
from typing import Any, Callable, Dict, List, NamedTuple, Optional, get_type_hints


class UnknownToolError(KeyError):
    """Raised when a run asks for a function that is not registered."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"Unknown tool call function: {self.name}"


class ToolCall(NamedTuple):
    """A pending tool call with its arguments already decoded."""

    id: str
    name: str
    arguments: Dict[str, Any]

    @classmethod
    def from_openai(cls, tool_call: Any) -> "ToolCall":
        """Build from a ``RequiredActionFunctionToolCall`` of a run."""
        raw_arguments = tool_call.function.arguments
        arguments = json.loads(raw_arguments) if raw_arguments else {}
        return cls(id=tool_call.id, name=tool_call.function.name, arguments=arguments)


def callable_to_tool_schema(
    callable_func: Callable, name: str, description: Optional[str] = None
) -> Dict[str, Any]:
    """
    Convert a Python callable (function or method) to an Assistants API tool schema.

    Args:
        callable_func: The callable to convert
        name: Tool name
        description: Optional description

    Returns:
        Tool schema dictionary
    """
    sig = inspect.signature(callable_func)
    type_hints = get_type_hints(callable_func)

    # Get description from docstring if not provided
    if description is None:
        doc = inspect.getdoc(callable_func)
        description = doc.strip() if doc else f"Execute {name}"

    parameters = {"type": "object", "properties": {}, "required": []}

    for param_name, param in sig.parameters.items():
        if param_name == "self":
            continue

        param_type = type_hints.get(param_name, str)

        if param_type is int:
            json_type = "integer"
        elif param_type is float:
            json_type = "number"
        elif param_type is bool:
            json_type = "boolean"
        else:
            json_type = "string"

        parameters["properties"][param_name] = {
            "type": json_type,
            "description": f"The {param_name} parameter",
        }

        if param.default is inspect.Parameter.empty:
            parameters["required"].append(param_name)

    return {
        "type": "function",
        "function": {
            "name": name,
            "description": description,
            "parameters": parameters,
        },
    }


class ToolRegistry:
    """Registry for managing tools and their schemas."""

    def __init__(self):
        self.tools: Dict[str, Callable] = {}  # name -> callable
        self.schemas: List[Dict[str, Any]] = []

    def register_callable(
        self,
        callable_func: Callable,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> None:
        """
        Register a callable and auto-generate its tool schema.

        Args:
            callable_func: The callable to register
            name: Optional name override (defaults to callable name)
            description: Optional description
        """
        tool_name = name or callable_func.__name__
        schema = callable_to_tool_schema(callable_func, tool_name, description)

        self.tools[tool_name] = callable_func
        self.schemas.append(schema)

    def get_schemas(self) -> List[Dict[str, Any]]:
        """Get all tool schemas for the Assistants API."""
        return self.schemas

    async def execute_tool(self, name: str, args: Dict[str, Any]) -> Any:
        """
        Execute a registered tool by name.

        Arguments the callable does not accept are dropped.

        Raises:
            UnknownToolError: If tool is not registered
        """
        if name not in self.tools:
            raise UnknownToolError(name)

        callable_func = self.tools[name]
        accepted = inspect.signature(callable_func).parameters
        kwargs = {k: v for k, v in args.items() if k in accepted}

        if inspect.iscoroutinefunction(callable_func):
            return await callable_func(**kwargs)
        return callable_func(**kwargs)

    async def resolve_tool_call(self, tool_call: ToolCall) -> Dict[str, str]:
        """
        Execute a pending tool call and return the output entry to submit for it.

        String results are submitted unchanged, anything else as JSON.
        """
        result = await self.execute_tool(tool_call.name, tool_call.arguments)

        if isinstance(result, str):
            output = result
        else:
            output = json.dumps(result, separators=(",", ":"), ensure_ascii=False)

        return {"tool_call_id": tool_call.id, "output": output}
