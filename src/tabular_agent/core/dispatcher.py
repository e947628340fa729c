"""Tool dispatch for the agent.

This module maps a structured tool call onto exactly one tool and folds the
two error channels into a single tagged result:

- a returned ``{"error": ...}`` dict becomes a SOFT_ERROR
- a raised AgentError becomes a HARD_FAILURE
- anything else is OK

Exceptions that are not AgentErrors are bugs and propagate unchanged.
"""

import json

from ..exceptions import AgentError, ToolNotFoundError
from ..logging import get_logger
from ..tools.base import BaseTool
from ..types import ResultKind, ToolCall, ToolResult

logger = get_logger(__name__)


class ToolDispatcher:
    """Executes tool calls one at a time against a fixed tool set.

    Calls are strictly sequential: each call sees the registry state left by
    the previous one, so callers must not issue overlapping calls for the
    same session.
    """

    def __init__(self, tools: list[BaseTool] | dict[str, BaseTool]):
        """Initialize the dispatcher.

        Args:
            tools: Tool instances, or a dictionary mapping tool names to them.
        """
        if isinstance(tools, dict):
            self.tools = dict(tools)
        else:
            self.tools = {tool.name: tool for tool in tools}

    def get_tool(self, name: str) -> BaseTool | None:
        """Get a tool by name, or None if not found."""
        return self.tools.get(name)

    def has_tool(self, name: str) -> bool:
        return name in self.tools

    def schemas(self) -> list[dict]:
        """Function-calling schemas of every tool, in registration order."""
        return [tool.to_schema() for tool in self.tools.values()]

    def dispatch(self, call: ToolCall) -> ToolResult:
        """Execute a single tool call.

        Args:
            call: The tool call to execute.

        Returns:
            The tagged result of the call.
        """
        try:
            tool = self.tools.get(call.name)
            if tool is None:
                raise ToolNotFoundError(call.name)
            arguments = dict(call.arguments or {})
            tool.validate_arguments(arguments)
            logger.debug("Executing tool %s with args %s", call.name, arguments)
            value = tool.execute(**arguments)
        except AgentError as e:
            logger.warning("Tool %s failed (%s): %s", call.name, e.kind, e)
            return ToolResult.hard_failure(e.kind, str(e))

        if isinstance(value, dict) and "error" in value:
            logger.debug("Tool %s returned a soft error: %s", call.name, value["error"])
            return ToolResult.soft_error(str(value["error"]), value)
        return ToolResult.ok(value)

    def dispatch_many(self, calls: list[ToolCall]) -> list[ToolResult]:
        """Execute calls in order, continuing after failures."""
        return [self.dispatch(call) for call in calls]


def format_result(result: ToolResult) -> str:
    """Serialize a result as the text fed back to the LLM."""
    if result.kind is ResultKind.HARD_FAILURE:
        return f"Error: {result.error}"
    payload = result.value if result.value is not None else {"error": result.error}
    return json.dumps(payload, ensure_ascii=False, default=str)
