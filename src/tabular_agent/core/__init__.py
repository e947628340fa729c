"""Core agent components.

- ToolDispatcher: routes tool calls and tags their outcome
- build_dataset_context / build_prompt: dataset context for the LLM
"""

from .context import build_dataset_context, build_prompt
from .dispatcher import ToolDispatcher, format_result

__all__ = ["ToolDispatcher", "build_dataset_context", "build_prompt", "format_result"]
