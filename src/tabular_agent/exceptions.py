"""Custom exception hierarchy for the tabular agent.

This module defines all custom exceptions used throughout the agent,
organized into logical categories: dataset errors, catalog errors and tool errors.

Every exception here is a *hard* failure: it aborts the current tool call.
Recoverable conditions are returned to the caller as ``{"error": ...}``
payloads instead and never appear in this module.
"""


class AgentError(Exception):
    """Base exception for all agent errors."""

    #: short machine-readable name used by the dispatcher
    kind: str = "agent_error"


# =============================================================================
# Dataset Errors - Missing targets and registry limits
# =============================================================================

class DatasetError(AgentError):
    """Base class for dataset and registry errors."""

    kind = "dataset_error"


class DatasetNotFoundError(DatasetError):
    """No dataset could be resolved (the registry is empty)."""

    kind = "dataset_not_found"

    def __init__(self, reference: str | None, available: list[str] | None = None):
        self.reference = reference
        self.available = available or []
        message = f"Dataset not found: {reference}"
        if self.available:
            message = f"{message}. Available datasets: {', '.join(self.available)}"
        else:
            message = f"{message}. No datasets are loaded"
        super().__init__(message)


class ColumnNotFoundError(DatasetError):
    """Requested column does not exist in the dataset."""

    kind = "column_not_found"

    def __init__(self, column: str, available: list[str]):
        self.column = column
        self.available = available
        super().__init__(f"Column {column} not found. Columns: {', '.join(available)}")


class RegistryCapacityError(DatasetError):
    """The registry already holds the maximum number of datasets."""

    kind = "registry_capacity"

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(
            f"Maximum number of datasets reached ({limit}). Please remove one before loading another."
        )


class EmptyResultError(DatasetError):
    """A catalog query returned no rows."""

    kind = "empty_result"

    def __init__(self, dataset_id: str):
        self.dataset_id = dataset_id
        super().__init__(f"The query for '{dataset_id}' returned no results. Check your filters.")


class FileLoadError(DatasetError):
    """A local file could not be parsed into rows."""

    kind = "file_load_error"

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load '{path}': {reason}")


# =============================================================================
# Catalog Errors - Issues with the open-data catalog
# =============================================================================

class CatalogError(AgentError):
    """The open-data catalog request failed."""

    kind = "catalog_error"

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        if status_code is not None:
            message = f"{message} (HTTP {status_code})"
        super().__init__(message)


# =============================================================================
# Tool Errors - Issues with tool dispatch
# =============================================================================

class ToolError(AgentError):
    """Base class for tool dispatch errors."""

    kind = "tool_error"


class ToolNotFoundError(ToolError):
    """Requested tool does not exist."""

    kind = "tool_not_found"

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Tool not found: {tool_name}")


class ToolValidationError(ToolError):
    """Tool arguments failed validation."""

    kind = "tool_validation"

    def __init__(self, tool_name: str, errors: list[str]):
        self.tool_name = tool_name
        self.errors = errors
        super().__init__(f"Tool '{tool_name}' validation failed: {', '.join(errors)}")
