"""Prompt context describing the loaded datasets.

Before each conversational turn the agent is told which datasets exist, so
that it can reference them by id in its tool calls.
"""

from ..data.registry import DatasetRegistry


def build_dataset_context(registry: DatasetRegistry) -> str:
    """One line per dataset: id, name, source, columns and row count."""
    return "\n".join(
        f'Dataset [{ds.id}]: "{ds.name}" ({ds.source.value}). '
        f"Columns: {', '.join(ds.columns)}. Rows: {ds.row_count}."
        for ds in registry
    )


def build_prompt(registry: DatasetRegistry, user_message: str) -> str:
    """Prefix the user's message with the dataset context, if any."""
    context = build_dataset_context(registry)
    if not context:
        return user_message
    return f"{context}\n\nUser query: {user_message}"
