"""Pydantic models for API requests and responses."""

from typing import Any

from pydantic import BaseModel, Field


class SessionCreated(BaseModel):
    """Identifier of a newly created session."""

    session_id: str


class DatasetUpload(BaseModel):
    """Rows already parsed by an upload adapter."""

    name: str
    id: str | None = None
    rows: list[dict[str, Any]] = Field(default_factory=list)


class DatasetSummary(BaseModel):
    """A dataset without its rows."""

    id: str
    name: str
    source: str
    columns: list[str]
    rowCount: int


class ToolResponse(BaseModel):
    """Tagged outcome of a tool call."""

    kind: str  # "ok", "soft_error", "hard_failure"
    value: Any = None
    error: str | None = None
    failure: str | None = None
