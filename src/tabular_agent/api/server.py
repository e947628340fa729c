"""FastAPI server exposing the tool contract to external dispatchers."""

from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ..config import get_settings
from ..data.registry import DatasetRegistry
from ..exceptions import AgentError
from ..session import AnalysisSession, SessionManager
from ..tools import create_catalog_client, get_default_tools
from .schemas import DatasetSummary, DatasetUpload, SessionCreated, ToolResponse

sessions = SessionManager()


def get_sessions() -> SessionManager:
    """Session manager dependency (overridden in tests)."""
    return sessions


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Tabular Agent API",
        description="Tool-call API for in-memory tabular analysis",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # restrict in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app


app = create_app()


def _require_session(session_id: str, manager: SessionManager) -> AnalysisSession:
    session = manager.get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found or expired")
    return session


@app.post("/api/sessions", response_model=SessionCreated)
def create_session(manager: SessionManager = Depends(get_sessions)) -> SessionCreated:
    """Create a new analysis session with an empty registry."""
    session = manager.create_session()
    return SessionCreated(session_id=session.id)


@app.delete("/api/sessions/{session_id}")
def delete_session(session_id: str, manager: SessionManager = Depends(get_sessions)) -> dict:
    """Delete a session."""
    if manager.delete_session(session_id):
        return {"status": "deleted"}
    raise HTTPException(status_code=404, detail="Session not found")


@app.get("/api/tools")
def list_tools() -> list[dict]:
    """Function-calling schemas of every tool."""
    with create_catalog_client(get_settings()) as catalog:
        return [tool.to_schema() for tool in get_default_tools(DatasetRegistry(), catalog=catalog)]


@app.get("/api/sessions/{session_id}/datasets", response_model=list[DatasetSummary])
def list_datasets(session_id: str, manager: SessionManager = Depends(get_sessions)) -> list[dict]:
    """Datasets currently loaded in a session."""
    session = _require_session(session_id, manager)
    return [ds.summary() for ds in session.registry]


@app.post("/api/sessions/{session_id}/datasets", response_model=DatasetSummary)
def upload_dataset(
    session_id: str,
    upload: DatasetUpload,
    manager: SessionManager = Depends(get_sessions),
) -> dict:
    """Register rows parsed by an upload adapter as a file dataset."""
    session = _require_session(session_id, manager)
    try:
        dataset = session.add_rows(upload.id or upload.name, upload.rows, name=upload.name)
    except AgentError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return dataset.summary()


@app.delete("/api/sessions/{session_id}/datasets/{dataset_id}")
def remove_dataset(session_id: str, dataset_id: str, manager: SessionManager = Depends(get_sessions)) -> dict:
    """Remove a dataset; removing an unknown id is not an error."""
    session = _require_session(session_id, manager)
    return {"removed": session.registry.remove(dataset_id)}


@app.post(
    "/api/sessions/{session_id}/tools/{tool_name}",
    response_model=ToolResponse,
    response_model_exclude_none=True,
)
def call_tool(
    session_id: str,
    tool_name: str,
    arguments: dict[str, Any] | None = Body(default=None),
    manager: SessionManager = Depends(get_sessions),
) -> dict:
    """Dispatch one tool call in a session."""
    session = _require_session(session_id, manager)
    return session.call(tool_name, **(arguments or {})).to_dict()
