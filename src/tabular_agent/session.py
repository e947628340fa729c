"""Analysis sessions.

Each session owns an independent dataset registry and a dispatcher bound to
it; nothing is shared between sessions.
"""

import time
import uuid
from dataclasses import dataclass, field
from typing import Any

from .catalog import CatalogClient
from .config import Settings, get_settings
from .core.context import build_prompt
from .core.dispatcher import ToolDispatcher
from .data.registry import DatasetRegistry
from .logging import get_logger
from .tools import create_catalog_client, get_default_tools
from .types import Dataset, DatasetSource, ToolCall, ToolResult

logger = get_logger(__name__)


@dataclass
class AnalysisSession:
    """A user session: one registry plus the tools that operate on it.

    A session that built its own catalog client closes it in ``close()``;
    a client passed in by the caller is left open.
    """

    id: str
    registry: DatasetRegistry
    dispatcher: ToolDispatcher
    catalog: CatalogClient | None = None
    owns_catalog: bool = False
    created_at: float = field(default_factory=time.time)
    last_accessed: float = field(default_factory=time.time)

    @classmethod
    def create(
        cls,
        session_id: str | None = None,
        settings: Settings | None = None,
        catalog: CatalogClient | None = None,
    ) -> "AnalysisSession":
        settings = settings or get_settings()
        owns_catalog = catalog is None
        if owns_catalog:
            catalog = create_catalog_client(settings)
        registry = DatasetRegistry(max_datasets=settings.max_datasets)
        return cls(
            id=session_id or str(uuid.uuid4()),
            registry=registry,
            dispatcher=ToolDispatcher(get_default_tools(registry, settings, catalog)),
            catalog=catalog,
            owns_catalog=owns_catalog,
        )

    def touch(self) -> None:
        """Update last accessed time."""
        self.last_accessed = time.time()

    def call(self, tool_name: str, /, **arguments: Any) -> ToolResult:
        """Dispatch one tool call by name."""
        return self.dispatcher.dispatch(ToolCall(name=tool_name, arguments=arguments))

    def add_rows(
        self,
        dataset_id: str,
        rows: list[dict[str, Any]],
        name: str | None = None,
        source: DatasetSource = DatasetSource.FILE,
    ) -> Dataset:
        """Register rows parsed by an external adapter."""
        return self.registry.add(Dataset.from_rows(dataset_id, rows, name=name, source=source))

    def prompt(self, user_message: str) -> str:
        return build_prompt(self.registry, user_message)

    def close(self) -> None:
        """Drop all datasets and release the catalog connection pool."""
        self.registry.clear()
        if self.owns_catalog and self.catalog is not None:
            self.catalog.close()


class SessionManager:
    """Owns the live sessions of an API process and expires idle ones.

    Args:
        session_timeout: Idle seconds before a session expires (settings default)
        settings: Settings handed to every new session
    """

    def __init__(self, session_timeout: int | None = None, settings: Settings | None = None):
        self._settings = settings or get_settings()
        self._timeout = session_timeout or self._settings.session_timeout
        self._sessions: dict[str, AnalysisSession] = {}

    def create_session(self, catalog: CatalogClient | None = None) -> AnalysisSession:
        """Create a session with an empty registry."""
        session = AnalysisSession.create(settings=self._settings, catalog=catalog)
        self._sessions[session.id] = session
        logger.info("Created session %s", session.id)
        return session

    def _is_expired(self, session: AnalysisSession, now: float) -> bool:
        return now - session.last_accessed > self._timeout

    def _evict(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.close()
        logger.info("Closed session %s", session_id)
        return True

    def get_session(self, session_id: str) -> AnalysisSession | None:
        """Look up a live session and mark it as used.

        Returns:
            The session, or None when it does not exist or has expired.
        """
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if self._is_expired(session, time.time()):
            self._evict(session_id)
            return None
        session.touch()
        return session

    def delete_session(self, session_id: str) -> bool:
        """Close a session. Returns False if it did not exist."""
        return self._evict(session_id)

    def cleanup_expired(self) -> int:
        """Close every expired session and return how many there were."""
        now = time.time()
        expired = [sid for sid, s in self._sessions.items() if self._is_expired(s, now)]
        for sid in expired:
            self._evict(sid)
        return len(expired)

    @property
    def active_count(self) -> int:
        return len(self._sessions)
