"""Append-only activity log."""

from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape

from ..models import LogEvent, Severity
from .store import DocumentStore

LOGS = "logs"

_STYLES = {
    Severity.INFO: "dim",
    Severity.WARN: "yellow",
    Severity.ERROR: "red",
}


class ActivityLog:
    """Structured event sink shared by every pipeline stage.

    Events are written to the ``logs`` collection and echoed to the console.
    Pass one instance to each component instead of reaching for a global.
    """

    def __init__(self, store: DocumentStore, console: Optional[Console] = None, echo: bool = True) -> None:
        self.store = store
        self.console = console or Console(stderr=True)
        self.echo = echo

    async def log(
        self,
        severity: Severity,
        action: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> LogEvent:
        """Append one event."""
        event = LogEvent(severity=severity, action=action, details=details)
        event.id = await self.store.insert(LOGS, event.to_document())
        if self.echo:
            style = _STYLES[severity]
            suffix = f" {details}" if details else ""
            self.console.print(f"[{style}]{severity.value:<5}[/{style}] {escape(action + suffix)}", highlight=False)
        return event

    async def info(self, action: str, details: Optional[Dict[str, Any]] = None) -> LogEvent:
        return await self.log(Severity.INFO, action, details)

    async def warn(self, action: str, details: Optional[Dict[str, Any]] = None) -> LogEvent:
        return await self.log(Severity.WARN, action, details)

    async def error(self, action: str, details: Optional[Dict[str, Any]] = None) -> LogEvent:
        return await self.log(Severity.ERROR, action, details)

    async def recent(self, limit: int = 50) -> List[LogEvent]:
        """Most recent events, newest first."""
        rows = await self.store.list(LOGS, limit=limit)
        return [LogEvent.from_document(doc_id, data) for doc_id, data in rows]
