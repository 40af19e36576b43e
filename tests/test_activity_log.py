from io import StringIO

from rich.console import Console

from marketwire.db import LOGS, ActivityLog
from marketwire.models import Severity


async def test_events_are_stored_and_listed_newest_first(store):
    activity = ActivityLog(store, echo=False)
    await activity.info("first")
    await activity.warn("second", {"source": "Wire"})
    await activity.error("third")

    events = await activity.recent()

    assert [e.action for e in events] == ["third", "second", "first"]
    assert [e.severity for e in events] == [Severity.ERROR, Severity.WARN, Severity.INFO]
    assert events[1].details == {"source": "Wire"}
    assert [e.action for e in await activity.recent(limit=1)] == ["third"]


async def test_events_are_stored_with_timestamps(store):
    event = await ActivityLog(store, echo=False).info("stamped")

    data = await store.get(LOGS, event.id)
    assert data["severity"] == "INFO"
    assert data["timestamp"]
    assert data["details"] is None


async def test_echo_prints_action_without_markup(store):
    buffer = StringIO()
    activity = ActivityLog(store, console=Console(file=buffer, width=200))

    await activity.warn("Failed to fetch [bold]feed[/bold]", {"status": 503})

    output = buffer.getvalue()
    assert "WARN" in output
    assert "[bold]feed[/bold]" in output
    assert "503" in output
