"""Source registry."""

from typing import List, Optional

from pydantic import ValidationError

from ..models import Source, SourceKind, SourceSpec, SourceUpdate
from .logs import ActivityLog
from .store import DocumentStore

NEWS_SOURCES = "news_sources"

# Optional source fields an update may clear with an explicit None
CLEARABLE_FIELDS = {"apiKeyEnv", "pollIntervalMinutes"}


class SourceRegistry:
    """Durable configuration of news sources.

    The registry trusts its caller: validation happens in the pydantic models
    only. Every mutation appends an INFO event to the activity log.
    """

    def __init__(self, store: DocumentStore, activity: ActivityLog) -> None:
        self.store = store
        self.activity = activity

    async def list(self) -> List[Source]:
        """All sources, newest first."""
        sources = []
        for doc_id, data in await self.store.list(NEWS_SOURCES):
            try:
                sources.append(Source.from_document(doc_id, data))
            except ValidationError as e:
                await self.activity.warn(
                    f"Skipping unreadable news source: {doc_id}",
                    {"id": doc_id, "error": str(e)},
                )
        return sources

    async def list_active(self, kind: Optional[SourceKind] = None) -> List[Source]:
        """Active sources in listing order, optionally of one kind."""
        return [
            s for s in await self.list()
            if s.is_active and (kind is None or s.kind == kind)
        ]

    async def get(self, source_id: str) -> Optional[Source]:
        data = await self.store.get(NEWS_SOURCES, source_id)
        return Source.from_document(source_id, data) if data else None

    async def find_by_name(self, name: str) -> Optional[Source]:
        for source in await self.list():
            if source.name == name:
                return source
        return None

    async def create(self, spec: SourceSpec) -> Source:
        """Store a new source, assigning its identity and creation time."""
        source = Source(**spec.model_dump())
        source.id = await self.store.insert(NEWS_SOURCES, source.to_document())
        await self.activity.info(f'News source "{source.name}" added.', {"id": source.id})
        return source

    async def update(self, source_id: str, changes: SourceUpdate) -> Optional[Source]:
        """Merge the fields set on ``changes`` into the stored source."""
        data = changes.model_dump(mode="json", by_alias=True, exclude_unset=True)
        patch = {k: v for k, v in data.items() if v is not None or k in CLEARABLE_FIELDS}
        if not await self.store.update(NEWS_SOURCES, source_id, patch):
            return None
        source = await self.get(source_id)
        await self.activity.info(f'News source "{changes.name or source.name}" updated.', {"id": source_id})
        return source

    async def set_active(self, source_id: str, is_active: bool) -> Optional[Source]:
        """Toggle activation without touching any other field."""
        return await self.update(source_id, SourceUpdate(is_active=is_active))

    async def delete(self, source_id: str) -> None:
        """Remove a source; no-op when it does not exist."""
        source = await self.get(source_id)
        if source is None:
            return
        await self.store.delete(NEWS_SOURCES, source_id)
        await self.activity.info(f'News source "{source.name}" deleted.', {"id": source_id})

    async def import_sources(self, specs: List[SourceSpec]) -> List[Source]:
        """Create every declared source whose name is not registered yet."""
        existing = {s.name for s in await self.list()}
        created = []
        for spec in specs:
            if spec.name in existing:
                continue
            created.append(await self.create(spec))
            existing.add(spec.name)
        return created
