"""Document store with collection semantics.

Every record the pipeline keeps (sources, articles, log events) is a JSON
document addressed by ``(collection, id)``. Listing is newest-first by
insertion order. Updates merge top-level keys of one document and never touch
any other document, so concurrent writers to different ids never conflict.
"""

import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from psycopg.types.json import Jsonb

from .connection import get_connection

Document = Dict[str, Any]


def new_document_id() -> str:
    """Generate a fresh document identity."""
    return uuid.uuid4().hex


class DocumentStore(ABC):
    """Abstract base class for document stores."""

    @abstractmethod
    async def insert(self, collection: str, data: Document, doc_id: Optional[str] = None) -> str:
        """Insert a document and return its id."""
        pass

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Fetch one document, or None when absent."""
        pass

    @abstractmethod
    async def update(self, collection: str, doc_id: str, patch: Document) -> bool:
        """Merge top-level keys into a document. Returns False when absent."""
        pass

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> bool:
        """Delete a document. Returns False when absent."""
        pass

    @abstractmethod
    async def list(self, collection: str, limit: Optional[int] = None) -> List[Tuple[str, Document]]:
        """List ``(id, data)`` pairs newest first."""
        pass


class PostgresDocumentStore(DocumentStore):
    """Document store backed by the ``documents`` table."""

    def __init__(self, db_config: Dict[str, Any]) -> None:
        self.db_config = db_config

    async def insert(self, collection: str, data: Document, doc_id: Optional[str] = None) -> str:
        doc_id = doc_id or new_document_id()
        async with get_connection(self.db_config) as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    INSERT INTO documents (collection, id, data)
                    VALUES (%s, %s, %s)
                    """,
                    (collection, doc_id, Jsonb(data)),
                )
            await conn.commit()
        return doc_id

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        async with get_connection(self.db_config) as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    "SELECT data FROM documents WHERE collection = %s AND id = %s",
                    (collection, doc_id),
                )
                row = await cur.fetchone()
        return row["data"] if row else None

    async def update(self, collection: str, doc_id: str, patch: Document) -> bool:
        async with get_connection(self.db_config) as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    UPDATE documents
                    SET data = data || %s
                    WHERE collection = %s AND id = %s
                    """,
                    (Jsonb(patch), collection, doc_id),
                )
                updated = cur.rowcount > 0
            await conn.commit()
        return updated

    async def delete(self, collection: str, doc_id: str) -> bool:
        async with get_connection(self.db_config) as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    "DELETE FROM documents WHERE collection = %s AND id = %s",
                    (collection, doc_id),
                )
                deleted = cur.rowcount > 0
            await conn.commit()
        return deleted

    async def list(self, collection: str, limit: Optional[int] = None) -> List[Tuple[str, Document]]:
        query = """
            SELECT id, data FROM documents
            WHERE collection = %s
            ORDER BY seq DESC
        """
        params: tuple = (collection,)
        if limit is not None:
            query += " LIMIT %s"
            params = (collection, limit)

        async with get_connection(self.db_config) as conn:
            async with conn.cursor() as cur:
                await cur.execute(query, params)
                rows = await cur.fetchall()
        return [(row["id"], row["data"]) for row in rows]


class MemoryDocumentStore(DocumentStore):
    """In-process document store for tests and dry runs."""

    def __init__(self) -> None:
        self.collections: Dict[str, Dict[str, Tuple[int, Document]]] = {}
        self._seq = 0

    def _collection(self, name: str) -> Dict[str, Tuple[int, Document]]:
        return self.collections.setdefault(name, {})

    async def insert(self, collection: str, data: Document, doc_id: Optional[str] = None) -> str:
        doc_id = doc_id or new_document_id()
        docs = self._collection(collection)
        if doc_id in docs:
            raise KeyError(f"Document {collection}/{doc_id} already exists")
        self._seq += 1
        docs[doc_id] = (self._seq, dict(data))
        return doc_id

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        entry = self._collection(collection).get(doc_id)
        return dict(entry[1]) if entry else None

    async def update(self, collection: str, doc_id: str, patch: Document) -> bool:
        docs = self._collection(collection)
        if doc_id not in docs:
            return False
        seq, data = docs[doc_id]
        docs[doc_id] = (seq, {**data, **patch})
        return True

    async def delete(self, collection: str, doc_id: str) -> bool:
        return self._collection(collection).pop(doc_id, None) is not None

    async def list(self, collection: str, limit: Optional[int] = None) -> List[Tuple[str, Document]]:
        entries = sorted(self._collection(collection).items(), key=lambda item: item[1][0], reverse=True)
        if limit is not None:
            entries = entries[:limit]
        return [(doc_id, dict(data)) for doc_id, (_, data) in entries]
