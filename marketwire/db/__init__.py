"""Persistence for the news pipeline."""

from .articles import NEWS_ITEMS, ArticleSink
from .connection import close_connection_pool, get_connection, get_connection_pool
from .init import init_database, validate_connection
from .logs import LOGS, ActivityLog
from .sources import NEWS_SOURCES, SourceRegistry
from .store import DocumentStore, MemoryDocumentStore, PostgresDocumentStore

__all__ = [
    "ActivityLog",
    "ArticleSink",
    "DocumentStore",
    "LOGS",
    "MemoryDocumentStore",
    "NEWS_ITEMS",
    "NEWS_SOURCES",
    "PostgresDocumentStore",
    "SourceRegistry",
    "close_connection_pool",
    "get_connection",
    "get_connection_pool",
    "init_database",
    "validate_connection",
]
