"""Data models for the news pipeline."""

from .article import (
    Article,
    ExtractedArticle,
    Momentum,
    PendingSentiment,
    ScoredSentiment,
)
from .cycle import IngestionCycleResult
from .log import LogEvent, Severity
from .source import FieldMapping, Source, SourceKind, SourceSpec, SourceUpdate

__all__ = [
    "Article",
    "ExtractedArticle",
    "FieldMapping",
    "IngestionCycleResult",
    "LogEvent",
    "Momentum",
    "PendingSentiment",
    "ScoredSentiment",
    "Severity",
    "Source",
    "SourceKind",
    "SourceSpec",
    "SourceUpdate",
]
