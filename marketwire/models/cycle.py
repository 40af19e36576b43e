"""Ingestion cycle result."""

from pydantic import Field

from .base import CamelModel


class IngestionCycleResult(CamelModel):
    """Counters for one orchestration run."""

    imported_count: int = Field(0, description="Articles persisted")
    filtered_count: int = Field(0, description="Articles dropped by keyword filters")
