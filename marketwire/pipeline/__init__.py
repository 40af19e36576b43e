"""Pipeline orchestration for polled and live news."""

from .live import LivePipeline
from .orchestrator import IngestionOrchestrator

__all__ = ["IngestionOrchestrator", "LivePipeline"]
