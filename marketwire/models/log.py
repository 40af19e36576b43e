"""Activity log event model."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import Field

from .base import DocModel, utcnow


class Severity(str, Enum):
    """Log severity."""

    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class LogEvent(DocModel):
    """Append-only activity log entry."""

    severity: Severity = Field(..., description="INFO, WARN or ERROR")
    action: str = Field(..., description="Short description of what happened")
    details: Optional[Dict[str, Any]] = Field(None, description="Structured detail map")
    timestamp: datetime = Field(default_factory=utcnow, description="When it happened")
