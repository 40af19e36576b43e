"""Source model for configured news origins."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from .base import CamelModel, DocModel, utcnow


class SourceKind(str, Enum):
    """Transport used to reach a source."""

    POLL = "poll"
    PUSH = "push"


class FieldMapping(CamelModel):
    """Hint pairing a normalized article field with the source's own field name."""

    field: str = Field(..., description="Normalized field, e.g. headline or momentum.volume")
    source_field: str = Field(..., description="Field name used by the source payload")


class SourceSpec(CamelModel):
    """Everything an operator declares about a source."""

    name: str = Field(..., description="Display name")
    kind: SourceKind = Field(SourceKind.POLL, description="poll (HTTP) or push (socket)")
    url: str = Field(..., description="HTTP endpoint for poll sources, socket URL for push sources")
    is_active: bool = Field(True, description="Whether the source takes part in ingestion")
    api_key_env: Optional[str] = Field(None, description="Environment variable holding the API key")
    api_key_param: str = Field("apiKey", description="Query parameter the API key is sent as")
    field_mappings: List[FieldMapping] = Field(default_factory=list, description="Field mapping hints")
    field_mapping_enabled: bool = Field(False, description="Whether mapping hints are passed to extraction")
    poll_interval_minutes: Optional[int] = Field(None, description="Polling interval", ge=1)
    include_keywords: List[str] = Field(default_factory=list, description="Keep only articles matching one of these")
    exclude_keywords: List[str] = Field(default_factory=list, description="Drop articles matching any of these")


class SourceUpdate(CamelModel):
    """Partial update; only fields that are set are merged."""

    name: Optional[str] = None
    kind: Optional[SourceKind] = None
    url: Optional[str] = None
    is_active: Optional[bool] = None
    api_key_env: Optional[str] = None
    api_key_param: Optional[str] = None
    field_mappings: Optional[List[FieldMapping]] = None
    field_mapping_enabled: Optional[bool] = None
    poll_interval_minutes: Optional[int] = Field(None, ge=1)
    include_keywords: Optional[List[str]] = None
    exclude_keywords: Optional[List[str]] = None


class Source(DocModel, SourceSpec):
    """Stored news source."""

    created_at: datetime = Field(default_factory=utcnow, description="Creation timestamp")

    @property
    def mapping_hints(self) -> Optional[List[FieldMapping]]:
        """Mapping hints to hand to extraction, if enabled."""
        if self.field_mapping_enabled and self.field_mappings:
            return self.field_mappings
        return None
