"""Base model classes for all stored documents."""

from datetime import datetime
from typing import Optional

import pendulum
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    """Current UTC time."""
    return pendulum.now("UTC")


class CamelModel(BaseModel):
    """Model that reads and writes camelCase keys, accepting snake_case too."""

    class Config:
        """Pydantic config."""

        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class DocModel(CamelModel):
    """Base model for all documents kept in the store."""

    id: Optional[str] = Field(None, description="Document identity")

    def to_document(self) -> dict:
        """Serialize to a JSON-compatible dict without the identity."""
        return self.model_dump(mode="json", by_alias=True, exclude={"id"})

    @classmethod
    def from_document(cls, doc_id: str, data: dict):
        """Build a model from a stored document."""
        return cls.model_validate({**data, "id": doc_id})
