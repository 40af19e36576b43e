"""Extraction stage: raw payload in, normalized articles out."""

from typing import List, Optional

from pydantic import ValidationError

from ..errors import ExtractionFailure
from ..models import ExtractedArticle, FieldMapping
from .llm_provider import LLMProvider


class ExtractionStage:
    """Coerce a payload of any shape into typed article records.

    All uncertainty about source layouts stays behind the provider call; the
    rest of the pipeline only ever sees ``ExtractedArticle`` instances.
    """

    def __init__(self, llm_provider: LLMProvider) -> None:
        self.llm_provider = llm_provider

    async def extract(
        self,
        raw_payload: str,
        field_mappings: Optional[List[FieldMapping]] = None,
    ) -> List[ExtractedArticle]:
        """Extract zero or more articles from a raw payload.

        Raises:
            ExtractionFailure: provider unreachable or output unusable
        """
        if not raw_payload or not raw_payload.strip():
            raise ExtractionFailure("Empty payload")

        try:
            records = await self.llm_provider.extract_articles(raw_payload, field_mappings)
        except Exception as e:
            raise ExtractionFailure(f"Extraction failed: {e}") from e

        if not isinstance(records, list):
            raise ExtractionFailure("Extraction returned no article list")

        articles = []
        for record in records:
            try:
                articles.append(ExtractedArticle.model_validate(record))
            except ValidationError:
                # Records without ticker, headline or content are skipped
                continue
        return articles
