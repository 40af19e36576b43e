"""Normalized news article and its sentiment state."""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import Field, field_validator, model_validator

from .base import CamelModel, DocModel, utcnow


class Momentum(CamelModel):
    """Trading activity as reported by the source, not verified."""

    volume: str = Field("0", description="Trading volume")
    relative_volume: float = Field(0.0, description="Volume relative to average")
    float_shares: str = Field("N/A", alias="float", description="Shares available for trading")
    short_interest: str = Field("N/A", description="Percentage of float held short")
    price_action: str = Field("N/A", description="Short description of recent price action")

    @model_validator(mode="before")
    @classmethod
    def drop_missing(cls, data):
        """Treat nulls as absent so defaults apply."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @field_validator("volume", "float_shares", "short_interest", "price_action", mode="before")
    @classmethod
    def coerce_text(cls, v):
        if isinstance(v, (int, float)):
            return str(v)
        return v

    @field_validator("relative_volume", mode="before")
    @classmethod
    def parse_relative_volume(cls, v):
        # Sources often report relative volume as "3.2x"
        if isinstance(v, str):
            try:
                return float(v.strip().rstrip("xX").replace(",", ""))
            except ValueError:
                return 0.0
        return v


class PendingSentiment(CamelModel):
    """Sentiment not attached yet."""

    status: Literal["pending"] = "pending"


class ScoredSentiment(CamelModel):
    """Result of the sentiment stage."""

    status: Literal["scored"] = "scored"
    sentiment: str = Field(..., description="positive, negative or neutral")
    impact_score: float = Field(..., description="Expected price impact", ge=-1.0, le=1.0)
    summary: str = Field(..., description="Short trader-facing summary")

    @field_validator("sentiment", mode="before")
    @classmethod
    def normalize_label(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


Analysis = Annotated[Union[PendingSentiment, ScoredSentiment], Field(discriminator="status")]


class ExtractedArticle(CamelModel):
    """Article as produced by extraction, before it is stored."""

    ticker: str = Field(..., min_length=1, description="Stock ticker symbol")
    headline: str = Field(..., min_length=1, description="Article headline")
    content: str = Field(..., min_length=1, description="Article body")
    momentum: Momentum = Field(default_factory=Momentum)

    @field_validator("ticker", mode="before")
    @classmethod
    def normalize_ticker(cls, v):
        return v.strip().lstrip("$").upper() if isinstance(v, str) else v

    @field_validator("momentum", mode="before")
    @classmethod
    def default_momentum(cls, v):
        return {} if v is None else v

    @property
    def text(self) -> str:
        """Headline and body joined, used for keyword matching."""
        return f"{self.headline} {self.content}"


class Article(DocModel, ExtractedArticle):
    """Stored article."""

    source_id: Optional[str] = Field(None, description="Source the article came from")
    published_at: datetime = Field(default_factory=utcnow, description="Publication timestamp")
    analysis: Analysis = Field(default_factory=PendingSentiment)

    @property
    def is_pending(self) -> bool:
        """Whether sentiment has not been attached yet."""
        return self.analysis.status == "pending"
