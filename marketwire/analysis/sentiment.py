"""Sentiment stage."""

from pydantic import ValidationError

from ..errors import AnalysisFailure
from ..models import ScoredSentiment
from .llm_provider import LLMProvider


class SentimentStage:
    """Score one article's trading sentiment. Never retries."""

    def __init__(self, llm_provider: LLMProvider) -> None:
        self.llm_provider = llm_provider

    async def analyze(self, ticker: str, headline: str, content: str) -> ScoredSentiment:
        """
        Analyze one article.

        Raises:
            AnalysisFailure: provider errored or returned an invalid result
        """
        try:
            result = await self.llm_provider.analyze_sentiment(ticker, headline, content)
        except Exception as e:
            raise AnalysisFailure(f"Sentiment analysis failed for {ticker}: {e}") from e

        try:
            return ScoredSentiment.model_validate({**result, "status": "scored"})
        except (ValidationError, TypeError) as e:
            raise AnalysisFailure(f"Invalid sentiment result for {ticker}: {e}") from e
