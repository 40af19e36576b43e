"""Language-model backed extraction and sentiment analysis."""

from .extraction import ExtractionStage
from .llm_provider import LLMProvider, MockLLMProvider, OpenAIProvider
from .sentiment import SentimentStage

__all__ = [
    "ExtractionStage",
    "LLMProvider",
    "MockLLMProvider",
    "OpenAIProvider",
    "SentimentStage",
]
