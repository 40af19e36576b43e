"""LLM provider interface and implementations."""

import json
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI

from ..models import FieldMapping


EXTRACTION_PROMPT = """You are an expert data parsing AI. Analyze the provided raw data, which could be in JSON, XML, or plain text format, and extract structured stock news articles from it.

Return a JSON object of the form {{"articles": [...]}} where every article has:
- "ticker": the stock ticker symbol the news is about
- "headline": the headline of the article
- "content": the full content of the article
- "momentum": an object with "volume" (string), "relativeVolume" (number), "float" (string), "shortInterest" (string) and "priceAction" (string)

Use "N/A" for momentum values the data does not provide. Return {{"articles": []}} if the data holds no news.
{hints}
Raw Data:
{raw_data}"""


SENTIMENT_PROMPT = """You are an expert financial analyst AI for day traders. Analyze the provided news article and determine its potential for creating immediate, short-term trading opportunities for the given stock ticker.

Filter out news that is not a direct catalyst for price movement, such as general market commentary, legal news with long-term uncertain outcomes, or repetitive PR announcements.
Focus on high-impact catalysts: earnings surprises, mergers and acquisitions, clinical trial results, FDA approvals, major product launches, analyst rating changes from reputable firms, unexpected executive changes.

Return a JSON object with:
- "sentiment": "positive", "negative" or "neutral" from a trader's perspective
- "impactScore": a number from -1 to 1; the sign follows the expected price direction and the magnitude the size of the expected reaction (0 means market noise)
- "summary": a concise explanation for a trader of why this is or is not a catalyst

Ticker: {ticker}
Headline: {headline}
Content: {content}"""


def format_mapping_hints(field_mappings: Optional[List[FieldMapping]]) -> str:
    """Render mapping hints as prompt lines."""
    if not field_mappings:
        return ""
    lines = ["", "Field mapping hints (schema field <- source field):"]
    for mapping in field_mappings:
        lines.append(f"- {mapping.field} <- {mapping.source_field}")
    return "\n".join(lines) + "\n"


def parse_json_object(text: str) -> Dict[str, Any]:
    """Parse a JSON object out of a model response, tolerating code fences."""
    text = text.strip()
    fenced = re.match(r"^```(?:json)?\s*(.*?)\s*```$", text, re.DOTALL)
    if fenced:
        text = fenced.group(1)
    parsed = json.loads(text)
    if not isinstance(parsed, dict):
        raise ValueError("Expected a JSON object")
    return parsed


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    @abstractmethod
    async def extract_articles(
        self,
        raw_data: str,
        field_mappings: Optional[List[FieldMapping]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Turn a raw payload of any shape into article-shaped records.

        Args:
            raw_data: Raw text, JSON or XML payload
            field_mappings: Optional hints pairing schema fields with source fields

        Returns:
            List of article dicts (ticker, headline, content, momentum)
        """
        pass

    @abstractmethod
    async def analyze_sentiment(
        self,
        ticker: str,
        headline: str,
        content: str,
    ) -> Dict[str, Any]:
        """
        Score the trading sentiment of one article.

        Returns:
            Dict with sentiment, impactScore and summary
        """
        pass

    @abstractmethod
    def get_usage_stats(self) -> Dict:
        """Get usage statistics."""
        pass


class OpenAIProvider(LLMProvider):
    """OpenAI implementation of LLM provider."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
        max_payload_chars: int = 24000,
    ) -> None:
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Model name to use
            base_url: Custom base URL (for testing or compatible servers)
            max_payload_chars: Raw payload is truncated to this many characters
        """
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url)
        self.model = model
        self.max_payload_chars = max_payload_chars
        self.total_tokens = 0
        self.api_calls = 0

        # Token cost estimates (per 1K tokens)
        self.cost_per_1k_tokens = {
            "gpt-4o": {"input": 0.005, "output": 0.015},
            "gpt-4o-mini": {"input": 0.00015, "output": 0.0006},
            "gpt-4": {"input": 0.03, "output": 0.06},
            "gpt-3.5-turbo": {"input": 0.001, "output": 0.002},
        }

    async def _complete_json(self, prompt: str, max_tokens: int) -> Dict[str, Any]:
        self.api_calls += 1
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.1,
            max_tokens=max_tokens,
            response_format={"type": "json_object"},
        )

        # Update usage stats
        if response.usage:
            self.total_tokens += response.usage.total_tokens

        content = response.choices[0].message.content or ""
        return parse_json_object(content)

    async def extract_articles(
        self,
        raw_data: str,
        field_mappings: Optional[List[FieldMapping]] = None,
    ) -> List[Dict[str, Any]]:
        """Extract articles using OpenAI."""
        if len(raw_data) > self.max_payload_chars:
            raw_data = raw_data[: self.max_payload_chars] + "..."

        prompt = EXTRACTION_PROMPT.format(
            hints=format_mapping_hints(field_mappings),
            raw_data=raw_data,
        )
        result = await self._complete_json(prompt, max_tokens=4000)

        articles = result.get("articles")
        if not isinstance(articles, list):
            raise ValueError("Response has no articles list")
        return articles

    async def analyze_sentiment(
        self,
        ticker: str,
        headline: str,
        content: str,
    ) -> Dict[str, Any]:
        """Analyze sentiment using OpenAI."""
        # Truncate content if too long (rough token estimate: 1 token ~= 4 chars)
        max_content_chars = 8000
        if len(content) > max_content_chars:
            content = content[:max_content_chars] + "..."

        prompt = SENTIMENT_PROMPT.format(ticker=ticker, headline=headline, content=content)
        return await self._complete_json(prompt, max_tokens=400)

    def get_usage_stats(self) -> Dict:
        """Get usage statistics."""
        estimated_cost = 0.0
        if self.model in self.cost_per_1k_tokens:
            # Rough estimate (assuming 80% input, 20% output)
            input_tokens = int(self.total_tokens * 0.8)
            output_tokens = int(self.total_tokens * 0.2)
            rates = self.cost_per_1k_tokens[self.model]
            estimated_cost = (
                (input_tokens / 1000) * rates["input"] +
                (output_tokens / 1000) * rates["output"]
            )

        return {
            "total_tokens": self.total_tokens,
            "api_calls": self.api_calls,
            "estimated_cost": estimated_cost,
            "model": self.model,
        }


POSITIVE_WORDS = ("beat", "surge", "approval", "approved", "upgrade", "record", "acquire", "soar", "jump")
NEGATIVE_WORDS = ("miss", "plunge", "downgrade", "lawsuit", "recall", "offering", "halt", "fall", "drop")


class MockLLMProvider(LLMProvider):
    """Offline provider.

    Extraction understands payloads that are already JSON (a list of records,
    or an object holding one under ``articles``/``data``/``items``/``results``)
    and applies mapping hints as field renames. Sentiment is a keyword count.
    """

    def __init__(self) -> None:
        """Initialize mock provider."""
        self.api_calls = 0

    @staticmethod
    def _lookup(record: Dict[str, Any], path: str) -> Any:
        value: Any = record
        for part in path.split("."):
            if not isinstance(value, dict) or part not in value:
                return None
            value = value[part]
        return value

    def _apply_mappings(self, record: Dict[str, Any], field_mappings: List[FieldMapping]) -> Dict[str, Any]:
        mapped = dict(record)
        momentum = dict(mapped.get("momentum") or {})
        for mapping in field_mappings:
            value = self._lookup(record, mapping.source_field)
            if value is None:
                continue
            if mapping.field.startswith("momentum."):
                momentum[mapping.field.split(".", 1)[1]] = value
            else:
                mapped[mapping.field] = value
        if momentum:
            mapped["momentum"] = momentum
        return mapped

    async def extract_articles(
        self,
        raw_data: str,
        field_mappings: Optional[List[FieldMapping]] = None,
    ) -> List[Dict[str, Any]]:
        """Mock extraction for JSON payloads."""
        self.api_calls += 1

        parsed = json.loads(raw_data)
        if isinstance(parsed, dict):
            for key in ("articles", "data", "items", "results"):
                if isinstance(parsed.get(key), list):
                    parsed = parsed[key]
                    break
            else:
                parsed = [parsed]
        if not isinstance(parsed, list):
            raise ValueError("Payload holds no records")

        records = [r for r in parsed if isinstance(r, dict)]
        if field_mappings:
            records = [self._apply_mappings(r, field_mappings) for r in records]
        return records

    async def analyze_sentiment(
        self,
        ticker: str,
        headline: str,
        content: str,
    ) -> Dict[str, Any]:
        """Mock sentiment scoring."""
        self.api_calls += 1

        text = f"{headline} {content}".lower()
        score = sum(w in text for w in POSITIVE_WORDS) - sum(w in text for w in NEGATIVE_WORDS)
        impact = max(-1.0, min(1.0, score / 3))
        if impact > 0:
            sentiment = "positive"
        elif impact < 0:
            sentiment = "negative"
        else:
            sentiment = "neutral"

        return {
            "sentiment": sentiment,
            "impactScore": impact,
            "summary": f"Mock analysis of {ticker}: {headline[:80]}",
        }

    def get_usage_stats(self) -> Dict:
        """Get mock usage statistics."""
        return {
            "total_tokens": 0,
            "api_calls": self.api_calls,
            "estimated_cost": 0.0,
            "model": "mock",
        }
