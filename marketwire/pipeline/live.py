"""Live path: one socket message in, one fully scored article out."""

from typing import AsyncIterator

from ..analysis import ExtractionStage, SentimentStage
from ..db import ActivityLog
from ..errors import AnalysisFailure, ExtractionFailure
from ..ingestion import SocketFeed
from ..models import Article
from ..models.base import utcnow


class LivePipeline:
    """Runs EXTRACT then ANALYZE synchronously per message. Nothing is persisted."""

    def __init__(
        self,
        extractor: ExtractionStage,
        sentiment: SentimentStage,
        feed: SocketFeed,
        activity: ActivityLog,
    ) -> None:
        self.extractor = extractor
        self.sentiment = sentiment
        self.feed = feed
        self.activity = activity

    async def process_message(self, raw_message: str) -> Article:
        """Turn one inbound message into an article.

        A message is assumed to carry a single article; only the first
        extracted record is used.

        Raises:
            ExtractionFailure: nothing could be extracted from the message
            AnalysisFailure: the sentiment call failed
        """
        articles = await self.extractor.extract(raw_message)
        if not articles:
            raise ExtractionFailure("Could not parse a news article from the WebSocket message.")

        article = articles[0]
        analysis = await self.sentiment.analyze(article.ticker, article.headline, article.content)
        return Article(
            **article.model_dump(),
            analysis=analysis,
            published_at=utcnow(),
        )

    async def stream(self, url: str) -> AsyncIterator[Article]:
        """Yield one article per successfully processed message from ``url``.

        Messages that fail are logged and produce no output. Socket errors end
        the stream by propagating to the consumer.
        """
        async for message in self.feed.messages(url):
            try:
                yield await self.process_message(message)
            except (ExtractionFailure, AnalysisFailure) as e:
                await self.activity.error(
                    "Error processing WebSocket message",
                    {"url": url, "error": str(e), "snippet": message[:200]},
                )
