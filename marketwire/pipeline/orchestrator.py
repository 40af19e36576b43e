"""Ingestion orchestrator that runs one cycle over all active polled sources."""

import asyncio
from typing import List

from ..analysis import ExtractionStage, SentimentStage
from ..db import ActivityLog, ArticleSink, SourceRegistry
from ..errors import AnalysisFailure, ExtractionFailure, FetchFailure
from ..ingestion import KeywordFilter, RawFetcher
from ..models import Article, IngestionCycleResult, Source, SourceKind


class SourceOutcome:
    """Counters for one source within a cycle."""

    def __init__(self, source: Source):
        self.source = source
        self.extracted = 0
        self.imported = 0
        self.filtered = 0
        self.scored = 0
        self.pending = 0


class IngestionOrchestrator:
    """Drives FETCH, EXTRACT, FILTER, PERSIST and ANALYZE for each source.

    Sources are processed one after another in registry order. Within a source,
    each accepted article is persisted with pending sentiment and its analysis
    is started right away; all of the source's analyses are awaited before the
    next source begins. A failure anywhere in one source is logged and never
    stops the rest of the cycle.
    """

    def __init__(
        self,
        registry: SourceRegistry,
        fetcher: RawFetcher,
        extractor: ExtractionStage,
        sentiment: SentimentStage,
        sink: ArticleSink,
        activity: ActivityLog,
    ) -> None:
        self.registry = registry
        self.fetcher = fetcher
        self.extractor = extractor
        self.sentiment = sentiment
        self.sink = sink
        self.activity = activity

    async def run_cycle(self) -> IngestionCycleResult:
        """Run one full pass over the active poll sources."""
        result = IngestionCycleResult()
        sources = await self.registry.list_active(SourceKind.POLL)

        for source in sources:
            try:
                outcome = await self.process_source(source)
            except Exception as e:
                await self.activity.error(
                    f"Error fetching from news source: {source.name}",
                    {"source": source.name, "error": str(e)},
                )
                continue
            if outcome is None:
                continue
            result.imported_count += outcome.imported
            result.filtered_count += outcome.filtered

        if result.imported_count > 0 or result.filtered_count > 0:
            await self.activity.info(
                "News ingestion cycle completed.",
                result.model_dump(by_alias=True),
            )
        return result

    async def process_source(self, source: Source):
        """Process one source. Returns None when the source was skipped."""
        try:
            payload = await self.fetcher.fetch(source)
        except FetchFailure:
            # Already logged by the fetcher
            return None

        try:
            extracted = await self.extractor.extract(payload, source.mapping_hints)
        except ExtractionFailure as e:
            await self.activity.warn(
                f"Could not extract articles from source: {source.name}",
                {"source": source.name, "error": str(e)},
            )
            return None

        if not extracted:
            await self.activity.warn(
                f"No articles extracted from source: {source.name}",
                {"source": source.name},
            )
            return None

        outcome = SourceOutcome(source)
        outcome.extracted = len(extracted)
        accepted = KeywordFilter.for_source(source).apply(extracted)
        outcome.filtered = len(extracted) - len(accepted)

        tasks: List[asyncio.Task] = []
        try:
            for item in accepted:
                article = await self.sink.create_pending(
                    Article(source_id=source.id, **item.model_dump())
                )
                outcome.imported += 1
                tasks.append(asyncio.create_task(self._analyze(article, outcome)))
        finally:
            # Never leave analyses running past this source
            if tasks:
                await asyncio.gather(*tasks, return_exceptions=True)

        await self.activity.info(
            f"Processed {outcome.imported} articles from source: {source.name}",
            {
                "source": source.name,
                "extracted": outcome.extracted,
                "imported": outcome.imported,
                "filtered": outcome.filtered,
                "scored": outcome.scored,
                "pending": outcome.pending,
            },
        )
        return outcome

    async def _analyze(self, article: Article, outcome: SourceOutcome) -> None:
        """Score one stored article and patch the result onto it."""
        try:
            scored = await self.sentiment.analyze(article.ticker, article.headline, article.content)
            await self.sink.attach_sentiment(article.id, scored)
            outcome.scored += 1
        except AnalysisFailure as e:
            outcome.pending += 1
            await self.activity.error(
                f"Sentiment analysis failed for article: {article.id}",
                {"id": article.id, "ticker": article.ticker, "error": str(e)},
            )
        except Exception as e:
            outcome.pending += 1
            await self.activity.error(
                f"Could not attach sentiment to article: {article.id}",
                {"id": article.id, "ticker": article.ticker, "error": str(e)},
            )
