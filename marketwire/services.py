"""Wiring of pipeline components from configuration."""

from typing import Optional

import httpx
from rich.console import Console

from .analysis import ExtractionStage, LLMProvider, MockLLMProvider, OpenAIProvider, SentimentStage
from .config import Config
from .db import ActivityLog, ArticleSink, DocumentStore, PostgresDocumentStore, SourceRegistry
from .ingestion import RawFetcher, SocketFeed
from .pipeline import IngestionOrchestrator, LivePipeline

console = Console(stderr=True)


def get_llm_provider(config: Config) -> LLMProvider:
    """Get configured LLM provider."""
    llm_config = config.get_llm_config()

    if llm_config.get("provider") == "openai":
        api_key = llm_config.get("api_key")
        if not api_key:
            console.print("[yellow]Warning: No OpenAI API key found. Using mock LLM provider.[/yellow]")
            return MockLLMProvider()

        return OpenAIProvider(
            api_key=api_key,
            model=llm_config.get("model", "gpt-4o-mini"),
            base_url=llm_config.get("base_url"),
            max_payload_chars=llm_config.get("max_payload_chars", 24000),
        )
    elif llm_config.get("provider") == "mock":
        return MockLLMProvider()
    else:
        console.print("[yellow]Warning: Unknown LLM provider. Using mock provider.[/yellow]")
        return MockLLMProvider()


class Services:
    """Every pipeline component, built once and shared."""

    def __init__(
        self,
        config: Config,
        store: Optional[DocumentStore] = None,
        llm_provider: Optional[LLMProvider] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        socket_connect=None,
        echo: bool = True,
    ) -> None:
        self.config = config
        self.store = store or PostgresDocumentStore(config.get_db_config())
        self.llm_provider = llm_provider or get_llm_provider(config)

        ingestion = config.config.ingestion
        self.activity = ActivityLog(self.store, echo=echo)
        self.registry = SourceRegistry(self.store, self.activity)
        self.sink = ArticleSink(self.store)
        self.fetcher = RawFetcher(
            self.activity,
            timeout=ingestion.fetch_timeout,
            snippet_chars=ingestion.snippet_chars,
            user_agent=ingestion.user_agent,
            transport=transport,
        )
        self.extractor = ExtractionStage(self.llm_provider)
        self.sentiment = SentimentStage(self.llm_provider)
        self.orchestrator = IngestionOrchestrator(
            self.registry,
            self.fetcher,
            self.extractor,
            self.sentiment,
            self.sink,
            self.activity,
        )
        self.live = LivePipeline(
            self.extractor,
            self.sentiment,
            SocketFeed(self.activity, connect=socket_connect),
            self.activity,
        )
