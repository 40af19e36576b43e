"""Article persistence sink."""

from typing import List, Optional

from ..models import Article, PendingSentiment, ScoredSentiment
from .store import DocumentStore

NEWS_ITEMS = "news_items"


class ArticleSink:
    """Two-phase article storage.

    ``create_pending`` makes an article visible to readers right away with
    pending sentiment; ``attach_sentiment`` later replaces only the
    ``analysis`` sub-object of that one article.
    """

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def create_pending(self, article: Article) -> Article:
        stored = article.model_copy(deep=True)
        stored.analysis = PendingSentiment()
        stored.id = await self.store.insert(NEWS_ITEMS, stored.to_document())
        return stored

    async def attach_sentiment(self, article_id: str, result: ScoredSentiment) -> bool:
        patch = {"analysis": result.model_dump(mode="json", by_alias=True)}
        return await self.store.update(NEWS_ITEMS, article_id, patch)

    async def get(self, article_id: str) -> Optional[Article]:
        data = await self.store.get(NEWS_ITEMS, article_id)
        return Article.from_document(article_id, data) if data else None

    async def list_recent(self, limit: int = 50) -> List[Article]:
        rows = await self.store.list(NEWS_ITEMS, limit=limit)
        return [Article.from_document(doc_id, data) for doc_id, data in rows]
