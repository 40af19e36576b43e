"""Per-source keyword filtering."""

from typing import Iterable, List, Optional, Sequence, TypeVar

from ..models import ExtractedArticle, Source

ArticleT = TypeVar("ArticleT", bound=ExtractedArticle)


def _clean(keywords: Optional[Iterable[str]]) -> List[str]:
    return [k.strip().lower() for k in keywords or [] if k and k.strip()]


class KeywordFilter:
    """Include/exclude keyword rules.

    Matching is a case-insensitive substring search over headline plus body.
    Exclude wins over include; an empty include list keeps everything that was
    not excluded.
    """

    def __init__(
        self,
        include: Optional[Iterable[str]] = None,
        exclude: Optional[Iterable[str]] = None,
    ) -> None:
        self.include = _clean(include)
        self.exclude = _clean(exclude)

    @classmethod
    def for_source(cls, source: Source) -> "KeywordFilter":
        return cls(include=source.include_keywords, exclude=source.exclude_keywords)

    @property
    def is_empty(self) -> bool:
        return not self.include and not self.exclude

    def accepts(self, article: ExtractedArticle) -> bool:
        text = article.text.lower()
        if any(keyword in text for keyword in self.exclude):
            return False
        if self.include:
            return any(keyword in text for keyword in self.include)
        return True

    def apply(self, articles: Sequence[ArticleT]) -> List[ArticleT]:
        if self.is_empty:
            return list(articles)
        return [a for a in articles if self.accepts(a)]


def apply_filters(
    articles: Sequence[ArticleT],
    include: Optional[Iterable[str]] = None,
    exclude: Optional[Iterable[str]] = None,
) -> List[ArticleT]:
    """Filter articles by keyword rules; identity when no rules are given."""
    return KeywordFilter(include, exclude).apply(articles)
