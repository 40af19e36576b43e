from marketwire.ingestion import KeywordFilter, apply_filters
from marketwire.models import ExtractedArticle, Source


def _article(headline, content="Body text"):
    return ExtractedArticle(ticker="TST", headline=headline, content=content)


ARTICLES = [
    _article("Acme announces Merger with Globex"),
    _article("Acme beats estimates", "Revenue up on strong FDA approval demand"),
    _article("Quiet day for Initech"),
]


def test_no_filters_is_identity():
    assert apply_filters(ARTICLES) == ARTICLES
    assert apply_filters(ARTICLES, [], []) == ARTICLES


def test_exclude_is_case_insensitive():
    kept = apply_filters(ARTICLES, exclude=["merger"])
    assert [a.headline for a in kept] == ["Acme beats estimates", "Quiet day for Initech"]


def test_exclude_wins_over_include():
    kept = apply_filters(ARTICLES, include=["acme"], exclude=["MERGER"])
    assert [a.headline for a in kept] == ["Acme beats estimates"]


def test_include_requires_a_match():
    kept = apply_filters(ARTICLES, include=["fda", "globex"])
    assert len(kept) == 2
    assert all("Initech" not in a.headline for a in kept)


def test_include_matches_body_text():
    kept = apply_filters(ARTICLES, include=["approval"])
    assert [a.headline for a in kept] == ["Acme beats estimates"]


def test_empty_include_drops_nothing_on_its_own():
    assert len(apply_filters(ARTICLES, include=[], exclude=["nothing-matches"])) == 3


def test_blank_keywords_are_ignored():
    assert apply_filters(ARTICLES, include=["  "], exclude=[""]) == ARTICLES


def test_filtering_is_idempotent():
    rules = KeywordFilter(include=["acme", "initech"], exclude=["merger"])
    once = rules.apply(ARTICLES)
    assert rules.apply(once) == once


def test_for_source_uses_source_keywords():
    source = Source(name="Wire", url="https://example.com", exclude_keywords=["Quiet"])
    kept = KeywordFilter.for_source(source).apply(ARTICLES)
    assert len(kept) == 2
