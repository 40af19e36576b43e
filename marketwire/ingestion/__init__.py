"""Fetching raw payloads and narrowing extracted articles."""

from .fetcher import RawFetcher
from .filters import KeywordFilter, apply_filters
from .socket_feed import SocketFeed

__all__ = ["KeywordFilter", "RawFetcher", "SocketFeed", "apply_filters"]
