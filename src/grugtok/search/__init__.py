"""Paper search: entry parsing and multi-query fetching."""

from grugtok.search.arxiv import DEFAULT_CATEGORIES, DEFAULT_TOPIC_QUERIES, ArxivSearcher
from grugtok.search.base import PaperSearcher
from grugtok.search.entry import parse_entry, parse_feed

__all__ = [
    "DEFAULT_CATEGORIES",
    "DEFAULT_TOPIC_QUERIES",
    "ArxivSearcher",
    "PaperSearcher",
    "parse_entry",
    "parse_feed",
]
