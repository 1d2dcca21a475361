"""Feed pipeline combining search and enrichment."""

from grugtok.pipeline.feed import PaperFeed, has_more

__all__ = [
    "PaperFeed",
    "has_more",
]
