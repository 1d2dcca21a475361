"""Full-text recovery for individual papers."""

from grugtok.content.fetcher import (
    PLACEHOLDER_TEMPLATE,
    ContentFetcher,
    ExtractionError,
    decompress_source,
    is_gzip,
)

__all__ = [
    "PLACEHOLDER_TEMPLATE",
    "ContentFetcher",
    "ExtractionError",
    "decompress_source",
    "is_gzip",
]
