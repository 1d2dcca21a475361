"""GrugTok: arXiv papers as swipeable cards with short LLM-written summaries."""

from grugtok.config import GrugTokConfig, create_from_config, load_config, resolve_config
from grugtok.content import ContentFetcher
from grugtok.data import (
    FALLBACK_ENRICHMENT,
    Enrichment,
    Paper,
    PaperContent,
    PaperPage,
    TopicQuery,
)
from grugtok.enricher import (
    ClaudeEnricher,
    FallbackEnricher,
    PaperEnricher,
    parse_enrichment,
)
from grugtok.pipeline import PaperFeed
from grugtok.run_logger import RunLogger
from grugtok.search import ArxivSearcher, PaperSearcher, parse_entry, parse_feed

__all__ = [
    # Models
    "Enrichment",
    "FALLBACK_ENRICHMENT",
    "Paper",
    "PaperContent",
    "PaperPage",
    "TopicQuery",
    # Protocols
    "PaperEnricher",
    "PaperSearcher",
    # Parsing
    "parse_enrichment",
    "parse_entry",
    "parse_feed",
    # Components
    "ArxivSearcher",
    "ClaudeEnricher",
    "ContentFetcher",
    "FallbackEnricher",
    "PaperFeed",
    # Logging
    "RunLogger",
    # Config
    "GrugTokConfig",
    "create_from_config",
    "load_config",
    "resolve_config",
]
