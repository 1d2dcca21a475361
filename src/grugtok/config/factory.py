"""Factory functions to create components from configuration."""

from pathlib import Path

from grugtok.config.models import (
    ClaudeEnricherConfig,
    ContentConfig,
    FallbackEnricherConfig,
    GrugTokConfig,
    SearchConfig,
)
from grugtok.content.fetcher import ContentFetcher
from grugtok.data import TopicQuery
from grugtok.enricher.base import PaperEnricher
from grugtok.enricher.claude import ClaudeEnricher
from grugtok.enricher.fallback import FallbackEnricher
from grugtok.pipeline.feed import PaperFeed
from grugtok.run_logger import RunLogger
from grugtok.search.arxiv import ArxivSearcher


def create_searcher(config: SearchConfig) -> ArxivSearcher:
    """Create the arXiv searcher from config."""
    return ArxivSearcher(
        queries=[TopicQuery(name=q.name, search_query=q.search_query) for q in config.queries],
        categories=config.categories,
        base_url=config.base_url,
        timeout=config.timeout_seconds,
        min_abstract_length=config.min_abstract_length,
        sort_by=config.sort_by,
        sort_order=config.sort_order,
    )


def create_enricher(config: ClaudeEnricherConfig | FallbackEnricherConfig) -> PaperEnricher:
    """Create a paper enricher from config.

    Uses explicit type matching rather than getattr.
    """
    if isinstance(config, ClaudeEnricherConfig):
        return ClaudeEnricher(
            model=config.model,
            max_concurrency=config.max_concurrency,
            timeout=config.timeout_seconds,
            max_tokens=config.max_tokens,
            temperature=config.temperature,
        )
    if isinstance(config, FallbackEnricherConfig):
        return FallbackEnricher()
    msg = f"Unknown enricher config type: {type(config)}"
    raise ValueError(msg)


def create_content_fetcher(config: ContentConfig) -> ContentFetcher:
    """Create the content fetcher from config."""
    return ContentFetcher(
        source_url=config.source_url,
        html_url=config.html_url,
        pdf_url=config.pdf_url,
        timeout=config.timeout_seconds,
        min_length=config.min_length,
        min_printable_ratio=config.min_printable_ratio,
    )


def create_from_config(
    config: GrugTokConfig,
    *,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> tuple[PaperFeed, ContentFetcher, RunLogger | None]:
    """Create the feed pipeline and content fetcher from root config.

    Args:
        config: Root configuration.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.

    Returns:
        Tuple of (feed, content_fetcher, run_logger).
        run_logger is None if run logging is disabled.
    """
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)

    run_logger: RunLogger | None = None
    if log_enabled:
        run_logger = RunLogger(log_dir=log_dir, enabled=True)

    feed = PaperFeed(
        searcher=create_searcher(config.search),
        enricher=create_enricher(config.enricher),
        run_logger=run_logger,
    )
    return (feed, create_content_fetcher(config.content), run_logger)
