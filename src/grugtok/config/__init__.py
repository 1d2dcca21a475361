"""Configuration module for GrugTok."""

from grugtok.config.factory import (
    create_content_fetcher,
    create_enricher,
    create_from_config,
    create_searcher,
)
from grugtok.config.loader import get_default_config_path, load_config, resolve_config
from grugtok.config.models import (
    ClaudeEnricherConfig,
    ContentConfig,
    EnricherConfig,
    FallbackEnricherConfig,
    GrugTokConfig,
    LoggingConfig,
    SearchConfig,
    ServerConfig,
    TopicQueryConfig,
)

__all__ = [
    "ClaudeEnricherConfig",
    "ContentConfig",
    "EnricherConfig",
    "FallbackEnricherConfig",
    "GrugTokConfig",
    "LoggingConfig",
    "SearchConfig",
    "ServerConfig",
    "TopicQueryConfig",
    "create_content_fetcher",
    "create_enricher",
    "create_from_config",
    "create_searcher",
    "get_default_config_path",
    "load_config",
    "resolve_config",
]
