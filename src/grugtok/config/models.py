"""Pydantic configuration models for GrugTok components."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from grugtok.search.arxiv import ARXIV_API_URL, DEFAULT_CATEGORIES, DEFAULT_TOPIC_QUERIES

# ============================================================
# Search Config
# ============================================================


class TopicQueryConfig(BaseModel):
    """One topic-scoped query against the search index."""

    name: str
    search_query: str

    model_config = {"frozen": True}


def _default_queries() -> list[TopicQueryConfig]:
    return [
        TopicQueryConfig(name=query.name, search_query=query.search_query)
        for query in DEFAULT_TOPIC_QUERIES
    ]


class SearchConfig(BaseModel):
    """Configuration for ArxivSearcher."""

    base_url: str = ARXIV_API_URL
    queries: list[TopicQueryConfig] = Field(default_factory=_default_queries, min_length=1)
    categories: list[str] = Field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    timeout_seconds: float = Field(default=30.0, gt=0)
    min_abstract_length: int = Field(default=100, ge=0)
    sort_by: str = "submittedDate"
    sort_order: str = "descending"

    model_config = {"frozen": True}


# ============================================================
# Enricher Configs
# ============================================================


class ClaudeEnricherConfig(BaseModel):
    """Configuration for ClaudeEnricher."""

    type: Literal["claude"] = "claude"
    model: str = "claude-haiku-4-5-20251001"
    max_concurrency: int = Field(default=8, ge=1)
    timeout_seconds: float = Field(default=30.0, gt=0)
    max_tokens: int = Field(default=300, ge=1)
    temperature: float = Field(default=0.3, ge=0.0, le=1.0)

    model_config = {"frozen": True}


class FallbackEnricherConfig(BaseModel):
    """Enricher that attaches default labels without calling a model."""

    type: Literal["fallback"] = "fallback"

    model_config = {"frozen": True}


EnricherConfig = Annotated[
    ClaudeEnricherConfig | FallbackEnricherConfig,
    Field(discriminator="type"),
]


# ============================================================
# Content Config
# ============================================================


class ContentConfig(BaseModel):
    """Configuration for ContentFetcher."""

    source_url: str = "https://arxiv.org/e-print/{id}"
    html_url: str = "https://arxiv.org/html/{id}"
    pdf_url: str = "https://arxiv.org/pdf/{id}.pdf"
    timeout_seconds: float = Field(default=30.0, gt=0)
    min_length: int = Field(default=1000, ge=0)
    min_printable_ratio: float = Field(default=0.7, ge=0.0, le=1.0)

    model_config = {"frozen": True}


# ============================================================
# Server Config
# ============================================================


class ServerConfig(BaseModel):
    """Configuration for the HTTP API."""

    host: str = "127.0.0.1"
    port: int = 8000
    default_limit: int = Field(default=30, ge=1)
    max_limit: int = Field(default=100, ge=1)

    model_config = {"frozen": True}


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for logging and per-request run logs."""

    enabled: bool = False
    log_dir: str = "logs"
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class GrugTokConfig(BaseModel):
    """Root configuration for GrugTok."""

    search: SearchConfig = Field(default_factory=SearchConfig)
    enricher: EnricherConfig = Field(default_factory=ClaudeEnricherConfig)
    content: ContentConfig = Field(default_factory=ContentConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
