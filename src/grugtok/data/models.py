"""Core data models for GrugTok."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

FALLBACK_TAG = "AI Research"
FALLBACK_QUESTION = "How can we advance machine learning?"
FALLBACK_ANSWER = "A novel approach to improve AI systems"
FALLBACK_BET = "Better methods will keep making AI systems better"


@dataclass(frozen=True)
class TopicQuery:
    """A topic-scoped query against the paper search index."""

    name: str
    search_query: str


@dataclass(frozen=True)
class Enrichment:
    """Short LLM-derived labels for a paper.

    ``fallback`` is True when every field holds the fixed default text, i.e. the
    model could not be reached or its answer could not be read at all.
    """

    tag: str = FALLBACK_TAG
    question: str = FALLBACK_QUESTION
    answer: str = FALLBACK_ANSWER
    bet: str = FALLBACK_BET
    fallback: bool = False


FALLBACK_ENRICHMENT = Enrichment(fallback=True)


@dataclass(frozen=True)
class Paper:
    """A normalized paper record parsed from one search index entry.

    The record is immutable. Enrichment labels and full text are attached by
    deriving a new record, each at most once.
    """

    id: str
    title: str
    abstract: str
    url: str
    published_at: str
    authors: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()
    tag: str | None = None
    question: str | None = None
    answer: str | None = None
    bet: str | None = None
    content: str | None = None

    @property
    def is_enriched(self) -> bool:
        return self.tag is not None

    def with_enrichment(self, enrichment: Enrichment) -> Paper:
        """Return a copy carrying the enrichment labels.

        Raises:
            ValueError: If the paper was already enriched.
        """
        if self.is_enriched:
            raise ValueError(f"Paper {self.id} is already enriched")
        return replace(
            self,
            tag=enrichment.tag,
            question=enrichment.question,
            answer=enrichment.answer,
            bet=enrichment.bet,
        )

    def with_content(self, content: str) -> Paper:
        """Return a copy carrying the full text.

        Raises:
            ValueError: If content was already attached.
        """
        if self.content is not None:
            raise ValueError(f"Paper {self.id} already has content")
        return replace(self, content=content)


@dataclass
class PaperPage:
    """One page of enriched papers returned to the presentation layer."""

    papers: list[Paper] = field(default_factory=list)
    offset: int = 0
    has_more: bool = False
    categories: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.papers)


@dataclass(frozen=True)
class PaperContent:
    """Full text recovered for a paper, or a placeholder message."""

    id: str
    text: str
    strategy: str | None = None

    @property
    def has_content(self) -> bool:
        """Whether one of the extraction strategies produced the text."""
        return self.strategy is not None
