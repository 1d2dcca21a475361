"""Data models for GrugTok."""

from grugtok.data.models import (
    FALLBACK_ANSWER,
    FALLBACK_BET,
    FALLBACK_ENRICHMENT,
    FALLBACK_QUESTION,
    FALLBACK_TAG,
    Enrichment,
    Paper,
    PaperContent,
    PaperPage,
    TopicQuery,
)

__all__ = [
    "FALLBACK_ANSWER",
    "FALLBACK_BET",
    "FALLBACK_ENRICHMENT",
    "FALLBACK_QUESTION",
    "FALLBACK_TAG",
    "Enrichment",
    "Paper",
    "PaperContent",
    "PaperPage",
    "TopicQuery",
]
