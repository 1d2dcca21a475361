"""Enricher that never calls a model."""

from grugtok.data import FALLBACK_ENRICHMENT, Paper


class FallbackEnricher:
    """Attach the default labels to every paper.

    No API calls are made. Useful for running the feed without model
    credentials, and as a stand-in in tests.
    """

    async def enrich(self, paper: Paper) -> Paper:
        return paper.with_enrichment(FALLBACK_ENRICHMENT)

    async def enrich_all(self, papers: list[Paper]) -> list[Paper]:
        return [paper.with_enrichment(FALLBACK_ENRICHMENT) for paper in papers]
