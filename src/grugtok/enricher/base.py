"""Protocol for paper enrichment."""

from typing import Protocol

from grugtok.data import Paper


class PaperEnricher(Protocol):
    """Interface for attaching tag/question/answer/bet labels to papers."""

    async def enrich(self, paper: Paper) -> Paper:
        """Return the paper with all four labels populated.

        Implementations never raise for upstream failures; they fall back to
        the default labels instead.
        """
        ...

    async def enrich_all(self, papers: list[Paper]) -> list[Paper]:
        """Enrich every paper, preserving order."""
        ...
