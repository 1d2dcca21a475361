from typing import Protocol

from grugtok.data import Paper


class PaperSearcher(Protocol):
    """Interface for fetching a page of papers from a search index."""

    async def search(self, *, limit: int, offset: int = 0) -> list[Paper]:
        """Fetch up to ``limit`` unique papers, most recent first.

        Args:
            limit: Maximum number of papers to return.
            offset: Pagination offset passed to the index.

        Returns:
            Deduplicated papers sorted by publication time, newest first.
            An empty list means no (more) results.
        """
        ...

    @property
    def categories(self) -> list[str]:
        """Subject categories covered by the searcher's queries."""
        ...
