"""Paper feed: fetch a page of papers and enrich every one of them."""

import logging
import time

from grugtok.data import PaperPage
from grugtok.enricher.base import PaperEnricher
from grugtok.run_logger import RunLogger
from grugtok.search.base import PaperSearcher

logger = logging.getLogger(__name__)


def has_more(returned: int, limit: int) -> bool:
    """Whether the client should ask for another page.

    An approximation: a full page suggests the index holds more.
    """
    return returned >= limit


class PaperFeed:
    """Compose a searcher and an enricher into one page of feed results.

    Flow:
    1. The searcher fetches, deduplicates and orders up to ``limit`` papers
    2. The enricher labels every paper (concurrently, bounded by the enricher)
    3. Results are wrapped in a ``PaperPage`` envelope

    Args:
        searcher: Paper searcher.
        enricher: Paper enricher.
        run_logger: Optional RunLogger for per-request logging.
    """

    def __init__(
        self,
        searcher: PaperSearcher,
        enricher: PaperEnricher,
        run_logger: RunLogger | None = None,
    ) -> None:
        self._searcher = searcher
        self._enricher = enricher
        self._run_logger = run_logger

    async def run(self, *, limit: int, offset: int = 0) -> PaperPage:
        """Build one page of enriched papers.

        Args:
            limit: Requested page size.
            offset: Pagination offset.

        Returns:
            The page envelope. Unexpected errors propagate to the caller.
        """
        record = None
        if self._run_logger:
            record = self._run_logger.start_run("feed", {"limit": limit, "offset": offset})

        t0 = time.monotonic()
        papers = await self._searcher.search(limit=limit, offset=offset)
        search_duration = time.monotonic() - t0

        if self._run_logger:
            self._run_logger.log_stage(
                record,
                stage="search",
                component=type(self._searcher).__name__,
                input_data={"limit": limit, "offset": offset},
                output_data=[paper.id for paper in papers],
                duration_seconds=search_duration,
            )

        t0 = time.monotonic()
        enriched = await self._enricher.enrich_all(papers)
        enrich_duration = time.monotonic() - t0

        if self._run_logger:
            self._run_logger.log_stage(
                record,
                stage="enrichment",
                component=type(self._enricher).__name__,
                input_data={"paper_count": len(papers)},
                output_data=enriched,
                duration_seconds=enrich_duration,
            )
            self._run_logger.finish_run(record, enriched)

        logger.info(
            "Feed page offset=%d limit=%d: %d papers (search %.2fs, enrichment %.2fs)",
            offset,
            limit,
            len(enriched),
            search_duration,
            enrich_duration,
        )
        return PaperPage(
            papers=enriched,
            offset=offset,
            has_more=has_more(len(enriched), limit),
            categories=self._searcher.categories,
        )
