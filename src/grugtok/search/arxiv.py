from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime

import httpx

from grugtok.data import Paper, TopicQuery
from grugtok.search.entry import MIN_ABSTRACT_LENGTH, parse_feed
from grugtok.text import parse_timestamp

logger = logging.getLogger(__name__)

ARXIV_API_URL = "http://export.arxiv.org/api/query"

DEFAULT_TOPIC_QUERIES: tuple[TopicQuery, ...] = (
    TopicQuery(
        name="core-ai",
        search_query="cat:cs.AI OR cat:cs.LG OR cat:cs.CL OR cat:cs.CV OR cat:cs.NE",
    ),
    TopicQuery(
        name="adjacent-ai",
        search_query="cat:stat.ML OR cat:cs.IR OR cat:cs.HC OR cat:cs.CR",
    ),
    TopicQuery(
        name="ml-keywords",
        search_query=(
            'all:"machine learning" OR "deep learning" OR "neural network" '
            'OR "large language model"'
        ),
    ),
    TopicQuery(
        name="architecture-keywords",
        search_query='all:"transformer" OR "attention" OR "GPT" OR "BERT"',
    ),
    TopicQuery(
        name="frontier-keywords",
        search_query='all:"reinforcement learning" OR "AI ethics" OR "foundation model"',
    ),
)

DEFAULT_CATEGORIES: tuple[str, ...] = (
    "cs.AI",
    "cs.LG",
    "cs.CL",
    "cs.CV",
    "cs.NE",
    "stat.ML",
    "cs.IR",
    "cs.HC",
    "cs.CR",
)

_OLDEST = datetime.min.replace(tzinfo=UTC)


class ArxivSearcher:
    """Fetch recent papers from the arXiv API across several topic queries.

    The requested page size is split evenly across the topic queries. Results
    are merged in query order (first occurrence of an id wins), sorted newest
    first and truncated to the page size.

    Args:
        queries: Topic queries to fan out over.
        categories: Subject categories reported alongside results.
        base_url: arXiv API endpoint.
        timeout: Per-request timeout in seconds.
        min_abstract_length: Entries with an abstract this short or shorter are dropped.
        sort_by: arXiv ``sortBy`` parameter.
        sort_order: arXiv ``sortOrder`` parameter.
    """

    def __init__(
        self,
        *,
        queries: list[TopicQuery] | None = None,
        categories: list[str] | None = None,
        base_url: str = ARXIV_API_URL,
        timeout: float = 30.0,
        min_abstract_length: int = MIN_ABSTRACT_LENGTH,
        sort_by: str = "submittedDate",
        sort_order: str = "descending",
    ) -> None:
        self._queries = list(queries) if queries is not None else list(DEFAULT_TOPIC_QUERIES)
        if not self._queries:
            raise ValueError("At least one topic query is required.")
        self._categories = (
            list(categories) if categories is not None else list(DEFAULT_CATEGORIES)
        )
        self._base_url = base_url
        self._timeout = timeout
        self._min_abstract_length = min_abstract_length
        self._sort_by = sort_by
        self._sort_order = sort_order

    @property
    def categories(self) -> list[str]:
        return list(self._categories)

    def per_query_limit(self, limit: int) -> int:
        """Share of ``limit`` requested from each topic query, rounded up."""
        return max(1, -(-limit // len(self._queries)))

    async def search(self, *, limit: int, offset: int = 0) -> list[Paper]:
        """Fetch up to ``limit`` unique papers, newest first.

        Failed queries contribute nothing. If every query fails the result is
        empty, which callers treat as "no more results".
        """
        max_results = self.per_query_limit(limit)
        try:
            async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
                tasks = [
                    self._search_single(client, query, offset=offset, max_results=max_results)
                    for query in self._queries
                ]
                results = await asyncio.gather(*tasks, return_exceptions=True)
        except httpx.HTTPError as e:
            logger.warning("arXiv fetch failed: %s", e)
            return []

        seen_ids: set[str] = set()
        papers: list[Paper] = []
        for query, result in zip(self._queries, results, strict=True):
            if isinstance(result, BaseException):
                logger.warning("arXiv query %r failed: %s", query.name, result)
                continue
            new_ids = 0
            for paper in result:
                if paper.id not in seen_ids:
                    seen_ids.add(paper.id)
                    papers.append(paper)
                    new_ids += 1
            logger.info(
                "arXiv query %r: parsed=%d new_unique=%d", query.name, len(result), new_ids
            )

        papers.sort(key=_recency_key, reverse=True)
        return papers[:limit]

    async def _search_single(
        self,
        client: httpx.AsyncClient,
        query: TopicQuery,
        *,
        offset: int,
        max_results: int,
    ) -> list[Paper]:
        """Execute a single topic query and parse its entries."""
        params: dict[str, str | int] = {
            "search_query": query.search_query,
            "start": offset,
            "max_results": max_results,
            "sortBy": self._sort_by,
            "sortOrder": self._sort_order,
        }
        response = await client.get(self._base_url, params=params)
        response.raise_for_status()
        return parse_feed(response.text, min_abstract_length=self._min_abstract_length)


def _recency_key(paper: Paper) -> datetime:
    return parse_timestamp(paper.published_at) or _OLDEST
