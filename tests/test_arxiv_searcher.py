"""Tests for ArxivSearcher."""

from __future__ import annotations

import httpx
import pytest

from grugtok.data import TopicQuery
from grugtok.search.arxiv import DEFAULT_CATEGORIES, DEFAULT_TOPIC_QUERIES, ArxivSearcher

ABSTRACT = (
    "This paper studies how large models learn structured representations and shows "
    "that a simple training change improves robustness across many benchmarks."
)


def _entry(arxiv_id: str, published: str) -> str:
    return (
        f"<entry>\n<id>http://arxiv.org/abs/{arxiv_id}</id>\n"
        f"<published>{published}</published>\n"
        f"<title>Paper {arxiv_id}</title>\n"
        f"<summary>{ABSTRACT}</summary>\n"
        "<author><name>Grace Hopper</name></author>\n</entry>\n"
    )


def _feed(*entries: tuple[str, str]) -> str:
    body = "".join(_entry(arxiv_id, published) for arxiv_id, published in entries)
    return (
        '<feed xmlns="http://www.w3.org/2005/Atom">\n'
        f"<title>ArXiv Query</title>\n{body}</feed>\n"
    )


def _response(url: str, text: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, text=text, request=httpx.Request("GET", url))


QUERIES = [
    TopicQuery(name="a", search_query="cat:cs.AI"),
    TopicQuery(name="b", search_query="cat:cs.LG"),
]


class TestArxivSearcher:
    """Tests for ArxivSearcher."""

    @pytest.fixture
    def searcher(self) -> ArxivSearcher:
        return ArxivSearcher(queries=QUERIES, categories=["cs.AI", "cs.LG"])

    def test_defaults(self) -> None:
        searcher = ArxivSearcher()
        assert searcher.categories == list(DEFAULT_CATEGORIES)
        assert len(DEFAULT_TOPIC_QUERIES) == 5
        assert searcher.per_query_limit(30) == 6
        assert searcher.per_query_limit(12) == 3

    def test_requires_queries(self) -> None:
        with pytest.raises(ValueError, match="At least one topic query"):
            ArxivSearcher(queries=[])

    def test_per_query_limit_rounds_up(self, searcher: ArxivSearcher) -> None:
        assert searcher.per_query_limit(10) == 5
        assert searcher.per_query_limit(11) == 6
        assert searcher.per_query_limit(1) == 1

    async def test_search_passes_query_params(
        self, searcher: ArxivSearcher, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        captured: list[dict] = []

        async def mock_get(self, url, params=None):
            captured.append(dict(params or {}))
            return _response(url, _feed())

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        await searcher.search(limit=10, offset=20)

        assert [p["search_query"] for p in captured] == ["cat:cs.AI", "cat:cs.LG"]
        assert all(p["start"] == 20 for p in captured)
        assert all(p["max_results"] == 5 for p in captured)
        assert all(p["sortBy"] == "submittedDate" for p in captured)
        assert all(p["sortOrder"] == "descending" for p in captured)

    async def test_search_deduplicates_across_queries(
        self, searcher: ArxivSearcher, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        feeds = {
            "cat:cs.AI": _feed(("1", "2024-01-03T00:00:00Z"), ("2", "2024-01-02T00:00:00Z")),
            "cat:cs.LG": _feed(("2", "2024-01-02T00:00:00Z"), ("3", "2024-01-01T00:00:00Z")),
        }

        async def mock_get(self, url, params=None):
            return _response(url, feeds[params["search_query"]])

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        papers = await searcher.search(limit=10)

        ids = [p.id for p in papers]
        assert len(ids) == len(set(ids))
        assert sorted(ids) == ["1", "2", "3"]

    async def test_first_occurrence_wins(
        self, searcher: ArxivSearcher, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        first = _feed(("dup", "2024-01-03T00:00:00Z")).replace("Paper dup", "First copy")
        second = _feed(("dup", "2024-01-03T00:00:00Z")).replace("Paper dup", "Second copy")
        feeds = {"cat:cs.AI": first, "cat:cs.LG": second}

        async def mock_get(self, url, params=None):
            return _response(url, feeds[params["search_query"]])

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        papers = await searcher.search(limit=10)

        assert len(papers) == 1
        assert papers[0].title == "First copy"

    async def test_search_sorts_newest_first_and_truncates(
        self, searcher: ArxivSearcher, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        feeds = {
            "cat:cs.AI": _feed(("old", "2023-05-01T00:00:00Z"), ("new", "2024-06-01T00:00:00Z")),
            "cat:cs.LG": _feed(("mid", "2024-01-01T00:00:00Z"), ("bad", "not-a-date")),
        }

        async def mock_get(self, url, params=None):
            return _response(url, feeds[params["search_query"]])

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        papers = await searcher.search(limit=3)

        assert [p.id for p in papers] == ["new", "mid", "old"]

    async def test_unparsable_dates_sort_last(
        self, searcher: ArxivSearcher, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        feeds = {
            "cat:cs.AI": _feed(("bad", "not-a-date"), ("good", "2020-01-01T00:00:00Z")),
            "cat:cs.LG": _feed(),
        }

        async def mock_get(self, url, params=None):
            return _response(url, feeds[params["search_query"]])

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        papers = await searcher.search(limit=10)

        assert [p.id for p in papers] == ["good", "bad"]

    async def test_search_handles_failed_queries(
        self, searcher: ArxivSearcher, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_get(self, url, params=None):
            if params["search_query"] == "cat:cs.AI":
                raise httpx.ConnectError("connection refused")
            return _response(url, _feed(("ok", "2024-01-01T00:00:00Z")))

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        papers = await searcher.search(limit=10)

        assert [p.id for p in papers] == ["ok"]

    async def test_search_skips_error_status(
        self, searcher: ArxivSearcher, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_get(self, url, params=None):
            if params["search_query"] == "cat:cs.AI":
                return _response(url, "Service Unavailable", status_code=503)
            return _response(url, _feed(("ok", "2024-01-01T00:00:00Z")))

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        papers = await searcher.search(limit=10)

        assert [p.id for p in papers] == ["ok"]

    async def test_total_failure_returns_empty(
        self, searcher: ArxivSearcher, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_get(self, url, params=None):
            raise httpx.ReadTimeout("timed out")

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        assert await searcher.search(limit=10) == []
