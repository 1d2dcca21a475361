"""Tests for the Claude-based paper enricher."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from grugtok.data import (
    FALLBACK_ANSWER,
    FALLBACK_BET,
    FALLBACK_QUESTION,
    FALLBACK_TAG,
    Paper,
)
from grugtok.enricher.claude import SYSTEM_PROMPT, ClaudeEnricher, build_prompt
from grugtok.enricher.fallback import FallbackEnricher

# -- Fixtures --


@pytest.fixture
def paper() -> Paper:
    return Paper(
        id="2401.00001v1",
        title="Sparse Attention at Scale",
        abstract="We propose a method for training sparse attention models on long inputs.",
        url="http://arxiv.org/abs/2401.00001v1",
        published_at="2024-01-01T00:00:00Z",
    )


def _make_mock_api_response(text: str) -> MagicMock:
    """Create a mock Anthropic API response."""
    text_block = MagicMock()
    text_block.text = text
    text_block.type = "text"

    response = MagicMock()
    response.content = [text_block]
    return response


def _enricher_returning(text: str, **kwargs) -> tuple[ClaudeEnricher, AsyncMock]:
    enricher = ClaudeEnricher(api_key="test-key", **kwargs)
    mock_create = AsyncMock(return_value=_make_mock_api_response(text))
    object.__setattr__(enricher._client.messages, "create", mock_create)
    return enricher, mock_create


def _labels(paper: Paper) -> tuple:
    return (paper.tag, paper.question, paper.answer, paper.bet)


# -- Prompt --


def test_build_prompt_embeds_title_and_abstract(paper: Paper) -> None:
    prompt = build_prompt(paper)
    assert paper.title in prompt
    assert paper.abstract in prompt
    for key in ('"tag"', '"question"', '"answer"', '"bet"'):
        assert key in prompt


async def test_enrich_sends_system_and_user_messages(paper: Paper) -> None:
    enricher, mock_create = _enricher_returning(json.dumps({"tag": "t"}), max_tokens=123)
    await enricher.enrich(paper)

    kwargs = mock_create.call_args.kwargs
    assert kwargs["system"] == SYSTEM_PROMPT
    assert kwargs["max_tokens"] == 123
    assert kwargs["messages"] == [{"role": "user", "content": build_prompt(paper)}]


# -- Response handling --


async def test_enrich_fenced_json(paper: Paper) -> None:
    fenced = '```json\n{"tag":"x","question":"y","answer":"z","bet":"w"}\n```'
    enricher, _ = _enricher_returning(fenced)
    result = await enricher.enrich(paper)
    assert _labels(result) == ("x", "y", "z", "w")
    assert result.id == paper.id


async def test_enrich_missing_bet(paper: Paper) -> None:
    enricher, _ = _enricher_returning('{"tag":"x","question":"y","answer":"z"}')
    result = await enricher.enrich(paper)
    assert _labels(result) == ("x", "y", "z", FALLBACK_BET)


async def test_enrich_malformed_json(paper: Paper) -> None:
    enricher, _ = _enricher_returning("grug no speak json")
    result = await enricher.enrich(paper)
    assert _labels(result) == (FALLBACK_TAG, FALLBACK_QUESTION, FALLBACK_ANSWER, FALLBACK_BET)


async def test_enrich_call_raises(paper: Paper) -> None:
    enricher = ClaudeEnricher(api_key="test-key")
    object.__setattr__(
        enricher._client.messages, "create", AsyncMock(side_effect=RuntimeError("quota exceeded"))
    )
    result = await enricher.enrich(paper)
    assert _labels(result) == (FALLBACK_TAG, FALLBACK_QUESTION, FALLBACK_ANSWER, FALLBACK_BET)


async def test_enrich_timeout(paper: Paper) -> None:
    enricher = ClaudeEnricher(api_key="test-key")
    object.__setattr__(
        enricher._client.messages, "create", AsyncMock(side_effect=asyncio.TimeoutError())
    )
    result = await enricher.enrich(paper)
    assert result.tag == FALLBACK_TAG


# -- Batches --


async def test_enrich_all_preserves_order(paper: Paper) -> None:
    papers = [
        Paper(id=str(i), title=f"T{i}", abstract="a", url="u", published_at="p") for i in range(5)
    ]
    enricher, mock_create = _enricher_returning('{"tag":"x","question":"y","answer":"z","bet":"w"}')
    results = await enricher.enrich_all(papers)
    assert [r.id for r in results] == ["0", "1", "2", "3", "4"]
    assert all(_labels(r) == ("x", "y", "z", "w") for r in results)
    assert mock_create.call_count == 5


async def test_enrich_all_empty() -> None:
    enricher, mock_create = _enricher_returning("{}")
    assert await enricher.enrich_all([]) == []
    mock_create.assert_not_called()


async def test_enrich_all_isolates_failures() -> None:
    papers = [
        Paper(id=str(i), title=f"T{i}", abstract="a", url="u", published_at="p") for i in range(3)
    ]

    async def create(**kwargs):
        if "T1" in kwargs["messages"][0]["content"]:
            raise RuntimeError("authentication failed")
        return _make_mock_api_response('{"tag":"x","question":"y","answer":"z","bet":"w"}')

    enricher = ClaudeEnricher(api_key="test-key")
    object.__setattr__(enricher._client.messages, "create", create)

    results = await enricher.enrich_all(papers)

    assert [r.tag for r in results] == ["x", FALLBACK_TAG, "x"]


async def test_enrich_all_bounds_concurrency() -> None:
    papers = [
        Paper(id=str(i), title=f"T{i}", abstract="a", url="u", published_at="p")
        for i in range(10)
    ]
    in_flight = 0
    peak = 0

    async def create(**kwargs):
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1
        return _make_mock_api_response('{"tag":"x"}')

    enricher = ClaudeEnricher(api_key="test-key", max_concurrency=3)
    object.__setattr__(enricher._client.messages, "create", create)

    results = await enricher.enrich_all(papers)

    assert len(results) == 10
    assert peak == 3


def test_enricher_reused_across_event_loops() -> None:
    papers = [
        Paper(id=str(i), title=f"T{i}", abstract="a", url="u", published_at="p")
        for i in range(4)
    ]

    async def create(**kwargs):
        await asyncio.sleep(0.01)
        return _make_mock_api_response('{"tag":"x"}')

    enricher = ClaudeEnricher(api_key="test-key", max_concurrency=1)
    object.__setattr__(enricher._client.messages, "create", create)

    for _ in range(2):
        results = asyncio.run(enricher.enrich_all(papers))
        assert [r.tag for r in results] == ["x"] * 4


def test_max_concurrency_must_be_positive() -> None:
    with pytest.raises(ValueError, match="max_concurrency"):
        ClaudeEnricher(api_key="test-key", max_concurrency=0)


# -- Fallback enricher --


async def test_fallback_enricher(paper: Paper) -> None:
    enricher = FallbackEnricher()
    result = await enricher.enrich(paper)
    assert _labels(result) == (FALLBACK_TAG, FALLBACK_QUESTION, FALLBACK_ANSWER, FALLBACK_BET)
    batch = await enricher.enrich_all([paper, paper])
    assert len(batch) == 2
    assert all(p.tag == FALLBACK_TAG for p in batch)
