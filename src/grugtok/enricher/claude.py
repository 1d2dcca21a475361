"""Claude-based paper enricher using JSON-only responses."""

import asyncio
import logging
import os

import anthropic

from grugtok.data import FALLBACK_ENRICHMENT, Enrichment, Paper
from grugtok.enricher.parse import parse_enrichment

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert at analyzing research papers and extracting key insights. "
    "Always respond with valid JSON only."
)

PROMPT_TEMPLATE = """\
Analyze this arXiv paper and extract the following information in a concise format:

Paper Title: {title}
Abstract: {abstract}

Please provide:
1. A 1-2 word tag for the broad topic area (e.g., "LLM inference", "knowledge base", \
"computer vision")
2. A 1-line motivating question the authors likely asked themselves, in simple grug \
English (short words, no jargon)
3. A 1-line answer: the core technical idea or contribution, in simple grug English
4. A 1-line bet: the underlying assumption the paper is betting on, in simple grug English

Format your response as JSON:
{{
  "tag": "topic tag",
  "question": "motivating question?",
  "answer": "core idea",
  "bet": "underlying assumption"
}}

Keep each field very concise and accessible.\
"""


def build_prompt(paper: Paper) -> str:
    """Format the user prompt for one paper."""
    return PROMPT_TEMPLATE.format(title=paper.title, abstract=paper.abstract)


class ClaudeEnricher:
    """Enrich papers with tag/question/answer/bet labels using Claude.

    Each paper gets one Messages API call. Calls for a batch run concurrently
    but never more than ``max_concurrency`` at a time within one ``enrich_all``
    call. Any failure of a call (auth, quota, timeout, unreadable output)
    yields the default labels for that paper only.

    Args:
        model: Anthropic model to use.
        api_key: API key (defaults to ANTHROPIC_API_KEY, then CLAUDE_API_KEY env var).
        max_concurrency: Maximum simultaneous model calls.
        timeout: Per-call timeout in seconds.
        max_tokens: Output token cap per call.
        temperature: Sampling temperature.
    """

    def __init__(
        self,
        model: str = "claude-haiku-4-5-20251001",
        api_key: str | None = None,
        *,
        max_concurrency: int = 8,
        timeout: float = 30.0,
        max_tokens: int = 300,
        temperature: float = 0.3,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1.")
        resolved_key = (
            api_key or os.environ.get("ANTHROPIC_API_KEY") or os.environ.get("CLAUDE_API_KEY")
        )
        self._client = anthropic.AsyncAnthropic(
            api_key=resolved_key, timeout=timeout, max_retries=0
        )
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._max_concurrency = max_concurrency

    @property
    def max_concurrency(self) -> int:
        return self._max_concurrency

    async def enrich(self, paper: Paper) -> Paper:
        """Return the paper with labels attached, falling back to defaults on failure."""
        return paper.with_enrichment(await self._extract(paper))

    async def enrich_all(self, papers: list[Paper]) -> list[Paper]:
        """Enrich a batch concurrently, preserving order."""
        if not papers:
            return []
        semaphore = asyncio.Semaphore(self._max_concurrency)
        enrichments = await asyncio.gather(
            *(self._bounded_extract(paper, semaphore) for paper in papers)
        )
        fallbacks = sum(1 for enrichment in enrichments if enrichment.fallback)
        logger.info("Enriched %d papers (%d with default labels)", len(papers), fallbacks)
        return [
            paper.with_enrichment(enrichment)
            for paper, enrichment in zip(papers, enrichments, strict=True)
        ]

    async def _bounded_extract(self, paper: Paper, semaphore: asyncio.Semaphore) -> Enrichment:
        async with semaphore:
            return await self._extract(paper)

    async def _extract(self, paper: Paper) -> Enrichment:
        try:
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": build_prompt(paper)}],
            )
        except Exception as e:
            logger.warning("Enrichment call failed for paper_id=%s: %s", paper.id, e)
            return FALLBACK_ENRICHMENT

        response_text = ""
        for block in response.content:
            if hasattr(block, "text"):
                response_text += block.text

        logger.debug("LLM response for %s -> %s", paper.id, response_text)
        enrichment = parse_enrichment(response_text)
        if enrichment.fallback:
            logger.warning("Unreadable enrichment for paper_id=%s: %r", paper.id, response_text)
        return enrichment
