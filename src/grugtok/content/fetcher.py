"""On-demand full-text recovery for a single paper.

Strategies are tried in order and the first one yielding enough plausible text
wins:

1. raw source (``e-print``) decoded as text, rejected if gzip or mostly binary
2. the rendered HTML version, reduced to visible text
3. the LaTeX source, decompressed if needed, stripped of markup

If none succeeds a placeholder message pointing at the PDF is returned.
Network and decoding errors inside a strategy only fail that strategy.
"""

from __future__ import annotations

import gzip
import io
import logging
import tarfile

import httpx

from grugtok.data import Paper, PaperContent
from grugtok.text import html_to_text, latex_to_text, printable_ratio

logger = logging.getLogger(__name__)

SOURCE_URL_TEMPLATE = "https://arxiv.org/e-print/{id}"
HTML_URL_TEMPLATE = "https://arxiv.org/html/{id}"
PDF_URL_TEMPLATE = "https://arxiv.org/pdf/{id}.pdf"

GZIP_MAGIC = b"\x1f\x8b"
MIN_CONTENT_LENGTH = 1000
MIN_PRINTABLE_RATIO = 0.7

PLACEHOLDER_TEMPLATE = """\
Full paper content extraction is currently unavailable for this paper.

Paper ID: {id}
Direct PDF link: {pdf_url}

The automatic text extraction encountered issues. \
Please use the arXiv link above to view the full paper directly."""


class ExtractionError(Exception):
    """Raised inside a strategy when its payload cannot be turned into text."""


def is_gzip(payload: bytes) -> bool:
    return payload[:2] == GZIP_MAGIC


def decompress_source(payload: bytes) -> str:
    """Decompress an arXiv source bundle into LaTeX text.

    A bundle is either a gzip'd tarball, whose ``.tex`` members are
    concatenated, or a single gzip'd file.
    """
    raw = gzip.decompress(payload)
    try:
        with tarfile.open(fileobj=io.BytesIO(raw)) as archive:
            parts = []
            for member in archive.getmembers():
                if not member.isfile() or not member.name.endswith(".tex"):
                    continue
                extracted = archive.extractfile(member)
                if extracted is not None:
                    parts.append(extracted.read().decode("utf-8", errors="replace"))
            return "\n".join(parts)
    except tarfile.ReadError:
        return raw.decode("utf-8", errors="replace")


class ContentFetcher:
    """Recover full text for a paper id.

    Args:
        source_url: Template for the raw source URL (``{id}`` placeholder).
        html_url: Template for the rendered HTML URL.
        pdf_url: Template for the PDF link used in the placeholder message.
        timeout: Per-request timeout in seconds.
        min_length: Minimum characters for a strategy's result to count.
        min_printable_ratio: Below this printable ratio raw source is treated as binary.
    """

    def __init__(
        self,
        *,
        source_url: str = SOURCE_URL_TEMPLATE,
        html_url: str = HTML_URL_TEMPLATE,
        pdf_url: str = PDF_URL_TEMPLATE,
        timeout: float = 30.0,
        min_length: int = MIN_CONTENT_LENGTH,
        min_printable_ratio: float = MIN_PRINTABLE_RATIO,
    ) -> None:
        self._source_url = source_url
        self._html_url = html_url
        self._pdf_url = pdf_url
        self._timeout = timeout
        self._min_length = min_length
        self._min_printable_ratio = min_printable_ratio

    def placeholder(self, paper_id: str) -> str:
        """Human-readable message used when no strategy produced text."""
        return PLACEHOLDER_TEMPLATE.format(
            id=paper_id, pdf_url=self._pdf_url.format(id=paper_id)
        )

    async def fetch(self, paper_id: str) -> PaperContent:
        """Return the best available text for ``paper_id``.

        Never raises for upstream problems; the placeholder message is
        returned when every strategy fails.
        """
        strategies = (
            ("source", self._from_source),
            ("html", self._from_html),
            ("latex", self._from_latex),
        )
        async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
            for name, strategy in strategies:
                logger.info("Trying %s extraction for %s", name, paper_id)
                try:
                    text = await strategy(client, paper_id)
                except Exception as e:
                    logger.info("%s extraction failed for %s: %s", name, paper_id, e)
                    continue
                if len(text) > self._min_length:
                    logger.info(
                        "Extracted %d characters from %s for %s", len(text), name, paper_id
                    )
                    return PaperContent(id=paper_id, text=text, strategy=name)
                logger.info(
                    "%s extraction too short for %s (%d chars)", name, paper_id, len(text)
                )

        logger.warning("All extraction methods failed for %s", paper_id)
        return PaperContent(id=paper_id, text=self.placeholder(paper_id))

    async def attach(self, paper: Paper) -> Paper:
        """Return ``paper`` with its full text attached.

        Papers that already carry content are returned unchanged. When no
        strategy recovers text the paper is returned without content.
        """
        if paper.content is not None:
            return paper
        content = await self.fetch(paper.id)
        if not content.has_content:
            return paper
        return paper.with_content(content.text)

    async def _get(self, client: httpx.AsyncClient, url: str) -> httpx.Response:
        response = await client.get(url)
        response.raise_for_status()
        return response

    async def _from_source(self, client: httpx.AsyncClient, paper_id: str) -> str:
        response = await self._get(client, self._source_url.format(id=paper_id))
        payload = response.content
        if is_gzip(payload):
            raise ExtractionError("gzip compressed source")

        text = payload.decode("utf-8", errors="replace")
        ratio = printable_ratio(text)
        if ratio < self._min_printable_ratio:
            raise ExtractionError(f"binary content ({ratio:.2f} printable)")
        return text

    async def _from_html(self, client: httpx.AsyncClient, paper_id: str) -> str:
        response = await self._get(client, self._html_url.format(id=paper_id))
        return html_to_text(response.text)

    async def _from_latex(self, client: httpx.AsyncClient, paper_id: str) -> str:
        response = await self._get(client, self._source_url.format(id=paper_id))
        payload = response.content
        if is_gzip(payload):
            source = decompress_source(payload)
        else:
            source = payload.decode("utf-8", errors="replace")
        if printable_ratio(source) < self._min_printable_ratio:
            raise ExtractionError("source is not LaTeX text")
        return latex_to_text(source)
