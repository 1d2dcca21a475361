"""Tolerant parsing of search index entries into Paper records.

The index answers with an Atom feed whose markup is not guaranteed to be
stable, so it is read with feedparser, which never raises on malformed input.
Missing fields degrade to named defaults; nothing here raises.
"""

from __future__ import annotations

import logging
import uuid

import feedparser

from grugtok.data import Paper
from grugtok.text import collapse_whitespace, utc_now_iso

logger = logging.getLogger(__name__)

UNKNOWN_TITLE = "Unknown Title"
MIN_ABSTRACT_LENGTH = 100
ABS_URL_TEMPLATE = "https://arxiv.org/abs/{id}"


def parse_entry(
    entry: feedparser.FeedParserDict,
    *,
    min_abstract_length: int = MIN_ABSTRACT_LENGTH,
) -> Paper | None:
    """Parse one feed entry.

    Args:
        entry: A single entry from ``feedparser.parse(...).entries``.
        min_abstract_length: Entries whose abstract is this long or shorter
            are treated as stubs.

    Returns:
        The parsed paper, or None if the entry is a stub.
    """
    abstract = collapse_whitespace(entry.get("summary", ""))
    if len(abstract) <= min_abstract_length:
        logger.debug("Skipping entry with short abstract (%d chars)", len(abstract))
        return None

    canonical_url = entry.get("id", "").strip()
    if canonical_url:
        paper_id = canonical_url.rstrip("/").rsplit("/", 1)[-1]
        url = canonical_url
    else:
        paper_id = f"paper_{uuid.uuid4().hex}"
        url = ABS_URL_TEMPLATE.format(id=paper_id)

    authors = [collapse_whitespace(author.get("name", "")) for author in entry.get("authors", [])]
    categories = [tag.get("term", "").strip() for tag in entry.get("tags", [])]

    return Paper(
        id=paper_id,
        title=collapse_whitespace(entry.get("title", "")) or UNKNOWN_TITLE,
        abstract=abstract,
        url=url,
        published_at=entry.get("published", "").strip() or utc_now_iso(),
        authors=tuple(name for name in authors if name),
        categories=tuple(dict.fromkeys(term for term in categories if term)),
    )


def parse_feed(feed: str, *, min_abstract_length: int = MIN_ABSTRACT_LENGTH) -> list[Paper]:
    """Parse every non-stub entry of a raw feed document, in feed order."""
    parsed = feedparser.parse(feed)
    if parsed.bozo:
        logger.debug("Malformed feed markup: %s", parsed.get("bozo_exception"))

    papers: list[Paper] = []
    for entry in parsed.entries:
        paper = parse_entry(entry, min_abstract_length=min_abstract_length)
        if paper is not None:
            papers.append(paper)
    return papers
