"""Text cleanup helpers shared by the parser and the content fetcher."""

from __future__ import annotations

import re
from datetime import UTC, datetime

from bs4 import BeautifulSoup, Comment

_WHITESPACE_RE = re.compile(r"\s+")
_ARXIV_STAMP_RE = re.compile(r"arXiv:\d+\.\d+v\d+\s*\[\w+\.\w+\]\s*\d+\s*\w+\s*\d+")
_ABSTRACT_LABEL_RE = re.compile(r"Abstract\s*\.\s*")
_TRAILING_REFERENCES_RE = re.compile(r"References\s*\.\s*$")
_LATEX_COMMENT_RE = re.compile(r"(?<!\\)%.*$", re.MULTILINE)
_LATEX_COMMAND_RE = re.compile(r"\\[a-zA-Z]+\{[^}]*\}")
_LATEX_DISALLOWED_RE = re.compile(r"[^a-zA-Z0-9\s.,;:!?()-]")
_PRINTABLE_RE = re.compile(r"[\x20-\x7E\n\r\t]")


def collapse_whitespace(text: str) -> str:
    """Replace every run of whitespace with a single space and trim the ends."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def printable_ratio(text: str) -> float:
    """Fraction of characters that are printable ASCII or common whitespace.

    Returns 0.0 for an empty string.
    """
    if not text:
        return 0.0
    return len(_PRINTABLE_RE.findall(text)) / len(text)


def html_to_text(markup: str) -> str:
    """Reduce an HTML page to its visible text.

    Script, style and comment nodes are dropped, text nodes are joined with spaces and
    arXiv stamp/label boilerplate is removed.
    """
    soup = BeautifulSoup(markup, "html.parser")
    for tag in soup.find_all(["script", "style"]):
        tag.decompose()
    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()
    text = collapse_whitespace(soup.get_text(separator=" "))
    text = _ARXIV_STAMP_RE.sub("", text)
    text = _ABSTRACT_LABEL_RE.sub("", text)
    text = _TRAILING_REFERENCES_RE.sub("", text)
    return text.strip()


def strip_latex_comments(source: str) -> str:
    """Remove ``%`` comments from LaTeX source, keeping escaped ``\\%``."""
    return _LATEX_COMMENT_RE.sub("", source)


def latex_to_text(source: str) -> str:
    """Strip LaTeX markup down to plain words and basic punctuation."""
    text = strip_latex_comments(source)
    text = _LATEX_COMMAND_RE.sub("", text)
    text = _LATEX_DISALLOWED_RE.sub(" ", text)
    return collapse_whitespace(text)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Returns None when the value is missing or unparsable.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def utc_now_iso() -> str:
    """Current time as an ISO-8601 string with a ``Z`` suffix."""
    return datetime.now(tz=UTC).isoformat(timespec="seconds").replace("+00:00", "Z")
