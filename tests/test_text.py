"""Tests for text cleanup helpers."""

from datetime import UTC, datetime

import pytest

from grugtok.text import (
    collapse_whitespace,
    html_to_text,
    latex_to_text,
    parse_timestamp,
    printable_ratio,
    strip_latex_comments,
    utc_now_iso,
)


def test_collapse_whitespace() -> None:
    assert collapse_whitespace("  a \n\t b   c  ") == "a b c"
    assert collapse_whitespace("") == ""


def test_printable_ratio() -> None:
    assert printable_ratio("") == 0.0
    assert printable_ratio("hello\n") == 1.0
    assert printable_ratio("ab\x00\x01") == pytest.approx(0.5)


def test_html_to_text_drops_scripts_styles_and_tags() -> None:
    markup = (
        "<html><head><style>.x { color: red; }</style>"
        "<script type='text/javascript'>var a = 1;</script></head>"
        "<body><h1>Title</h1><p>First   paragraph &amp; more.</p></body></html>"
    )
    assert html_to_text(markup) == "Title First paragraph & more."


def test_html_to_text_ignores_attributes_and_comments() -> None:
    markup = (
        '<p title="a > b">Hello</p><!-- <div>hidden</div> -->world'
        '<style media="x>y">p{}</style>'
    )
    assert html_to_text(markup) == "Hello world"


def test_html_to_text_removes_arxiv_boilerplate() -> None:
    markup = "<p>arXiv:2401.00001v1 [cs.LG] 1 Jan 2024</p><p>Abstract. We study things.</p>"
    assert html_to_text(markup) == "We study things."


def test_strip_latex_comments_keeps_escaped_percent() -> None:
    source = "Accuracy of 90\\% % the real number\n% whole line\nnext line"
    assert strip_latex_comments(source) == "Accuracy of 90\\% \n\nnext line"


def test_latex_to_text() -> None:
    source = "\\section{Intro} We use $x^2$ models. % note\n\\cite{ref} Done!"
    assert latex_to_text(source) == "We use x 2 models. Done!"


def test_parse_timestamp() -> None:
    assert parse_timestamp("2024-01-02T03:04:05Z") == datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
    assert parse_timestamp("2024-01-02T03:04:05") == datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
    assert parse_timestamp("not a date") is None
    assert parse_timestamp(None) is None


def test_utc_now_iso_is_parseable() -> None:
    value = utc_now_iso()
    assert value.endswith("Z")
    assert parse_timestamp(value) is not None
