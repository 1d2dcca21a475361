"""Response schemas for the HTTP API (camelCase on the wire)."""

import dataclasses

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from grugtok.data import Paper, PaperContent, PaperPage


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaperResponse(_CamelModel):
    id: str
    title: str
    authors: list[str]
    abstract: str
    url: str
    published_at: str
    categories: list[str]
    tag: str | None = None
    question: str | None = None
    answer: str | None = None
    bet: str | None = None
    content: str | None = None

    @classmethod
    def from_paper(cls, paper: Paper) -> "PaperResponse":
        return cls(**dataclasses.asdict(paper))


class PaperPageResponse(_CamelModel):
    papers: list[PaperResponse]
    total: int
    offset: int
    has_more: bool
    categories: list[str]

    @classmethod
    def from_page(cls, page: PaperPage) -> "PaperPageResponse":
        return cls(
            papers=[PaperResponse.from_paper(paper) for paper in page.papers],
            total=page.total,
            offset=page.offset,
            has_more=page.has_more,
            categories=page.categories,
        )


class PaperContentResponse(_CamelModel):
    id: str
    content: str
    has_content: bool

    @classmethod
    def from_content(cls, content: PaperContent) -> "PaperContentResponse":
        return cls(id=content.id, content=content.text, has_content=content.has_content)


class ErrorResponse(BaseModel):
    error: str
