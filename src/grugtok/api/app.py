"""FastAPI application serving the paper feed."""

import logging

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse

from grugtok.api.schemas import ErrorResponse, PaperContentResponse, PaperPageResponse
from grugtok.config import GrugTokConfig, create_from_config, resolve_config
from grugtok.content.fetcher import ContentFetcher
from grugtok.pipeline.feed import PaperFeed

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def create_app(
    config: GrugTokConfig | None = None,
    *,
    feed: PaperFeed | None = None,
    content_fetcher: ContentFetcher | None = None,
) -> FastAPI:
    """Build the API.

    Components not passed in are created from ``config`` (or the resolved
    default config).
    """
    config = config or resolve_config()
    if feed is None or content_fetcher is None:
        built_feed, built_fetcher, _run_logger = create_from_config(config)
        if feed is None:
            feed = built_feed
        if content_fetcher is None:
            content_fetcher = built_fetcher

    app = FastAPI(title="GrugTok", description="Research papers, Grug style")
    app.state.config = config
    app.state.feed = feed
    app.state.content_fetcher = content_fetcher

    server = config.server

    @app.get(
        "/papers",
        response_model=PaperPageResponse,
        responses={500: {"model": ErrorResponse}},
    )
    async def get_papers(
        limit: int = Query(default=server.default_limit, ge=1, le=server.max_limit),
        offset: int = Query(default=0, ge=0),
    ):
        try:
            page = await feed.run(limit=limit, offset=offset)
        except Exception:
            logger.exception("Error in papers API")
            return _error(500, "Failed to fetch papers")
        return PaperPageResponse.from_page(page)

    @app.get(
        "/papers/{paper_id}/content",
        response_model=PaperContentResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def get_paper_content(paper_id: str):
        paper_id = paper_id.strip()
        if not paper_id:
            return _error(400, "Paper ID is required")
        try:
            content = await content_fetcher.fetch(paper_id)
        except Exception:
            logger.exception("Error in paper content API for %s", paper_id)
            return _error(500, "Failed to fetch paper content")
        return PaperContentResponse.from_content(content)

    return app
