#!/usr/bin/env python
"""CLI for the GrugTok paper feed."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from grugtok.config import GrugTokConfig, create_from_config, resolve_config

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    command: str
    config: Path | None = None
    limit: int = Field(default=10, ge=1)
    offset: int = Field(default=0, ge=0)
    paper_id: str | None = None
    with_content: bool = False
    host: str | None = None
    port: int | None = None

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path | None) -> Path | None:
        if v is not None and not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v


async def run_feed(config: GrugTokConfig, args: CLIArgs) -> None:
    """Fetch and print one enriched page."""
    feed, fetcher, run_logger = create_from_config(config)
    page = await feed.run(limit=args.limit, offset=args.offset)
    papers = page.papers
    if args.with_content:
        papers = list(await asyncio.gather(*(fetcher.attach(paper) for paper in papers)))

    print(f"\nFetched {page.total} papers (has more: {page.has_more}):\n")
    for i, paper in enumerate(papers, 1):
        print(f"{i}. [{paper.tag}] {paper.title}")
        print(f"   {paper.url} ({paper.published_at})")
        print(f"   Q: {paper.question}")
        print(f"   A: {paper.answer}")
        print(f"   Bet: {paper.bet}")
        if paper.content:
            print(f"   Content: {paper.content[:200]}...")

    if run_logger and run_logger.last_log_path:
        logger.info(f"Run log written to: {run_logger.last_log_path}")


async def run_content(config: GrugTokConfig, args: CLIArgs) -> None:
    """Fetch and print the full text of one paper."""
    _feed, fetcher, _run_logger = create_from_config(config)
    content = await fetcher.fetch(args.paper_id or "")
    logger.info(f"Strategy: {content.strategy or 'none'}")
    print(content.text)


def serve(config: GrugTokConfig, args: CLIArgs) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from grugtok.api import create_app

    app = create_app(config)
    uvicorn.run(
        app,
        host=args.host or config.server.host,
        port=args.port or config.server.port,
        log_level=config.logging.level.lower(),
    )


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Browse arXiv papers, Grug style.")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: $GRUGTOK_CONFIG or built-in defaults)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", type=str, default=None)
    serve_parser.add_argument("--port", type=int, default=None)

    feed_parser = subparsers.add_parser("feed", help="Print one page of enriched papers")
    feed_parser.add_argument("--limit", type=int, default=10)
    feed_parser.add_argument("--offset", type=int, default=0)
    feed_parser.add_argument(
        "--with-content",
        action="store_true",
        help="Also fetch the full text of every paper on the page",
    )

    content_parser = subparsers.add_parser("content", help="Print the full text of a paper")
    content_parser.add_argument("paper_id", help="arXiv paper id, e.g. 2401.00001v1")

    ns = parser.parse_args()

    try:
        args = CLIArgs(
            command=ns.command,
            config=ns.config,
            limit=getattr(ns, "limit", 10),
            offset=getattr(ns, "offset", 0),
            paper_id=getattr(ns, "paper_id", None),
            with_content=getattr(ns, "with_content", False),
            host=getattr(ns, "host", None),
            port=getattr(ns, "port", None),
        )
        config = resolve_config(args.config)
    except Exception as e:
        logging.basicConfig(level=logging.INFO, format="%(message)s")
        logger.error(str(e))
        sys.exit(1)

    logging.basicConfig(
        level=getattr(logging, config.logging.level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "serve":
            serve(config, args)
        elif args.command == "feed":
            asyncio.run(run_feed(config, args))
        else:
            asyncio.run(run_content(config, args))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
