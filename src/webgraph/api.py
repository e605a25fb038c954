"""
HTTP entry point: run a crawl per request and return the graph as JSON.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Query
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse

from webgraph import __version__
from webgraph.config import CrawlConfig, Strategy
from webgraph.core import crawl
from webgraph.errors import CrawlError

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """FastAPI application factory."""
    app = FastAPI(
        title="webgraph",
        version=__version__,
        description="Bounded web-graph crawler",
    )

    @app.get("/health")
    async def health():
        """Simple health check for load balancers."""
        return {"status": "ok"}

    @app.get("/crawl")
    async def crawl_graph(
        url: Optional[str] = None,
        type: str = Query("bfs", description="Traversal order: bfs or dfs"),
    ):
        """
        Crawl from `url` and return nodes, links, hosts and the frequency table.

        Crawls run in the threadpool since fetching is blocking.
        """
        if not url:
            return PlainTextResponse("url is required", status_code=400)
        try:
            strategy = Strategy(type)
        except ValueError:
            return PlainTextResponse(f"unknown type {type!r}, expected bfs or dfs", status_code=400)

        try:
            store, _ = await run_in_threadpool(crawl, url, CrawlConfig(strategy=strategy))
        except CrawlError as e:
            logger.warning(f"Crawl of {url} failed: {e}")
            return JSONResponse(status_code=502, content={"error": str(e)})

        return store.to_dict()

    return app


app = create_app()
