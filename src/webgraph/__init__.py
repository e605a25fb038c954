"""
Bounded web-graph crawler: breadth-first or depth-first traversal of the
links reachable from a start URL, with same-site grouping of pages.
"""
__version__ = "1.0.0"

from webgraph.config import CrawlConfig, Strategy
from webgraph.core import CrawlStats, crawl, crawl_bfs, crawl_dfs
from webgraph.errors import CrawlError, FetchError, ResolutionError, SelectorConfigError
from webgraph.graph import GraphStore, Link, Node

__all__ = [
    "crawl",
    "crawl_bfs",
    "crawl_dfs",
    "CrawlConfig",
    "CrawlStats",
    "Strategy",
    "GraphStore",
    "Node",
    "Link",
    "CrawlError",
    "FetchError",
    "ResolutionError",
    "SelectorConfigError",
]
