"""
Frontier walkers: breadth-first and depth-first traversal of the link graph.
"""
from __future__ import annotations

import logging
import sys
from collections import defaultdict, deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Iterator, List, NamedTuple, Optional, Tuple

import soupsieve
from bs4 import Tag

from webgraph.config import CrawlConfig, Strategy
from webgraph.errors import FetchError, ResolutionError
from webgraph.fetch import Fetcher, FetchFunc
from webgraph.graph import GraphStore
from webgraph.grouping import Classifier, get_classifier
from webgraph.limits import LimitPolicy
from webgraph.links import compile_selector, hostname_of, iter_hrefs, resolve_url, select_anchors

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CrawlStats:
    """Statistics collected during crawl for summary output."""
    pages_fetched: int = 0
    resolution_errors: int = 0
    node_cap_reached: bool = False
    deadline_reached: bool = False
    error_counts: Dict[str, int] = field(default_factory=lambda: defaultdict(int))

    def record_error(self, status_code: Optional[int]) -> None:
        """Record a fetch error by status code category."""
        if status_code is None:
            self.error_counts["connection_error"] += 1
        else:
            self.error_counts[str(status_code)] += 1

    @property
    def fetch_errors(self) -> int:
        return sum(self.error_counts.values())


class FrontierItem(NamedTuple):
    url: str
    depth: int
    group: int


@dataclass(slots=True)
class _Frame:
    """A fetched page whose hrefs are still being walked (depth-first)."""
    url: str
    depth: int
    group: int
    hrefs: Iterator[str]


def print_progress(fetched: int, discovered: int, frontier: int, max_nodes: int) -> None:
    """Print real-time progress to stderr."""
    progress = f"\r\033[K[{discovered}/{max_nodes}] Fetched: {fetched} | Nodes: {discovered} | Frontier: {frontier}"
    sys.stderr.write(progress)
    sys.stderr.flush()


def print_scan_line(url: str, ok: bool, new_nodes: int) -> None:
    """Print single page result line."""
    status_str = "OK" if ok else "ERR"
    sys.stderr.write(f"\n  → {status_str} {url} (+{new_nodes} nodes)")
    sys.stderr.flush()


class FrontierWalker:
    """
    Expands pages into a GraphStore.

    Both traversal orders share the per-href discovery step: resolve, classify,
    record the link, then record the node only if it is new. A node's group is
    the one assigned by the first page that links to it.
    """

    def __init__(
        self,
        store: GraphStore,
        fetch: FetchFunc,
        selector: soupsieve.SoupSieve,
        classifier: Classifier,
        limits: LimitPolicy,
        stats: Optional[CrawlStats] = None,
        verbose: bool = False,
    ) -> None:
        self.store = store
        self.fetch = fetch
        self.selector = selector
        self.classifier = classifier
        self.limits = limits
        self.stats = stats if stats is not None else CrawlStats()
        self.verbose = verbose

    def _load(self, url: str) -> List[Tag]:
        try:
            html = self.fetch(url)
        except FetchError as e:
            self.stats.record_error(e.status_code)
            raise
        self.stats.pages_fetched += 1
        return select_anchors(html, self.selector)

    def _discover(self, page_url: str, href: str, group: int) -> Optional[Tuple[str, int]]:
        """
        Record the link behind one href.

        Returns (url, group) of the target when it is a newly recorded node,
        None when the link or the node was already known.
        """
        next_url = resolve_url(page_url, href)
        next_group = self.classifier(href, group, self.store)

        if self.store.contains_link(page_url, next_url):
            return None
        self.store.insert_link(page_url, next_url)

        if self.store.contains_node(next_url):
            return None
        self.store.insert_node(next_url, next_group)
        self.store.record_host(hostname_of(next_url))
        return next_url, next_group

    def _node_cap_reached(self) -> bool:
        if self.limits.node_cap_reached(self.store):
            if not self.stats.node_cap_reached:
                logger.info(f"Node limit reached ({self.store.size()}/{self.limits.max_nodes}), stopping")
            self.stats.node_cap_reached = True
            return True
        return False

    def _should_stop(self) -> bool:
        """Checked before every fetch."""
        if self._node_cap_reached():
            return True
        if self.limits.deadline_passed():
            if not self.stats.deadline_reached:
                logger.warning(f"Crawl deadline passed with {self.store.size()} nodes, stopping")
            self.stats.deadline_reached = True
            return True
        return False

    def bfs(self, start_url: str) -> None:
        """
        Breadth-first walk over a FIFO queue.

        A page that cannot be fetched is skipped and an href that cannot be
        resolved is skipped; the rest of the crawl continues.
        """
        queue: Deque[FrontierItem] = deque([FrontierItem(start_url, 0, 0)])

        while queue:
            item = queue.popleft()
            if self._should_stop():
                return

            if self.verbose:
                print_progress(self.stats.pages_fetched, self.store.size(), len(queue), self.limits.max_nodes)

            try:
                anchors = self._load(item.url)
            except FetchError as e:
                logger.warning(f"Skipping {item.url}: {e}")
                if self.verbose:
                    print_scan_line(item.url, False, 0)
                continue

            self.store.record_frequency(item.url, self.limits.cap_frequency(len(anchors)))
            new_nodes = 0

            for href in iter_hrefs(anchors, item.url):
                if self._node_cap_reached():
                    return
                try:
                    found = self._discover(item.url, href, item.group)
                except ResolutionError as e:
                    self.stats.resolution_errors += 1
                    logger.warning(f"Skipping href on {item.url}: {e}")
                    continue
                if found is None:
                    continue

                new_nodes += 1
                if self.limits.may_expand(item.depth):
                    queue.append(FrontierItem(found[0], item.depth + 1, found[1]))

            if self.verbose:
                print_scan_line(item.url, True, new_nodes)

    def dfs(self, start_url: str) -> None:
        """
        Depth-first walk on an explicit stack of partially walked pages.

        A new node is fetched and walked completely before the next href of
        its parent is looked at. Any FetchError or ResolutionError aborts the
        whole walk.
        """
        if self._should_stop():
            return
        stack: List[_Frame] = [self._open(start_url, 0, 0)]

        while stack:
            frame = stack[-1]
            href = next(frame.hrefs, None)
            if href is None:
                stack.pop()
                continue

            if self._node_cap_reached():
                return
            found = self._discover(frame.url, href, frame.group)
            if found is None or not self.limits.may_expand(frame.depth):
                continue

            if self._should_stop():
                return
            stack.append(self._open(found[0], frame.depth + 1, found[1]))

    def _open(self, url: str, depth: int, group: int) -> _Frame:
        if self.verbose:
            print_progress(self.stats.pages_fetched, self.store.size(), depth, self.limits.max_nodes)
        anchors = self._load(url)
        return _Frame(url, depth, group, iter_hrefs(anchors, url))


def _build_walker(
    store: GraphStore,
    fetch: FetchFunc,
    config: CrawlConfig,
    stats: Optional[CrawlStats],
    verbose: bool,
) -> FrontierWalker:
    config.validate()
    return FrontierWalker(
        store=store,
        fetch=fetch,
        selector=compile_selector(config.selector),
        classifier=get_classifier(config.grouping),
        limits=LimitPolicy(config.max_nodes, config.max_depth, config.deadline_s),
        stats=stats,
        verbose=verbose,
    )


def crawl_bfs(
    start_url: str,
    store: GraphStore,
    fetch: FetchFunc,
    config: Optional[CrawlConfig] = None,
    stats: Optional[CrawlStats] = None,
    verbose: bool = False,
) -> CrawlStats:
    """Breadth-first crawl into an existing store. Returns the crawl statistics."""
    walker = _build_walker(store, fetch, config or CrawlConfig(), stats, verbose)
    walker.bfs(start_url)
    return walker.stats


def crawl_dfs(
    start_url: str,
    store: GraphStore,
    fetch: FetchFunc,
    config: Optional[CrawlConfig] = None,
    stats: Optional[CrawlStats] = None,
    verbose: bool = False,
) -> CrawlStats:
    """Depth-first crawl into an existing store. Raises on the first fetch or resolution error."""
    walker = _build_walker(store, fetch, config or CrawlConfig(), stats, verbose)
    walker.dfs(start_url)
    return walker.stats


def crawl(
    start_url: str,
    config: Optional[CrawlConfig] = None,
    fetch: Optional[FetchFunc] = None,
    verbose: bool = False,
) -> Tuple[GraphStore, CrawlStats]:
    """
    Crawl the link graph reachable from a start URL.

    Args:
        start_url: Absolute http(s) URL of the seed page.
        config: Limits and policies; defaults to CrawlConfig().
        fetch: Callable returning page text for a URL and raising FetchError
               on failure. Defaults to an HTTP Fetcher built from the config.
        verbose: Whether to print progress information to stderr.

    Returns:
        Tuple of (graph store, crawl statistics).

    Raises:
        ResolutionError: The start URL is not an absolute http(s) URL, or
                         (depth-first only) an href could not be resolved.
        SelectorConfigError: The configured selector is not valid CSS.
        FetchError: Depth-first only, any page failed to load.
    """
    config = config or CrawlConfig()
    config.validate()
    compile_selector(config.selector)

    start = resolve_url(start_url, start_url)
    store = GraphStore.seeded(start, hostname_of(start))
    stats = CrawlStats()

    owned_fetcher: Optional[Fetcher] = None
    if fetch is None:
        owned_fetcher = Fetcher(timeout_s=config.timeout_s, user_agent=config.user_agent)
        fetch = owned_fetcher

    if verbose:
        sys.stderr.write(f"Starting {config.strategy.value} crawl from: {start}\n")
        sys.stderr.write(f"Max nodes: {config.max_nodes}, max depth: {config.max_depth}\n\n")

    try:
        if config.strategy is Strategy.DFS:
            crawl_dfs(start, store, fetch, config, stats, verbose)
        else:
            crawl_bfs(start, store, fetch, config, stats, verbose)
    finally:
        if owned_fetcher is not None:
            owned_fetcher.close()
        if verbose:
            sys.stderr.write("\n\n")

    logger.info(f"Crawl finished: {store.size()} nodes, {len(store.links)} links, {stats.pages_fetched} pages fetched")
    return store, stats
