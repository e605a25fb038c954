"""
Node, depth and time limits checked by the frontier walkers.
"""
from __future__ import annotations

import time
from typing import Callable, Optional

from webgraph.graph import GraphStore


class LimitPolicy:
    """
    Stopping rules for a crawl.

    The node cap is soft: it is checked before each page and each href, so a
    single page can push the store past it by at most its own out-degree.
    The deadline clock starts when the policy is created.
    """

    def __init__(
        self,
        max_nodes: int,
        max_depth: int,
        deadline_s: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_nodes = max_nodes
        self.max_depth = max_depth
        self._clock = clock
        self._deadline = clock() + deadline_s if deadline_s is not None else None

    def node_cap_reached(self, store: GraphStore) -> bool:
        return store.size() >= self.max_nodes

    def may_expand(self, depth: int) -> bool:
        """Whether links found on a page at this depth may be scheduled."""
        return depth < self.max_depth

    def deadline_passed(self) -> bool:
        return self._deadline is not None and self._clock() >= self._deadline

    def cap_frequency(self, count: int) -> int:
        return min(count, self.max_nodes)
