"""
Crawl configuration.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from webgraph.grouping import GROUPING_POLICIES

DEFAULT_SELECTOR = 'a:not([href^="#"])'
DEFAULT_USER_AGENT = "WebGraphCrawler/1.0"


class Strategy(str, Enum):
    """Traversal order of the frontier."""
    BFS = "bfs"
    DFS = "dfs"


@dataclass(slots=True)
class CrawlConfig:
    """Limits and policies for one crawl run."""
    strategy: Strategy = Strategy.BFS
    max_depth: int = 10
    max_nodes: int = 1000
    selector: str = DEFAULT_SELECTOR
    grouping: str = "relative"
    timeout_s: float = 15.0
    user_agent: str = DEFAULT_USER_AGENT
    deadline_s: Optional[float] = None

    def __post_init__(self) -> None:
        self.strategy = Strategy(self.strategy)

    def validate(self) -> None:
        """Raise ValueError for settings a crawl cannot run with."""
        if self.max_nodes <= 0:
            raise ValueError(f"max_nodes must be positive, got {self.max_nodes}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")
        if self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be positive, got {self.timeout_s}")
        if self.deadline_s is not None and self.deadline_s <= 0:
            raise ValueError(f"deadline_s must be positive, got {self.deadline_s}")
        if self.grouping not in GROUPING_POLICIES:
            choices = ", ".join(sorted(GROUPING_POLICIES))
            raise ValueError(f"Unknown grouping policy {self.grouping!r} (choose from: {choices})")
