"""
In-memory graph of crawled pages and the links between them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Set


@dataclass(frozen=True, slots=True)
class Node:
    """A discovered page. Identity is the URL; the group is fixed at discovery."""
    url: str
    group: int = field(default=0, compare=False)


@dataclass(frozen=True, slots=True)
class Link:
    """A directed edge between two page URLs."""
    source: str
    target: str


class GraphStore:
    """
    Nodes, links, hostnames and per-page anchor counts for a single crawl.

    Nodes and links are deduplicated independently: a link is kept even when
    its target node was already known. Nodes and links keep discovery order.
    """

    def __init__(self) -> None:
        self._nodes: Dict[str, Node] = {}
        self._links: Dict[Link, None] = {}
        self.host_names: Set[str] = set()
        self.freq_table: Dict[str, int] = {}

    @classmethod
    def seeded(cls, start_url: str, hostname: Optional[str] = None) -> "GraphStore":
        """Create a store holding the start URL as a group-0 node."""
        store = cls()
        store.insert_node(start_url, 0)
        if hostname:
            store.record_host(hostname)
        return store

    def __len__(self) -> int:
        return len(self._nodes)

    def size(self) -> int:
        return len(self._nodes)

    def contains_node(self, url: str) -> bool:
        return url in self._nodes

    def contains_link(self, source: str, target: str) -> bool:
        return Link(source, target) in self._links

    def insert_node(self, url: str, group: int) -> None:
        """Add a node. Does nothing if the URL is already known, so the first group wins."""
        if url not in self._nodes:
            self._nodes[url] = Node(url, group)

    def insert_link(self, source: str, target: str) -> None:
        self._links.setdefault(Link(source, target), None)

    def record_host(self, hostname: str) -> None:
        if hostname:
            self.host_names.add(hostname)

    def record_frequency(self, url: str, count: int) -> None:
        self.freq_table[url] = count

    def node(self, url: str) -> Optional[Node]:
        return self._nodes.get(url)

    def group_of(self, url: str) -> Optional[int]:
        node = self._nodes.get(url)
        return node.group if node else None

    @property
    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    @property
    def links(self) -> List[Link]:
        return list(self._links)

    def iter_links_from(self, source: str) -> Iterator[Link]:
        return (link for link in self._links if link.source == source)

    def to_dict(self) -> Dict[str, Any]:
        """Plain structure ready for JSON encoding."""
        return {
            "nodes": [{"url": n.url, "group": n.group} for n in self._nodes.values()],
            "links": [{"source": l.source, "target": l.target} for l in self._links],
            "host_names": sorted(self.host_names),
            "freq_table": dict(self.freq_table),
        }
