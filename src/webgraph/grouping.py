"""
Policies that decide the group of a newly discovered page.

A classifier looks at the raw href as written in the source page (before it
is joined with the page URL) and the group of the page it was found on.
Groups never decrease along a path from the seed.
"""
from __future__ import annotations

from typing import Callable, Dict

from webgraph.graph import GraphStore

Classifier = Callable[[str, int, GraphStore], int]


def relative_path(raw_href: str, group: int, store: GraphStore) -> int:
    """Root-relative hrefs ("/about") stay in the current group; anything else starts a new one."""
    return group if raw_href.startswith("/") else group + 1


def known_host(raw_href: str, group: int, store: GraphStore) -> int:
    """
    Stay in the current group only when the raw href is itself a hostname
    already present in the store.

    Relative hrefs never match, so most links start a new group under this
    policy.
    """
    return group if raw_href in store.host_names else group + 1


GROUPING_POLICIES: Dict[str, Classifier] = {
    "relative": relative_path,
    "known-host": known_host,
}


def get_classifier(name: str) -> Classifier:
    try:
        return GROUPING_POLICIES[name]
    except KeyError:
        choices = ", ".join(sorted(GROUPING_POLICIES))
        raise ValueError(f"Unknown grouping policy {name!r} (choose from: {choices})") from None
