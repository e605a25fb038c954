"""
Test configuration and fixtures for crawler tests
"""

from typing import Dict, List

import pytest

from webgraph.errors import FetchError


class FakeWeb:
    """In-memory pages keyed by URL; unknown URLs fail like a 404."""

    def __init__(self, pages: Dict[str, str]):
        self.pages = dict(pages)
        self.fetched: List[str] = []

    def __call__(self, url: str) -> str:
        self.fetched.append(url)
        if url not in self.pages:
            raise FetchError(url, 404)
        return self.pages[url]


def page(*hrefs: str) -> str:
    """Build an HTML page with one anchor per href."""
    anchors = "".join(f'<a href="{h}">link</a>' for h in hrefs)
    return f"<html><body>{anchors}</body></html>"


@pytest.fixture
def fake_web():
    """Factory for FakeWeb instances"""
    return FakeWeb


@pytest.fixture
def seed_web():
    """The seed scenario: a.example links to /x, b.example/y and a fragment."""
    return FakeWeb(
        {
            "https://a.example/": page("/x", "https://b.example/y", "#frag"),
            "https://a.example/x": page(),
            "https://b.example/y": page(),
        }
    )
