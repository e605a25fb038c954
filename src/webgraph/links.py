"""
Anchor extraction and URL resolution.
"""
from __future__ import annotations

import logging
from typing import Iterable, Iterator, List
from urllib.parse import urldefrag, urljoin, urlparse, urlunparse

import soupsieve
from bs4 import BeautifulSoup, Tag

from webgraph.errors import ResolutionError, SelectorConfigError

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES: frozenset[str] = frozenset(("http", "https"))


def compile_selector(selector: str) -> soupsieve.SoupSieve:
    """Compile a CSS selector once, before any page is fetched."""
    try:
        return soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as e:
        raise SelectorConfigError(selector, str(e)) from e


def select_anchors(html: str, selector: soupsieve.SoupSieve) -> List[Tag]:
    """Return every element of the page matching the selector, in document order."""
    soup = BeautifulSoup(html, "lxml")
    return selector.select(soup)


def iter_hrefs(anchors: Iterable[Tag], page_url: str = "") -> Iterator[str]:
    """Yield the href of each anchor, skipping (and logging) anchors without one."""
    for anchor in anchors:
        href = anchor.get("href")
        if href is None:
            logger.warning(f"No href found on <{anchor.name}> at {page_url or 'page'}")
            continue
        yield href


def extract_links(html: str, selector: soupsieve.SoupSieve, page_url: str = "") -> Iterator[str]:
    """Raw href strings of the anchors on a page that match the selector."""
    return iter_hrefs(select_anchors(html, selector), page_url)


def resolve_url(base: str, href: str) -> str:
    """
    Join an href against the page it was found on and normalize the result.

    - Drops fragments (#...)
    - Lowercases scheme and host
    - Removes default ports (:80, :443)
    - Keeps querystrings

    Raises ResolutionError for non-http(s) targets, missing hosts and
    unparseable URLs.
    """
    try:
        joined, _ = urldefrag(urljoin(base, href.strip()))
        parsed = urlparse(joined)
        port = parsed.port
    except ValueError as e:
        raise ResolutionError(base, href, str(e)) from e

    scheme = parsed.scheme.lower()
    if scheme not in ALLOWED_SCHEMES:
        raise ResolutionError(base, href, f"unsupported scheme {scheme or '(none)'!r}")

    hostname = (parsed.hostname or "").lower()
    if not hostname:
        raise ResolutionError(base, href, "missing host")

    if (scheme == "http" and port == 80) or (scheme == "https" and port == 443):
        netloc = hostname
    elif port:
        netloc = f"{hostname}:{port}"
    else:
        netloc = hostname

    return urlunparse((scheme, netloc, parsed.path or "/", parsed.params, parsed.query, ""))


def hostname_of(url: str) -> str:
    return (urlparse(url).hostname or "").lower()
