"""
Exceptions raised while crawling.
"""
from __future__ import annotations

from typing import Optional


class CrawlError(Exception):
    """Base class for every error the crawler surfaces to its caller."""


class FetchError(CrawlError):
    """A page could not be retrieved (transport failure or non-2xx status)."""

    def __init__(self, url: str, status_code: Optional[int] = None, reason: str = "") -> None:
        self.url = url
        self.status_code = status_code
        self.reason = reason
        if status_code is not None:
            message = f"HTTP {status_code} fetching {url}"
        else:
            message = f"Failed to fetch {url}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ResolutionError(CrawlError):
    """An href could not be turned into an absolute http(s) URL."""

    def __init__(self, base: str, href: str, reason: str = "") -> None:
        self.base = base
        self.href = href
        message = f"Cannot resolve {href!r} against {base}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class SelectorConfigError(CrawlError):
    """The anchor selector is not valid CSS."""

    def __init__(self, selector: str, reason: str = "") -> None:
        self.selector = selector
        super().__init__(f"Invalid selector {selector!r}: {reason}" if reason else f"Invalid selector {selector!r}")
