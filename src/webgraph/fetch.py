"""
HTTP fetching.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

import requests

from webgraph.config import DEFAULT_USER_AGENT
from webgraph.errors import FetchError

logger = logging.getLogger(__name__)

FetchFunc = Callable[[str], str]


class Fetcher:
    """GET pages over a shared session; any transport error or non-2xx status is a FetchError."""

    def __init__(
        self,
        timeout_s: float = 15.0,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout_s = timeout_s
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = user_agent

    def __call__(self, url: str) -> str:
        return self.fetch(url)

    def fetch(self, url: str) -> str:
        try:
            resp = self.session.get(url, timeout=self.timeout_s, allow_redirects=True)
        except requests.RequestException as e:
            raise FetchError(url, reason=str(e)) from e

        if not 200 <= resp.status_code < 300:
            raise FetchError(url, resp.status_code)

        logger.debug(f"Fetched {url} ({resp.status_code}, {len(resp.text)} chars)")
        return resp.text

    def close(self) -> None:
        self.session.close()
