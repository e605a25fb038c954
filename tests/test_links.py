"""
Link extraction and URL resolution tests
"""

import logging

import pytest

from webgraph.config import DEFAULT_SELECTOR
from webgraph.errors import ResolutionError, SelectorConfigError
from webgraph.links import compile_selector, extract_links, hostname_of, resolve_url, select_anchors


# ==========================================
# Tests for resolve_url
# ==========================================


def test_resolve_root_relative():
    assert resolve_url("https://a.example/page", "/x") == "https://a.example/x"


def test_resolve_page_relative():
    assert resolve_url("http://example.com/dir/page1", "page2.html") == "http://example.com/dir/page2.html"


def test_resolve_absolute():
    assert resolve_url("http://example.com/page1", "http://other.com/foo") == "http://other.com/foo"


def test_resolve_drops_fragment():
    assert resolve_url("http://example.com", "http://example.com/page#section") == "http://example.com/page"


def test_resolve_normalizes_host_and_port():
    assert resolve_url("http://EXAMPLE.COM:80", "/foo") == "http://example.com/foo"
    assert resolve_url("https://example.com:443/", "/") == "https://example.com/"
    assert resolve_url("https://example.com:8443/", "/a") == "https://example.com:8443/a"


def test_resolve_keeps_query():
    assert resolve_url("https://a.example/", "/s?q=1") == "https://a.example/s?q=1"


def test_resolve_empty_path():
    assert resolve_url("https://a.example", "https://a.example") == "https://a.example/"


@pytest.mark.parametrize("href", ["mailto:user@example.com", "javascript:alert(1)", "ftp://example.com/f"])
def test_resolve_rejects_other_schemes(href):
    with pytest.raises(ResolutionError):
        resolve_url("http://example.com", href)


def test_resolve_rejects_bad_port():
    with pytest.raises(ResolutionError):
        resolve_url("http://example.com", "http://example.com:notaport/")


def test_resolve_rejects_bad_ipv6():
    with pytest.raises(ResolutionError):
        resolve_url("http://example.com", "http://[::1/")


def test_resolution_error_carries_inputs():
    with pytest.raises(ResolutionError) as exc_info:
        resolve_url("http://example.com", "mailto:x@y")
    assert exc_info.value.base == "http://example.com"
    assert exc_info.value.href == "mailto:x@y"


def test_hostname_of():
    assert hostname_of("https://B.Example/y") == "b.example"


# ==========================================
# Tests for anchor extraction
# ==========================================


def test_default_selector_skips_fragments():
    html = '<a href="/x">x</a><a href="#top">top</a><a href="https://b.example/">b</a>'
    assert list(extract_links(html, compile_selector(DEFAULT_SELECTOR))) == ["/x", "https://b.example/"]


def test_missing_href_is_skipped_with_warning(caplog):
    html = '<a name="anchor">no link</a><a href="/x">x</a>'
    with caplog.at_level(logging.WARNING, logger="webgraph.links"):
        hrefs = list(extract_links(html, compile_selector("a"), "https://a.example/"))
    assert hrefs == ["/x"]
    assert "No href found" in caplog.text


def test_select_anchors_counts_all_matches():
    html = '<a href="/x">x</a><a>none</a><a href="/x">again</a>'
    assert len(select_anchors(html, compile_selector("a"))) == 3


def test_custom_selector():
    html = '<nav><a href="/nav">n</a></nav><main><a href="/body">b</a></main>'
    assert list(extract_links(html, compile_selector("main a"))) == ["/body"]


def test_extraction_is_lazy():
    hrefs = extract_links('<a href="/x">x</a>', compile_selector("a"))
    assert next(hrefs) == "/x"
    with pytest.raises(StopIteration):
        next(hrefs)


def test_invalid_selector():
    with pytest.raises(SelectorConfigError) as exc_info:
        compile_selector("a[href^=")
    assert exc_info.value.selector == "a[href^="
