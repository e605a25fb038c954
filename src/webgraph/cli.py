"""
Command-line interface for the crawler.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from urllib.parse import urlparse

from webgraph.config import DEFAULT_SELECTOR, DEFAULT_USER_AGENT, CrawlConfig, Strategy
from webgraph.core import CrawlStats, crawl
from webgraph.errors import CrawlError
from webgraph.graph import GraphStore
from webgraph.grouping import GROUPING_POLICIES

logger = logging.getLogger(__name__)


def print_summary(store: GraphStore, stats: CrawlStats) -> None:
    """Print crawl summary to stderr."""
    sys.stderr.write("=" * 50 + "\n")
    sys.stderr.write("CRAWL SUMMARY\n")
    sys.stderr.write("=" * 50 + "\n\n")

    sys.stderr.write(f"Pages fetched:          {stats.pages_fetched}\n")
    sys.stderr.write(f"Nodes discovered:       {store.size()}\n")
    sys.stderr.write(f"Links discovered:       {len(store.links)}\n")
    sys.stderr.write(f"Distinct hosts:         {len(store.host_names)}\n")
    sys.stderr.write(f"Unresolvable hrefs:     {stats.resolution_errors}\n")
    if stats.node_cap_reached:
        sys.stderr.write("Stopped at node limit.\n")
    if stats.deadline_reached:
        sys.stderr.write("Stopped at crawl deadline.\n")
    sys.stderr.write("\n")

    if stats.error_counts:
        sys.stderr.write("Errors by type:\n")
        for error_type, count in sorted(stats.error_counts.items()):
            label = "Connection errors" if error_type == "connection_error" else f"HTTP {error_type}"
            sys.stderr.write(f"  {label}: {count}\n")
    else:
        sys.stderr.write("No errors encountered.\n")

    sys.stderr.write("\n")


def generate_output_path(start_url: str) -> Path:
    """Generate output path: crawls/{hostname}_{datetime}.json"""
    parsed = urlparse(start_url)
    hostname = parsed.hostname or "unknown"
    hostname_safe = hostname.replace(".", "_")
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    crawls_dir = Path("crawls")
    crawls_dir.mkdir(exist_ok=True)

    return crawls_dir / f"{hostname_safe}_{timestamp}.json"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Crawl the link graph reachable from a URL and output it as JSON."
    )
    parser.add_argument("start_url", help="Start URL (e.g. https://example.com)")
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in Strategy],
        default=Strategy.BFS.value,
        help="Traversal order (default: bfs)",
    )
    parser.add_argument("--max-nodes", type=int, default=1000, help="Maximum nodes to discover (default: 1000)")
    parser.add_argument("--max-depth", type=int, default=10, help="Maximum link depth to expand (default: 10)")
    parser.add_argument("--selector", default=DEFAULT_SELECTOR, help=f"CSS selector for links (default: {DEFAULT_SELECTOR})")
    parser.add_argument(
        "--grouping",
        choices=sorted(GROUPING_POLICIES),
        default="relative",
        help="How new pages are assigned to groups (default: relative)",
    )
    parser.add_argument("--timeout", type=float, default=15.0, help="Request timeout in seconds (default: 15)")
    parser.add_argument("--deadline", type=float, help="Stop the crawl after this many seconds")
    parser.add_argument("--user-agent", default=DEFAULT_USER_AGENT, help="User-Agent header")
    parser.add_argument("--out", help="Output file path, or '-' for stdout (default: auto-generated in crawls/)")
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON")
    parser.add_argument("--verbose", action="store_true", help="Show progress and summary")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the crawler CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = CrawlConfig(
        strategy=Strategy(args.strategy),
        max_depth=args.max_depth,
        max_nodes=args.max_nodes,
        selector=args.selector,
        grouping=args.grouping,
        timeout_s=args.timeout,
        user_agent=args.user_agent,
        deadline_s=args.deadline,
    )
    try:
        config.validate()
    except ValueError as e:
        parser.error(str(e))

    try:
        store, stats = crawl(args.start_url, config=config, verbose=args.verbose)
    except CrawlError as e:
        logger.error(f"Crawl failed: {e}")
        return 1

    if args.verbose:
        print_summary(store, stats)

    json_text = json.dumps(store.to_dict(), ensure_ascii=False, indent=2 if args.pretty else None)

    if args.out == "-":
        print(json_text)
    else:
        output_path = Path(args.out) if args.out else generate_output_path(args.start_url)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json_text, encoding="utf-8")
        if args.verbose:
            sys.stderr.write(f"Results written to: {output_path}\n")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
