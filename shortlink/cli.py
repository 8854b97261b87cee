#!/usr/bin/env python3
"""
Command-line client for a URL shortening backend.

Usage:
    shortlink shorten <url> [--alias ALIAS]
    shortlink resolve <slug>
    shortlink top [--range RANGE] [--limit N]
    shortlink list [--query TEXT]
    shortlink check <url> [--alias ALIAS]
"""

import argparse
import asyncio
import json
import os
import sys
from typing import Optional

from .backend import BackendClient, BackendConfig
from .common.logging_config import setup_logging
from .errors import SubmissionRejectedError, UpstreamUnavailableError, ValidationFailedError
from .ranking import Range, destination_of, filter_by_destination, metric, top_n, total_hits
from .resolver import Redirect, SlugResolver
from .validators import alias_error, can_submit, destination_error

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_UNAVAILABLE = 2


class ShortlinkCLI:
    """Command-line interface for the short link client."""

    def __init__(self, backend: BackendClient, resolver: SlugResolver, out=None, err=None):
        self.backend = backend
        self.resolver = resolver
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def _emit(self, payload: dict, error: bool = False) -> None:
        print(json.dumps(payload, indent=2), file=self.err if error else self.out)

    async def shorten(self, url: str, alias: Optional[str] = None) -> int:
        """Shorten a URL."""
        try:
            result = await self.backend.shorten(url, alias)
        except ValidationFailedError as e:
            self._emit({
                "success": False,
                "error": str(e),
                "url_error": e.url_error,
                "alias_error": e.alias_error,
            }, error=True)
            return EXIT_FAILED
        except SubmissionRejectedError as e:
            self._emit({"success": False, "error": e.message}, error=True)
            return EXIT_FAILED
        except UpstreamUnavailableError as e:
            self._emit({"success": False, "error": f"Backend unavailable: {e}"}, error=True)
            return EXIT_UNAVAILABLE

        self._emit({
            "success": True,
            "slug": result.slug,
            "short_url": result.short_url,
        })
        return EXIT_OK

    async def resolve(self, slug: str) -> int:
        """Show where a slug points."""
        try:
            outcome = await self.resolver.resolve(slug)
        except UpstreamUnavailableError as e:
            self._emit({"success": False, "error": f"Backend unavailable: {e}"}, error=True)
            return EXIT_UNAVAILABLE

        if isinstance(outcome, Redirect):
            self._emit({"success": True, "slug": slug, "target": outcome.target})
            return EXIT_OK

        self._emit({"success": False, "error": f"Slug '{slug}' not found"}, error=True)
        return EXIT_FAILED

    async def top(self, range_: str = Range.TODAY.value, limit: int = 10) -> int:
        """Print the most used URLs for a range."""
        try:
            selected = Range.parse(range_)
        except ValueError as e:
            self._emit({"success": False, "error": str(e)}, error=True)
            return EXIT_FAILED

        try:
            rows = await self.backend.top(limit, selected)
        except UpstreamUnavailableError as e:
            self._emit({"success": False, "error": f"Backend unavailable: {e}"}, error=True)
            return EXIT_UNAVAILABLE

        ranked = top_n(rows, selected, limit)
        self._emit({
            "success": True,
            "range": selected.value,
            "count": len(ranked),
            "urls": [
                {
                    "slug": row.get("slug"),
                    "url": destination_of(row),
                    "hits": metric(row, selected),
                    "hits_total": total_hits(row),
                }
                for row in ranked
            ],
        })
        return EXIT_OK

    async def list_urls(self, query: Optional[str] = None) -> int:
        """List all shortened URLs."""
        try:
            rows = await self.backend.list_all()
        except UpstreamUnavailableError as e:
            self._emit({"success": False, "error": f"Backend unavailable: {e}"}, error=True)
            return EXIT_UNAVAILABLE

        matches = filter_by_destination(rows, query)
        self._emit({"success": True, "count": len(matches), "urls": matches})
        return EXIT_OK

    def check(self, url: str, alias: str = "") -> int:
        """Validate inputs locally without contacting the backend."""
        alias = (alias or "").strip()
        allowed = can_submit(url, alias)
        self._emit({
            "success": allowed,
            "can_submit": allowed,
            "url_error": destination_error(url) or ("URL is required" if not url else ""),
            "alias_error": alias_error(alias),
        })
        return EXIT_OK if allowed else EXIT_FAILED


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shortlink",
        description="Short link client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten https://example.com/long/url

  # Shorten with a custom alias
  %(prog)s shorten https://example.com/long/url --alias Ab3Z

  # Where does a slug point?
  %(prog)s resolve Ab3Z

  # Most used URLs over the last week
  %(prog)s top --range last-7-days --limit 5
        """
    )

    parser.add_argument(
        "--backend-url",
        default=os.getenv("BACKEND_URL", "http://localhost:8080"),
        help="Backend base URL (default: from BACKEND_URL env or http://localhost:8080)"
    )
    parser.add_argument(
        "--timeout-ms",
        type=int,
        default=int(os.getenv("BACKEND_TIMEOUT_MS", "5000")),
        help="Backend request timeout in milliseconds"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument("--alias", default="", help="Custom alias")

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a slug")
    resolve_parser.add_argument("slug", help="Slug to resolve")

    top_parser = subparsers.add_parser("top", help="Most used URLs")
    top_parser.add_argument("--range", dest="range_", default=Range.TODAY.value,
                            help="today, last-7-days or all-time")
    top_parser.add_argument("--limit", type=int, default=10, help="Maximum number to show")

    list_parser = subparsers.add_parser("list", help="List all shortened URLs")
    list_parser.add_argument("--query", default=None, help="Filter by destination URL")

    check_parser = subparsers.add_parser("check", help="Validate a URL and alias locally")
    check_parser.add_argument("url", help="Destination URL")
    check_parser.add_argument("--alias", default="", help="Custom alias")

    return parser


async def run(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_FAILED

    logger = setup_logging(level="DEBUG" if args.verbose else "WARNING")
    config = BackendConfig(base_url=args.backend_url, timeout_ms=args.timeout_ms)
    cli = ShortlinkCLI(
        backend=BackendClient(config, logger=logger),
        resolver=SlugResolver(config, logger=logger),
    )

    if args.command == "shorten":
        return await cli.shorten(args.url, args.alias)
    elif args.command == "resolve":
        return await cli.resolve(args.slug)
    elif args.command == "top":
        return await cli.top(args.range_, args.limit)
    elif args.command == "list":
        return await cli.list_urls(args.query)
    elif args.command == "check":
        return cli.check(args.url, args.alias)

    parser.print_help()
    return EXIT_FAILED


def main():
    """Console script entry point."""
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
