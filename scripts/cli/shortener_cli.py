#!/usr/bin/env python3
"""
Command-line interface for URL shortener service.

Usage:
    python shortener_cli.py shorten <url>
    python shortener_cli.py get <short_code>
    python shortener_cli.py info <short_code>
    python shortener_cli.py health
"""

import argparse
import asyncio
import json
import sys
import os
from typing import Optional

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from config import Config, load_config
from shortener.database.postgres import PostgresStore
from shortener.database.cache import RedisCache
from shortener.service import URLShortenerService
from shortener.common.logging_config import setup_logging
from shortener.errors import ShortenerError


class URLShortenerCLI:
    """Command-line interface for URL shortener."""

    def __init__(
        self,
        config: Config,
        db_url: Optional[str] = None,
        redis_url: Optional[str] = None,
        verbose: bool = False,
    ):
        self.config = config
        self.db_url = db_url or config.database_url
        self.redis_url = redis_url or config.redis_url
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.service: Optional[URLShortenerService] = None

    async def initialize(self):
        """Initialize store, cache and service."""
        store = PostgresStore(
            db_config=self.db_url,
            tables=(self.config.urls_table, self.config.counter_table),
            pool_max_size=self.config.pool_max_size,
            logger=self.logger,
        )

        cache = None
        if self.redis_url:
            cache = RedisCache(
                redis_url=self.redis_url,
                ttl_seconds=self.config.cache_ttl_seconds,
                logger=self.logger,
            )
            await cache.connect()

        self.service = URLShortenerService.from_config(
            self.config, store=store, cache=cache, logger=self.logger
        )

    async def cleanup(self):
        """Cleanup resources."""
        if self.service:
            await self.service.close()

    @staticmethod
    def _emit(payload: dict, ok: bool = True) -> int:
        print(json.dumps(payload, indent=2), file=sys.stdout if ok else sys.stderr)
        return 0 if ok else 1

    async def shorten(self, url: str) -> int:
        """Shorten a URL."""
        try:
            mapping = await self.service.create_short_url(url)
        except ShortenerError as e:
            return self._emit({"success": False, "error": str(e)}, ok=False)

        return self._emit({
            "success": True,
            "short_code": mapping.short_code,
            "original_url": mapping.long_url,
            "created_at": mapping.created_at.isoformat(),
        })

    async def get(self, short_code: str) -> int:
        """Resolve a short code through the cache."""
        try:
            original_url = await self.service.resolve(short_code)
        except ShortenerError as e:
            return self._emit({"success": False, "error": str(e)}, ok=False)

        return self._emit({
            "success": True,
            "short_code": short_code,
            "original_url": original_url,
        })

    async def info(self, short_code: str) -> int:
        """Show the stored mapping for a short code."""
        try:
            mapping = await self.service.get_url_info(short_code)
        except ShortenerError as e:
            return self._emit({"success": False, "error": str(e)}, ok=False)

        return self._emit({"success": True, **mapping.to_record()})

    async def health(self) -> int:
        """Check service health."""
        health_status = await self.service.health_check()
        if not health_status["overall"]:
            return self._emit({"success": False, "health": health_status}, ok=False)

        stats = await self.service.get_statistics()
        return self._emit({"success": True, "health": health_status, "statistics": stats})


async def main():
    """Main entry point."""
    config = load_config()

    parser = argparse.ArgumentParser(
        description="URL Shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten https://example.com/long/url

  # Get original URL
  %(prog)s get 1c

  # Show stored mapping
  %(prog)s info 1c

  # Check health
  %(prog)s health
        """
    )

    parser.add_argument(
        "--db-url",
        default=config.database_url,
        help="PostgreSQL connection URL (default: DATABASE_URL from config)"
    )
    parser.add_argument(
        "--redis-url",
        default=config.redis_url,
        help="Redis connection URL (optional, default: REDIS_URL from config)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")

    get_parser = subparsers.add_parser("get", help="Get original URL")
    get_parser.add_argument("short_code", help="Short code to lookup")

    info_parser = subparsers.add_parser("info", help="Show stored mapping")
    info_parser.add_argument("short_code", help="Short code to lookup")

    subparsers.add_parser("health", help="Check service health")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    cli = URLShortenerCLI(
        config=config,
        db_url=args.db_url,
        redis_url=args.redis_url,
        verbose=args.verbose,
    )

    try:
        await cli.initialize()

        if args.command == "shorten":
            return await cli.shorten(args.url)
        elif args.command == "get":
            return await cli.get(args.short_code)
        elif args.command == "info":
            return await cli.info(args.short_code)
        elif args.command == "health":
            return await cli.health()
        else:
            parser.print_help()
            return 1

    finally:
        await cli.cleanup()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
