#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: requests are handled as independent coroutines sharing one
asyncpg pool and one redis.asyncio client. Short code uniqueness relies only
on the store's atomic counter, so WORKERS > 1 and multiple hosts are safe.

Usage:
    python app.py

Environment variables:
    DATABASE_URL - PostgreSQL connection URL
    CREATE_TABLES - Set to 'true' to create tables on startup
    REDIS_URL - Redis connection URL (optional)
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortener.database.postgres import PostgresStore
from shortener.database.cache import RedisCache
from shortener.service import URLShortenerService
from shortener.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build store, cache and service on startup; close them on shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting URL shortener service...")

    store = PostgresStore(
        db_config=config.database_url,
        tables=(config.urls_table, config.counter_table),
        pool_max_size=config.pool_max_size,
        logger=logger,
    )
    if config.create_tables:
        await store.ensure_tables()

    cache = None
    if config.redis_url:
        logger.info("Connecting to Redis cache")
        cache = RedisCache(
            redis_url=config.redis_url,
            ttl_seconds=config.cache_ttl_seconds,
            logger=logger,
        )
        await cache.connect()
    else:
        logger.info("Redis caching disabled")

    service = URLShortenerService.from_config(config, store=store, cache=cache, logger=logger)
    app.state.service = service

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down URL shortener service...")
    await service.close()
    logger.info("Service stopped")


def build_app() -> FastAPI:
    """Build the application from environment config.

    Used directly by main() and as the uvicorn factory when WORKERS > 1,
    so each worker process builds its own pool and cache client.
    """
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    app = create_app(service_instance=None, config=config, logger=logger)
    app.router.lifespan_context = lifespan
    return app


def main():
    """Main entry point."""
    app = build_app()
    config = app.state.config
    logger = app.state.logger

    logger.info("URL Shortener Service")
    logger.debug(f"Configuration: {config.model_dump(exclude={'database_url', 'redis_url'})}")

    if config.workers > 1:
        # Worker processes import the app themselves; uvicorn handles signals.
        logger.info(f"Starting {config.workers} workers on {config.host}:{config.port}")
        uvicorn.run(
            "app:build_app",
            factory=True,
            host=config.host,
            port=config.port,
            workers=config.workers,
            log_level=config.log_level.lower(),
            access_log=True,
        )
        return

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
