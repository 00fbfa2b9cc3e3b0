#!/usr/bin/env python3
"""
Main entry point for QuickLink URL shortener service.

Concurrency: one in-memory allocation table per process, shared by every
request. Synchronous table operations are guarded by a readers-writer lock,
so the app is safe under uvicorn's threadpool as well as the event loop.
The server always runs as a single process, since a second process would
hold a separate table.

Usage:
    python app.py

Environment variables:
    BASE_URL - Base URL for short links
    PATH_PREFIX - Path prefix inserted before short codes
    HOST / PORT - Bind address
    SHORT_CODE_LENGTH - Length of generated codes (default 6)
    MAX_GENERATION_ATTEMPTS - Random codes to try per request (default 10)
    ENABLE_CUSTOM_CODES - Allow caller-chosen codes
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from quicklink.allocation import AllocationTable
from quicklink.service import URLShortenerService
from quicklink.shortcode import ShortCodeGenerator
from quicklink.common.logging_config import setup_logging
from web_app import create_app


def build_service(config: Config, logger) -> URLShortenerService:
    """Compose a fresh allocation table and the service around it."""
    generator = ShortCodeGenerator(default_length=config.short_code_length)
    table = AllocationTable(
        generator=generator,
        max_attempts=config.max_generation_attempts,
    )
    return URLShortenerService(
        table=table,
        logger=logger,
        enable_custom_codes=config.enable_custom_codes,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting QuickLink service...")

    if app.state.service is None:
        app.state.service = build_service(config, logger)

    logger.info("Service started successfully")

    yield

    stats = app.state.service.get_statistics()
    logger.info(f"Shutting down QuickLink service with {stats['total_urls']} mappings in memory")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("QuickLink URL Shortener")
    logger.info(f"Configuration: {config.model_dump()}")

    app = create_app(
        service_instance=None,  # Built in lifespan
        config=config,
        logger=logger,
    )
    app.router.lifespan_context = lifespan

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
