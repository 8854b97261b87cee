#!/usr/bin/env python3
"""
Main entry point for the short link web front end.

The front end holds no state of its own: every page and API call goes to the
URL shortening backend configured by BACKEND_URL. With WORKERS > 1 uvicorn
starts that many worker processes, each building its own app through
``build_app``.

Usage:
    python app.py

Environment variables:
    BACKEND_URL - Base URL of the shortening backend
    BACKEND_TIMEOUT_MS - Timeout for each backend request
    FRONTEND_URL - Public base URL used in short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortlink.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info(f"Short link front end using backend at {config.backend_url}")
    yield
    logger.info("Short link front end stopped")


def build_app(config: Optional[Config] = None) -> FastAPI:
    """Build the app from configuration. Also the uvicorn factory for worker processes."""
    config = config or load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    app = create_app(config=config, logger=logger)

    # Override lifespan
    app.router.lifespan_context = lifespan
    return app


def main():
    """Main entry point."""
    config = load_config()
    app = build_app(config)
    logger = app.state.logger

    logger.info("Short Link Front End")
    logger.info(f"Configuration: {config.model_dump()}")

    if config.workers > 1:
        # Each worker process imports the factory and builds its own app
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

    # Graceful shutdown on SIGINT/SIGTERM
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
