"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shortlink.backend import BackendClient
from shortlink.common.logging_config import get_logger
from shortlink.resolver import SlugResolver

from .api import api_router
from .web import web_router
from .middleware.headers import ForwardedHeadersMiddleware, NoStoreMiddleware
from .middleware.logging import LoggingMiddleware


def create_app(
    config,
    resolver: Optional[SlugResolver] = None,
    backend: Optional[BackendClient] = None,
    logger: Optional[logging.Logger] = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        config: Configuration instance
        resolver: Slug resolver (built from config when omitted)
        backend: Backend client (built from config when omitted)
        logger: Optional logger

    Returns:
        Configured FastAPI app
    """
    logger = logger or get_logger("web")

    app = FastAPI(
        title="Short Link",
        description="Web front end for a URL shortening backend",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # Components hold configuration only, so one instance serves every request
    app.state.config = config
    app.state.logger = logger
    app.state.resolver = resolver or SlugResolver(config.backend(), logger=logger)
    app.state.backend = backend or BackendClient(config.backend(), logger=logger)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Last added runs first: forwarded headers are parsed before logging
    app.add_middleware(NoStoreMiddleware)
    app.add_middleware(LoggingMiddleware, logger=logger)
    app.add_middleware(ForwardedHeadersMiddleware)

    app.include_router(api_router, prefix="/api", tags=["API"])
    # Registered last: its /{slug} route catches everything else
    app.include_router(web_router, tags=["Web"])

    return app
