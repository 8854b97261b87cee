"""Middleware for the short link web app."""

from .headers import ForwardedHeadersMiddleware, NoStoreMiddleware
from .logging import LoggingMiddleware

__all__ = ["ForwardedHeadersMiddleware", "LoggingMiddleware", "NoStoreMiddleware"]
