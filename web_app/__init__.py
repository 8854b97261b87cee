"""FastAPI web front end for the short link client."""

from .app_factory import create_app

__all__ = ["create_app"]
