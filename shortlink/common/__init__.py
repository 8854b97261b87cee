"""Common utilities for the short link client."""

from .headers import extract_forwarded_headers, build_base_url
from .url_builder import build_short_url
from .logging_config import setup_logging, get_logger

__all__ = [
    "extract_forwarded_headers",
    "build_base_url",
    "build_short_url",
    "setup_logging",
    "get_logger",
]
