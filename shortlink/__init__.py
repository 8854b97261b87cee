"""Client core for a URL shortening backend."""

from .backend import BackendClient, BackendConfig, ShortenResult
from .errors import (
    ShortlinkError,
    SubmissionRejectedError,
    UpstreamUnavailableError,
    ValidationFailedError,
)
from .ranking import Range, metric, rank, top_n
from .resolver import NotFound, Redirect, ResolutionOutcome, SlugResolver
from .validators import can_submit, is_valid_alias, is_valid_destination

__all__ = [
    "BackendClient",
    "BackendConfig",
    "ShortenResult",
    "ShortlinkError",
    "SubmissionRejectedError",
    "UpstreamUnavailableError",
    "ValidationFailedError",
    "Range",
    "metric",
    "rank",
    "top_n",
    "NotFound",
    "Redirect",
    "ResolutionOutcome",
    "SlugResolver",
    "can_submit",
    "is_valid_alias",
    "is_valid_destination",
]
