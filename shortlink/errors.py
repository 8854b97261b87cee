"""Error taxonomy for the short link client."""

from typing import Optional


class ShortlinkError(Exception):
    """Base class for client errors."""


class ValidationFailedError(ShortlinkError):
    """Submission blocked locally before any request was sent."""

    def __init__(self, url_error: str = "", alias_error: str = ""):
        self.url_error = url_error
        self.alias_error = alias_error
        message = "; ".join(m for m in (url_error, alias_error) if m) or "Invalid submission"
        super().__init__(message)


class SubmissionRejectedError(ShortlinkError):
    """Backend refused a well-formed submission (e.g. alias collision).

    The message is the backend's own text and is shown to the user as is.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class UpstreamUnavailableError(ShortlinkError):
    """Backend could not be reached, timed out, or answered with an unexpected status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
