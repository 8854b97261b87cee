"""HTTP client for the shortening backend (submit and listing endpoints)."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import httpx

from .errors import SubmissionRejectedError, UpstreamUnavailableError, ValidationFailedError
from .ranking import Range
from .validators import alias_error, can_submit, destination_error

SHORTEN_PATH = "/api/v1/urls/shorten"
ALL_URLS_PATH = "/api/v1/urls/all"
TOP_URLS_PATH = "/api/v1/urls/top"

DEFAULT_REJECTION_MESSAGE = "Failed to shorten URL"


@dataclass(frozen=True)
class BackendConfig:
    """Where the backend lives and how long to wait for it."""

    base_url: str
    timeout_ms: int = 5000

    def __post_init__(self):
        if self.timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0

    def url_for(self, path: str) -> str:
        """Join ``path`` onto the base URL."""
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


@dataclass(frozen=True)
class ShortenResult:
    """Successful submission."""

    slug: str
    short_url: str


def error_message_from(response: httpx.Response) -> Optional[str]:
    """Pull a human readable message out of an error response body."""
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text or None

    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return None


class BackendClient:
    """Calls the submit and listing endpoints.

    Every call opens its own ``httpx.AsyncClient`` so concurrent requests
    share nothing.
    """

    def __init__(
        self,
        config: BackendConfig,
        logger: Optional[logging.Logger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize backend client.

        Args:
            config: Backend location and timeout
            logger: Optional logger
            transport: Optional httpx transport (used by tests)
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            follow_redirects=False,
            transport=self.transport,
        )

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            async with self._client() as client:
                response = await client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            self.logger.warning(f"Backend timed out on {method} {path}: {e}")
            raise UpstreamUnavailableError("Backend timed out") from e
        except httpx.HTTPError as e:
            self.logger.warning(f"Backend unreachable on {method} {path}: {e}")
            raise UpstreamUnavailableError(f"Backend unreachable: {e}") from e

        if response.status_code >= 500:
            self.logger.warning(f"Backend error on {method} {path}: status {response.status_code}")
            raise UpstreamUnavailableError(
                f"Backend responded with status {response.status_code}",
                status_code=response.status_code,
            )
        return response

    async def shorten(self, url: str, custom_slug: Optional[str] = None) -> ShortenResult:
        """Submit a destination URL, optionally with a custom alias.

        Args:
            url: Destination URL
            custom_slug: Optional alias; empty means "let the backend choose"

        Returns:
            ShortenResult with the slug and fully-qualified short URL

        Raises:
            ValidationFailedError: Input rejected locally, no request sent
            SubmissionRejectedError: Backend refused the submission
            UpstreamUnavailableError: Backend unreachable or misbehaving
        """
        url = (url or "").strip()
        alias = (custom_slug or "").strip()

        if not can_submit(url, alias):
            raise ValidationFailedError(
                url_error=destination_error(url) or ("URL is required" if not url else ""),
                alias_error=alias_error(alias),
            )

        payload: Dict[str, Any] = {"url": url}
        if alias:
            payload["customSlug"] = alias

        response = await self._request("POST", SHORTEN_PATH, json=payload)

        if response.status_code >= 400:
            message = error_message_from(response) or DEFAULT_REJECTION_MESSAGE
            self.logger.info(f"Backend rejected submission of {url}: {message}")
            raise SubmissionRejectedError(message, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError:
            data = None

        if not isinstance(data, dict) or not data.get("shortUrl"):
            raise UpstreamUnavailableError("Unexpected response", status_code=response.status_code)

        result = ShortenResult(slug=str(data.get("slug") or ""), short_url=str(data["shortUrl"]))
        self.logger.info(f"Shortened {url} to {result.short_url}")
        return result

    async def list_all(self) -> List[Dict[str, Any]]:
        """Fetch every shortened URL known to the backend."""
        response = await self._request("GET", ALL_URLS_PATH)
        return self._rows_from(response)

    async def top(self, limit: int, range_: Union[Range, str]) -> List[Dict[str, Any]]:
        """Fetch usage rows for ``range_``. Rows come back in server order."""
        selected = Range.parse(range_)
        response = await self._request(
            "GET",
            TOP_URLS_PATH,
            params={"limit": limit, "range": selected.wire},
        )
        return self._rows_from(response)

    async def ping(self) -> bool:
        """True when the backend answers at all with a non-5xx status."""
        try:
            await self._request("GET", "/")
        except UpstreamUnavailableError:
            return False
        return True

    def _rows_from(self, response: httpx.Response) -> List[Dict[str, Any]]:
        if response.status_code >= 400:
            raise UpstreamUnavailableError(
                f"Backend responded with status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            self.logger.warning("Listing response was not JSON")
            return []

        if isinstance(data, dict):
            data = data.get("items")
        if not isinstance(data, list):
            return []
        return [row for row in data if isinstance(row, dict)]
