"""Slug resolution against the backend's resolve endpoint."""

import logging
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import quote

import httpx

from .backend import BackendConfig
from .errors import UpstreamUnavailableError
from .ranking import DESTINATION_FIELDS, first_present

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store",
    "Pragma": "no-cache",
}


@dataclass(frozen=True)
class Redirect:
    """Send the client to ``target``."""

    target: str


@dataclass(frozen=True)
class NotFound:
    """The alias has no mapping."""


ResolutionOutcome = Union[Redirect, NotFound]


def _is_json(content_type: Optional[str]) -> bool:
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


class SlugResolver:
    """Map an inbound slug to a redirect target, or decide it does not exist.

    The backend may answer in two shapes:

    1. A 3xx status with a ``Location`` header. This always wins, even when
       a body is attached.
    2. A 2xx JSON body naming the target (``url``, ``targetUrl`` or
       ``originalUrl``).

    Anything else from a responding backend is ``NotFound``. Transport
    failures, timeouts and 5xx answers raise ``UpstreamUnavailableError``
    so callers can tell a broken backend from a missing alias.

    Redirects are never followed and responses are never cached: each call
    makes exactly one request.
    """

    def __init__(
        self,
        config: BackendConfig,
        logger: Optional[logging.Logger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize resolver.

        Args:
            config: Backend location and timeout
            logger: Optional logger
            transport: Optional httpx transport (used by tests)
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.transport = transport

    def path_for(self, slug: str) -> str:
        """Backend path for ``slug``, escaped so it stays a single segment."""
        return "/" + quote(slug, safe="")

    async def resolve(self, slug: str) -> ResolutionOutcome:
        """Resolve ``slug`` with a single non-following, uncached GET.

        Raises:
            UpstreamUnavailableError: Backend unreachable, timed out or
                answered with an unexpected status
        """
        path = self.path_for(slug)

        try:
            async with httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout_seconds,
                follow_redirects=False,
                headers=NO_CACHE_HEADERS,
                transport=self.transport,
            ) as client:
                response = await client.get(path)
        except httpx.TimeoutException as e:
            self.logger.warning(f"Resolve timed out for '{slug}': {e}")
            raise UpstreamUnavailableError("Backend timed out") from e
        except httpx.HTTPError as e:
            self.logger.warning(f"Resolve failed for '{slug}': {e}")
            raise UpstreamUnavailableError(f"Backend unreachable: {e}") from e

        status = response.status_code

        if 300 <= status < 400:
            location = response.headers.get("location")
            if location:
                self.logger.debug(f"Resolved '{slug}' via {status} to {location}")
                return Redirect(location)
            self.logger.warning(f"Backend sent {status} without Location for '{slug}'")

        elif 200 <= status < 300:
            if _is_json(response.headers.get("content-type")):
                target = self._target_from_body(slug, response)
                if target:
                    self.logger.debug(f"Resolved '{slug}' via JSON body to {target}")
                    return Redirect(target)

        elif 400 <= status < 500:
            self.logger.debug(f"Backend reported '{slug}' missing (status {status})")

        else:
            self.logger.warning(f"Unexpected status {status} resolving '{slug}'")
            raise UpstreamUnavailableError(
                f"Backend responded with status {status}",
                status_code=status,
            )

        return NotFound()

    def _target_from_body(self, slug: str, response: httpx.Response) -> Optional[str]:
        try:
            data = response.json()
        except ValueError:
            # Malformed body counts as "no usable body"
            self.logger.warning(f"Unparseable JSON body resolving '{slug}'")
            return None

        if not isinstance(data, dict):
            return None

        target = first_present(data, DESTINATION_FIELDS)
        if isinstance(target, str) and target.strip():
            return target.strip()
        return None
