"""Web interface routes implementation."""

import os
from typing import Optional

from fastapi import APIRouter, Request, Form, Query, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from shortlink.errors import SubmissionRejectedError, UpstreamUnavailableError, ValidationFailedError
from shortlink.ranking import Range, filter_by_destination, top_n
from shortlink.resolver import Redirect
from shortlink.validators import ALIAS_LENGTH, FRIENDLY_ALPHABET
from ..rows import display_rows, public_base_url

router = APIRouter()

template_dir = os.path.join(os.path.dirname(__file__), "..", "templates")
templates = Jinja2Templates(directory=template_dir)

RANGES = [Range.TODAY, Range.LAST_7_DAYS, Range.ALL_TIME]


def _service_error(request: Request, message: str) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "service_error.html",
        {"error_message": message},
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


async def _render_home(
    request: Request,
    status_code: int = status.HTTP_200_OK,
    url: str = "",
    custom_slug: str = "",
    url_error: str = "",
    alias_error: str = "",
    server_error: str = "",
    short_url: str = "",
    query: Optional[str] = None,
) -> HTMLResponse:
    """Render the form together with the all-URLs table."""
    backend = request.app.state.backend
    logger = request.app.state.logger

    rows = []
    listing_error = ""
    try:
        all_rows = await backend.list_all()
        rows = display_rows(filter_by_destination(all_rows, query), public_base_url(request))
    except UpstreamUnavailableError as e:
        logger.warning(f"Failed to fetch URLs: {e}")
        listing_error = "Could not load shortened URLs right now."

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "url": url,
            "custom_slug": custom_slug,
            "url_error": url_error,
            "alias_error": alias_error,
            "server_error": server_error,
            "short_url": short_url,
            "query": query or "",
            "rows": rows,
            "listing_error": listing_error,
            "alias_length": ALIAS_LENGTH,
            "alphabet": FRIENDLY_ALPHABET,
        },
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage(request: Request, q: Optional[str] = None):
    """Serve the shorten form and the list of all shortened URLs."""
    return await _render_home(request, query=q)


@router.post("/create", response_class=HTMLResponse, include_in_schema=False)
async def create_short_url_web(
    request: Request,
    url: str = Form(""),
    custom_slug: str = Form(""),
):
    """Handle form submission to create short URL."""
    backend = request.app.state.backend

    url = url.strip()
    custom_slug = custom_slug.strip()

    try:
        result = await backend.shorten(url, custom_slug or None)
    except ValidationFailedError as e:
        return await _render_home(
            request,
            status_code=status.HTTP_400_BAD_REQUEST,
            url=url,
            custom_slug=custom_slug,
            url_error=e.url_error,
            alias_error=e.alias_error,
        )
    except SubmissionRejectedError as e:
        return await _render_home(
            request,
            status_code=status.HTTP_400_BAD_REQUEST,
            url=url,
            custom_slug=custom_slug,
            server_error=e.message,
        )
    except UpstreamUnavailableError as e:
        return _service_error(request, f"Could not shorten the URL: {e}")

    return await _render_home(request, short_url=result.short_url)


@router.get("/dashboard", response_class=HTMLResponse, include_in_schema=False)
async def dashboard(request: Request, range_: Optional[str] = Query(None, alias="range")):
    """Show the most used URLs for the selected range."""
    backend = request.app.state.backend
    config = request.app.state.config
    logger = request.app.state.logger

    try:
        selected = Range.parse(range_ or Range.TODAY.value)
    except ValueError:
        selected = Range.TODAY

    rows = []
    listing_error = ""
    try:
        fetched = await backend.top(config.top_limit, selected)
        ranked = top_n(fetched, selected, config.top_limit)
        rows = display_rows(ranked, public_base_url(request), selected)
    except UpstreamUnavailableError as e:
        logger.warning(f"Failed to fetch top URLs: {e}")
        listing_error = "Could not load usage statistics right now."

    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "rows": rows,
            "ranges": RANGES,
            "selected": selected,
            "limit": config.top_limit,
            "listing_error": listing_error,
        },
    )


@router.get("/{slug}", include_in_schema=False)
async def redirect_to_url(request: Request, slug: str):
    """Redirect to the destination behind ``slug``."""
    resolver = request.app.state.resolver

    try:
        outcome = await resolver.resolve(slug)
    except UpstreamUnavailableError as e:
        return _service_error(request, f"Could not look up '{slug}': {e}")

    if isinstance(outcome, Redirect):
        return RedirectResponse(
            url=outcome.target,
            status_code=status.HTTP_307_TEMPORARY_REDIRECT,
            headers={"Cache-Control": "no-store"},
        )

    return templates.TemplateResponse(
        request,
        "not_found.html",
        {"slug": slug},
        status_code=status.HTTP_404_NOT_FOUND,
    )
