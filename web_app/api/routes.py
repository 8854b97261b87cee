"""API routes implementation."""

from typing import Optional

from fastapi import APIRouter, Request, HTTPException, Query, status
from datetime import datetime, timezone

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    ValidationResponse,
    ListResponse,
    TopResponse,
    ResolveResponse,
    HealthResponse,
    ErrorResponse,
)
from shortlink.errors import SubmissionRejectedError, UpstreamUnavailableError, ValidationFailedError
from shortlink.ranking import Range, filter_by_destination, top_n
from shortlink.resolver import Redirect
from shortlink.validators import alias_error, can_submit, destination_error
from ..rows import display_rows, public_base_url

router = APIRouter()


def _parse_range(value: Optional[str]) -> Range:
    try:
        return Range.parse(value)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


def _unavailable(e: UpstreamUnavailableError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"Backend unavailable: {e}",
    )


@router.get(
    "/validate",
    response_model=ValidationResponse,
    summary="Validate form inputs",
    description="Check a destination URL and optional alias. Call on every input change.",
)
async def validate_inputs(url: str = "", alias: str = ""):
    """Compute submission eligibility without contacting the backend."""
    alias = alias.strip()
    return ValidationResponse(
        can_submit=can_submit(url, alias),
        url_error=destination_error(url),
        alias_error=alias_error(alias),
    )


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Submission rejected by backend"},
        409: {"model": ErrorResponse, "description": "Alias already in use"},
        422: {"model": ErrorResponse, "description": "Invalid URL or alias"},
        503: {"model": ErrorResponse, "description": "Backend unavailable"},
    },
    summary="Create short URL",
    description="Validate locally, then submit to the backend. Optionally provide a custom alias.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    backend = request.app.state.backend

    try:
        result = await backend.shorten(body.url, body.custom_slug)
    except ValidationFailedError as e:
        raise HTTPException(
            status_code=422,
            detail={"url_error": e.url_error, "alias_error": e.alias_error},
        )
    except SubmissionRejectedError as e:
        code = status.HTTP_409_CONFLICT if e.status_code == 409 else status.HTTP_400_BAD_REQUEST
        raise HTTPException(status_code=code, detail=e.message)
    except UpstreamUnavailableError as e:
        raise _unavailable(e)

    return ShortenResponse(slug=result.slug, short_url=result.short_url)


@router.get(
    "/urls",
    response_model=ListResponse,
    responses={503: {"model": ErrorResponse, "description": "Backend unavailable"}},
    summary="List shortened URLs",
    description="All shortened URLs as returned by the backend, filtered by destination when q is given.",
)
async def list_urls(request: Request, q: Optional[str] = None):
    """List all shortened URLs."""
    backend = request.app.state.backend

    try:
        rows = await backend.list_all()
    except UpstreamUnavailableError as e:
        raise _unavailable(e)

    items = display_rows(filter_by_destination(rows, q), public_base_url(request))
    return ListResponse(count=len(items), items=items)


@router.get(
    "/top",
    response_model=TopResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Unknown range"},
        503: {"model": ErrorResponse, "description": "Backend unavailable"},
    },
    summary="Most used URLs",
    description="Rows ranked by hits in the selected range, highest first.",
)
async def top_urls(
    request: Request,
    range_: Optional[str] = Query("today", alias="range", description="today, last-7-days or all-time"),
    limit: Optional[int] = Query(None, ge=1, le=1000),
):
    """Rank usage rows for a range."""
    backend = request.app.state.backend
    config = request.app.state.config

    selected = _parse_range(range_)
    limit = limit or config.top_limit

    try:
        rows = await backend.top(limit, selected)
    except UpstreamUnavailableError as e:
        raise _unavailable(e)

    # Server order is not trusted: rank, then truncate
    ranked = top_n(rows, selected, limit)
    return TopResponse(
        range=selected.value,
        label=selected.label,
        items=display_rows(ranked, public_base_url(request), selected),
    )


@router.get(
    "/resolve/{slug}",
    response_model=ResolveResponse,
    responses={503: {"model": ErrorResponse, "description": "Backend unavailable"}},
    summary="Resolve a slug",
    description="Report where a slug points without redirecting.",
)
async def resolve_slug(request: Request, slug: str):
    """Resolve a slug to its destination."""
    resolver = request.app.state.resolver

    try:
        outcome = await resolver.resolve(slug)
    except UpstreamUnavailableError as e:
        raise _unavailable(e)

    if isinstance(outcome, Redirect):
        return ResolveResponse(slug=slug, found=True, target=outcome.target)
    return ResolveResponse(slug=slug, found=False)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the front end is up and the backend is reachable.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    backend = request.app.state.backend

    backend_ok = await backend.ping()

    return HealthResponse(
        status="healthy" if backend_ok else "degraded",
        backend="healthy" if backend_ok else "unreachable",
        timestamp=datetime.now(timezone.utc),
    )
