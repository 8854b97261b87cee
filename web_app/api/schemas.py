"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import List, Optional, Union
from datetime import datetime


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: str = Field(..., description="The URL to shorten", max_length=2048)
    custom_slug: Optional[str] = Field(
        None,
        alias="customSlug",
        description="Optional custom alias (exactly 4 friendly characters)",
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/very/long/path/to/resource",
                },
                {
                    "url": "https://github.com/user/repo",
                    "customSlug": "Ab3Z"
                }
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    slug: str = Field(..., description="The alias assigned by the backend")
    short_url: str = Field(..., description="The complete short URL")


class ValidationResponse(BaseModel):
    """Submission eligibility for the current form inputs."""

    can_submit: bool
    url_error: str = ""
    alias_error: str = ""


class UrlRow(BaseModel):
    """One shortened URL as displayed in a listing."""

    slug: str
    url: Optional[str] = None
    created_at: Optional[str] = None
    hits: Union[int, float] = 0
    hits_total: Union[int, float] = 0
    short_url: Optional[str] = None


class ListResponse(BaseModel):
    """All shortened URLs, optionally filtered by destination."""

    count: int
    items: List[UrlRow]


class TopResponse(BaseModel):
    """Most used URLs for a range."""

    range: str
    label: str
    items: List[UrlRow]


class ResolveResponse(BaseModel):
    """Where a slug currently points."""

    slug: str
    found: bool
    target: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    backend: str = Field(..., description="Backend reachability")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
    detail: Optional[Union[str, dict]] = Field(None, description="Detailed error information")
