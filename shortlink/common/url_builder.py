"""Short URL building."""

from urllib.parse import quote


def build_short_url(slug: str, base_url: str) -> str:
    """Build the public short URL for ``slug``.

    Args:
        slug: The alias
        base_url: Base URL of this front end (e.g., https://example.com)

    Returns:
        Complete short URL
    """
    return f"{base_url.rstrip('/')}/{quote(slug, safe='')}"
