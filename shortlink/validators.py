"""Alias grammar and destination URL validation.

The same rules gate the web form, the JSON API and the CLI, so a submission
that passes here is one the backend is expected to accept.
"""

import ipaddress
from urllib.parse import urlsplit

ALIAS_LENGTH = 4

# Letters and digits minus the look-alikes 0 O 1 I l (57 symbols)
FRIENDLY_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz23456789"
FRIENDLY_SET = frozenset(FRIENDLY_ALPHABET)

ALLOWED_SCHEMES = ("http", "https")

# Characters a URL host may not contain
FORBIDDEN_HOST_CHARS = frozenset(" \t\n\r#/:<>?@[\\]^|%\"")

DESTINATION_ERROR = "Enter a valid URL starting with http:// or https://"
ALIAS_ERROR = f"Alias must be exactly {ALIAS_LENGTH} friendly characters: [{FRIENDLY_ALPHABET}]"


def is_valid_alias(alias: str) -> bool:
    """Check a custom alias against the friendly alphabet.

    The empty string means "no alias requested" and is not valid here;
    callers handle it separately.
    """
    if not isinstance(alias, str) or len(alias) != ALIAS_LENGTH:
        return False

    for ch in alias:
        if not 0x21 <= ord(ch) <= 0x7E:
            return False
        if ch not in FRIENDLY_SET:
            return False

    return True


def is_valid_destination(url: str) -> bool:
    """Check that ``url`` is an absolute http(s) URL. Never raises."""
    if not isinstance(url, str):
        return False

    value = url.strip()
    if not value:
        return False

    try:
        parts = urlsplit(value)
        # Accessing port validates it
        parts.port
    except ValueError:
        return False

    if parts.scheme.lower() not in ALLOWED_SCHEMES:
        return False

    return _is_valid_host(parts.netloc, parts.hostname)


def _is_valid_host(netloc: str, host) -> bool:
    if not host:
        return False

    # Bracketed IPv6 literal
    if netloc.rpartition("@")[2].startswith("[") or ":" in host:
        try:
            ipaddress.IPv6Address(host)
        except ValueError:
            return False
        return True

    for ch in host:
        if ord(ch) <= 0x20 or ord(ch) == 0x7F or ch in FORBIDDEN_HOST_CHARS:
            return False
    return True


def destination_error(url: str) -> str:
    """Message to show under the URL input ('' when empty or valid)."""
    if not url:
        return ""
    return "" if is_valid_destination(url) else DESTINATION_ERROR


def alias_error(alias: str) -> str:
    """Message to show under the alias input ('' when empty or valid)."""
    if not alias:
        return ""
    return "" if is_valid_alias(alias) else ALIAS_ERROR


def can_submit(url: str, alias: str = "") -> bool:
    """Submission is allowed iff the destination is valid and the alias is empty or valid."""
    alias = alias or ""
    return is_valid_destination(url) and (alias == "" or is_valid_alias(alias))
