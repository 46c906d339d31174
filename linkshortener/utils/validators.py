"""Input validation for the URL-mapping service."""

import re
from typing import Any
from urllib.parse import urlsplit

from linkshortener.constants import REQUIRED_URL_SCHEME, Shortcode


_CUSTOM_ALIAS_RE = re.compile(Shortcode.CUSTOM_PATTERN)


def is_valid_full_url(full_url: Any) -> bool:
    """Return True if full_url is an https:// URL with a host.

    Example:
        >>> is_valid_full_url('https://example.com/a')
        True
        >>> is_valid_full_url('http://example.com/a')
        False
        >>> is_valid_full_url('https://')
        False
    """
    if not isinstance(full_url, str) or not full_url.startswith(REQUIRED_URL_SCHEME):
        return False
    try:
        return bool(urlsplit(full_url).hostname)
    except ValueError:  # e.g. malformed IPv6 netloc
        return False


def is_valid_custom_alias(alias: Any) -> bool:
    """Return True if alias can be used verbatim as a single URL path segment."""
    return isinstance(alias, str) and _CUSTOM_ALIAS_RE.fullmatch(alias) is not None
