"""Header names, common header values, and case-insensitive merging."""

from collections.abc import Mapping
from enum import Enum
from typing import Final


class HeaderKey:
    """Well-known header names."""

    ACCEPT: Final = "Accept"
    ACCEPT_ENCODING: Final = "Accept-Encoding"
    ACCEPT_LANGUAGE: Final = "Accept-Language"
    AUTHORIZATION: Final = "Authorization"
    CACHE_CONTROL: Final = "Cache-Control"
    CONTENT_DISPOSITION: Final = "Content-Disposition"
    CONTENT_LENGTH: Final = "Content-Length"
    CONTENT_TYPE: Final = "Content-Type"
    HOST: Final = "Host"
    LOCATION: Final = "Location"
    ORIGIN: Final = "Origin"
    REFERER: Final = "Referer"
    USER_AGENT: Final = "User-Agent"


class ContentType(str, Enum):
    """Common ``Content-Type`` header values."""

    JSON = "application/json"
    XML = "application/xml"
    URLENCODED = "application/x-www-form-urlencoded; charset=utf-8"
    TEXT = "text/plain; charset=utf-8"
    OCTET_STREAM = "application/octet-stream"


class CacheControl:
    """Builders for ``Cache-Control`` directives."""

    NO_CACHE: Final = "no-cache"
    NO_STORE: Final = "no-store"
    NO_TRANSFORM: Final = "no-transform"
    ONLY_IF_CACHED: Final = "only-if-cached"

    @staticmethod
    def max_age(seconds: int) -> str:
        """Build a ``max-age`` directive."""
        return f"max-age={seconds}"

    @staticmethod
    def max_stale(seconds: int | None = None) -> str:
        """Build a ``max-stale`` directive, optionally bounded."""
        if seconds is None:
            return "max-stale"
        return f"max-stale={seconds}"

    @staticmethod
    def min_fresh(seconds: int) -> str:
        """Build a ``min-fresh`` directive."""
        return f"min-fresh={seconds}"

    @staticmethod
    def combine(*directives: str) -> str:
        """Join several directives into one header value."""
        return ", ".join(directives)


def merge_headers(*layers: Mapping[str, str] | None) -> dict[str, str]:
    """Merge header layers in ascending precedence.

    Keys are compared case-insensitively. A later layer replaces an earlier
    entry with the same key, and the later spelling of the key is kept.

    Args:
        layers: Header mappings, lowest precedence first. ``None`` is skipped.

    Returns:
        New merged headers dictionary.
    """
    merged: dict[str, tuple[str, str]] = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            merged[key.lower()] = (key, value)
    return dict(merged.values())


def get_header(headers: Mapping[str, str] | None, key: str) -> str | None:
    """Look up a header value case-insensitively.

    Args:
        headers: Headers to search.
        key: Header name.

    Returns:
        The header value, or None if absent.
    """
    if not headers:
        return None
    wanted = key.lower()
    for name, value in headers.items():
        if name.lower() == wanted:
            return value
    return None
