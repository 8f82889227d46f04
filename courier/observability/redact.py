"""Redaction of credentials before request details reach the logs."""

import re
from collections.abc import Mapping


# Headers whose values must never appear in logs
SENSITIVE_HEADERS = frozenset(
    {
        "authorization",
        "cookie",
        "proxy-authorization",
        "set-cookie",
        "x-api-key",
        "x-auth-token",
    }
)

REDACTED_VALUE = "[REDACTED]"

_URL_CREDENTIALS = re.compile(r"(https?://)([^:/@]+):([^@/]+)@")


def redact_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    """Redact sensitive header values for logging.

    Args:
        headers: Request or response headers.

    Returns:
        New dictionary with sensitive values replaced by ``[REDACTED]``.
    """
    if not headers:
        return {}
    return {
        key: REDACTED_VALUE if is_sensitive_header(key) else value
        for key, value in headers.items()
    }


def is_sensitive_header(header_name: str) -> bool:
    """Check whether a header carries credentials."""
    return header_name.lower() in SENSITIVE_HEADERS


def redact_url_credentials(url: str) -> str:
    """Redact ``user:password@`` userinfo from a URL.

    Args:
        url: URL that may embed credentials.

    Returns:
        URL with credentials redacted.
    """
    return _URL_CREDENTIALS.sub(r"\1[REDACTED]:[REDACTED]@", url)
