"""Wire request construction.

Turns a host plus a request description plus manager defaults into a
transport-ready ``WireRequest``. Pure: no I/O, no shared state.
"""

from collections.abc import Mapping, Sequence
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

import httpx
from pydantic import ValidationError

from courier.models.authentication import BasicAuthentication, TokenAuthentication
from courier.models.errors import MalformedRequestError
from courier.models.headers import merge_headers
from courier.models.wire import WireRequest
from courier.request.protocols import Requestable


def build_url(host: str, path: str, query: Sequence[tuple[str, str]]) -> str:
    """Combine a host URL with a request path and query.

    The path is appended to the host's own path. A non-empty query replaces
    the host's query, keeping pair order and duplicate names.

    Args:
        host: Absolute base URL, e.g. ``https://api.example.com/v1``.
        path: Path appended to the host path.
        query: Ordered query pairs.

    Returns:
        Final URL string.

    Raises:
        MalformedRequestError: If the host or the combined URL is invalid.
    """
    try:
        parts = urlsplit(host)
    except ValueError as e:
        msg = f"Invalid host URL: {host!r}"
        raise MalformedRequestError(msg, cause=e) from e
    if not parts.scheme or not parts.netloc:
        msg = f"Host must be an absolute URL: {host!r}"
        raise MalformedRequestError(msg)

    query_string = urlencode(list(query), quote_via=quote) if query else parts.query
    candidate = urlunsplit(
        (parts.scheme, parts.netloc, f"{parts.path}{path}", query_string, parts.fragment)
    )
    try:
        return str(httpx.URL(candidate))
    except (httpx.InvalidURL, ValueError) as e:
        msg = f"Invalid request URL: {candidate!r}"
        raise MalformedRequestError(msg, cause=e) from e


def build_wire_request(
    host: str,
    descriptor: Requestable,
    *,
    default_headers: Mapping[str, str] | None = None,
    additional_headers: Mapping[str, str] | None = None,
    backup_authentication: BasicAuthentication | TokenAuthentication | None = None,
) -> WireRequest:
    """Build the transport request for one attempt.

    Header precedence, lowest first: default headers, descriptor headers,
    additional headers. The resolved credential (descriptor's, else the
    backup) then overrides ``Authorization``.

    Args:
        host: Base URL.
        descriptor: Request description.
        default_headers: Manager-injected defaults.
        additional_headers: Manager headers with highest precedence.
        backup_authentication: Credential used when the descriptor has none.

    Returns:
        The wire request.

    Raises:
        MalformedRequestError: On an invalid URL or a body encoder failure.
    """
    url = build_url(host, descriptor.path, descriptor.query)

    body: bytes | None = None
    if descriptor.body is not None:
        try:
            body = descriptor.request_encoder.encode(descriptor.body)
        except Exception as e:  # noqa: BLE001
            msg = "The request body could not be encoded"
            raise MalformedRequestError(msg, cause=e) from e

    headers = merge_headers(default_headers, descriptor.headers, additional_headers)

    authentication = descriptor.authentication or backup_authentication
    if authentication is not None:
        headers = merge_headers(
            headers, {authentication.header_key: authentication.header_value}
        )

    try:
        return WireRequest(
            url=url,
            method=descriptor.method,
            headers=headers,
            body=body,
            timeout=descriptor.timeout_interval,
        )
    except ValidationError as e:
        msg = f"Invalid request fields: {e.error_count()} errors"
        raise MalformedRequestError(msg, cause=e) from e
