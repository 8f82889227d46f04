"""Response assembly from raw transport output."""

from typing import Any

from courier.coding.codecs import BodyDecoder
from courier.models.errors import (
    RequestError,
    ResponseDecodingError,
    TimedOutError,
    TransportFailedError,
    UnknownRequestError,
)
from courier.models.response import Response
from courier.transport.base import (
    TransportError,
    TransportErrorKind,
    TransportResponse,
    TransportResult,
)


def transport_failure(error: BaseException) -> RequestError:
    """Map a transport-level error onto the request error taxonomy.

    Args:
        error: Error reported by the transport.

    Returns:
        ``TimedOutError`` for timeouts, ``TransportFailedError`` for any other
        ``TransportError``, ``UnknownRequestError`` for anything else.
    """
    if isinstance(error, TransportError):
        if error.kind == TransportErrorKind.TIMEOUT:
            return TimedOutError(cause=error)
        return TransportFailedError(error)
    return UnknownRequestError(f"Unexpected transport result: {error!r}", cause=error)


def assemble_response(
    result: TransportResponse,
    decoder: BodyDecoder[Any],
) -> Response[Any]:
    """Decode transport output into a Response.

    Status code and headers are only filled in when the transport produced an
    HTTP response; opaque responses carry just the URL and body.

    Args:
        result: Raw transport output.
        decoder: Response body decoder.

    Returns:
        The assembled response.

    Raises:
        ResponseDecodingError: If the decoder raises.
    """
    try:
        body = decoder.decode(result.body)
    except Exception as e:  # noqa: BLE001
        raise ResponseDecodingError(e) from e

    if result.http is None:
        return Response(url=result.url, body=body)
    return Response(
        url=result.url,
        headers={str(key): str(value) for key, value in result.http.headers.items()},
        status_code=result.http.status_code,
        body=body,
    )


def interpret_transport_result(
    result: TransportResult,
    decoder: BodyDecoder[Any],
) -> Response[Any]:
    """Turn any transport result into a Response or a RequestError.

    Raises:
        RequestError: The mapped transport failure or a decoding error.
    """
    if isinstance(result, TransportResponse):
        return assemble_response(result, decoder)
    raise transport_failure(result)
