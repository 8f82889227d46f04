"""Transport adapters performing the network I/O for wire requests."""

from courier.transport.base import (
    HttpMetadata,
    Transport,
    TransportCompletion,
    TransportError,
    TransportErrorKind,
    TransportResponse,
    TransportResult,
    TransportTask,
)
from courier.transport.httpx_transport import (
    HttpxTask,
    HttpxTransport,
    close_default_transport,
    default_transport,
)


__all__ = [
    # Contract
    "HttpMetadata",
    "Transport",
    "TransportCompletion",
    "TransportError",
    "TransportErrorKind",
    "TransportResponse",
    "TransportResult",
    "TransportTask",
    # httpx
    "HttpxTask",
    "HttpxTransport",
    "close_default_transport",
    "default_transport",
]
