"""Transport adapter contract.

The execution layer never performs network I/O itself. It hands each
``WireRequest`` to a ``Transport``, which reports exactly one
``TransportResponse`` or ``TransportError`` through a completion callback.
"""

from collections.abc import Callable
from enum import Enum
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from courier.models.wire import WireRequest


class TransportErrorKind(str, Enum):
    """Classification of transport failures.

    - FAILURE: Connection, protocol, or any other generic failure
    - TIMEOUT: The per-request timeout elapsed
    - CANCELLED: The request was cancelled before it completed
    """

    FAILURE = "FAILURE"
    TIMEOUT = "TIMEOUT"
    CANCELLED = "CANCELLED"


class TransportError(Exception):
    """Error reported by a transport instead of a response.

    Attributes:
        kind: Failure classification.
        cause: Underlying client exception, if any.
    """

    def __init__(
        self,
        kind: TransportErrorKind,
        message: str,
        cause: BaseException | None = None,
    ) -> None:
        self.kind = kind
        self.cause = cause
        super().__init__(message)


class HttpMetadata(BaseModel):
    """Status line and headers of an HTTP response."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    status_code: int = Field(ge=100, le=999)
    headers: dict[str, str] = Field(default_factory=dict)


class TransportResponse(BaseModel):
    """Raw bytes plus transport metadata.

    ``http`` is None when the transport produced an opaque, non-HTTP response.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    body: bytes = b""
    url: str | None = None
    http: HttpMetadata | None = None


TransportResult = TransportResponse | TransportError
TransportCompletion = Callable[[TransportResult], None]


@runtime_checkable
class TransportTask(Protocol):
    """Handle to one in-flight transport request."""

    def cancel(self) -> None:
        """Cancel the request. The completion is not invoked afterwards."""
        ...


@runtime_checkable
class Transport(Protocol):
    """Protocol for transports.

    Allows dependency injection of test doubles that control timing.
    """

    def submit(
        self,
        request: WireRequest,
        completion: TransportCompletion,
    ) -> TransportTask:
        """Start a request.

        Args:
            request: Request to send.
            completion: Called at most once with the result. May be called
                before ``submit`` returns.

        Returns:
            Handle used to cancel the request.
        """
        ...
