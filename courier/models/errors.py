"""Error taxonomy for request execution.

Every failed execution surfaces exactly one ``RequestError`` subclass:

- ``MalformedRequestError``: bad host/URL or body encoding failure
- ``ResponseDecodingError``: the response decoder raised
- ``TransportFailedError``: the transport failed for a reason other than timeout
- ``TimedOutError``: the transport reported a per-request timeout
- ``SlaExceededError``: the whole retry sequence overran its SLA
- ``ResponseValidationError``: the validator rejected the response
- ``UnknownRequestError``: anything that fits none of the above
"""

from enum import Enum

from courier.constants import (
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_CLIENT_ERROR_MAX,
    HTTP_STATUS_FORBIDDEN,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
    HTTP_STATUS_SERVER_ERROR,
    HTTP_STATUS_SERVER_ERROR_MAX,
    HTTP_STATUS_UNAUTHORIZED,
)


class RequestErrorClass(str, Enum):
    """Classification of request failures for logs and metrics."""

    MALFORMED_REQUEST = "MALFORMED_REQUEST"
    DECODING_ERROR = "DECODING_ERROR"
    TRANSPORT_FAILED = "TRANSPORT_FAILED"
    TIMED_OUT = "TIMED_OUT"
    SLA_EXCEEDED = "SLA_EXCEEDED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNKNOWN = "UNKNOWN"


class RequestError(Exception):
    """Base class for request execution failures."""

    error_class: RequestErrorClass = RequestErrorClass.UNKNOWN
    default_message = "The request failed for an unknown reason"

    def __init__(self, message: str | None = None, cause: BaseException | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable message. Defaults to a per-class message.
            cause: Underlying error, if any.
        """
        self.cause = cause
        super().__init__(message or self.default_message)


class MalformedRequestError(RequestError):
    """Raised when a wire request cannot be built from a descriptor."""

    error_class = RequestErrorClass.MALFORMED_REQUEST
    default_message = "The request was malformed. Check the URL or the body content"


class ResponseDecodingError(RequestError):
    """Raised when the response body cannot be decoded."""

    error_class = RequestErrorClass.DECODING_ERROR

    def __init__(self, cause: BaseException) -> None:
        """Initialize the error.

        Args:
            cause: Exception raised by the decoder.
        """
        super().__init__(f"Couldn't decode the response body content: {cause}", cause)


class TransportFailedError(RequestError):
    """Raised when the transport fails for a reason other than a timeout."""

    error_class = RequestErrorClass.TRANSPORT_FAILED

    def __init__(self, cause: BaseException) -> None:
        """Initialize the error.

        Args:
            cause: Error reported by the transport.
        """
        super().__init__(f"The transport failed: {cause}", cause)


class TimedOutError(RequestError):
    """Raised when the transport reports a per-request timeout."""

    error_class = RequestErrorClass.TIMED_OUT
    default_message = "The request timed out"


class SlaExceededError(RequestError):
    """Raised when an execution, retries included, overruns its SLA."""

    error_class = RequestErrorClass.SLA_EXCEEDED
    default_message = "The request exceeded the timeout sla"


class ResponseValidationError(RequestError):
    """Raised when a response validator rejects a response."""

    error_class = RequestErrorClass.VALIDATION_ERROR

    def __init__(self, cause: BaseException) -> None:
        """Initialize the error.

        Args:
            cause: Domain error raised by the validator.
        """
        super().__init__(f"The request failed validation: {cause}", cause)


class UnknownRequestError(RequestError):
    """Raised for failures that match no other error class."""


class OperationCancelledError(Exception):
    """Raised by ``RequestOperation.result`` when the operation was cancelled."""


class NoValidationError(Exception):
    """Error type of validators that never reject a response."""


class HTTPErrorKind(str, Enum):
    """Status-code classes produced by the status-code validator."""

    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CLIENT_ERROR = "CLIENT_ERROR"
    SERVER_ERROR = "SERVER_ERROR"
    SERVER_ERROR_5XX = "SERVER_ERROR_5XX"
    UNKNOWN_CODE = "UNKNOWN_CODE"


_EXACT_KINDS = {
    HTTP_STATUS_BAD_REQUEST: HTTPErrorKind.BAD_REQUEST,
    HTTP_STATUS_UNAUTHORIZED: HTTPErrorKind.UNAUTHORIZED,
    HTTP_STATUS_FORBIDDEN: HTTPErrorKind.FORBIDDEN,
    HTTP_STATUS_NOT_FOUND: HTTPErrorKind.NOT_FOUND,
    HTTP_STATUS_SERVER_ERROR: HTTPErrorKind.SERVER_ERROR,
}


class HTTPError(Exception):
    """Validation error for a response whose status code is not 2xx.

    Attributes:
        kind: Status-code class.
        status_code: The offending status code.
    """

    def __init__(self, kind: HTTPErrorKind, status_code: int) -> None:
        self.kind = kind
        self.status_code = status_code
        super().__init__(f"HTTP {status_code} ({kind.value})")

    @classmethod
    def from_status(cls, status_code: int) -> "HTTPError | None":
        """Classify a status code.

        Args:
            status_code: HTTP status code.

        Returns:
            The matching HTTPError, or None for a 2xx status.
        """
        if HTTP_STATUS_OK_MIN <= status_code < HTTP_STATUS_OK_MAX:
            return None
        kind = _EXACT_KINDS.get(status_code)
        if kind is None:
            if HTTP_STATUS_BAD_REQUEST < status_code < HTTP_STATUS_CLIENT_ERROR_MAX:
                kind = HTTPErrorKind.CLIENT_ERROR
            elif HTTP_STATUS_SERVER_ERROR < status_code < HTTP_STATUS_SERVER_ERROR_MAX:
                kind = HTTPErrorKind.SERVER_ERROR_5XX
            else:
                kind = HTTPErrorKind.UNKNOWN_CODE
        return cls(kind, status_code)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HTTPError):
            return (self.kind, self.status_code) == (other.kind, other.status_code)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.kind, self.status_code))
