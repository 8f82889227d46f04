"""Value types shared by request descriptors and execution."""

from courier.models.authentication import (
    BasicAuthentication,
    RequestAuthentication,
    TokenAuthentication,
    TokenType,
)
from courier.models.errors import (
    HTTPError,
    HTTPErrorKind,
    MalformedRequestError,
    NoValidationError,
    OperationCancelledError,
    RequestError,
    RequestErrorClass,
    ResponseDecodingError,
    ResponseValidationError,
    SlaExceededError,
    TimedOutError,
    TransportFailedError,
    UnknownRequestError,
)
from courier.models.headers import (
    CacheControl,
    ContentType,
    HeaderKey,
    get_header,
    merge_headers,
)
from courier.models.method import RequestMethod
from courier.models.parameters import RequestParameters
from courier.models.response import Response
from courier.models.wire import WireRequest


__all__ = [
    # Authentication
    "BasicAuthentication",
    "RequestAuthentication",
    "TokenAuthentication",
    "TokenType",
    # Errors
    "HTTPError",
    "HTTPErrorKind",
    "MalformedRequestError",
    "NoValidationError",
    "OperationCancelledError",
    "RequestError",
    "RequestErrorClass",
    "ResponseDecodingError",
    "ResponseValidationError",
    "SlaExceededError",
    "TimedOutError",
    "TransportFailedError",
    "UnknownRequestError",
    # Headers
    "CacheControl",
    "ContentType",
    "HeaderKey",
    "get_header",
    "merge_headers",
    # Method, parameters, response
    "RequestMethod",
    "RequestParameters",
    "Response",
    "WireRequest",
]
