"""Declarative HTTP request execution with retry, SLA and fallback policies."""

from courier.coding import (
    BodyDecoder,
    BodyEncoder,
    CodecRegistry,
    ResponseValidator,
    default_registry,
)
from courier.config import CourierSettings, ManagerConfig, load_manager_config
from courier.constants import COURIER_VERSION
from courier.execution import (
    ExecutionState,
    ManualScheduler,
    RequestManager,
    RequestOperation,
    ThreadingScheduler,
)
from courier.models import (
    BasicAuthentication,
    CacheControl,
    ContentType,
    HeaderKey,
    HTTPError,
    HTTPErrorKind,
    MalformedRequestError,
    OperationCancelledError,
    RequestError,
    RequestErrorClass,
    RequestMethod,
    RequestParameters,
    Response,
    ResponseDecodingError,
    ResponseValidationError,
    SlaExceededError,
    TimedOutError,
    TokenAuthentication,
    TokenType,
    TransportFailedError,
    UnknownRequestError,
)
from courier.observability import RequestMetrics, configure_logging
from courier.request import ComposableRequest, RequestDescriptor, Requestable
from courier.transport import HttpxTransport, Transport


__version__ = COURIER_VERSION

__all__ = [
    "BasicAuthentication",
    "BodyDecoder",
    "BodyEncoder",
    "CacheControl",
    "CodecRegistry",
    "ComposableRequest",
    "ContentType",
    "CourierSettings",
    "ExecutionState",
    "HTTPError",
    "HTTPErrorKind",
    "HeaderKey",
    "HttpxTransport",
    "MalformedRequestError",
    "ManagerConfig",
    "ManualScheduler",
    "OperationCancelledError",
    "RequestDescriptor",
    "RequestError",
    "RequestErrorClass",
    "RequestManager",
    "RequestMethod",
    "RequestMetrics",
    "RequestOperation",
    "RequestParameters",
    "Requestable",
    "Response",
    "ResponseDecodingError",
    "ResponseValidationError",
    "ResponseValidator",
    "SlaExceededError",
    "ThreadingScheduler",
    "TimedOutError",
    "TokenAuthentication",
    "TokenType",
    "Transport",
    "TransportFailedError",
    "UnknownRequestError",
    "configure_logging",
    "default_registry",
]
