"""Immutable request descriptors."""

import dataclasses
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from courier.coding.codecs import BodyDecoder, BodyEncoder
from courier.coding.validators import ResponseValidator
from courier.constants import DEFAULT_REQUEST_TIMEOUT_SECONDS
from courier.models.authentication import BasicAuthentication, TokenAuthentication
from courier.models.method import RequestMethod
from courier.models.response import Response


RequestBodyT = TypeVar("RequestBodyT")
ResponseBodyT = TypeVar("ResponseBodyT")


@dataclass(frozen=True)
class RequestDescriptor(Generic[RequestBodyT, ResponseBodyT]):
    """Everything needed to build and interpret one HTTP exchange.

    Defaults send ``bytes`` bodies unchanged, return raw response bytes, and
    accept every response. ``headers`` is frozen into a read-only mapping and
    ``query`` into a tuple, so a descriptor cannot change while it executes.

    Attributes:
        path: Path appended to the manager host's path.
        query: Ordered query pairs; duplicate names are kept.
        method: HTTP method.
        headers: Request headers.
        body: Optional request body, encoded by ``request_encoder``.
        authentication: Credential overriding the manager's backup credential.
        fallback_response: Response substituted when execution fails.
        request_encoder: Body-to-bytes transform.
        response_decoder: Bytes-to-body transform.
        response_validator: Accepts or rejects assembled responses.
        timeout_interval: Per-request transport timeout in seconds.
    """

    path: str = ""
    query: Sequence[tuple[str, str]] = ()
    method: RequestMethod = RequestMethod.GET
    headers: Mapping[str, str] = field(default_factory=dict)
    body: RequestBodyT | None = None
    authentication: BasicAuthentication | TokenAuthentication | None = None
    fallback_response: Response[Any] | None = None
    request_encoder: BodyEncoder[Any] = field(default_factory=BodyEncoder.passthrough)
    response_decoder: BodyDecoder[Any] = field(default_factory=BodyDecoder.passthrough)
    response_validator: ResponseValidator[Any, Any] = field(
        default_factory=ResponseValidator.unsafe
    )
    timeout_interval: float = DEFAULT_REQUEST_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if self.timeout_interval <= 0:
            msg = f"timeout_interval must be positive, got {self.timeout_interval}"
            raise ValueError(msg)
        object.__setattr__(self, "method", RequestMethod(self.method))
        object.__setattr__(
            self, "query", tuple((str(name), str(value)) for name, value in self.query)
        )
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def replace(self, **changes: Any) -> "RequestDescriptor[RequestBodyT, ResponseBodyT]":
        """Return a copy with some fields replaced."""
        return dataclasses.replace(self, **changes)
