"""Protocol interface for executable request descriptions."""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from courier.coding.codecs import BodyDecoder, BodyEncoder
from courier.coding.validators import ResponseValidator
from courier.models.authentication import BasicAuthentication, TokenAuthentication
from courier.models.method import RequestMethod
from courier.models.response import Response


@runtime_checkable
class Requestable(Protocol):
    """Protocol for anything the request manager can execute.

    ``RequestDescriptor`` is the stock implementation, but any object exposing
    these attributes (a hand-written class, a dataclass, a property-based
    wrapper) can be passed to ``RequestManager.execute`` interchangeably.
    """

    @property
    def path(self) -> str: ...

    @property
    def query(self) -> Sequence[tuple[str, str]]: ...

    @property
    def method(self) -> RequestMethod: ...

    @property
    def headers(self) -> Mapping[str, str]: ...

    @property
    def body(self) -> Any: ...

    @property
    def authentication(self) -> BasicAuthentication | TokenAuthentication | None: ...

    @property
    def fallback_response(self) -> Response[Any] | None: ...

    @property
    def request_encoder(self) -> BodyEncoder[Any]: ...

    @property
    def response_decoder(self) -> BodyDecoder[Any]: ...

    @property
    def response_validator(self) -> ResponseValidator[Any, Any]: ...

    @property
    def timeout_interval(self) -> float: ...
