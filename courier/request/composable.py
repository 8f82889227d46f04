"""Fluent builder for request descriptors.

Example:
    >>> operation = (
    ...     ComposableRequest(request_type=dict, response_type=dict, error_type=HTTPError)
    ...     .path("/users")
    ...     .method(RequestMethod.POST)
    ...     .header(HeaderKey.CONTENT_TYPE, ContentType.JSON)
    ...     .body({"name": "morpheus", "job": "leader"})
    ...     .send(manager)
    ... )
"""

import copy
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from courier.coding.codecs import BodyDecoder, BodyEncoder
from courier.coding.registry import CodecNotFoundError, CodecRegistry, default_registry
from courier.coding.validators import ResponseValidator
from courier.constants import DEFAULT_REQUEST_TIMEOUT_SECONDS
from courier.models.authentication import BasicAuthentication, TokenAuthentication
from courier.models.errors import HTTPError
from courier.models.headers import merge_headers
from courier.models.method import RequestMethod
from courier.models.response import Response
from courier.request.descriptor import RequestDescriptor
from courier.transport.httpx_transport import default_transport


if TYPE_CHECKING:
    from courier.execution.manager import RequestManager
    from courier.execution.operation import RequestOperation


RequestBodyT = TypeVar("RequestBodyT")
ResponseBodyT = TypeVar("ResponseBodyT")
ValueT = TypeVar("ValueT")

# A builder field holds either a literal value or a zero-argument thunk
Deferred = ValueT | Callable[[], ValueT]


def _evaluate(value: Any) -> Any:
    return value() if callable(value) else value


def _unresolved_encoder(body_type: type[Any]) -> BodyEncoder[Any]:
    def encode(body: Any) -> bytes | None:
        raise CodecNotFoundError(body_type, "encoder")

    return BodyEncoder(encode)


def _unresolved_decoder(body_type: type[Any]) -> BodyDecoder[Any]:
    def decode(data: bytes | None) -> Any:
        raise CodecNotFoundError(body_type, "decoder")

    return BodyDecoder(decode)


class ComposableRequest(Generic[RequestBodyT, ResponseBodyT]):
    """Immutable fluent builder producing ``RequestDescriptor`` values.

    Every setter returns a modified copy. Setters accept a literal value or a
    zero-argument callable evaluated by ``build()``; callables are always
    treated as thunks, never as values. ``query``/``header`` append in call
    order, while ``queries``/``headers`` given a mapping replace everything
    accumulated so far.

    Codecs are resolved from ``request_type``/``response_type`` through the
    codec registry when the builder is created. A type without a registered
    codec gets one that fails at use, unless a custom codec is set. With
    ``error_type=HTTPError`` the status-code validator is the default;
    otherwise every response is accepted.
    """

    def __init__(
        self,
        request_type: type[RequestBodyT] | None = None,
        response_type: type[ResponseBodyT] | None = None,
        error_type: type[Exception] | None = None,
        registry: CodecRegistry | None = None,
    ) -> None:
        """Initialize an empty builder.

        Args:
            request_type: Request body type used to pick the default encoder.
            response_type: Response body type used to pick the default decoder.
            error_type: Validation error type used to pick the default validator.
            registry: Codec registry. Defaults to the built-in codecs.
        """
        registry = registry or default_registry()
        self._encoder: BodyEncoder[Any] = self._resolve_encoder(registry, request_type)
        self._decoder: BodyDecoder[Any] = self._resolve_decoder(registry, response_type)
        self._validator: ResponseValidator[Any, Any] = (
            ResponseValidator.status_code()
            if error_type is not None and issubclass(error_type, HTTPError)
            else ResponseValidator.unsafe()
        )

        self._path: Deferred[str] = ""
        self._query: Deferred[Mapping[str, str]] = {}
        self._query_items: tuple[Deferred[tuple[str, str]], ...] = ()
        self._method: Deferred[RequestMethod] = RequestMethod.GET
        self._headers: Deferred[Mapping[str, str]] = {}
        self._header_items: tuple[Deferred[tuple[str, str | None]], ...] = ()
        self._body: Deferred[RequestBodyT | None] = None
        self._authentication: Deferred[BasicAuthentication | TokenAuthentication | None] = None
        self._fallback: Deferred[Response[Any] | None] = None
        self._timeout: Deferred[float] = DEFAULT_REQUEST_TIMEOUT_SECONDS

    @staticmethod
    def _resolve_encoder(
        registry: CodecRegistry, body_type: type[Any] | None
    ) -> BodyEncoder[Any]:
        if body_type is None:
            return BodyEncoder.passthrough()
        try:
            return registry.encoder_for(body_type)
        except CodecNotFoundError:
            return _unresolved_encoder(body_type)

    @staticmethod
    def _resolve_decoder(
        registry: CodecRegistry, body_type: type[Any] | None
    ) -> BodyDecoder[Any]:
        if body_type is None:
            return BodyDecoder.passthrough()
        try:
            return registry.decoder_for(body_type)
        except CodecNotFoundError:
            return _unresolved_decoder(body_type)

    def _with(self, **fields: Any) -> "ComposableRequest[RequestBodyT, ResponseBodyT]":
        clone = copy.copy(self)
        for name, value in fields.items():
            setattr(clone, f"_{name}", value)
        return clone

    def path(self, path: Deferred[str]) -> "ComposableRequest[RequestBodyT, ResponseBodyT]":
        """Set the path appended to the host."""
        return self._with(path=path)

    def query(
        self,
        name: str | Callable[[], tuple[str, str]],
        value: str | None = None,
    ) -> "ComposableRequest[RequestBodyT, ResponseBodyT]":
        """Append one query pair.

        Args:
            name: Query name, or a thunk returning a ``(name, value)`` pair.
            value: Query value when ``name`` is a string.
        """
        item = name if callable(name) else (name, "" if value is None else value)
        return self._with(query_items=(*self._query_items, item))

    def queries(
        self,
        queries: Mapping[str, str] | Callable[[], Mapping[str, str]] | Iterable[tuple[str, str]],
    ) -> "ComposableRequest[RequestBodyT, ResponseBodyT]":
        """Add or replace query pairs.

        A mapping (or a thunk returning one) replaces all queries so far. An
        iterable of pairs is appended.
        """
        if isinstance(queries, Mapping) or callable(queries):
            return self._with(query=queries, query_items=())
        return self._with(query_items=(*self._query_items, *queries))

    def method(
        self, method: Deferred[RequestMethod | str]
    ) -> "ComposableRequest[RequestBodyT, ResponseBodyT]":
        """Set the HTTP method."""
        return self._with(method=method)

    def header(
        self,
        key: str | Callable[[], tuple[str, str | None]],
        value: str | None = None,
    ) -> "ComposableRequest[RequestBodyT, ResponseBodyT]":
        """Append one header; a None value removes the header instead.

        Args:
            key: Header name, or a thunk returning a ``(name, value)`` pair.
            value: Header value when ``key`` is a string.
        """
        item = key if callable(key) else (key, value)
        return self._with(header_items=(*self._header_items, item))

    def headers(
        self,
        headers: Mapping[str, str] | Callable[[], Mapping[str, str]] | Iterable[tuple[str, str]],
    ) -> "ComposableRequest[RequestBodyT, ResponseBodyT]":
        """Add or replace headers.

        A mapping (or a thunk returning one) replaces all headers so far. An
        iterable of pairs is appended.
        """
        if isinstance(headers, Mapping) or callable(headers):
            return self._with(headers=headers, header_items=())
        return self._with(header_items=(*self._header_items, *headers))

    def body(
        self, body: Deferred[RequestBodyT | None]
    ) -> "ComposableRequest[RequestBodyT, ResponseBodyT]":
        """Set the request body."""
        return self._with(body=body)

    def authentication(
        self, authentication: Deferred[BasicAuthentication | TokenAuthentication | None]
    ) -> "ComposableRequest[RequestBodyT, ResponseBodyT]":
        """Set a credential overriding the manager's backup credential."""
        return self._with(authentication=authentication)

    def fallback_response(
        self, response: Deferred[Response[Any] | None]
    ) -> "ComposableRequest[RequestBodyT, ResponseBodyT]":
        """Set the response delivered when execution fails."""
        return self._with(fallback=response)

    def encode_body(
        self,
        encoder: BodyEncoder[RequestBodyT] | Callable[[RequestBodyT | None], bytes | None],
    ) -> "ComposableRequest[RequestBodyT, ResponseBodyT]":
        """Use a custom request body encoder."""
        if not isinstance(encoder, BodyEncoder):
            encoder = BodyEncoder(encoder)
        return self._with(encoder=encoder)

    def decode_body(
        self,
        decoder: BodyDecoder[ResponseBodyT] | Callable[[bytes | None], ResponseBodyT | None],
    ) -> "ComposableRequest[RequestBodyT, ResponseBodyT]":
        """Use a custom response body decoder."""
        if not isinstance(decoder, BodyDecoder):
            decoder = BodyDecoder(decoder)
        return self._with(decoder=decoder)

    def validate_response(
        self,
        validator: ResponseValidator[ResponseBodyT, Any]
        | Callable[[Response[ResponseBodyT]], Response[ResponseBodyT]],
        error_type: type[Exception] = Exception,
    ) -> "ComposableRequest[RequestBodyT, ResponseBodyT]":
        """Use a custom response validator.

        Args:
            validator: Validator, or a callable raising ``error_type`` to reject.
            error_type: Error type a bare callable declares.
        """
        if not isinstance(validator, ResponseValidator):
            validator = ResponseValidator(validator, error_type)
        return self._with(validator=validator)

    def timeout_interval(
        self, interval: Deferred[float]
    ) -> "ComposableRequest[RequestBodyT, ResponseBodyT]":
        """Set the per-request transport timeout in seconds."""
        return self._with(timeout=interval)

    def build(self) -> RequestDescriptor[RequestBodyT, ResponseBodyT]:
        """Evaluate every field once and freeze the result.

        Returns:
            The request descriptor.

        Raises:
            ValueError: If an evaluated field is invalid.
        """
        query = [(str(k), str(v)) for k, v in _evaluate(self._query).items()]
        query.extend(_evaluate(item) for item in self._query_items)

        headers = merge_headers(_evaluate(self._headers))
        for item in self._header_items:
            key, value = _evaluate(item)
            if value is None:
                headers = {k: v for k, v in headers.items() if k.lower() != key.lower()}
            else:
                headers = merge_headers(headers, {key: value})

        return RequestDescriptor(
            path=_evaluate(self._path),
            query=tuple(query),
            method=_evaluate(self._method),
            headers=headers,
            body=_evaluate(self._body),
            authentication=_evaluate(self._authentication),
            fallback_response=_evaluate(self._fallback),
            request_encoder=self._encoder,
            response_decoder=self._decoder,
            response_validator=self._validator,
            timeout_interval=_evaluate(self._timeout),
        )

    def send(
        self,
        target: "RequestManager | str",
        retries: int | None = None,
        sla: float | None = None,
        fallback: Response[Any] | None = None,
    ) -> "RequestOperation":
        """Build the descriptor and execute it.

        Args:
            target: Manager to execute on, or a host URL. A host URL gets a
                manager with default configuration sending through the
                shared ``default_transport()``.
            retries: Additional attempts after the first.
            sla: Deadline in seconds covering every attempt.
            fallback: Response used on failure when none was set here.

        Returns:
            The idle request operation.
        """
        from courier.execution.manager import RequestManager

        if isinstance(target, str):
            manager = RequestManager(target, transport=default_transport())
        else:
            manager = target
        return manager.execute(self.build(), retries=retries, sla=sla, fallback=fallback)
