"""Unit tests for ComposableRequest."""

import pytest
from pydantic import BaseModel

from courier.coding.codecs import BodyEncoder
from courier.coding.registry import CodecNotFoundError
from courier.execution.manager import RequestManager
from courier.execution.scheduler import ManualScheduler
from courier.models.authentication import TokenAuthentication
from courier.models.errors import HTTPError, HTTPErrorKind, NoValidationError
from courier.models.method import RequestMethod
from courier.models.response import Response
from courier.request.composable import ComposableRequest
from tests.helpers.transport import FakeTransport, http_response


class User(BaseModel):
    """Sample body model."""

    name: str
    job: str


class TestBuilderFields:
    """Tests for setters and build()."""

    @pytest.mark.unit
    def test_setters_return_copies(self) -> None:
        """Setters never modify the receiver."""
        base = ComposableRequest().path("/a")

        changed = base.path("/b")

        assert base.build().path == "/a"
        assert changed.build().path == "/b"

    def test_full_build(self) -> None:
        """Every field reaches the descriptor."""
        auth = TokenAuthentication(value="abc")
        fallback = Response(body=b"cached")

        descriptor = (
            ComposableRequest()
            .path("/users")
            .method(RequestMethod.PUT)
            .body(b"payload")
            .authentication(auth)
            .fallback_response(fallback)
            .timeout_interval(12.0)
            .build()
        )

        assert descriptor.path == "/users"
        assert descriptor.method == RequestMethod.PUT
        assert descriptor.body == b"payload"
        assert descriptor.authentication == auth
        assert descriptor.fallback_response == fallback
        assert descriptor.timeout_interval == 12.0

    def test_query_appends_in_order(self) -> None:
        """Single query pairs append, duplicates included."""
        descriptor = (
            ComposableRequest().query("page", "2").query("tag", "a").query("tag", "b").build()
        )

        assert descriptor.query == (("page", "2"), ("tag", "a"), ("tag", "b"))

    def test_queries_mapping_replaces(self) -> None:
        """A query mapping replaces earlier pairs; later pairs append."""
        descriptor = (
            ComposableRequest()
            .query("dropped", "1")
            .queries({"page": "1"})
            .queries([("tag", "x")])
            .build()
        )

        assert descriptor.query == (("page", "1"), ("tag", "x"))

    def test_header_none_removes(self) -> None:
        """A None header value removes that header case-insensitively."""
        descriptor = (
            ComposableRequest()
            .headers({"Accept": "*/*", "X-Debug": "1"})
            .header("x-debug", None)
            .header("X-Trace", "t")
            .build()
        )

        assert dict(descriptor.headers) == {"Accept": "*/*", "X-Trace": "t"}

    def test_headers_mapping_replaces(self) -> None:
        """A header mapping replaces earlier headers."""
        descriptor = ComposableRequest().header("X-Old", "1").headers({"X-New": "2"}).build()

        assert dict(descriptor.headers) == {"X-New": "2"}

    def test_thunks_evaluated_at_build(self) -> None:
        """Callables are evaluated each time build() runs."""
        counter = {"value": 0}

        def next_page() -> tuple[str, str]:
            counter["value"] += 1
            return ("page", str(counter["value"]))

        builder = ComposableRequest().query(next_page).path(lambda: "/items")

        assert builder.build().query == (("page", "1"),)
        assert builder.build().query == (("page", "2"),)
        assert builder.build().path == "/items"

    def test_invalid_timeout_raises_on_build(self) -> None:
        """Invalid evaluated fields raise ValueError."""
        with pytest.raises(ValueError):
            ComposableRequest().timeout_interval(0).build()


class TestCodecSelection:
    """Tests for default codecs and validators."""

    def test_types_select_codecs(self) -> None:
        """Request and response types pick registered codecs."""
        descriptor = ComposableRequest(request_type=User, response_type=dict).build()

        assert descriptor.request_encoder.encode(User(name="n", job="j")) == (
            b'{"name":"n","job":"j"}'
        )
        assert descriptor.response_decoder.decode(b'{"id": 1}') == {"id": 1}

    def test_unregistered_type_fails_at_use(self) -> None:
        """A type without a codec fails only when used."""
        descriptor = ComposableRequest(response_type=complex).build()

        with pytest.raises(CodecNotFoundError):
            descriptor.response_decoder.decode(b"1")

    def test_custom_encoder_overrides(self) -> None:
        """A custom codec replaces an unresolved one."""
        descriptor = (
            ComposableRequest(request_type=complex)
            .encode_body(lambda body: str(body).encode())
            .build()
        )

        assert isinstance(descriptor.request_encoder, BodyEncoder)
        assert descriptor.request_encoder.encode(1j) == b"1j"

    @pytest.mark.unit
    def test_http_error_type_selects_status_validator(self) -> None:
        """error_type=HTTPError validates status codes."""
        descriptor = ComposableRequest(error_type=HTTPError).build()

        with pytest.raises(HTTPError) as exc_info:
            descriptor.response_validator.validate(Response(status_code=404))

        assert exc_info.value.kind == HTTPErrorKind.NOT_FOUND

    def test_default_validator_accepts_all(self) -> None:
        """Without an HTTPError type every response is accepted."""
        descriptor = ComposableRequest().build()

        assert descriptor.response_validator.error_type is NoValidationError

    def test_custom_validator_callable(self) -> None:
        """A bare callable is wrapped with its declared error type."""

        def reject(response: Response[bytes]) -> Response[bytes]:
            raise KeyError("nope")

        descriptor = ComposableRequest().validate_response(reject, KeyError).build()

        assert descriptor.response_validator.error_type is KeyError


class TestSend:
    """Tests for send()."""

    def test_send_with_manager(self) -> None:
        """send() executes the built descriptor on the manager."""
        transport = FakeTransport([http_response(200, body=b'{"ok": true}')])
        manager = RequestManager(
            "https://app.example.com/api",
            transport=transport,
            scheduler=ManualScheduler(),
        )

        operation = (
            ComposableRequest(response_type=dict, error_type=HTTPError)
            .path("/status")
            .query("verbose", "1")
            .send(manager)
        )
        response = operation.result(timeout=1)

        assert response.body == {"ok": True}
        assert transport.requests[0].url == "https://app.example.com/api/status?verbose=1"

    def test_send_is_lazy(self) -> None:
        """Nothing is sent until the operation is consumed."""
        transport = FakeTransport([http_response()])
        manager = RequestManager(
            "https://app.example.com", transport=transport, scheduler=ManualScheduler()
        )

        ComposableRequest().send(manager)

        assert transport.requests == []

    def test_host_sends_share_one_transport(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Sends to a host URL reuse the default transport instead of opening clients."""
        shared = FakeTransport([http_response(200, b"ok")] * 5)
        opened: list[object] = []
        monkeypatch.setattr("courier.request.composable.default_transport", lambda: shared)
        monkeypatch.setattr(
            "courier.execution.manager.HttpxTransport",
            lambda *args, **kwargs: opened.append(args),
        )

        bodies = [
            ComposableRequest().path("/x").send("https://app.example.com").result(timeout=1).body
            for _ in range(5)
        ]

        assert bodies == [b"ok"] * 5
        assert opened == []
        assert len(shared.requests) == 5
