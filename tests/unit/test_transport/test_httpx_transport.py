"""Unit tests for the httpx transport."""

import threading

import httpx
import pytest

from courier.models.method import RequestMethod
from courier.models.wire import WireRequest
from courier.transport.base import (
    Transport,
    TransportError,
    TransportErrorKind,
    TransportResponse,
    TransportResult,
)
from courier.transport.httpx_transport import (
    HttpxTask,
    HttpxTransport,
    close_default_transport,
    default_transport,
)


def wire(url: str = "https://api.example.com/items", **kwargs: object) -> WireRequest:
    """Build a GET wire request."""
    fields = {"url": url, "method": RequestMethod.GET, "timeout": 5.0}
    fields.update(kwargs)
    return WireRequest(**fields)


def mock_client(handler: object) -> httpx.Client:
    """Create an httpx client backed by MockTransport."""
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestHttpxTransportSend:
    """Tests for synchronous sending."""

    def test_successful_response(self) -> None:
        """Status, headers, body and URL are captured."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, content=b"created", headers={"X-Id": "7"})

        transport = HttpxTransport(client=mock_client(handler))
        result = transport.send(
            wire(method=RequestMethod.POST, headers={"X-Trace": "1"}, body=b"payload")
        )

        assert isinstance(result, TransportResponse)
        assert result.body == b"created"
        assert result.url == "https://api.example.com/items"
        assert result.http is not None
        assert result.http.status_code == 201
        assert result.http.headers["x-id"] == "7"
        assert seen[0].method == "POST"
        assert seen[0].headers["X-Trace"] == "1"
        assert seen[0].content == b"payload"

    def test_non_2xx_is_still_a_response(self) -> None:
        """HTTP errors are responses; status validation happens later."""
        transport = HttpxTransport(
            client=mock_client(lambda request: httpx.Response(404, content=b"missing"))
        )

        result = transport.send(wire())

        assert isinstance(result, TransportResponse)
        assert result.http is not None
        assert result.http.status_code == 404

    def test_timeout_maps_to_timeout_kind(self) -> None:
        """httpx timeouts become TIMEOUT errors."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        result = HttpxTransport(client=mock_client(handler)).send(wire())

        assert isinstance(result, TransportError)
        assert result.kind == TransportErrorKind.TIMEOUT
        assert isinstance(result.cause, httpx.ReadTimeout)

    def test_connect_error_maps_to_failure(self) -> None:
        """Other httpx errors become FAILURE errors."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        result = HttpxTransport(client=mock_client(handler)).send(wire())

        assert isinstance(result, TransportError)
        assert result.kind == TransportErrorKind.FAILURE


class TestHttpxTransportSubmit:
    """Tests for asynchronous submission."""

    def test_submit_completes_once(self) -> None:
        """The completion receives the result from a worker thread."""
        done = threading.Event()
        results: list[TransportResult] = []

        def completion(result: TransportResult) -> None:
            results.append(result)
            done.set()

        with HttpxTransport(
            client=mock_client(lambda request: httpx.Response(200, content=b"ok"))
        ) as transport:
            transport.submit(wire(), completion)
            assert done.wait(timeout=5)

        assert len(results) == 1
        assert isinstance(results[0], TransportResponse)

    def test_satisfies_protocol(self) -> None:
        """HttpxTransport is a Transport."""
        with HttpxTransport(client=mock_client(lambda r: httpx.Response(200))) as transport:
            assert isinstance(transport, Transport)

    @pytest.mark.unit
    def test_cancel_suppresses_completion(self) -> None:
        """A cancelled task never invokes its completion."""
        started = threading.Event()
        release = threading.Event()
        finished = threading.Event()
        results: list[TransportResult] = []

        def handler(request: httpx.Request) -> httpx.Response:
            started.set()
            release.wait(timeout=5)
            finished.set()
            return httpx.Response(200)

        with HttpxTransport(client=mock_client(handler), max_workers=1) as transport:
            task = transport.submit(wire(), results.append)
            assert started.wait(timeout=5)
            task.cancel()
            release.set()
            finished.wait(timeout=5)

        assert results == []


class TestHttpxTask:
    """Tests for HttpxTask bookkeeping."""

    def test_complete_after_cancel_is_dropped(self) -> None:
        """complete() reports False once cancelled."""
        results: list[TransportResult] = []
        task = HttpxTask(results.append)

        task.cancel()

        assert task.complete(TransportResponse()) is False
        assert results == []

    def test_cancel_after_complete_is_noop(self) -> None:
        """Cancelling a finished task changes nothing."""
        results: list[TransportResult] = []
        task = HttpxTask(results.append)

        assert task.complete(TransportResponse()) is True
        task.cancel()

        assert len(results) == 1
        assert task.is_finished


class TestDefaultTransport:
    """Tests for the shared default transport."""

    def test_created_once(self) -> None:
        """Repeated calls return the same transport."""
        try:
            assert default_transport() is default_transport()
        finally:
            close_default_transport()

    def test_close_resets(self) -> None:
        """After closing, a fresh transport is created on demand."""
        first = default_transport()
        close_default_transport()
        try:
            second = default_transport()
            assert second is not first
            assert isinstance(second, HttpxTransport)
        finally:
            close_default_transport()

    def test_close_without_transport_is_noop(self) -> None:
        """Closing before first use does nothing."""
        close_default_transport()
        close_default_transport()
