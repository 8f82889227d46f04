"""httpx-backed transport."""

from concurrent.futures import Future, ThreadPoolExecutor
from threading import Lock

import httpx
import structlog

from courier.constants import DEFAULT_TRANSPORT_TIMEOUT_SECONDS, DEFAULT_TRANSPORT_WORKERS
from courier.models.wire import WireRequest
from courier.observability.redact import redact_url_credentials
from courier.transport.base import (
    HttpMetadata,
    TransportCompletion,
    TransportError,
    TransportErrorKind,
    TransportResponse,
    TransportResult,
)


logger = structlog.get_logger()


class HttpxTask:
    """Cancellable handle for one request running on the worker pool.

    The completion callback fires at most once, and never after ``cancel``.
    """

    def __init__(self, completion: TransportCompletion) -> None:
        """Initialize the task.

        Args:
            completion: Callback receiving the transport result.
        """
        self._completion = completion
        self._lock = Lock()
        self._finished = False
        self._future: Future[None] | None = None

    @property
    def is_finished(self) -> bool:
        """Check whether the task completed or was cancelled."""
        with self._lock:
            return self._finished

    def attach(self, future: "Future[None]") -> None:
        """Bind the worker future so cancellation can dequeue it."""
        with self._lock:
            self._future = future
            finished = self._finished
        if finished:
            future.cancel()

    def cancel(self) -> None:
        """Cancel the request.

        A request still queued is removed from the pool. A request already on
        the wire runs to completion but its result is discarded.
        """
        with self._lock:
            if self._finished:
                return
            self._finished = True
            future = self._future
        if future is not None:
            future.cancel()

    def complete(self, result: TransportResult) -> bool:
        """Deliver a result unless the task already finished.

        Returns:
            True if the completion callback was invoked.
        """
        with self._lock:
            if self._finished:
                return False
            self._finished = True
        self._completion(result)
        return True


class HttpxTransport:
    """Transport sending wire requests with a shared ``httpx.Client``.

    Requests run on a thread pool so ``submit`` never blocks. The client's
    connection pool is shared read-only by every request.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        max_workers: int = DEFAULT_TRANSPORT_WORKERS,
    ) -> None:
        """Initialize the transport.

        Args:
            client: Client to send with. A client following redirects is
                created (and owned) when omitted.
            max_workers: Size of the worker pool.
        """
        self._owns_client = client is None
        self._client = client or httpx.Client(
            follow_redirects=True,
            timeout=DEFAULT_TRANSPORT_TIMEOUT_SECONDS,
        )
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="courier-transport",
        )
        self._log = logger.bind(component="transport")

    def submit(self, request: WireRequest, completion: TransportCompletion) -> HttpxTask:
        """Queue a request on the worker pool.

        Args:
            request: Request to send.
            completion: Receives the result once.

        Returns:
            Cancellable task handle.
        """
        task = HttpxTask(completion)
        future = self._executor.submit(self._run, request, task)
        task.attach(future)
        return task

    def close(self) -> None:
        """Stop the worker pool and close an owned client."""
        self._executor.shutdown(wait=False, cancel_futures=True)
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _run(self, request: WireRequest, task: HttpxTask) -> None:
        if task.is_finished:
            return
        task.complete(self.send(request))

    def send(self, request: WireRequest) -> TransportResult:
        """Send a request synchronously.

        Args:
            request: Request to send.

        Returns:
            TransportResponse, or TransportError describing the failure.
        """
        log = self._log.bind(
            method=request.method.value,
            url=redact_url_credentials(request.url),
        )
        try:
            http_request = request.to_httpx(self._client)
            response = self._client.send(http_request)
        except httpx.TimeoutException as e:
            log.debug("transport_timeout", error=str(e))
            return TransportError(
                TransportErrorKind.TIMEOUT, f"Request timed out: {e}", cause=e
            )
        except httpx.HTTPError as e:
            log.debug("transport_failed", error=str(e))
            return TransportError(
                TransportErrorKind.FAILURE, f"Request failed: {e}", cause=e
            )
        except Exception as e:  # noqa: BLE001
            log.debug("transport_failed", error=str(e))
            return TransportError(
                TransportErrorKind.FAILURE, f"Unexpected error: {e}", cause=e
            )

        return TransportResponse(
            body=response.content,
            url=str(response.url),
            http=HttpMetadata(
                status_code=response.status_code,
                headers=dict(response.headers),
            ),
        )


_default_transport: HttpxTransport | None = None
_default_transport_lock = Lock()


def default_transport() -> HttpxTransport:
    """Get the process-wide transport used when sending to a bare host URL.

    Created on first use and shared afterwards, so one-off sends reuse a
    single client and worker pool.
    """
    global _default_transport  # noqa: PLW0603
    with _default_transport_lock:
        if _default_transport is None:
            _default_transport = HttpxTransport()
        return _default_transport


def close_default_transport() -> None:
    """Close the shared default transport, if one was created."""
    global _default_transport  # noqa: PLW0603
    with _default_transport_lock:
        transport, _default_transport = _default_transport, None
    if transport is not None:
        transport.close()
