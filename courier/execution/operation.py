"""Cancellable single-value request operation.

A ``RequestOperation`` runs one execution of an ``ExecutionPlan``: attempts
run sequentially (build, transport, assemble, validate), a single SLA deadline
spans all of them, and the final response or error is delivered exactly once.

Nothing happens until a caller asks for the outcome through ``subscribe()``
or ``result()``. Every state change goes through one lock, so cancellation,
transport completion and the SLA deadline can race freely: whichever claims
the outcome first wins and the others are discarded.
"""

import threading
import uuid
from collections.abc import Callable
from concurrent.futures import Executor
from dataclasses import dataclass
from functools import partial
from typing import Any

import structlog

from courier.execution.pipeline import ExecutionPlan
from courier.execution.scheduler import ScheduledAction, Scheduler
from courier.execution.state_machine import ExecutionState, ExecutionStateMachine
from courier.models.errors import (
    OperationCancelledError,
    RequestError,
    SlaExceededError,
    UnknownRequestError,
)
from courier.models.response import Response
from courier.observability.metrics import RequestMetrics
from courier.observability.redact import redact_headers, redact_url_credentials
from courier.transport.base import Transport, TransportResult, TransportTask


logger = structlog.get_logger()

Outcome = Response[Any] | RequestError
SuccessHandler = Callable[[Response[Any]], None]
FailureHandler = Callable[[RequestError], None]


@dataclass(frozen=True)
class _Subscriber:
    on_success: SuccessHandler
    on_failure: FailureHandler
    executor: Executor | None


class RequestOperation:
    """One execution of a request, delivered to a single subscriber.

    Attributes:
        request_id: Identifier bound to every log event of this execution.
    """

    def __init__(
        self,
        plan: ExecutionPlan,
        transport: Transport,
        scheduler: Scheduler,
        metrics: RequestMetrics,
    ) -> None:
        """Initialize an idle operation.

        Args:
            plan: Execution plan.
            transport: Transport used for every attempt.
            scheduler: Runs the SLA deadline.
            metrics: Metrics sink.
        """
        self.request_id = uuid.uuid4().hex[:12]
        self._plan = plan
        self._transport = transport
        self._scheduler = scheduler
        self._metrics = metrics

        self._lock = threading.Lock()
        self._done = threading.Event()
        self._machine = ExecutionStateMachine(self.request_id)
        self._attempt = 0
        self._pending_attempt: int | None = None
        self._driving = False
        self._task: TransportTask | None = None
        self._sla_handle: ScheduledAction | None = None
        self._subscriber: _Subscriber | None = None
        self._outcome: Outcome | None = None
        self._used_fallback = False

        self._log = logger.bind(
            component="request_manager",
            request_id=self.request_id,
            method=plan.descriptor.method.value,
            path=plan.descriptor.path,
        )

    @property
    def state(self) -> ExecutionState:
        """Get the current execution state."""
        with self._lock:
            return self._machine.state

    def done(self) -> bool:
        """Check whether the operation delivered an outcome or was cancelled."""
        return self._done.is_set()

    def cancelled(self) -> bool:
        """Check whether the operation was cancelled."""
        return self.state is ExecutionState.CANCELLED

    def subscribe(
        self,
        on_success: SuccessHandler,
        on_failure: FailureHandler,
        executor: Executor | None = None,
    ) -> "RequestOperation":
        """Register the subscriber and start the execution.

        Handlers run on ``executor`` when given, otherwise on whichever thread
        produced the outcome. Subscribing to a finished operation delivers its
        outcome right away; subscribing to a cancelled one delivers nothing.

        Args:
            on_success: Receives the final response.
            on_failure: Receives the final error.
            executor: Optional executor for handler invocation.

        Returns:
            This operation, for chaining.

        Raises:
            RuntimeError: If the operation already has a subscriber.
        """
        subscriber = _Subscriber(on_success, on_failure, executor)
        with self._lock:
            if self._subscriber is not None:
                msg = "RequestOperation supports a single subscriber"
                raise RuntimeError(msg)
            self._subscriber = subscriber
            state = self._machine.state
            outcome = self._outcome

        if state in (ExecutionState.SUCCEEDED, ExecutionState.FAILED):
            self._dispatch(subscriber, outcome)
        elif state is ExecutionState.IDLE:
            self._start()
        return self

    def result(self, timeout: float | None = None) -> Response[Any]:
        """Start the execution if needed and block until it finishes.

        Args:
            timeout: Seconds to wait; None waits forever.

        Returns:
            The final response.

        Raises:
            RequestError: The final error.
            OperationCancelledError: If the operation was cancelled.
            TimeoutError: If ``timeout`` elapsed first.
        """
        self._start()
        if not self._done.wait(timeout):
            msg = f"Request {self.request_id} did not finish within {timeout}s"
            raise TimeoutError(msg)

        with self._lock:
            state = self._machine.state
            outcome = self._outcome
        if state is ExecutionState.CANCELLED:
            msg = f"Request {self.request_id} was cancelled"
            raise OperationCancelledError(msg)
        if isinstance(outcome, RequestError):
            raise outcome
        return outcome

    def cancel(self) -> bool:
        """Cancel the execution.

        Stops retries, cancels the in-flight transport task and the SLA
        deadline, and drops any outcome not yet handed to the subscriber.

        Returns:
            True if this call cancelled the operation, False if it had already
            finished or been cancelled.
        """
        with self._lock:
            if self._machine.is_terminal:
                return False
            started = self._machine.state is not ExecutionState.IDLE
            self._machine.transition(ExecutionState.CANCELLED)
            task, self._task = self._task, None
            sla_handle, self._sla_handle = self._sla_handle, None
        self._done.set()

        if task is not None:
            task.cancel()
        if sla_handle is not None:
            sla_handle.cancel()
        if started:
            self._metrics.record_cancellation()
            self._log.info("request_cancelled")
        return True

    def _start(self) -> None:
        with self._lock:
            if self._machine.state is not ExecutionState.IDLE:
                return
            self._machine.transition(ExecutionState.BUILDING)

        self._metrics.record_request()
        self._log.info(
            "request_started",
            host=redact_url_credentials(self._plan.host),
            retries=self._plan.retries,
            sla_seconds=self._plan.sla,
        )

        sla_handle = self._scheduler.schedule(self._plan.sla, self._on_sla_elapsed)
        with self._lock:
            keep = self._machine.is_active
            if keep:
                self._sla_handle = sla_handle
                self._pending_attempt = 0
                self._driving = True
        if not keep:
            sla_handle.cancel()
            return

        self._drive()

    def _drive(self) -> None:
        """Run queued attempts until none is pending.

        Only one thread drives at a time. A retry requested while another
        thread drives (for example from a completion delivered inside
        ``submit``) is picked up by that thread's loop instead of nesting
        another attempt on the stack.
        """
        while True:
            with self._lock:
                attempt, self._pending_attempt = self._pending_attempt, None
                if attempt is None or self._machine.state is not ExecutionState.BUILDING:
                    self._driving = False
                    return
            self._run_attempt(attempt)

    def _run_attempt(self, attempt: int) -> None:
        self._metrics.record_attempt(attempt)
        try:
            wire = self._plan.build()
        except RequestError as e:
            self._attempt_failed(attempt, e)
            return
        except Exception as e:  # noqa: BLE001
            self._attempt_failed(attempt, UnknownRequestError(str(e), cause=e))
            return

        with self._lock:
            if attempt != self._attempt or self._machine.state is not ExecutionState.BUILDING:
                return
            self._machine.transition(ExecutionState.IN_FLIGHT)

        self._log.info(
            "attempt_started",
            attempt=attempt + 1,
            total_attempts=self._plan.total_attempts,
            url=redact_url_credentials(wire.url),
            headers=redact_headers(wire.headers),
        )

        try:
            task = self._transport.submit(wire, partial(self._on_transport_result, attempt))
        except Exception as e:  # noqa: BLE001
            self._attempt_failed(attempt, UnknownRequestError(str(e), cause=e))
            return

        # The completion may already have run (or the operation ended) during submit
        with self._lock:
            keep = (
                attempt == self._attempt
                and self._machine.state is ExecutionState.IN_FLIGHT
            )
            if keep:
                self._task = task
        if not keep:
            task.cancel()

    def _on_transport_result(self, attempt: int, result: TransportResult) -> None:
        with self._lock:
            if attempt != self._attempt or self._machine.state is not ExecutionState.IN_FLIGHT:
                self._log.debug("stale_completion_discarded", attempt=attempt + 1)
                return
            self._task = None
            self._machine.transition(ExecutionState.ASSEMBLING)

        try:
            response = self._plan.assemble(result)
        except RequestError as e:
            self._attempt_failed(attempt, e)
            return

        self._metrics.record_response(response.status_code)
        self._log.info(
            "response_received",
            attempt=attempt + 1,
            status_code=response.status_code,
            headers=redact_headers(response.headers),
        )

        with self._lock:
            if attempt != self._attempt or self._machine.state is not ExecutionState.ASSEMBLING:
                return
            self._machine.transition(ExecutionState.VALIDATING)

        try:
            validated = self._plan.validate(response)
        except RequestError as e:
            self._attempt_failed(attempt, e)
            return

        self._finish_success(attempt, validated)

    def _attempt_failed(self, attempt: int, error: RequestError) -> None:
        with self._lock:
            if attempt != self._attempt or not self._machine.is_active:
                return
            self._task = None
            retry = attempt < self._plan.retries
            drive = False
            if retry:
                self._attempt = attempt + 1
                self._machine.transition(ExecutionState.BUILDING)
                self._pending_attempt = attempt + 1
                drive = not self._driving
                self._driving = True
                sla_handle = None
            else:
                self._machine.transition(ExecutionState.FINISHING)
                sla_handle, self._sla_handle = self._sla_handle, None

        self._log.warning(
            "attempt_failed",
            attempt=attempt + 1,
            error_class=error.error_class.value,
            error=str(error),
        )
        if retry:
            self._log.info("retry_scheduled", next_attempt=attempt + 2)
            if drive:
                self._drive()
            return

        if sla_handle is not None:
            sla_handle.cancel()
        self._conclude(error)

    def _finish_success(self, attempt: int, response: Response[Any]) -> None:
        with self._lock:
            if attempt != self._attempt or not self._machine.is_active:
                return
            self._machine.transition(ExecutionState.FINISHING)
            sla_handle, self._sla_handle = self._sla_handle, None

        if sla_handle is not None:
            sla_handle.cancel()
        self._settle(response)

    def _on_sla_elapsed(self) -> None:
        with self._lock:
            if not self._machine.is_active:
                return
            self._machine.transition(ExecutionState.FINISHING)
            task, self._task = self._task, None
            self._sla_handle = None

        if task is not None:
            task.cancel()
        self._metrics.record_sla_exceeded()
        self._log.warning("sla_exceeded", sla_seconds=self._plan.sla)
        self._conclude(SlaExceededError())

    def _conclude(self, error: RequestError) -> None:
        try:
            response = self._plan.resolve_fallback(error)
        except RequestError as final_error:
            self._log.error(
                "request_failed",
                error_class=final_error.error_class.value,
                error=str(final_error),
            )
            self._settle(final_error)
            return

        self._log.info(
            "fallback_used",
            error_class=error.error_class.value,
            status_code=response.status_code,
        )
        self._settle(response, used_fallback=True)

    def _settle(self, outcome: Outcome, used_fallback: bool = False) -> None:
        with self._lock:
            if self._machine.state is not ExecutionState.FINISHING:
                return
            self._outcome = outcome
            self._used_fallback = used_fallback
            subscriber = self._subscriber
            queued = subscriber is not None and subscriber.executor is not None
            if not queued:
                self._complete_locked()

        if not queued:
            self._record_outcome(outcome)
            self._done.set()
            if subscriber is not None:
                self._invoke(subscriber, outcome)
            return

        try:
            subscriber.executor.submit(self._deliver_queued)
        except RuntimeError as e:
            self._log.warning("delivery_executor_unavailable", error=str(e))
            self._deliver_queued()

    def _deliver_queued(self) -> None:
        # A cancel that lands before this runs suppresses delivery
        with self._lock:
            if self._machine.state is not ExecutionState.FINISHING:
                return
            self._complete_locked()
            subscriber = self._subscriber
            outcome = self._outcome

        self._record_outcome(outcome)
        self._done.set()
        self._invoke(subscriber, outcome)

    def _complete_locked(self) -> None:
        if isinstance(self._outcome, RequestError):
            self._machine.transition(ExecutionState.FAILED)
        else:
            self._machine.transition(ExecutionState.SUCCEEDED)

    def _record_outcome(self, outcome: Outcome) -> None:
        if isinstance(outcome, RequestError):
            self._metrics.record_failure(outcome.error_class)
        else:
            self._metrics.record_success(used_fallback=self._used_fallback)
            self._log.info(
                "request_succeeded",
                status_code=outcome.status_code,
                used_fallback=self._used_fallback,
            )

    def _dispatch(self, subscriber: _Subscriber, outcome: Outcome) -> None:
        if subscriber.executor is None:
            self._invoke(subscriber, outcome)
        else:
            subscriber.executor.submit(self._invoke, subscriber, outcome)

    def _invoke(self, subscriber: _Subscriber, outcome: Outcome) -> None:
        try:
            if isinstance(outcome, RequestError):
                subscriber.on_failure(outcome)
            else:
                subscriber.on_success(outcome)
        except Exception:  # noqa: BLE001
            self._log.exception("subscriber_failed")
