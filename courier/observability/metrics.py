"""Metrics for request execution."""

from collections import Counter
from threading import Lock

from courier.models.errors import RequestErrorClass


class RequestMetrics:
    """Thread-safe counters for request executions.

    One instance is shared by every execution of a manager, so all updates
    go through a lock. Tracks:
    - requests_total: executions that started
    - attempts_total: pipeline attempts, retries included
    - retries_total: attempts after the first
    - failures_total{error_class}: executions that ended in an error
    - fallbacks_total: executions answered by a fallback response
    - cancellations_total: executions cancelled by the caller
    - sla_exceeded_total: executions whose SLA deadline elapsed
    """

    def __init__(self) -> None:
        """Initialize all counters to zero."""
        self._lock = Lock()
        self._requests = 0
        self._attempts = 0
        self._retries = 0
        self._successes = 0
        self._fallbacks = 0
        self._cancellations = 0
        self._sla_exceeded = 0
        self._failures: Counter[str] = Counter()
        self._status_codes: Counter[int] = Counter()

    def record_request(self) -> None:
        """Record the start of an execution."""
        with self._lock:
            self._requests += 1

    def record_attempt(self, attempt: int) -> None:
        """Record a pipeline attempt.

        Args:
            attempt: Zero-based attempt number; anything above 0 is a retry.
        """
        with self._lock:
            self._attempts += 1
            if attempt > 0:
                self._retries += 1

    def record_response(self, status_code: int | None) -> None:
        """Record an assembled response.

        Args:
            status_code: HTTP status code, if the response carried one.
        """
        if status_code is None:
            return
        with self._lock:
            self._status_codes[status_code] += 1

    def record_success(self, used_fallback: bool = False) -> None:
        """Record a successful execution.

        Args:
            used_fallback: Whether a fallback response was delivered.
        """
        with self._lock:
            self._successes += 1
            if used_fallback:
                self._fallbacks += 1

    def record_failure(self, error_class: RequestErrorClass) -> None:
        """Record a failed execution.

        Args:
            error_class: Classification of the delivered error.
        """
        with self._lock:
            self._failures[error_class.value] += 1

    def record_cancellation(self) -> None:
        """Record an execution cancelled by its caller."""
        with self._lock:
            self._cancellations += 1

    def record_sla_exceeded(self) -> None:
        """Record an execution whose SLA deadline elapsed."""
        with self._lock:
            self._sla_exceeded += 1

    @property
    def requests_total(self) -> int:
        """Executions started."""
        with self._lock:
            return self._requests

    @property
    def attempts_total(self) -> int:
        """Pipeline attempts, retries included."""
        with self._lock:
            return self._attempts

    @property
    def retries_total(self) -> int:
        """Attempts after the first."""
        with self._lock:
            return self._retries

    @property
    def successes_total(self) -> int:
        """Executions delivering a response."""
        with self._lock:
            return self._successes

    @property
    def fallbacks_total(self) -> int:
        """Executions answered by a fallback response."""
        with self._lock:
            return self._fallbacks

    @property
    def cancellations_total(self) -> int:
        """Executions cancelled by the caller."""
        with self._lock:
            return self._cancellations

    @property
    def sla_exceeded_total(self) -> int:
        """Executions whose SLA deadline elapsed."""
        with self._lock:
            return self._sla_exceeded

    def failures_total(self) -> dict[str, int]:
        """Failures keyed by error class value."""
        with self._lock:
            return dict(self._failures)

    def to_dict(self) -> dict[str, int | dict[str, int] | dict[int, int]]:
        """Convert metrics to a dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        with self._lock:
            return {
                "requests_total": self._requests,
                "attempts_total": self._attempts,
                "retries_total": self._retries,
                "successes_total": self._successes,
                "fallbacks_total": self._fallbacks,
                "cancellations_total": self._cancellations,
                "sla_exceeded_total": self._sla_exceeded,
                "failures_total": dict(self._failures),
                "responses_by_status": dict(self._status_codes),
            }
