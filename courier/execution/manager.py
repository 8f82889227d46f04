"""Request manager: turns request descriptions into running operations."""

from threading import Lock
from typing import Any

import structlog

from courier.config.manager import ManagerConfig
from courier.config.settings import CourierSettings
from courier.constants import DEFAULT_SLA_SECONDS
from courier.execution.operation import RequestOperation
from courier.execution.pipeline import ExecutionPlan
from courier.execution.scheduler import Scheduler, ThreadingScheduler
from courier.models.authentication import RequestAuthentication
from courier.models.response import Response
from courier.observability.metrics import RequestMetrics
from courier.observability.redact import redact_url_credentials
from courier.request.protocols import Requestable
from courier.transport.base import Transport
from courier.transport.httpx_transport import HttpxTransport


logger = structlog.get_logger()


class RequestManager:
    """Executes requests against one host with shared configuration.

    The manager holds no per-call state. Configuration lives in an immutable
    ``ManagerConfig`` snapshot that setters replace under a lock; each
    ``execute()`` call captures the snapshot once, so concurrent executions
    never observe a half-applied change.
    """

    def __init__(
        self,
        host: str,
        config: ManagerConfig | None = None,
        transport: Transport | None = None,
        scheduler: Scheduler | None = None,
        metrics: RequestMetrics | None = None,
        default_retries: int = 0,
        default_sla: float = DEFAULT_SLA_SECONDS,
    ) -> None:
        """Initialize the manager.

        Args:
            host: Base URL every request path is appended to.
            config: Manager configuration. Defaults to ``ManagerConfig()``.
            transport: Transport to send with. An ``HttpxTransport`` owned by
                the manager is created when omitted.
            scheduler: Scheduler for SLA deadlines.
            metrics: Metrics sink shared by all executions.
            default_retries: Retries used when ``execute`` gets none.
            default_sla: SLA in seconds used when ``execute`` gets none.

        Raises:
            ValueError: If the defaults are out of range.
        """
        _check_policy(default_retries, default_sla)
        self.host = host
        self._config = config or ManagerConfig()
        self._config_lock = Lock()
        self._owns_transport = transport is None
        self._transport: Transport = transport or HttpxTransport()
        self._scheduler = scheduler or ThreadingScheduler()
        self.metrics = metrics or RequestMetrics()
        self.default_retries = default_retries
        self.default_sla = default_sla
        self._log = logger.bind(
            component="request_manager",
            host=redact_url_credentials(host),
        )

    @classmethod
    def for_host(cls, host: str) -> "RequestManager":
        """Create a manager with default configuration and transport."""
        return cls(host)

    @classmethod
    def from_settings(
        cls,
        host: str,
        settings: CourierSettings,
        transport: Transport | None = None,
    ) -> "RequestManager":
        """Create a manager configured from environment settings.

        Args:
            host: Base URL.
            settings: Loaded settings.
            transport: Optional transport.

        Returns:
            Configured manager.
        """
        return cls(
            host,
            config=settings.to_manager_config(),
            transport=transport,
            default_retries=settings.default_retries,
            default_sla=settings.default_sla_seconds,
        )

    @property
    def config(self) -> ManagerConfig:
        """Get the current configuration snapshot."""
        with self._config_lock:
            return self._config

    @config.setter
    def config(self, value: ManagerConfig) -> None:
        with self._config_lock:
            self._config = value

    def update_config(self, **changes: Any) -> ManagerConfig:
        """Replace the configuration with a validated modified copy.

        Args:
            **changes: ``ManagerConfig`` fields to change.

        Returns:
            The new snapshot.
        """
        with self._config_lock:
            self._config = ManagerConfig.model_validate(
                {**self._config.model_dump(), **changes}
            )
            return self._config

    @property
    def additional_headers(self) -> dict[str, str]:
        """Headers merged into every request with highest precedence."""
        return dict(self.config.additional_headers)

    @additional_headers.setter
    def additional_headers(self, value: dict[str, str]) -> None:
        self.update_config(additional_headers=dict(value))

    @property
    def inject_default_headers(self) -> bool:
        """Whether User-Agent, Accept-Encoding and Accept-Language are injected."""
        return self.config.inject_default_headers

    @inject_default_headers.setter
    def inject_default_headers(self, value: bool) -> None:
        self.update_config(inject_default_headers=value)

    @property
    def authentication(self) -> RequestAuthentication | None:
        """Backup credential for descriptors without one."""
        return self.config.authentication

    @authentication.setter
    def authentication(self, value: RequestAuthentication | None) -> None:
        self.update_config(authentication=value)

    def execute(
        self,
        descriptor: Requestable,
        retries: int | None = None,
        sla: float | None = None,
        fallback: Response[Any] | None = None,
    ) -> RequestOperation:
        """Create an operation executing ``descriptor``.

        The operation is idle until subscribed to or waited on.

        Args:
            descriptor: Request description.
            retries: Additional attempts after the first.
            sla: Deadline in seconds covering every attempt.
            fallback: Response used on failure when the descriptor has none.

        Returns:
            The request operation.

        Raises:
            ValueError: If ``retries`` is negative or ``sla`` is not positive.
        """
        retries = self.default_retries if retries is None else retries
        sla = self.default_sla if sla is None else sla
        _check_policy(retries, sla)

        config = self.config
        plan = ExecutionPlan(
            host=self.host,
            descriptor=descriptor,
            default_headers=config.default_headers(),
            additional_headers=dict(config.additional_headers),
            backup_authentication=config.authentication,
            retries=retries,
            sla=sla,
            fallback=fallback,
        )
        operation = RequestOperation(plan, self._transport, self._scheduler, self.metrics)
        self._log.debug(
            "request_created",
            request_id=operation.request_id,
            path=descriptor.path,
        )
        return operation

    def close(self) -> None:
        """Release the transport if the manager created it."""
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            self._transport.close()

    def __enter__(self) -> "RequestManager":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _check_policy(retries: int, sla: float) -> None:
    if retries < 0:
        msg = f"retries must be >= 0, got {retries}"
        raise ValueError(msg)
    if sla <= 0:
        msg = f"sla must be positive, got {sla}"
        raise ValueError(msg)
