"""Per-execution pipeline: build, assemble, validate, and fallback resolution."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from courier.execution.assembler import interpret_transport_result
from courier.execution.validation import run_validator
from courier.execution.wire import build_wire_request
from courier.models.authentication import BasicAuthentication, TokenAuthentication
from courier.models.errors import RequestError
from courier.models.response import Response
from courier.models.wire import WireRequest
from courier.request.protocols import Requestable
from courier.transport.base import TransportResult


@dataclass(frozen=True)
class ExecutionPlan:
    """Everything one execution needs, captured when it is created.

    Manager configuration is copied in at ``execute()`` time, so later
    configuration changes never affect an execution already created.

    Attributes:
        host: Base URL.
        descriptor: Request description.
        default_headers: Injected default headers (may be empty).
        additional_headers: Manager headers with highest precedence.
        backup_authentication: Credential used when the descriptor has none.
        retries: Additional attempts after the first.
        sla: Deadline in seconds covering every attempt.
        fallback: Response used when the descriptor defines no fallback.
    """

    host: str
    descriptor: Requestable
    default_headers: Mapping[str, str] = field(default_factory=dict)
    additional_headers: Mapping[str, str] = field(default_factory=dict)
    backup_authentication: BasicAuthentication | TokenAuthentication | None = None
    retries: int = 0
    sla: float = 180.0
    fallback: Response[Any] | None = None

    @property
    def total_attempts(self) -> int:
        """Attempts allowed, the first included."""
        return self.retries + 1

    def build(self) -> WireRequest:
        """Derive the wire request for one attempt.

        Raises:
            MalformedRequestError: If the request cannot be built.
        """
        return build_wire_request(
            self.host,
            self.descriptor,
            default_headers=self.default_headers,
            additional_headers=self.additional_headers,
            backup_authentication=self.backup_authentication,
        )

    def assemble(self, result: TransportResult) -> Response[Any]:
        """Turn transport output into a response.

        Raises:
            RequestError: Transport failure or decoding error.
        """
        return interpret_transport_result(result, self.descriptor.response_decoder)

    def validate(self, response: Response[Any]) -> Response[Any]:
        """Run the descriptor's validator.

        Raises:
            ResponseValidationError: If the response is rejected.
            UnknownRequestError: If the validator misbehaves.
        """
        return run_validator(self.descriptor.response_validator, response)

    def select_fallback(self) -> Response[Any] | None:
        """Pick the fallback response; the descriptor's wins over the plan's."""
        if self.descriptor.fallback_response is not None:
            return self.descriptor.fallback_response
        return self.fallback

    def resolve_fallback(self, error: RequestError) -> Response[Any]:
        """Recover a final failure with a fallback response.

        The chosen fallback goes through the validator like any response.

        Args:
            error: Final failure of the retry sequence.

        Returns:
            The validated fallback response.

        Raises:
            RequestError: ``error`` itself when no fallback exists, or the
                validation error of a rejected fallback.
        """
        fallback = self.select_fallback()
        if fallback is None:
            raise error
        return self.validate(fallback)
