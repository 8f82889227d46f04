"""Request execution: wire building, policies, and cancellable operations."""

from courier.execution.assembler import (
    assemble_response,
    interpret_transport_result,
    transport_failure,
)
from courier.execution.manager import RequestManager
from courier.execution.operation import RequestOperation
from courier.execution.pipeline import ExecutionPlan
from courier.execution.scheduler import ManualScheduler, Scheduler, ThreadingScheduler
from courier.execution.state_machine import (
    ExecutionState,
    ExecutionStateError,
    ExecutionStateMachine,
)
from courier.execution.validation import run_validator
from courier.execution.wire import build_url, build_wire_request


__all__ = [
    "ExecutionPlan",
    "ExecutionState",
    "ExecutionStateError",
    "ExecutionStateMachine",
    "ManualScheduler",
    "RequestManager",
    "RequestOperation",
    "Scheduler",
    "ThreadingScheduler",
    "assemble_response",
    "build_url",
    "build_wire_request",
    "interpret_transport_result",
    "run_validator",
    "transport_failure",
]
