"""State machine for a single request execution."""

from enum import Enum
from typing import ClassVar

import structlog


logger = structlog.get_logger()


class ExecutionState(str, Enum):
    """State of one request execution.

    States represent the lifecycle of an operation:
    - IDLE: Created, nothing requested yet
    - BUILDING: Deriving the wire request for an attempt
    - IN_FLIGHT: Waiting on the transport
    - ASSEMBLING: Decoding the transport output
    - VALIDATING: Running the response validator
    - FINISHING: Outcome claimed, fallback resolution or delivery pending
    - SUCCEEDED: Response delivered
    - FAILED: Error delivered
    - CANCELLED: Cancelled by the caller, nothing delivered
    """

    IDLE = "IDLE"
    BUILDING = "BUILDING"
    IN_FLIGHT = "IN_FLIGHT"
    ASSEMBLING = "ASSEMBLING"
    VALIDATING = "VALIDATING"
    FINISHING = "FINISHING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


TERMINAL_STATES = frozenset(
    {ExecutionState.SUCCEEDED, ExecutionState.FAILED, ExecutionState.CANCELLED}
)


class ExecutionStateError(Exception):
    """Raised when an illegal state transition is attempted."""

    def __init__(self, from_state: ExecutionState, to_state: ExecutionState) -> None:
        """Initialize the transition error.

        Args:
            from_state: Current state.
            to_state: Attempted target state.
        """
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Illegal execution state transition: {from_state.value} -> {to_state.value}"
        )


class ExecutionStateMachine:
    """Tracks and checks state transitions of one execution.

    Not synchronized; the owning operation holds its lock around transitions.
    """

    # Active stages may restart for a retry
    VALID_TRANSITIONS: ClassVar[dict[ExecutionState, frozenset[ExecutionState]]] = {
        ExecutionState.IDLE: frozenset(
            {ExecutionState.BUILDING, ExecutionState.CANCELLED}
        ),
        ExecutionState.BUILDING: frozenset(
            {
                ExecutionState.IN_FLIGHT,
                ExecutionState.BUILDING,
                ExecutionState.FINISHING,
                ExecutionState.CANCELLED,
            }
        ),
        ExecutionState.IN_FLIGHT: frozenset(
            {
                ExecutionState.ASSEMBLING,
                ExecutionState.BUILDING,
                ExecutionState.FINISHING,
                ExecutionState.CANCELLED,
            }
        ),
        ExecutionState.ASSEMBLING: frozenset(
            {
                ExecutionState.VALIDATING,
                ExecutionState.BUILDING,
                ExecutionState.FINISHING,
                ExecutionState.CANCELLED,
            }
        ),
        ExecutionState.VALIDATING: frozenset(
            {
                ExecutionState.BUILDING,
                ExecutionState.FINISHING,
                ExecutionState.CANCELLED,
            }
        ),
        ExecutionState.FINISHING: frozenset(
            {
                ExecutionState.SUCCEEDED,
                ExecutionState.FAILED,
                ExecutionState.CANCELLED,
            }
        ),
        ExecutionState.SUCCEEDED: frozenset(),  # Terminal state
        ExecutionState.FAILED: frozenset(),  # Terminal state
        ExecutionState.CANCELLED: frozenset(),  # Terminal state
    }

    def __init__(self, request_id: str) -> None:
        """Initialize the state machine in IDLE.

        Args:
            request_id: Identifier of the execution, for logs.
        """
        self._state = ExecutionState.IDLE
        self._log = logger.bind(component="request_manager", request_id=request_id)

    @property
    def state(self) -> ExecutionState:
        """Get the current state."""
        return self._state

    @property
    def is_terminal(self) -> bool:
        """Check if current state is terminal."""
        return self._state in TERMINAL_STATES

    @property
    def is_active(self) -> bool:
        """Check if an attempt stage is running."""
        return self._state in (
            ExecutionState.BUILDING,
            ExecutionState.IN_FLIGHT,
            ExecutionState.ASSEMBLING,
            ExecutionState.VALIDATING,
        )

    def can_transition(self, target: ExecutionState) -> bool:
        """Check if a transition to the target state is valid.

        Args:
            target: The target state.

        Returns:
            True if the transition is valid.
        """
        return target in self.VALID_TRANSITIONS[self._state]

    def transition(self, target: ExecutionState) -> None:
        """Transition to a new state.

        Args:
            target: The target state.

        Raises:
            ExecutionStateError: If the transition is invalid.
        """
        if not self.can_transition(target):
            self._log.error(
                "illegal_state_transition",
                from_state=self._state.value,
                to_state=target.value,
            )
            raise ExecutionStateError(self._state, target)

        old_state = self._state
        self._state = target
        self._log.debug(
            "state_transition",
            from_state=old_state.value,
            to_state=target.value,
        )
