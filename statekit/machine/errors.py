"""Exceptions raised by the state machine package."""

from typing import Any


class StateMachineError(Exception):
    """Base class for errors raised by statekit machines."""

    pass


class ReentrantTransitionError(StateMachineError):
    """Raised when a callback requests a transition on its own machine."""

    def __init__(self, machine: str, current_state: Any, target_state: Any):
        self.machine = machine
        self.current_state = current_state
        self.target_state = target_state
        super().__init__(
            f"{machine}: transition to {target_state!r} requested while another "
            f"transition is running (current state {current_state!r})"
        )


class InvalidTransitionError(StateMachineError):
    """Raised when a declared transition table does not allow an edge."""

    def __init__(self, from_state: Any, to_state: Any):
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(f"Transition {from_state!r} -> {to_state!r} is not allowed")
