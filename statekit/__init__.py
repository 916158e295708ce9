"""
statekit: a generic finite state machine with a small host layer.

The core is ``StateMachine``, which runs caller-supplied exit and entry
actions around each state change. The ``engine`` and ``adapters`` packages
drive machines from a per-tick polling loop.
"""

from statekit.machine import (
    StateMachine,
    TransitionRecord,
    TransitionTable,
    GuardedStateMachine,
    StateMachineError,
    ReentrantTransitionError,
    InvalidTransitionError,
)

__version__ = "0.1.0"

__all__ = [
    "StateMachine",
    "TransitionRecord",
    "TransitionTable",
    "GuardedStateMachine",
    "StateMachineError",
    "ReentrantTransitionError",
    "InvalidTransitionError",
]
