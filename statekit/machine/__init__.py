"""
Finite state machines for the statekit package.

StateMachine executes caller-driven transitions with exit/entry actions;
TransitionTable and GuardedStateMachine add optional legality checks on top.
"""

from statekit.machine.errors import (
    StateMachineError,
    ReentrantTransitionError,
    InvalidTransitionError,
)
from statekit.machine.state_machine import StateMachine, TransitionRecord, state_name
from statekit.machine.table import TransitionTable, GuardedStateMachine

__all__ = [
    "StateMachine",
    "TransitionRecord",
    "state_name",
    "TransitionTable",
    "GuardedStateMachine",
    "StateMachineError",
    "ReentrantTransitionError",
    "InvalidTransitionError",
]
