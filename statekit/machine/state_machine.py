"""
Generic finite state machine for the statekit package.

The StateMachine holds one current state and serialises every change through
a single guarded entry point, ``transition_to``. It is a transition executor,
not a validator: the caller picks the target state and supplies the exit and
entry actions for each request. Legality rules, when a caller wants them, are
layered on top (see ``statekit.machine.table``).

Ordering of a transition from A to B:

    on_exit()       machine still reports A
    commit B
    on_enter()      machine already reports B

Requesting the state the machine is already in is a no-op, so input that is
held across several ticks does not re-enter the same state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional
import logging
import time

from statekit.events.emitter import EventEmitter, MachineEventType
from statekit.machine.errors import ReentrantTransitionError

logger = logging.getLogger("statekit.machine")

Action = Callable[[], None]


def state_name(state: Any) -> Optional[str]:
    """Return a display name for a state value (enum member name or str())."""
    if state is None:
        return None
    if isinstance(state, Enum):
        return state.name
    return str(state)


@dataclass(frozen=True)
class TransitionRecord:
    """
    Immutable description of one completed transition.

    Attributes:
        machine: Name of the machine that changed state
        from_state: State that was left (None if the machine had no state)
        to_state: State that was entered
        timestamp: Time when the new state was committed
    """

    machine: str
    from_state: Any
    to_state: Any
    timestamp: float = field(default_factory=lambda: time.time())

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the record to a dictionary suitable for serialization.

        Returns:
            Dictionary with state names instead of raw state values
        """
        return {
            "machine": self.machine,
            "from_state": state_name(self.from_state),
            "to_state": state_name(self.to_state),
            "timestamp": self.timestamp,
        }


class StateMachine:
    """
    Holds a current discrete state and performs guarded transitions.

    The machine never inspects its states beyond equality, so any comparable
    value works; the bundled engines use Enum members.

    Callback failures are not caught. If ``on_exit`` raises, the state has not
    been changed yet; if ``on_enter`` raises, the new state is already
    committed. Either way the exception reaches the caller unchanged.

    A callback may not request another transition on the same machine while
    the first one is running; doing so raises ReentrantTransitionError.
    """

    def __init__(
        self,
        initial_state: Any = None,
        name: str = "machine",
        emitter: Optional[EventEmitter] = None,
    ):
        """
        Initialize the state machine.

        Args:
            initial_state: Starting state, or None for no well-defined state
            name: Name used in log messages and transition events
            emitter: Optional event emitter notified after each completed transition
        """
        self.name = name
        self._state = initial_state
        self._emitter = emitter
        self._transitioning = False

    @property
    def state(self) -> Any:
        """The current state."""
        return self._state

    def get_state(self) -> Any:
        """Get current state."""
        return self._state

    def is_in(self, state: Any) -> bool:
        """Check whether the machine is currently in ``state``."""
        return self._state == state

    @property
    def is_transitioning(self) -> bool:
        """True while a transition's callbacks are running."""
        return self._transitioning

    def transition_to(
        self,
        target_state: Any,
        on_exit: Optional[Action] = None,
        on_enter: Optional[Action] = None,
    ) -> bool:
        """
        Move the machine to ``target_state``.

        Args:
            target_state: State to move to
            on_exit: Optional action for leaving the current state
            on_enter: Optional action for entering the target state

        Returns:
            True if the state changed, False if the machine was already there

        Raises:
            ReentrantTransitionError: If called from inside another transition's callback
        """
        if self._transitioning:
            raise ReentrantTransitionError(self.name, self._state, target_state)

        if target_state == self._state:
            logger.debug(f"{self.name}: already in {state_name(target_state)}")
            return False

        previous_state = self._state
        self._transitioning = True
        try:
            if on_exit is not None:
                on_exit()

            self._state = target_state

            if on_enter is not None:
                on_enter()
        except Exception as e:
            logger.debug(
                f"{self.name}: transition {state_name(previous_state)} -> "
                f"{state_name(target_state)} failed with {type(e).__name__}; "
                f"state is {state_name(self._state)}"
            )
            raise
        finally:
            self._transitioning = False

        record = TransitionRecord(
            machine=self.name, from_state=previous_state, to_state=target_state
        )
        logger.debug(
            f"{self.name}: {state_name(previous_state)} -> {state_name(target_state)}"
        )

        if self._emitter is not None:
            data = record.to_dict()
            data["record"] = record
            data["source"] = self
            self._emitter.emit(MachineEventType.STATE_CHANGED, data)

        return True

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, state={state_name(self._state)!r})"
