"""
Declared transition tables.

StateMachine accepts any target state. Callers that want legality rules
declare the allowed edges in a TransitionTable and either check it
themselves before calling ``transition_to`` or use GuardedStateMachine,
which rejects undeclared edges before any callback runs.
"""

from collections import defaultdict
from typing import Any, Dict, Iterable, Optional, Set

from statekit.events.emitter import EventEmitter
from statekit.machine.errors import InvalidTransitionError
from statekit.machine.state_machine import Action, StateMachine


class TransitionTable:
    """
    Mapping of from-state to the set of states it may move to.

    Requesting the current state again is always allowed, since the machine
    treats it as a no-op.

    States used in a table must be hashable. StateMachine alone only needs
    ``==``; unhashable states raise TypeError here.
    """

    def __init__(self, edges: Optional[Dict[Any, Iterable[Any]]] = None):
        """
        Initialize the table.

        Args:
            edges: Optional mapping of from-state to allowed target states
        """
        self._edges: Dict[Any, Set[Any]] = defaultdict(set)
        for from_state, to_states in (edges or {}).items():
            self.allow(from_state, *to_states)

    def allow(self, from_state: Any, *to_states: Any) -> "TransitionTable":
        """Declare edges from ``from_state``. Returns self for chaining."""
        self._edges[from_state].update(to_states)
        return self

    def is_allowed(self, from_state: Any, to_state: Any) -> bool:
        """Check whether moving from ``from_state`` to ``to_state`` is declared."""
        if from_state == to_state:
            return True
        return to_state in self._edges.get(from_state, ())

    def check(self, from_state: Any, to_state: Any) -> None:
        """
        Raise if the edge is not declared.

        Raises:
            InvalidTransitionError: If ``to_state`` is not reachable from ``from_state``
        """
        if not self.is_allowed(from_state, to_state):
            raise InvalidTransitionError(from_state, to_state)

    def targets(self, from_state: Any) -> Set[Any]:
        """States reachable in one step from ``from_state``."""
        return set(self._edges.get(from_state, ()))

    def states(self) -> Set[Any]:
        """Every state mentioned in the table."""
        result = set(self._edges)
        for to_states in self._edges.values():
            result.update(to_states)
        return result


class GuardedStateMachine(StateMachine):
    """StateMachine that refuses edges missing from its TransitionTable."""

    def __init__(
        self,
        table: TransitionTable,
        initial_state: Any = None,
        name: str = "machine",
        emitter: Optional[EventEmitter] = None,
    ):
        super().__init__(initial_state=initial_state, name=name, emitter=emitter)
        self.table = table

    def can_transition(self, target_state: Any) -> bool:
        """Check if transition is valid."""
        return self.table.is_allowed(self.state, target_state)

    def transition_to(
        self,
        target_state: Any,
        on_exit: Optional[Action] = None,
        on_enter: Optional[Action] = None,
    ) -> bool:
        """
        Move to ``target_state`` if the table allows it.

        Raises:
            InvalidTransitionError: If the edge is not declared; no callback runs
            ReentrantTransitionError: If called from inside another transition's callback
        """
        if not self.is_transitioning:
            self.table.check(self.state, target_state)
        return super().transition_to(target_state, on_exit=on_exit, on_enter=on_enter)
