"""
Dummy adapter for the statekit host layer, used for testing and simulation.

This module provides a non-interactive adapter that replays a script of
commands, one per tick, and records everything the engine shows it.
"""

from typing import List, Dict, Any, Optional, Union
from enum import Enum

from statekit.adapters.base import HostAdapter


class DummyAdapter(HostAdapter):
    """
    Dummy adapter for testing and simulation.

    Each call to ``poll_input`` consumes the next scripted entry. A ``None``
    entry means "no input this tick", which lets a script hold still while a
    timed state (e.g. a jump) plays out. Once the script is exhausted every
    poll returns None.
    """

    def __init__(
        self,
        scripted_inputs: Optional[List[Optional[str]]] = None,
        verbose: bool = False,
    ):
        """
        Initialize the dummy adapter.

        Args:
            scripted_inputs: Commands to return from successive polls
            verbose: Whether to print states and events to stdout (useful for debugging)
        """
        self.scripted_inputs = list(scripted_inputs or [])
        self.verbose = verbose
        self.input_index = 0

        # Track events for later inspection
        self.events = []

        # Track rendered states for testing
        self.rendered_states = []

        self.initialized = False
        self.shut_down = False

    async def initialize(self) -> None:
        self.initialized = True

    async def shutdown(self) -> None:
        self.shut_down = True

    def queue_input(self, *commands: Optional[str]) -> None:
        """Append commands to the end of the script."""
        self.scripted_inputs.extend(commands)

    @property
    def inputs_remaining(self) -> int:
        """Number of scripted entries not yet polled."""
        return len(self.scripted_inputs) - self.input_index

    async def render_state(self, state: Dict[str, Any]) -> None:
        """
        Store the state for later inspection.

        Args:
            state: The current engine state
        """
        self.rendered_states.append(state)

        if self.verbose:
            print(f"[{state.get('machine')}] state: {state.get('state')}")

    async def poll_input(self) -> Optional[str]:
        """
        Return the next scripted command.

        Returns:
            The next command, or None when the entry is None or the script is done
        """
        if self.input_index >= len(self.scripted_inputs):
            return None

        command = self.scripted_inputs[self.input_index]
        self.input_index += 1

        if self.verbose and command is not None:
            print(f"> {command}")

        return command

    async def notify_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Store the event for later inspection.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        event_type_str = event_type.name if isinstance(event_type, Enum) else event_type

        self.events.append((event_type_str, data))

        if self.verbose:
            print(f"Event: {event_type_str}")
            for key, value in data.items():
                print(f"  {key}: {value}")

    def get_events_by_type(self, event_type: Union[str, Enum]) -> List[Dict[str, Any]]:
        """
        Get all events of a specific type.

        Args:
            event_type: The type of events to retrieve

        Returns:
            A list of event data dictionaries
        """
        event_type_str = event_type.name if isinstance(event_type, Enum) else event_type
        return [data for typ, data in self.events if typ == event_type_str]

    def clear(self) -> None:
        """Clear all stored events and states."""
        self.events.clear()
        self.rendered_states.clear()
