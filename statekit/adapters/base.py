"""
Base adapter interface for the statekit host layer.

This module defines the interface that platform-specific adapters must implement
to feed input to an engine's tick loop and display the machine it drives.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, Union
from enum import Enum


class HostAdapter(ABC):
    """
    Base interface for platform-specific adapters.

    An adapter is the engine's only contact with the outside world. On each
    tick the engine polls it for at most one input command, and it renders
    state and receives notifications whenever the engine has something to show.

    Implementations bridge the platform-agnostic engines and concrete hosts
    such as a console, a test harness, or a game loop.
    """

    @abstractmethod
    async def render_state(self, state: Dict[str, Any]) -> None:
        """
        Render the current engine state to the platform.

        Args:
            state: Adapter-friendly snapshot of the engine (machine name, state, extras)
        """
        pass

    @abstractmethod
    async def poll_input(self) -> Optional[str]:
        """
        Return the command received since the last tick, if any.

        Must not block waiting for input.

        Returns:
            A command string, or None if nothing arrived this tick
        """
        pass

    @abstractmethod
    async def notify_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Notify the platform of an engine event.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        pass

    async def initialize(self) -> None:
        """
        Initialize the adapter.

        This method is called when the engine is initialized.
        """
        pass

    async def shutdown(self) -> None:
        """
        Shut down the adapter.

        This method is called when the engine is shutting down.
        """
        pass
