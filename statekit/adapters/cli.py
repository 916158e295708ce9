"""
Command-line interface adapter for the statekit host layer.

Commands typed at the console are read by a background task and handed to
the engine one per tick, so the tick loop never waits on the keyboard.
"""

import asyncio
import logging
from typing import Dict, Any, Optional, Union
from enum import Enum

from statekit.adapters.base import HostAdapter
from statekit.common.io_interface import (
    IOInterface,
    ConsoleIOInterface,
    AsyncIOInterfaceWrapper,
)

logger = logging.getLogger("statekit.adapters.cli")

# Sent to the engine when the console reaches end of input
EOF_COMMAND = "quit"


class CLIAdapter(HostAdapter):
    """
    Command-line interface adapter.

    This adapter uses an IOInterface (the console by default) for input and
    output, providing a simple text-based view of the machine.
    """

    def __init__(self, io_interface: Optional[IOInterface] = None, prompt: str = "> "):
        """
        Initialize the CLI adapter.

        Args:
            io_interface: Optional IOInterface to use for I/O. If None, a console
                          IOInterface is used.
            prompt: Prompt shown when reading a command
        """
        self.io_interface = io_interface or ConsoleIOInterface()
        self.prompt = prompt
        self._async_io = AsyncIOInterfaceWrapper(self.io_interface)

        self._input_queue: asyncio.Queue = asyncio.Queue()
        self._async_input_running: bool = False
        self._input_task: Optional[asyncio.Task] = None

    async def initialize(self) -> None:
        """Start the background input task."""
        if not self._async_input_running:
            self._async_input_running = True
            self._input_task = asyncio.create_task(self._input_loop())

    async def shutdown(self) -> None:
        """Stop the background input task."""
        if self._async_input_running:
            self._async_input_running = False
            if self._input_task:
                self._input_task.cancel()
                try:
                    await self._input_task
                except asyncio.CancelledError:
                    pass
        self._async_io.close()

    async def _input_loop(self) -> None:
        """Background task reading commands into the queue."""
        try:
            while self._async_input_running:
                try:
                    line = await self._async_io.input(self.prompt)
                except EOFError:
                    await self._input_queue.put(EOF_COMMAND)
                    return

                command = line.strip().lower()
                if command:
                    await self._input_queue.put(command)
        except asyncio.CancelledError:
            return
        except Exception as e:
            logger.error(f"Error in input loop: {e}", exc_info=True)
            await self._input_queue.put(EOF_COMMAND)

    async def poll_input(self) -> Optional[str]:
        """
        Return the oldest unread command without waiting.

        Returns:
            A command string, or None if nothing has been typed since the last poll
        """
        try:
            return self._input_queue.get_nowait()
        except asyncio.QueueEmpty:
            return None

    async def render_state(self, state: Dict[str, Any]) -> None:
        """
        Render the current engine state to the console.

        Args:
            state: The current engine state
        """
        line = f"[{state.get('machine', 'machine')}] {state.get('state')}"
        extras = {
            key: value
            for key, value in state.items()
            if key not in ("machine", "state")
        }
        if extras:
            line += " " + " ".join(f"{key}={value}" for key, value in extras.items())
        self.io_interface.output(line)

    async def notify_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Print notable engine events.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        event_type_str = event_type.name if isinstance(event_type, Enum) else event_type

        if event_type_str == "STATE_CHANGED":
            self.io_interface.output(
                f"{data.get('from_state')} -> {data.get('to_state')}"
            )
        elif event_type_str == "TRANSITION_REJECTED":
            self.io_interface.output(
                f"Cannot '{data.get('command')}' while {data.get('state')}"
            )
        elif event_type_str == "ERROR":
            self.io_interface.output(f"Error: {data.get('message')}")
