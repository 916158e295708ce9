"""
Base engine class for the statekit host layer.

An engine owns one state machine and drives it from a polling loop, the way a
game host calls its per-frame update: each tick reads at most one command
from the adapter, maps it to a transition, runs any time-based logic, and
forwards the resulting state changes back to the adapter.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Awaitable, Callable, List, Optional
import asyncio
import logging
import time

from statekit.adapters import HostAdapter
from statekit.common.io_interface import LoggingIOInterface
from statekit.engine.config import EngineConfig
from statekit.events import EventBus, MachineEventType
from statekit.machine import StateMachine, state_name

logger = logging.getLogger("statekit.engine")


class StatekitEngine(ABC):
    """
    Abstract base class for all engines.

    Subclasses create ``self.machine`` in their constructor and publish their
    commands through ``command_handlers``. Transitions themselves are plain
    synchronous calls on the machine; only adapter I/O is awaited.
    """

    def __init__(self, adapter: HostAdapter, config: Dict[str, Any] = None):
        """
        Initialize the engine.

        Args:
            adapter: Platform adapter to use for rendering and input
            config: Configuration options for the engine
        """
        self.adapter = adapter
        self.config = config or {}
        self.settings = EngineConfig.from_dict(self.config)
        self.event_bus = EventBus.get_instance()
        self.machine: Optional[StateMachine] = None

        self.running = False
        self.tick_count = 0

        self._transcript = (
            LoggingIOInterface(self.settings.transcript_path)
            if self.settings.transcript_path
            else None
        )
        self._pending_changes: List[Dict[str, Any]] = []
        self._subscription: Optional[Callable] = None

    @abstractmethod
    def command_handlers(self) -> Dict[str, Callable[[], Awaitable[None]]]:
        """
        Map command names to handlers.

        Returns:
            Dictionary of lower-case command name to a zero-argument coroutine function
        """
        pass

    @abstractmethod
    def snapshot(self) -> Dict[str, Any]:
        """
        Adapter-friendly view of the engine.

        Returns:
            Dictionary with at least ``machine`` and ``state`` keys
        """
        pass

    def update(self) -> None:
        """Time-based logic run once per tick after input handling."""
        pass

    async def initialize(self) -> None:
        """
        Initialize the engine and its adapter.
        """
        await self.adapter.initialize()

        if self._subscription is None:
            self._subscription = self.event_bus.on(
                MachineEventType.STATE_CHANGED, self._on_state_changed
            )

        self.event_bus.emit(
            MachineEventType.ENGINE_INIT,
            {
                "engine_type": self.__class__.__name__,
                "machine": self.machine.name,
                "config": self.settings.to_dict(),
                "timestamp": time.time(),
            },
        )
        await self.render_state()

    async def shutdown(self) -> None:
        """
        Shut down the engine and clean up resources.
        """
        self.running = False
        self.event_bus.emit(
            MachineEventType.ENGINE_SHUTDOWN,
            {
                "machine": self.machine.name,
                "state": state_name(self.machine.state),
                "ticks": self.tick_count,
                "timestamp": time.time(),
            },
        )

        if self._subscription is not None:
            self._subscription()
            self._subscription = None

        await self.adapter.shutdown()

    def _on_state_changed(self, data: Dict[str, Any]) -> None:
        # Machine names need not be unique; match by identity
        if self.machine is not None and data.get("source") is self.machine:
            self._pending_changes.append(data)

    async def handle_input(self, command: str) -> bool:
        """
        Dispatch a command to its handler.

        Args:
            command: Command received from the adapter

        Returns:
            True if a handler ran, False if the command was unknown

        Raises:
            ValueError: If the command is unknown and ``strict_commands`` is set
        """
        command = command.strip().lower()
        handler = self.command_handlers().get(command)

        if handler is None:
            if self.settings.strict_commands:
                raise ValueError(f"Unknown command: {command}")
            logger.warning(f"{self.machine.name}: ignoring unknown command '{command}'")
            return False

        self.event_bus.emit(
            MachineEventType.INPUT_RECEIVED,
            {
                "machine": self.machine.name,
                "command": command,
                "state": state_name(self.machine.state),
                "tick": self.tick_count,
            },
        )
        await handler()
        return True

    async def reject(self, command: str, reason: str) -> None:
        """
        Report a command that is not legal in the current state.

        Args:
            command: The rejected command
            reason: Human-readable explanation
        """
        data = {
            "machine": self.machine.name,
            "command": command,
            "state": state_name(self.machine.state),
            "reason": reason,
        }
        logger.info(f"{self.machine.name}: rejected '{command}': {reason}")
        self.event_bus.emit(MachineEventType.TRANSITION_REJECTED, data)
        await self.adapter.notify_event(MachineEventType.TRANSITION_REJECTED, data)

    async def tick(self) -> None:
        """
        Run one iteration of the polling loop.
        """
        self.tick_count += 1

        try:
            command = await self.adapter.poll_input()
            if command is not None:
                await self.handle_input(command)

            self.update()
        except Exception as e:
            data = {
                "machine": self.machine.name,
                "message": str(e),
                "state": state_name(self.machine.state),
                "tick": self.tick_count,
            }
            self.event_bus.emit(MachineEventType.ERROR, data)
            await self.adapter.notify_event(MachineEventType.ERROR, data)
            raise
        finally:
            changed = await self._flush_changes()

        if changed or self.settings.render_every_tick:
            await self.render_state()

        self.event_bus.emit(
            MachineEventType.TICK,
            {
                "machine": self.machine.name,
                "tick": self.tick_count,
                "state": state_name(self.machine.state),
            },
        )

    async def _flush_changes(self) -> bool:
        changes, self._pending_changes = self._pending_changes, []
        for data in changes:
            await self.adapter.notify_event(MachineEventType.STATE_CHANGED, data)
            if self._transcript is not None:
                await self._transcript.output_async(
                    f"{self.tick_count}\t{data['from_state']}\t{data['to_state']}"
                )
        return bool(changes)

    async def run(self) -> None:
        """
        Tick until ``stop()`` is called or ``max_ticks`` is reached.
        """
        self.running = True
        try:
            while self.running:
                if (
                    self.settings.max_ticks is not None
                    and self.tick_count >= self.settings.max_ticks
                ):
                    break
                await self.tick()
                # Always yield so background adapter tasks get a turn
                await asyncio.sleep(self.settings.tick_interval)
        finally:
            self.running = False

    def stop(self) -> None:
        """Ask ``run()`` to return after the current tick."""
        self.running = False

    async def render_state(self) -> None:
        """
        Render the current engine state.
        """
        await self.adapter.render_state(self.snapshot())
