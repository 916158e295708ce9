"""
Player controller engine.

This module provides the PlayerControllerEngine class, which drives a
character's movement state (idle, walking, running, jumping) from input
commands. Movement commands that arrive every tick while a key is held map to
the state the player is already in, so the machine's same-state guard keeps
entry actions from firing again.
"""

from enum import Enum, auto
from typing import Any, Callable, Awaitable, Dict, List

from statekit.adapters import HostAdapter
from statekit.engine.base import StatekitEngine
from statekit.machine import StateMachine


class PlayerState(Enum):
    """Movement states of a player character."""

    IDLE = auto()
    WALKING = auto()
    RUNNING = auto()
    JUMPING = auto()


# Commands that change ground movement; ignored while airborne
GROUND_COMMANDS = {
    "walk": PlayerState.WALKING,
    "run": PlayerState.RUNNING,
    "stop": PlayerState.IDLE,
}


class PlayerControllerEngine(StatekitEngine):
    """
    Engine implementation for a player controller.

    Config keys (besides the shared EngineConfig keys):
        jump_ticks: Ticks spent airborne before landing (default 3)
        walk_speed: Speed while walking (default 2.0)
        run_speed: Speed while running (default 6.0)
    """

    def __init__(self, adapter: HostAdapter, config: Dict[str, Any] = None):
        """
        Initialize the player controller engine.

        Args:
            adapter: Platform adapter to use for rendering and input
            config: Configuration options for the engine
        """
        super().__init__(adapter, config)
        self.machine = StateMachine(
            PlayerState.IDLE, name="player", emitter=self.event_bus
        )

        self.jump_ticks = int(self.config.get("jump_ticks", 3))
        self.speeds = {
            PlayerState.IDLE: 0.0,
            PlayerState.WALKING: float(self.config.get("walk_speed", 2.0)),
            PlayerState.RUNNING: float(self.config.get("run_speed", 6.0)),
        }
        if self.jump_ticks < 1:
            raise ValueError("jump_ticks must be at least 1")

        self.speed = 0.0
        self.air_ticks = 0
        self.jump_count = 0

        # Names of states in the order their entry/exit actions ran
        self.entered: List[str] = []
        self.exited: List[str] = []

    @property
    def state(self) -> PlayerState:
        return self.machine.state

    def command_handlers(self) -> Dict[str, Callable[[], Awaitable[None]]]:
        handlers = {
            command: self._ground_handler(command) for command in GROUND_COMMANDS
        }
        handlers["jump"] = self.jump
        handlers["land"] = self.land
        return handlers

    def _ground_handler(self, command: str) -> Callable[[], Awaitable[None]]:
        async def handler():
            await self.move(command)

        return handler

    async def move(self, command: str) -> None:
        """
        Apply a ground movement command.

        Args:
            command: One of ``walk``, ``run`` or ``stop``
        """
        if self.machine.is_in(PlayerState.JUMPING):
            await self.reject(command, "player is airborne")
            return
        self.change_state(GROUND_COMMANDS[command])

    async def jump(self) -> None:
        """Leave the ground. Jumping again while airborne does nothing."""
        self.change_state(PlayerState.JUMPING)

    async def land(self) -> None:
        """Land early."""
        if not self.machine.is_in(PlayerState.JUMPING):
            await self.reject("land", "player is not airborne")
            return
        self.change_state(PlayerState.IDLE)

    def change_state(self, target: PlayerState) -> bool:
        """
        Transition to ``target`` with the matching exit and entry actions.

        Returns:
            True if the state changed
        """
        leaving = self.machine.state
        return self.machine.transition_to(
            target,
            on_exit=lambda: self._on_exit(leaving),
            on_enter=lambda: self._on_enter(target),
        )

    def _on_exit(self, state: PlayerState) -> None:
        self.exited.append(state.name)
        if state is PlayerState.JUMPING:
            self.air_ticks = 0

    def _on_enter(self, state: PlayerState) -> None:
        self.entered.append(state.name)
        if state is PlayerState.JUMPING:
            # Keep the ground speed through the jump
            self.air_ticks = 0
            self.jump_count += 1
        else:
            self.speed = self.speeds[state]

    def update(self) -> None:
        """Count airborne ticks and land once the jump is over."""
        if not self.machine.is_in(PlayerState.JUMPING):
            return

        self.air_ticks += 1
        if self.air_ticks >= self.jump_ticks:
            self.change_state(PlayerState.IDLE)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "machine": self.machine.name,
            "state": self.machine.state.name,
            "speed": self.speed,
            "jumps": self.jump_count,
        }
