"""
Game flow engine.

This module provides the GameFlowEngine class, which moves a game session
between the main menu, play, pause and game-over screens. Legality lives in
this engine, not in the machine: each command names the states it may be
issued from, and the machine is a GuardedStateMachine over the declared
screen graph.
"""

from enum import Enum, auto
from typing import Any, Callable, Awaitable, Dict, FrozenSet, Tuple
import logging

from statekit.adapters import HostAdapter
from statekit.engine.base import StatekitEngine
from statekit.machine import GuardedStateMachine, TransitionTable

logger = logging.getLogger("statekit.engine.game")


class GameFlowState(Enum):
    """Top-level screens of a game session."""

    MAIN_MENU = auto()
    PLAYING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


GAME_FLOW_TABLE = TransitionTable(
    {
        GameFlowState.MAIN_MENU: {GameFlowState.PLAYING},
        GameFlowState.PLAYING: {GameFlowState.PAUSED, GameFlowState.GAME_OVER},
        GameFlowState.PAUSED: {GameFlowState.PLAYING, GameFlowState.MAIN_MENU},
        GameFlowState.GAME_OVER: {GameFlowState.PLAYING, GameFlowState.MAIN_MENU},
    }
)

# command -> (states it may be issued from, target state)
GAME_COMMANDS: Dict[str, Tuple[FrozenSet[GameFlowState], GameFlowState]] = {
    "start": (frozenset({GameFlowState.MAIN_MENU}), GameFlowState.PLAYING),
    "pause": (frozenset({GameFlowState.PLAYING}), GameFlowState.PAUSED),
    "resume": (frozenset({GameFlowState.PAUSED}), GameFlowState.PLAYING),
    "die": (frozenset({GameFlowState.PLAYING}), GameFlowState.GAME_OVER),
    "restart": (frozenset({GameFlowState.GAME_OVER}), GameFlowState.PLAYING),
    "menu": (
        frozenset({GameFlowState.PAUSED, GameFlowState.GAME_OVER}),
        GameFlowState.MAIN_MENU,
    ),
}


class GameFlowEngine(StatekitEngine):
    """
    Engine implementation for a game session's screen flow.

    Config keys (besides the shared EngineConfig keys):
        points_per_tick: Score gained on every tick spent playing (default 1)
    """

    def __init__(self, adapter: HostAdapter, config: Dict[str, Any] = None):
        """
        Initialize the game flow engine.

        Args:
            adapter: Platform adapter to use for rendering and input
            config: Configuration options for the engine
        """
        super().__init__(adapter, config)
        self.machine = GuardedStateMachine(
            GAME_FLOW_TABLE,
            GameFlowState.MAIN_MENU,
            name="game",
            emitter=self.event_bus,
        )

        self.points_per_tick = int(self.config.get("points_per_tick", 1))
        self.time_scale = 0.0
        self.score = 0
        self.high_score = 0
        self.sessions = 0

    @property
    def state(self) -> GameFlowState:
        return self.machine.state

    def command_handlers(self) -> Dict[str, Callable[[], Awaitable[None]]]:
        handlers = {command: self._command_handler(command) for command in GAME_COMMANDS}
        handlers["quit"] = self.quit
        return handlers

    def _command_handler(self, command: str) -> Callable[[], Awaitable[None]]:
        async def handler():
            await self.issue(command)

        return handler

    async def issue(self, command: str) -> bool:
        """
        Apply a flow command if it is legal in the current state.

        Repeating a command whose target is the current state is a no-op.

        Args:
            command: A key of GAME_COMMANDS

        Returns:
            True if the state changed
        """
        sources, target = GAME_COMMANDS[command]
        current = self.machine.state

        if current == target:
            return self.machine.transition_to(target)

        if current not in sources:
            await self.reject(command, f"not available from {current.name}")
            return False

        return self.machine.transition_to(
            target,
            on_exit=lambda: self._on_exit(current),
            on_enter=lambda: self._on_enter(current, target),
        )

    async def quit(self) -> None:
        """Stop the engine's tick loop."""
        logger.info(f"Quitting from {self.machine.state.name}")
        self.stop()

    def _on_exit(self, state: GameFlowState) -> None:
        if state is GameFlowState.PLAYING:
            self.high_score = max(self.high_score, self.score)

    def _on_enter(self, previous: GameFlowState, state: GameFlowState) -> None:
        if state is GameFlowState.PLAYING:
            if previous is not GameFlowState.PAUSED:
                # Fresh session
                self.score = 0
                self.sessions += 1
            self.time_scale = 1.0
        else:
            self.time_scale = 0.0

    def update(self) -> None:
        """Accumulate score while playing."""
        if self.machine.is_in(GameFlowState.PLAYING):
            self.score += self.points_per_tick

    def snapshot(self) -> Dict[str, Any]:
        return {
            "machine": self.machine.name,
            "state": self.machine.state.name,
            "score": self.score,
            "high_score": self.high_score,
            "time_scale": self.time_scale,
        }
