"""
Host engines for the statekit package.

Each engine owns one state machine and drives it from a per-tick polling
loop, independent of the platform supplying input.
"""

from statekit.engine.base import StatekitEngine
from statekit.engine.config import EngineConfig
from statekit.engine.game import GameFlowEngine, GameFlowState
from statekit.engine.player import PlayerControllerEngine, PlayerState

__all__ = [
    "StatekitEngine",
    "EngineConfig",
    "GameFlowEngine",
    "GameFlowState",
    "PlayerControllerEngine",
    "PlayerState",
]
