"""Engine configuration."""

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional


@dataclass
class EngineConfig:
    """
    Settings shared by every engine's tick loop.

    Engines accept a plain config dict; the keys listed here are read into an
    EngineConfig and any other keys are left for the concrete engine.

    Attributes:
        tick_interval: Seconds to sleep between ticks
        max_ticks: Stop after this many ticks (None runs until stop() is called)
        render_every_tick: Render after every tick instead of only on state changes
        strict_commands: Raise ValueError on unknown commands instead of logging them
        transcript_path: Optional file that receives one line per state change
    """

    tick_interval: float = 0.0
    max_ticks: Optional[int] = None
    render_every_tick: bool = False
    strict_commands: bool = False
    transcript_path: Optional[str] = None

    def __post_init__(self):
        if self.tick_interval < 0:
            raise ValueError("tick_interval must not be negative")
        if self.max_ticks is not None and self.max_ticks < 0:
            raise ValueError("max_ticks must not be negative")

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]]) -> "EngineConfig":
        """Build settings from a config dict, ignoring keys it does not know."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (config or {}).items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to a dictionary for serialization."""
        return asdict(self)
