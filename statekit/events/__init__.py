"""
Event system for the statekit package.

Observers subscribe to state changes and host-loop events without taking part
in the transitions themselves.
"""

from statekit.events.emitter import (
    EventEmitter,
    EventBus,
    EventPriority,
    MachineEventType,
)

__all__ = ["EventEmitter", "EventBus", "EventPriority", "MachineEventType"]
