"""
Event system for the statekit package.

Machines and engines publish what happened (state changes, ticks, host
lifecycle) through an EventEmitter. Listeners are observers only: an error
raised by a listener is logged and never reaches the code that emitted the
event, so subscribing can not change how a transition behaves.
"""

from collections import defaultdict
from typing import Any, Dict, Callable, Optional, Union
import threading
import logging
from enum import Enum

# Create a logger for the event system
logger = logging.getLogger("statekit.events")


class EventPriority(Enum):
    """Priority levels for event handlers."""

    LOW = 0
    NORMAL = 1
    HIGH = 2
    CRITICAL = 3


class EventEmitter:
    """
    Event emitter with priority-ordered subscriptions.

    Features:
    - Subscribe by string or Enum event type
    - Once-only subscriptions
    - Subscriptions to every event type
    - Thread-safe registration; handlers run outside the lock
    """

    def __init__(self):
        """Initialize the event emitter."""
        self._listeners = defaultdict(list)
        self._global_listeners = []
        self._listener_lock = threading.RLock()

    @staticmethod
    def _insert_by_priority(handlers, handler) -> None:
        # Higher priority values run first; equal priorities keep subscription order
        for i, existing in enumerate(handlers):
            if existing["priority"] < handler["priority"]:
                handlers.insert(i, handler)
                break
        else:
            handlers.append(handler)

    def on(
        self,
        event_type: Union[str, Enum],
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to subscribe to (string or enum)
            callback: Function to call when event occurs, signature: fn(event_data)
            priority: Priority level for this handler

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        if isinstance(event_type, Enum):
            event_type = event_type.name

        handler = {"callback": callback, "priority": priority.value}

        with self._listener_lock:
            self._insert_by_priority(self._listeners[event_type], handler)

        def unsubscribe():
            with self._listener_lock:
                handlers = self._listeners[event_type]
                if handler in handlers:
                    handlers.remove(handler)

        return unsubscribe

    def once(
        self,
        event_type: Union[str, Enum],
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """
        Subscribe to an event type for a single occurrence.

        Args:
            event_type: The event type to subscribe to (string or enum)
            callback: Function to call when event occurs
            priority: Priority level for this handler

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        unsubscribe_ref = []

        def one_time_handler(event_data):
            try:
                callback(event_data)
            finally:
                # Unsubscribe even if the callback raised
                if unsubscribe_ref:
                    unsubscribe_ref[0]()

        unsubscribe_ref.append(self.on(event_type, one_time_handler, priority))
        return unsubscribe_ref[0]

    def on_any(
        self, callback: Callable, priority: EventPriority = EventPriority.NORMAL
    ) -> Callable:
        """
        Subscribe to all events.

        Args:
            callback: Function to call for any event, signature: fn((event_type, event_data))
            priority: Priority level for this handler

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        handler = {"callback": callback, "priority": priority.value}

        with self._listener_lock:
            self._insert_by_priority(self._global_listeners, handler)

        def unsubscribe():
            with self._listener_lock:
                if handler in self._global_listeners:
                    self._global_listeners.remove(handler)

        return unsubscribe

    def emit(self, event_type: Union[str, Enum], data: Dict[str, Any]) -> None:
        """
        Emit an event to all registered listeners.

        Args:
            event_type: The type of event to emit
            data: The data to include with the event
        """
        if isinstance(event_type, Enum):
            event_type = event_type.name

        handlers_to_call = []

        with self._listener_lock:
            for handler in self._listeners.get(event_type, []):
                handlers_to_call.append((handler["callback"], data))

            for handler in self._global_listeners:
                handlers_to_call.append((handler["callback"], (event_type, data)))

        # Call handlers outside of the lock to avoid deadlocks
        for callback, args in handlers_to_call:
            try:
                callback(args)
            except Exception as e:
                logger.error(
                    f"Error in event handler for {event_type}: {e}", exc_info=True
                )

    async def emit_async(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Emit an event from a coroutine.

        Handlers are still called sequentially on the running thread.
        """
        self.emit(event_type, data)

    def listener_count(self, event_type: Optional[Union[str, Enum]] = None) -> int:
        """
        Count registered listeners.

        Args:
            event_type: Optional event type. If None, counts every listener.
        """
        with self._listener_lock:
            if event_type is None:
                return len(self._global_listeners) + sum(
                    len(handlers) for handlers in self._listeners.values()
                )
            if isinstance(event_type, Enum):
                event_type = event_type.name
            return len(self._listeners.get(event_type, []))

    def remove_all_listeners(
        self, event_type: Optional[Union[str, Enum]] = None
    ) -> None:
        """
        Remove all listeners for a specific event type or all events.

        Args:
            event_type: Optional event type. If None, removes all listeners for all events.
        """
        with self._listener_lock:
            if event_type is None:
                self._listeners.clear()
                self._global_listeners.clear()
            else:
                if isinstance(event_type, Enum):
                    event_type = event_type.name
                self._listeners[event_type].clear()


class EventBus:
    """
    Process-wide event bus shared by the engines.

    Machines do not use it implicitly; pass ``EventBus.get_instance()`` as a
    machine's emitter to publish its transitions here.
    """

    _instance = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> EventEmitter:
        """
        Get the singleton instance of the EventBus.

        Returns:
            EventEmitter instance
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = EventEmitter()
        return cls._instance


class MachineEventType(Enum):
    """Event types published by machines and engines."""

    # Host lifecycle
    ENGINE_INIT = "engine_init"
    ENGINE_SHUTDOWN = "engine_shutdown"
    TICK = "tick"
    INPUT_RECEIVED = "input_received"

    # Machine events
    STATE_CHANGED = "state_changed"
    TRANSITION_REJECTED = "transition_rejected"

    ERROR = "error"
    UI_UPDATE_NEEDED = "ui_update_needed"
