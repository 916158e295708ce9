"""
Pytest configuration for tests at the root level.

This module contains pytest fixtures shared by the machine, engine and
adapter tests.
"""

import pytest

from statekit.events import EventBus


# Reset event bus before each test
@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus._instance = None
    yield
    EventBus._instance = None


@pytest.fixture
def calls():
    """A shared list that callbacks append to, to check ordering."""
    return []
