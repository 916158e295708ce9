"""
Host adapters for the statekit engines.

This package provides adapters that translate between the platform-agnostic
engines and concrete hosts (console, scripted test harness).
"""

from statekit.adapters.base import HostAdapter
from statekit.adapters.cli import CLIAdapter
from statekit.adapters.dummy import DummyAdapter

__all__ = ["HostAdapter", "CLIAdapter", "DummyAdapter"]
