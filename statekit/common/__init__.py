"""Shared helpers for the statekit host layer."""

from statekit.common.io_interface import (
    IOInterface,
    DummyIOInterface,
    TestIOInterface,
    ConsoleIOInterface,
    LoggingIOInterface,
    AsyncIOInterfaceWrapper,
)

__all__ = [
    "IOInterface",
    "DummyIOInterface",
    "TestIOInterface",
    "ConsoleIOInterface",
    "LoggingIOInterface",
    "AsyncIOInterfaceWrapper",
]
