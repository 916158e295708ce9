"""
This module contains the IOInterface abstract base class and its implementations.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor

import aiofiles


class IOInterface(ABC):
    """
    Abstract base class for an IO interface.

    This class defines the interface for line-based input/output used by the
    host adapters.
    """

    @abstractmethod
    def output(self, message: str) -> None:
        """Output a message to the interface."""
        pass

    @abstractmethod
    def input(self, prompt: str) -> str:
        """Get input from the user with a prompt."""
        pass


class DummyIOInterface(IOInterface):
    """
    A dummy IO interface for simulation purposes. Does not perform any actual IO.
    """

    def output(self, message: str) -> None:
        """Simulates output operation."""
        pass

    def input(self, prompt: str) -> str:
        """Simulates input operation."""
        return ""


class TestIOInterface(IOInterface):
    """
    A test IO interface. Collects output messages and replays queued input.

    Methods
    -------
    def output(self, message):
        Collect an output message.

    def input(self, prompt):
        Return the next queued response.

    def add_input(self, response: str):
        Queue a response for a later input() call.
    """

    __test__ = False

    def __init__(self):
        self.sent_messages = []
        self.prompts = []
        self.input_responses = []

    def output(self, message: str) -> None:
        self.sent_messages.append(message)

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.input_responses:
            return self.input_responses.pop(0)
        raise EOFError("No more input queued in TestIOInterface.")

    def add_input(self, response: str) -> None:
        """Queue a response for a later input() call."""
        self.input_responses.append(response)


class ConsoleIOInterface(IOInterface):
    """A console IO interface for interactive sessions."""

    def output(self, message: str) -> None:
        print(message)

    def input(self, prompt: str) -> str:
        return input(prompt)


class LoggingIOInterface(IOInterface):
    """
    A logging IO interface for recording purposes. Writes output messages to a
    transcript file.

    Output can be written synchronously or, from a coroutine, with
    ``output_async``; input is never read from the file.
    """

    def __init__(self, log_file_path: str):
        self.log_file_path = log_file_path

    def output(self, message: str) -> None:
        """Write an output message to the log file."""
        with open(self.log_file_path, "a", encoding="utf-8") as log_file:
            log_file.write(message + "\n")

    def input(self, prompt: str) -> str:
        """Log the prompt and return empty string."""
        self.output(f"[INPUT PROMPT] {prompt}")
        return ""

    async def output_async(self, message: str) -> None:
        """Async version of output."""
        async with aiofiles.open(
            self.log_file_path, mode="a", encoding="utf-8"
        ) as log_file:
            await log_file.write(message + "\n")


class AsyncIOInterfaceWrapper:
    """
    A wrapper class to facilitate asynchronous execution of synchronous IO
    operations defined in an IOInterface implementation. Blocking calls such as
    console input run in a ThreadPoolExecutor so they can be awaited without
    stalling the host loop.
    """

    def __init__(self, io_interface: IOInterface):
        self.io_interface = io_interface
        self.executor = ThreadPoolExecutor(max_workers=1)

    async def output(self, message: str) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(self.executor, self.io_interface.output, message)

    async def input(self, prompt: str) -> str:
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(
            self.executor, self.io_interface.input, prompt
        )
        return result

    def close(self) -> None:
        """Release the worker thread."""
        self.executor.shutdown(wait=False)
