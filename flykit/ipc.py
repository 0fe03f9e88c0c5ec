"""Bounded request/response queue between simulated HAL clients and the server."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

COMMAND_DATA_SIZE = 1024
DEFAULT_CAPACITY = 64 * 1024


@dataclass
class Command:
    """One queued request; the server replaces ``data`` with its response."""

    data: bytes
    satisfied: bool = False


class CommandQueue:
    """A ring of commands.

    Clients call :meth:`enqueue`, which blocks until the server has answered.
    The server inspects the oldest command with :meth:`current`, writes its
    response into ``data`` and releases the client with :meth:`dequeue`.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._slots: list[Optional[Command]] = [None] * capacity
        self._head = 0
        self._tail = 0
        self._count = 0
        self._cond = threading.Condition()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        with self._cond:
            return self._count

    def _head_command(self) -> Command:
        command = self._slots[self._head]
        if not self._count or command is None:
            raise IndexError("no pending command")
        return command

    def current(self) -> Command:
        """Return the oldest pending command."""
        with self._cond:
            return self._head_command()

    def enqueue(self, data) -> bytes:
        """Queue a request and block until the server's response is ready."""
        payload = bytes(data)
        if len(payload) > COMMAND_DATA_SIZE:
            raise ValueError(
                f"command of {len(payload)} bytes exceeds {COMMAND_DATA_SIZE}"
            )
        with self._cond:
            self._cond.wait_for(lambda: self._count < self._capacity)
            command = Command(payload)
            self._slots[self._tail] = command
            self._tail = (self._tail + 1) % self._capacity
            self._count += 1
            self._cond.notify_all()

            self._cond.wait_for(lambda: command.satisfied)
            response = command.data
            self._slots[self._head] = None
            self._head = (self._head + 1) % self._capacity
            self._count -= 1
            self._cond.notify_all()
        return response

    def dequeue(self) -> None:
        """Mark the oldest command as answered and wake its client."""
        with self._cond:
            command = self._head_command()
            response = bytes(command.data)
            if len(response) > COMMAND_DATA_SIZE:
                raise ValueError(
                    f"response of {len(response)} bytes exceeds {COMMAND_DATA_SIZE}"
                )
            command.data = response
            command.satisfied = True
            self._cond.notify_all()