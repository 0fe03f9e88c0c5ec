"""Abstract access to SPI, I2C and GPIO peripherals, with a GPIO stand-in."""

from __future__ import annotations

import abc
import enum
import functools
from typing import Callable, Dict, Optional

TickCallback = Callable[[int], None]


def to_hex_string(data) -> str:
    """Render bytes as lower-case hexadecimal, two digits per byte."""
    return bytes(data).hex()


class PinMode(enum.Enum):
    OUTPUT = enum.auto()
    INPUT = enum.auto()


class Edge(enum.Enum):
    FALLING = enum.auto()
    RISING = enum.auto()


class Spi(abc.ABC):
    """An SPI channel."""

    @abc.abstractmethod
    def read(self, count: int) -> bytes:
        """Clock in ``count`` bytes."""

    @abc.abstractmethod
    def write(self, data: bytes) -> None:
        """Clock out ``data``."""

    @abc.abstractmethod
    def xfer(self, data: bytes) -> bytes:
        """Clock out ``data`` and return the bytes clocked in meanwhile."""


class I2C(abc.ABC):
    """A device on an I2C bus, addressed by register."""

    @abc.abstractmethod
    def write_block(self, register: int, data: bytes) -> None:
        """Write ``data`` starting at ``register``."""

    @abc.abstractmethod
    def read_block(self, register: int, count: int) -> bytes:
        """Read ``count`` bytes starting at ``register``."""


class Gpio(abc.ABC):
    """General purpose I/O lines."""

    @abc.abstractmethod
    def set_mode(self, gpio: int, mode: PinMode) -> None:
        """Configure a line as input or output."""

    @abc.abstractmethod
    def get(self, gpio: int) -> int:
        """Return the level of a line."""

    @abc.abstractmethod
    def set(self, gpio: int, level: int) -> None:
        """Drive a line to ``level``."""

    @abc.abstractmethod
    def register_callback(self, gpio: int, edge: Edge, callback: TickCallback) -> int:
        """Call ``callback`` with a tick on each ``edge``; return its id."""

    @abc.abstractmethod
    def deregister_callback(self, callback_id: int) -> None:
        """Stop calling the callback with the given id."""


class GpioStub(Gpio):
    """GPIO that touches no hardware: lines are kept in memory and start low."""

    _CALLBACK_ID = 0

    def __init__(self) -> None:
        self.callback: Optional[TickCallback] = None
        self.modes: Dict[int, PinMode] = {}
        self.levels: Dict[int, int] = {}

    def set_mode(self, gpio: int, mode: PinMode) -> None:
        self.modes[gpio] = PinMode(mode)

    def get(self, gpio: int) -> int:
        return self.levels.get(gpio, 0)

    def set(self, gpio: int, level: int) -> None:
        self.levels[gpio] = level

    def register_callback(self, gpio: int, edge: Edge, callback: TickCallback) -> int:
        Edge(edge)
        self.callback = callback
        return self._CALLBACK_ID

    def deregister_callback(self, callback_id: int) -> None:
        if callback_id == self._CALLBACK_ID:
            self.callback = None


@functools.lru_cache(maxsize=None)
def get_gpio() -> Gpio:
    """Return the process-wide GPIO instance."""
    return GpioStub()