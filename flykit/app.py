"""Command-line options, control address and reading encoding of the sensor service."""

from __future__ import annotations

import re
import struct
from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

DEFAULT_CTRL_PORT = 2221
CTRL_ADDR_KEY = "cx"

_OPTION = re.compile(r"--(.+?)=(.+)")
_ADDRESS = re.compile(r"([0-9]+)\.([0-9]+)\.([0-9]+)\.([0-9]+):([0-9]+)")
_READING = struct.Struct("<6f")


@dataclass(frozen=True)
class IpPort:
    """An IPv4 address, as a 32-bit integer, and a port."""

    addr: int
    port: int

    def __post_init__(self) -> None:
        if not 0 <= self.addr <= 0xFFFFFFFF:
            raise ValueError(f"address must fit in 32 bits, got {self.addr}")
        if not 0 <= self.port <= 0xFFFF:
            raise ValueError(f"port must fit in 16 bits, got {self.port}")

    @classmethod
    def from_octets(cls, a: int, b: int, c: int, d: int, port: int) -> "IpPort":
        """Build an address from its four dotted octets, most significant first."""
        octets = (a, b, c, d)
        if any(not 0 <= octet <= 0xFF for octet in octets):
            raise ValueError(f"octets must fit in a byte, got {octets}")
        return cls((a << 24) | (b << 16) | (c << 8) | d, port)

    @property
    def octets(self) -> tuple[int, int, int, int]:
        """The four octets of the address, most significant first."""
        return (
            (self.addr >> 24) & 0xFF,
            (self.addr >> 16) & 0xFF,
            (self.addr >> 8) & 0xFF,
            self.addr & 0xFF,
        )

    def __str__(self) -> str:
        return "{}.{}.{}.{}:{}".format(*self.octets, self.port)


def parse_options(argv: Iterable[str]) -> dict[str, str]:
    """Collect ``--key=value`` arguments; the first occurrence of a key wins."""
    options: dict[str, str] = {}
    for argument in argv:
        match = _OPTION.fullmatch(argument)
        if match is None:
            raise ValueError(f"invalid argument: `{argument}`")
        options.setdefault(match.group(1), match.group(2))
    return options


def parse_ip_port(text: str) -> IpPort:
    """Parse ``a.b.c.d:port``."""
    match = _ADDRESS.fullmatch(text)
    if match is None:
        raise ValueError(f"invalid address: `{text}`")
    *octets, port = (int(group) for group in match.groups())
    try:
        return IpPort.from_octets(*octets, port)
    except ValueError:
        raise ValueError(f"invalid address: `{text}`") from None


def encode_reading(orientation: Sequence[float], acceleration: Sequence[float]) -> bytes:
    """Pack orientation and acceleration, each given as (x, y, z), in z, y, x order."""
    ox, oy, oz = orientation
    ax, ay, az = acceleration
    return _READING.pack(oz, oy, ox, az, ay, ax)


class Args:
    """Typed access to the service's command-line options."""

    def __init__(self, options: Mapping[str, str]) -> None:
        self._options = options

    def ctrl_addr(self) -> IpPort:
        """The address the control socket binds to."""
        text = self._options.get(CTRL_ADDR_KEY)
        if text is None:
            return IpPort(0, DEFAULT_CTRL_PORT)
        return parse_ip_port(text)