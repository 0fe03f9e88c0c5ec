"""Wire formats of the commands exchanged with the HAL simulation server."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import ClassVar, Union

COMMAND_SIZE = 1024
MAX_PAYLOAD = 1020


class CommandType(enum.IntEnum):
    SPI_STATUS_CODE = 0
    SPI_ACQUIRE_BUS = 1
    SPI_RELEASE_BUS = 2
    SPI_XFER = 3
    I2C_STATUS_CODE = 4
    I2C_START = 5
    I2C_STOP = 6
    I2C_WRITE = 7
    I2C_READ = 8
    I2C_READ_DATA = 9


class SpiStatus(enum.IntEnum):
    OK = 0
    INVALID_DEVICE = 1
    BUS_BUSY = 2


class I2cStatus(enum.IntEnum):
    OK = 0
    INVALID_DEVICE = 1
    BUS_BUSY = 2
    UNEXPECTED_STOP = 3


def _check_uint(name: str, value: object, bits: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{name} must fit in {bits} unsigned bits, got {value}")


def _check_payload(data: object) -> bytes:
    payload = bytes(data)
    if len(payload) > MAX_PAYLOAD:
        raise ValueError(f"payload of {len(payload)} bytes exceeds {MAX_PAYLOAD}")
    return payload


def _pack(command, *fields) -> bytes:
    return command._LAYOUT.pack(command.TYPE, *fields)


def _unpack(cls, data) -> list:
    raw = bytes(data)
    if len(raw) != cls._LAYOUT.size:
        raise ValueError(f"{cls.__name__} needs {cls._LAYOUT.size} bytes, got {len(raw)}")
    kind, *fields = cls._LAYOUT.unpack(raw)
    if kind != cls.TYPE:
        raise ValueError(f"{cls.__name__} expects type {cls.TYPE.value}, got {kind}")
    return fields


def _unpack_payload(cls, data):
    bus, size, payload = _unpack(cls, data)
    if size > MAX_PAYLOAD:
        raise ValueError(f"declared size {size} exceeds {MAX_PAYLOAD}")
    return cls(bus, payload[:size])


_PAYLOAD_LAYOUT = struct.Struct(f"<BBH{MAX_PAYLOAD}s")


@dataclass(frozen=True)
class SpiStatusCode:
    """Server reply to an SPI bus request."""

    TYPE: ClassVar[CommandType] = CommandType.SPI_STATUS_CODE
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<BB")

    status: SpiStatus

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", SpiStatus(self.status))

    def to_bytes(self) -> bytes:
        """Encode the command in its wire layout."""
        return _pack(self, self.status)

    @classmethod
    def from_bytes(cls, data) -> "SpiStatusCode":
        """Decode the command from its wire layout."""
        return cls(*_unpack(cls, data))


@dataclass(frozen=True)
class SpiAcquireBus:
    """Request to acquire an SPI bus for a chip; answered by SpiStatusCode."""

    TYPE: ClassVar[CommandType] = CommandType.SPI_ACQUIRE_BUS
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<BBB")

    bus: int
    chip: int

    def __post_init__(self) -> None:
        _check_uint("bus", self.bus, 8)
        _check_uint("chip", self.chip, 8)

    def to_bytes(self) -> bytes:
        """Encode the command in its wire layout."""
        return _pack(self, self.bus, self.chip)

    @classmethod
    def from_bytes(cls, data) -> "SpiAcquireBus":
        """Decode the command from its wire layout."""
        return cls(*_unpack(cls, data))


@dataclass(frozen=True)
class SpiReleaseBus:
    """Request to release an SPI bus; answered by SpiStatusCode."""

    TYPE: ClassVar[CommandType] = CommandType.SPI_RELEASE_BUS
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<BB")

    bus: int

    def __post_init__(self) -> None:
        _check_uint("bus", self.bus, 8)

    def to_bytes(self) -> bytes:
        """Encode the command in its wire layout."""
        return _pack(self, self.bus)

    @classmethod
    def from_bytes(cls, data) -> "SpiReleaseBus":
        """Decode the command from its wire layout."""
        return cls(*_unpack(cls, data))


@dataclass(frozen=True)
class SpiXfer:
    """Full-duplex SPI transfer; the reply is another SpiXfer."""

    TYPE: ClassVar[CommandType] = CommandType.SPI_XFER
    _LAYOUT: ClassVar[struct.Struct] = _PAYLOAD_LAYOUT

    bus: int
    data: bytes = b""

    def __post_init__(self) -> None:
        _check_uint("bus", self.bus, 8)
        object.__setattr__(self, "data", _check_payload(self.data))

    def to_bytes(self) -> bytes:
        """Encode the command in its wire layout."""
        return _pack(self, self.bus, len(self.data), self.data)

    @classmethod
    def from_bytes(cls, data) -> "SpiXfer":
        """Decode the command from its wire layout."""
        return _unpack_payload(cls, data)


@dataclass(frozen=True)
class I2cStatusCode:
    """Server reply to an I2C request."""

    TYPE: ClassVar[CommandType] = CommandType.I2C_STATUS_CODE
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<BB")

    status: I2cStatus

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", I2cStatus(self.status))

    def to_bytes(self) -> bytes:
        """Encode the command in its wire layout."""
        return _pack(self, self.status)

    @classmethod
    def from_bytes(cls, data) -> "I2cStatusCode":
        """Decode the command from its wire layout."""
        return cls(*_unpack(cls, data))


@dataclass(frozen=True)
class I2cStart:
    """Start condition addressed to a device; answered by I2cStatusCode."""

    TYPE: ClassVar[CommandType] = CommandType.I2C_START
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<BBH")

    bus: int
    address: int

    def __post_init__(self) -> None:
        _check_uint("bus", self.bus, 8)
        _check_uint("address", self.address, 16)

    def to_bytes(self) -> bytes:
        """Encode the command in its wire layout."""
        return _pack(self, self.bus, self.address)

    @classmethod
    def from_bytes(cls, data) -> "I2cStart":
        """Decode the command from its wire layout."""
        return cls(*_unpack(cls, data))


@dataclass(frozen=True)
class I2cStop:
    """Stop condition; answered by I2cStatusCode."""

    TYPE: ClassVar[CommandType] = CommandType.I2C_STOP
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<BB")

    bus: int

    def __post_init__(self) -> None:
        _check_uint("bus", self.bus, 8)

    def to_bytes(self) -> bytes:
        """Encode the command in its wire layout."""
        return _pack(self, self.bus)

    @classmethod
    def from_bytes(cls, data) -> "I2cStop":
        """Decode the command from its wire layout."""
        return cls(*_unpack(cls, data))


@dataclass(frozen=True)
class I2cWrite:
    """Bytes written on an I2C bus; answered by I2cStatusCode."""

    TYPE: ClassVar[CommandType] = CommandType.I2C_WRITE
    _LAYOUT: ClassVar[struct.Struct] = _PAYLOAD_LAYOUT

    bus: int
    data: bytes = b""

    def __post_init__(self) -> None:
        _check_uint("bus", self.bus, 8)
        object.__setattr__(self, "data", _check_payload(self.data))

    def to_bytes(self) -> bytes:
        """Encode the command in its wire layout."""
        return _pack(self, self.bus, len(self.data), self.data)

    @classmethod
    def from_bytes(cls, data) -> "I2cWrite":
        """Decode the command from its wire layout."""
        return _unpack_payload(cls, data)


@dataclass(frozen=True)
class I2cRead:
    """Request to read bytes from an I2C bus; answered by I2cStatusCode and I2cReadData."""

    TYPE: ClassVar[CommandType] = CommandType.I2C_READ
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<BBH")

    bus: int
    data_size: int

    def __post_init__(self) -> None:
        _check_uint("bus", self.bus, 8)
        _check_uint("data_size", self.data_size, 16)

    def to_bytes(self) -> bytes:
        """Encode the command in its wire layout."""
        return _pack(self, self.bus, self.data_size)

    @classmethod
    def from_bytes(cls, data) -> "I2cRead":
        """Decode the command from its wire layout."""
        return cls(*_unpack(cls, data))


@dataclass(frozen=True)
class I2cReadData:
    """Announces the bytes returned for an I2cRead."""

    TYPE: ClassVar[CommandType] = CommandType.I2C_READ_DATA
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<BBH")

    bus: int
    data_size: int

    def __post_init__(self) -> None:
        _check_uint("bus", self.bus, 8)
        _check_uint("data_size", self.data_size, 16)

    def to_bytes(self) -> bytes:
        """Encode the command in its wire layout."""
        return _pack(self, self.bus, self.data_size)

    @classmethod
    def from_bytes(cls, data) -> "I2cReadData":
        """Decode the command from its wire layout."""
        return cls(*_unpack(cls, data))


AnyCommand = Union[
    SpiStatusCode, SpiAcquireBus, SpiReleaseBus, SpiXfer,
    I2cStatusCode, I2cStart, I2cStop, I2cWrite, I2cRead, I2cReadData,
]

_BY_TYPE: dict[CommandType, type] = {
    cls.TYPE: cls
    for cls in (
        SpiStatusCode, SpiAcquireBus, SpiReleaseBus, SpiXfer,
        I2cStatusCode, I2cStart, I2cStop, I2cWrite, I2cRead, I2cReadData,
    )
}


def decode_command(data) -> AnyCommand:
    """Decode any command, choosing its kind from the leading type byte."""
    raw = bytes(data)
    if not raw:
        raise ValueError("empty command")
    try:
        kind = CommandType(raw[0])
    except ValueError:
        raise ValueError(f"unknown command type {raw[0]}") from None
    return _BY_TYPE[kind].from_bytes(raw)