"""Peripheral identifiers and configurations for the hardware abstraction layer."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar, Optional


def _check_uint(name: str, value: object, bits: int, *, optional: bool = False) -> None:
    if value is None:
        if optional:
            return
        raise ValueError(f"{name} is required")
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{name} must fit in {bits} unsigned bits, got {value}")


def _coerce(instance: object, name: str, enum_type: type[enum.Enum]) -> None:
    object.__setattr__(instance, name, enum_type(getattr(instance, name)))


class AdcReference(enum.IntEnum):
    """Voltage reference used by an ADC."""

    VCC = 0
    INTERNAL = 1
    EXTERNAL = 2


@dataclass(frozen=True)
class AdcConfig:
    """Sampling configuration of an ADC."""

    sample_rate_hz: int
    resolution_bits: int
    voltage_reference: AdcReference

    def __post_init__(self) -> None:
        _check_uint("sample_rate_hz", self.sample_rate_hz, 32)
        _check_uint("resolution_bits", self.resolution_bits, 8)
        _coerce(self, "voltage_reference", AdcReference)


@dataclass(frozen=True)
class AdcId:
    """Names an ADC and, optionally, its channel and pin."""

    name: str
    channel: Optional[int] = None
    pin: Optional[int] = None

    def __post_init__(self) -> None:
        _check_uint("channel", self.channel, 8, optional=True)
        _check_uint("pin", self.pin, 8, optional=True)


class GpioDirection(enum.IntEnum):
    INPUT = 0
    OUTPUT = 1


class GpioPullMode(enum.IntEnum):
    FLOATING = 0
    PULL_UP = 1
    PULL_DOWN = 2


class GpioEdgeTrigger(enum.IntEnum):
    NONE = 0
    RISING = 1
    FALLING = 2
    BOTH = 3


@dataclass(frozen=True)
class GpioConfig:
    """Direction, pull and interrupt trigger of a GPIO line."""

    direction: GpioDirection
    pull_mode: GpioPullMode
    interrupt_trigger: GpioEdgeTrigger

    def __post_init__(self) -> None:
        _coerce(self, "direction", GpioDirection)
        _coerce(self, "pull_mode", GpioPullMode)
        _coerce(self, "interrupt_trigger", GpioEdgeTrigger)


@dataclass(frozen=True)
class GpioId:
    """Names a GPIO line and, optionally, its pin."""

    name: str
    pin: Optional[int] = None

    def __post_init__(self) -> None:
        _check_uint("pin", self.pin, 8, optional=True)


class I2cAddressSize(enum.IntEnum):
    SEVEN_BIT = 0
    TEN_BIT = 1


@dataclass(frozen=True)
class I2cConfig:
    """Bus configuration of an I2C master."""

    STANDARD_MODE: ClassVar[int] = 100_000
    FAST_MODE: ClassVar[int] = 400_000
    FAST_MODE_PLUS: ClassVar[int] = 1_000_000
    HIGH_SPEED_MODE: ClassVar[int] = 3_400_000

    clock_speed_hz: int
    address_size: I2cAddressSize
    enable_clock_stretching: bool

    def __post_init__(self) -> None:
        _check_uint("clock_speed_hz", self.clock_speed_hz, 32)
        _coerce(self, "address_size", I2cAddressSize)


@dataclass(frozen=True)
class I2cId:
    """Names an I2C bus and, optionally, its data and clock pins."""

    name: str
    pin_sda: Optional[int] = None
    pin_sck: Optional[int] = None

    def __post_init__(self) -> None:
        _check_uint("pin_sda", self.pin_sda, 8, optional=True)
        _check_uint("pin_sck", self.pin_sck, 8, optional=True)


class PwmAlignment(enum.IntEnum):
    LEFT = 0
    CENTER = 1
    RIGHT = 2


@dataclass(frozen=True)
class PwmConfig:
    """Frequency, resolution and shape of a PWM output."""

    frequency_hz: int
    resolution_bits: int
    alignment: PwmAlignment
    enable_invert_polarity: bool

    def __post_init__(self) -> None:
        _check_uint("frequency_hz", self.frequency_hz, 64)
        _check_uint("resolution_bits", self.resolution_bits, 8)
        _coerce(self, "alignment", PwmAlignment)


@dataclass(frozen=True)
class PwmId:
    """Names a PWM output and, optionally, its pin and channel."""

    name: str
    pin_out: Optional[int] = None
    channel: Optional[int] = None

    def __post_init__(self) -> None:
        _check_uint("pin_out", self.pin_out, 8, optional=True)
        _check_uint("channel", self.channel, 8, optional=True)


class SpiMode(enum.IntEnum):
    """SPI clock mode; bit 1 is the clock polarity, bit 0 the clock phase."""

    MODE0 = 0
    MODE1 = 1
    MODE2 = 2
    MODE3 = 3

    @property
    def cpol(self) -> int:
        """Clock polarity."""
        return (self.value >> 1) & 1

    @property
    def cpha(self) -> int:
        """Clock phase."""
        return self.value & 1


class SpiBitOrder(enum.IntEnum):
    MSB = 0
    LSB = 1


@dataclass(frozen=True)
class SpiConfig:
    """Clock, framing and chip-select configuration of an SPI device."""

    clock_speed_hz: int
    mode: SpiMode
    bit_order: SpiBitOrder
    data_bits: int
    cs_active_low: bool

    def __post_init__(self) -> None:
        _check_uint("clock_speed_hz", self.clock_speed_hz, 32)
        _coerce(self, "mode", SpiMode)
        _coerce(self, "bit_order", SpiBitOrder)
        _check_uint("data_bits", self.data_bits, 8)


@dataclass(frozen=True)
class SpiId:
    """Names an SPI device and, optionally, its chip-select pin."""

    name: str
    pin_cs: Optional[int] = None

    def __post_init__(self) -> None:
        _check_uint("pin_cs", self.pin_cs, 8, optional=True)


@dataclass(frozen=True)
class UartConfig:
    """Baud rate and line polarity of a UART."""

    baud: int
    inverted: bool

    def __post_init__(self) -> None:
        _check_uint("baud", self.baud, 32)


@dataclass(frozen=True)
class UartId:
    """Names a UART and, optionally, its transmit and receive pins."""

    name: str
    pin_tx: Optional[int] = None
    pin_rx: Optional[int] = None

    def __post_init__(self) -> None:
        _check_uint("pin_tx", self.pin_tx, 8, optional=True)
        _check_uint("pin_rx", self.pin_rx, 8, optional=True)