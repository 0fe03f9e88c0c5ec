"""Register map and driver for the BNO055 orientation sensor."""

from __future__ import annotations

import enum

from flykit.hwapi import I2C

# Page 0
REG0_BNOCHIPID = 0x00
REG0_ACCCHIPID = 0x01
REG0_MAGCHIPID = 0x02
REG0_GYRCHIPID = 0x03
REG0_SWREVIDLO = 0x04
REG0_SWREVIDHI = 0x05
REG0_BLREVID = 0x06
REG0_PAGEID = 0x07
REG0_ACCDATAXLO = 0x08
REG0_ACCDATAXHI = 0x09
REG0_ACCDATAYLO = 0x0A
REG0_ACCDATAYHI = 0x0B
REG0_ACCDATAZLO = 0x0C
REG0_ACCDATAZHI = 0x0D
REG0_MAGDATAXLO = 0x0E
REG0_MAGDATAXHI = 0x0F
REG0_MAGDATAYLO = 0x10
REG0_MAGDATAYHI = 0x11
REG0_MAGDATAZLO = 0x12
REG0_MAGDATAZHI = 0x13
REG0_GYRDATAXLO = 0x14
REG0_GYRDATAXHI = 0x15
REG0_GYRDATAYLO = 0x16
REG0_GYRDATAYHI = 0x17
REG0_GYRDATAZLO = 0x18
REG0_GYRDATAZHI = 0x19
REG0_EULHDGLO = 0x1A
REG0_EULHDGHI = 0x1B
REG0_EULROLLGLO = 0x1C
REG0_EULROLLGHI = 0x1D
REG0_EULPUTCHLO = 0x1E
REG0_EULPUTCHHI = 0x1F
REG0_QUADATAWLO = 0x20
REG0_QUADATAWHI = 0x21
REG0_QUADATAXLO = 0x22
REG0_QUADATAXHI = 0x23
REG0_QUADATAYLO = 0x24
REG0_QUADATAYHI = 0x25
REG0_QUADATAZLO = 0x26
REG0_QUADATAZHI = 0x27
REG0_LIADATAXLO = 0x28
REG0_LIADATAXHI = 0x29
REG0_LIADATAYLO = 0x2A
REG0_LIADATAYHI = 0x2B
REG0_LIADATAZLO = 0x2C
REG0_LIADATAZHI = 0x2D
REG0_GRVDATAXLO = 0x2E
REG0_GRVDATAXHI = 0x2F
REG0_GRVDATAYLO = 0x30
REG0_GRVDATAYHI = 0x31
REG0_GRVDATAZLO = 0x32
REG0_GRVDATAZHI = 0x33
REG0_TEMP = 0x34

REG0_CALIBSTAT = 0x35
SYSCALIBSTATUSMASK = 0b11000000
GYRCALIBSTATUSMASK = 0b00110000
ACCCALIBSTATUSMASK = 0b00001100
MAGCALIBSTATUSMASK = 0b00000011

REG0_STRESULT = 0x36
STMCUMASK = 0b00001000
STGYRMASK = 0b00000100
STMAGMASK = 0b00000010
STACCMASK = 0b00000001

REG0_INTSTA = 0x37
ACCNMMASK = 0b10000000
ACCAMMASK = 0b01000000
ACCHIGHGMASK = 0b00100000
GYRHIGHRMASK = 0b00001000
GYRAMMASK = 0b00000100

REG0_SYSCLOCKSTATUS = 0x38
STMAINCLKMASK = 0b00000001

REG0_SYSSTATUSCODE = 0x39
REG0_SYSERRORCODE = 0x3A

REG0_UNITSEL = 0x3B
ORIANDROIDWINDOWSMASK = 0b10000000
TEMPUNITMASK = 0b00010000
EULUNITMASK = 0b00000100
GYRUNITMASK = 0b00000010
ACCUNITMASK = 0b00000001

REG0_OPRMODE = 0x3D
OPERATIONMODEMASK = 0b00001111

REG0_PWRMODE = 0x3E
POWERMODEMASK = 0b00000011

REG0_SYSTRIGGER = 0x3F
CLOCKSELMASK = 0b10000000
RESETINTMASK = 0b01000000
RESETSYSMASK = 0b00100000
SELFTESTMASK = 0b00000001

REG0_TEMPSOURCE = 0x40
TEMPSOURCEMASK = 0b00000011

REG0_AXISMAPCONFIG = 0x41
REMAPPEDZMASK = 0b00110000
REMAPPEDYMASK = 0b00001100
REMAPPEDXMASK = 0b00000011

REG0_AXISMAPSIGN = 0x42
REMAPPEDZSIGNMASK = 0b00001000
REMAPPEDYSIGNMASK = 0b00000010
REMAPPEDXSIGNMASK = 0b00000001

REG0_ACCOFFSETXLO = 0x55
REG0_ACCOFFSETXHI = 0x56
REG0_ACCOFFSETYLO = 0x57
REG0_ACCOFFSETYHI = 0x58
REG0_ACCOFFSETZLO = 0x59
REG0_ACCOFFSETZHI = 0x5A
REG0_MAGOFFSETXLO = 0x5B
REG0_MAGOFFSETXHI = 0x5C
REG0_MAGOFFSETYLO = 0x5D
REG0_MAGOFFSETYHI = 0x5E
REG0_MAGOFFSETZLO = 0x5F
REG0_MAGOFFSETZHI = 0x60
REG0_GYROFFSETXLO = 0x61
REG0_GYROFFSETXHI = 0x62
REG0_GYROFFSETYLO = 0x63
REG0_GYROFFSETYHI = 0x64
REG0_GYROFFSETZLO = 0x65
REG0_GYROFFSETZHI = 0x66
REG0_ACCRADIUSLO = 0x67
REG0_ACCRADIUSHI = 0x68
REG0_MAGRADIUSLO = 0x69
REG0_MAGRADIUSHI = 0x6A

# Page 1
REG1_PAGEID = 0x07

REG1_ACCCONFIG = 0x08
ACCPWRMODEMASK = 0b11100000
ACCBWMASK = 0b00011100
ACCRANGEMASK = 0b00000011

REG1_MAGCONFIG = 0x09
MAGPWRMODEMASK = 0b01100000
MAGOPRMODEMASK = 0b00011000
MAGDORMASK = 0b00000111

REG1_GYRCONFIG0 = 0x0A
GYRBWMASK = 0b00111000
GYRRANGEMASK = 0b00000111

REG1_GYRCONFIG1 = 0x0B
GYRPWRMODEMASK = 0b00000011

REG1_ACCSLPCONFIG = 0x0C
ACCSLPDURATIONMASK = 0b00011100
ACCSLPMODEMASK = 0b00000011

REG1_GYRSLPCONFIG = 0x0D
GYRAUTOSLPDURATIONMASK = 0b00111000
GYRSLPDURATIONMASK = 0b00000111

REG1_INTMASK = 0x0F
REG1_INTENMASK = 0x10

REG1_ACCAMTHRS = 0x11

REG1_ACCINTSET = 0x12
ACCHGZAXISMASK = 0b10000000
ACCHGYAXISMASK = 0b01000000
ACCHGXAXISMASK = 0b00100000
ACCAMNMZAXISMASK = 0b00010000
ACCAMNMYAXISMASK = 0b00001000
ACCAMNMXAXISMASK = 0b00000100
ACCAMDURATIONMASK = 0b00000011

REG1_ACCHGDUR = 0x13
REG1_ACCHGTHRS = 0x14
REG1_ACCNMTHRS = 0x15

REG1_ACCNMSET = 0x16
ACCNMDURMASK = 0b01111110
ACCSMNMMASK = 0b00000001

REG1_GYRINTSET = 0x17
GYRHRFILTMASK = 0b10000000
GYRAMFILTMASK = 0b01000000
GYRHRZAXISMASK = 0b00100000
GYRHRYAXISMASK = 0b00010000
GYRHRXAXISMASK = 0b00001000
GYRAMNMZAXISMASK = 0b00000100
GYRAMNMYAXISMASK = 0b00000010
GYRAMNMXAXISMASK = 0b00000001

REG1_GYRHRXSEL = 0x18
GYRHRXTHRSHYSTMASK = 0b01100000
GYRHRXTHRSMASK = 0b00011111
REG1_GYRDURX = 0x19

REG1_GYRHRYSEL = 0x1A
GYRHRYTHRSHYSTMASK = 0b01100000
GYRHRYTHRSMASK = 0b00011111
REG1_GYRDURY = 0x1B

REG1_GYRHRZSEL = 0x1C
GYRHRZTHRSHYSTMASK = 0b01100000
GYRHRZTHRSMASK = 0b00011111
REG1_GYRDURZ = 0x1D

REG1_GYRAMTHR = 0x1E

REG1_GYRAMSET = 0x1F
GYRAMAWAKEDURMASK = 0b00001100
GYRAMSLOPESAMPMASK = 0b00000011

REG1_UUID = 0x50

EXPECTED_CHIP_ID = 0b11100101


class CalibrationStatus(enum.IntEnum):
    NOT_CALIBRATED = 0
    BARELY_CALIBRATED = 1
    ALMOST_CALIBRATED = 2
    FULLY_CALIBRATED = 3


class SelfTestResult(enum.IntEnum):
    FAILED = 0
    PASSED = 1


class InterruptStatus(enum.IntEnum):
    NOT_TRIGGERED = 0
    TRIGGERED = 1


class MainClockStatus(enum.IntEnum):
    FREE = 0
    CONFIGURATION = 1


class SystemStatus(enum.IntEnum):
    IDLE = 0
    SYSTEM_ERROR = 1
    INIT_PERIPHERALS = 2
    INIT_SYSTEM = 3
    SELFTEST = 4
    RUN_FUSION = 5
    RUN = 6


class ErrorCode(enum.IntEnum):
    NO_ERROR = 0
    INIT_PERIPHERALS_ERROR = 1
    INIT_SYSTEM_ERROR = 2
    SELFTEST_FAILED = 3
    REGMAP_VAL_ERROR = 4
    REGMAP_ADDR_ERROR = 5
    REGMAP_WRITE_ERROR = 6
    BNONA = 7
    ACCEL_PWR_MODE_NA = 8
    FUSION_CONFIG_ERROR = 9
    SENSOR_CONFIG_ERROR = 10


def _trailing_zeros(mask: int) -> int:
    if mask <= 0:
        raise ValueError(f"mask must be a positive integer, got {mask}")
    return (mask & -mask).bit_length() - 1


def get_unmasked(mask: int, value: int) -> int:
    """Extract the field selected by ``mask`` from ``value``, shifted down to bit 0."""
    shift = _trailing_zeros(mask)
    return (mask >> shift) & (value >> shift)


def set_masked(mask: int, value: int) -> int:
    """Shift ``value`` into the field selected by ``mask``, dropping bits outside it."""
    return (value << _trailing_zeros(mask)) & mask


class BNO055:
    """Driver for a BNO055 reached through an I2C device."""

    def __init__(self, i2c: I2C) -> None:
        self._i2c = i2c

    def configure(self) -> None:
        """Check that the expected chip answers."""
        if self.read_register(REG0_BNOCHIPID)[0] != EXPECTED_CHIP_ID:
            raise RuntimeError("BNO055 is not recognized!")

    def read_register(self, register: int, count: int = 1) -> bytes:
        """Read ``count`` bytes starting at ``register``."""
        if count < 1:
            raise ValueError(f"count must be positive, got {count}")
        data = bytes(self._i2c.read_block(register, count))
        if len(data) != count:
            raise RuntimeError(
                f"short read at register {register:#04x}: {len(data)} of {count} bytes"
            )
        return data

    def write_register(self, register: int, value: int) -> None:
        """Write one byte to ``register``."""
        if not 0 <= value <= 0xFF:
            raise ValueError(f"register value must fit in a byte, got {value}")
        self._i2c.write_block(register, bytes([value]))