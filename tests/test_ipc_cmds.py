import pytest

from flykit.ipc_cmds import (
    COMMAND_SIZE,
    MAX_PAYLOAD,
    CommandType,
    I2cRead,
    I2cReadData,
    I2cStart,
    I2cStatus,
    I2cStatusCode,
    I2cStop,
    I2cWrite,
    SpiAcquireBus,
    SpiReleaseBus,
    SpiStatus,
    SpiStatusCode,
    SpiXfer,
    decode_command,
)

SAMPLES = [
    SpiStatusCode(SpiStatus.BUS_BUSY),
    SpiAcquireBus(bus=2, chip=3),
    SpiReleaseBus(bus=4),
    SpiXfer(bus=1, data=b"\x01\x02\x03"),
    I2cStatusCode(I2cStatus.UNEXPECTED_STOP),
    I2cStart(bus=1, address=0x1234),
    I2cStop(bus=1),
    I2cWrite(bus=0, data=b"hello"),
    I2cRead(bus=3, data_size=16),
    I2cReadData(bus=3, data_size=16),
]


@pytest.mark.parametrize("command", SAMPLES)
def test_round_trip(command):
    raw = command.to_bytes()
    assert type(command).from_bytes(raw) == command
    assert decode_command(raw) == command


@pytest.mark.parametrize("command", SAMPLES)
def test_decode_command_dispatches_on_type(command):
    decoded = decode_command(command.to_bytes())
    assert type(decoded) is type(command)
    assert decoded == command


@pytest.mark.parametrize("command", SAMPLES)
def test_every_command_fits_a_slot_and_leads_with_its_type(command):
    raw = command.to_bytes()
    assert len(raw) <= COMMAND_SIZE
    assert CommandType(raw[0]) is type(command).TYPE


def test_spi_round_trips_by_name():
    assert SpiStatusCode.from_bytes(b"\x00\x02") == SpiStatusCode(SpiStatus.BUS_BUSY)
    assert SpiReleaseBus.from_bytes(b"\x02\x04") == SpiReleaseBus(bus=4)


def test_i2c_round_trips_by_name():
    assert I2cStatusCode.from_bytes(b"\x04\x01") == I2cStatusCode(I2cStatus.INVALID_DEVICE)
    assert I2cRead.from_bytes(I2cRead(bus=2, data_size=9).to_bytes()) == I2cRead(bus=2, data_size=9)
    assert I2cReadData.from_bytes(b"\x09\x02\x09\x00") == I2cReadData(bus=2, data_size=9)


def test_acquire_bus_wire_bytes():
    assert SpiAcquireBus(bus=2, chip=3).to_bytes() == b"\x01\x02\x03"


def test_i2c_start_address_is_little_endian():
    assert I2cStart(bus=1, address=0x1234).to_bytes() == b"\x05\x01\x34\x12"


def test_status_code_wire_bytes():
    raw = SpiStatusCode(SpiStatus.INVALID_DEVICE).to_bytes()
    assert raw == bytes([CommandType.SPI_STATUS_CODE, SpiStatus.INVALID_DEVICE])


@pytest.mark.parametrize("cls", [SpiXfer, I2cWrite])
def test_payload_commands_fill_a_whole_slot(cls):
    payload = b"abcdef"
    raw = cls(bus=7, data=payload).to_bytes()
    assert len(raw) == COMMAND_SIZE
    assert int.from_bytes(raw[2:4], "little") == len(payload)
    assert raw[4:4 + len(payload)] == payload
    assert set(raw[4 + len(payload):]) == {0}


def test_largest_payload_round_trips():
    payload = bytes(range(256)) * 3 + bytes(MAX_PAYLOAD - 768)
    command = SpiXfer(bus=0, data=payload)
    assert SpiXfer.from_bytes(command.to_bytes()).data == payload


def test_payload_too_large_is_rejected():
    with pytest.raises(ValueError):
        I2cWrite(bus=0, data=bytes(MAX_PAYLOAD + 1))


def test_declared_size_beyond_payload_is_rejected():
    raw = bytearray(SpiXfer(bus=0, data=b"x").to_bytes())
    raw[2:4] = (MAX_PAYLOAD + 1).to_bytes(2, "little")
    with pytest.raises(ValueError):
        SpiXfer.from_bytes(bytes(raw))


def test_from_bytes_rejects_wrong_type():
    with pytest.raises(ValueError):
        SpiReleaseBus.from_bytes(I2cStop(bus=1).to_bytes())


def test_from_bytes_rejects_wrong_length():
    with pytest.raises(ValueError):
        I2cStart.from_bytes(b"\x05\x01\x34")


def test_decode_rejects_empty_input():
    with pytest.raises(ValueError):
        decode_command(b"")


def test_decode_rejects_unknown_type():
    with pytest.raises(ValueError):
        decode_command(b"\xff\x00")


def test_unknown_status_is_rejected():
    with pytest.raises(ValueError):
        I2cStatusCode.from_bytes(bytes([CommandType.I2C_STATUS_CODE, 200]))


def test_bus_must_fit_a_byte():
    with pytest.raises(ValueError):
        SpiAcquireBus(bus=256, chip=0)


def test_address_must_fit_16_bits():
    with pytest.raises(ValueError):
        I2cStart(bus=0, address=1 << 16)


def test_read_and_read_data_are_told_apart():
    read = I2cRead(bus=1, data_size=8)
    data = I2cReadData(bus=1, data_size=8)
    assert read.to_bytes()[0] != data.to_bytes()[0]
    assert type(decode_command(data.to_bytes())) is I2cReadData