import pytest

from flykit import hwapi


def test_to_hex_string_pads_each_byte():
    assert hwapi.to_hex_string(bytes([0, 255, 16])) == "00ff10"


def test_to_hex_string_round_trip():
    data = bytes(range(0, 256, 7))
    assert bytes.fromhex(hwapi.to_hex_string(data)) == data


def test_to_hex_string_empty():
    assert hwapi.to_hex_string(b"") == ""


def test_get_gpio_is_shared():
    ticks = []
    hwapi.get_gpio().register_callback(5, hwapi.Edge.RISING, ticks.append)
    hwapi.get_gpio().callback(77)
    assert ticks == [77]


def test_stub_stores_registered_callback():
    stub = hwapi.GpioStub()
    ticks = []
    callback_id = stub.register_callback(17, hwapi.Edge.RISING, ticks.append)
    assert callback_id == 0
    stub.callback(1234)
    assert ticks == [1234]


def test_stub_rejects_bad_mode():
    with pytest.raises(ValueError):
        hwapi.GpioStub().set_mode(3, "sideways")


def test_stub_set_mode_accepts_pin_modes():
    stub = hwapi.GpioStub()
    stub.set_mode(3, hwapi.PinMode.OUTPUT)
    stub.set_mode(3, hwapi.PinMode.INPUT)
    assert stub.get(3) == 0


@pytest.mark.parametrize("interface", [hwapi.Spi, hwapi.I2C, hwapi.Gpio])
def test_interfaces_are_abstract(interface):
    with pytest.raises(TypeError):
        interface()


def test_concrete_i2c_subclass_works():
    class Memory(hwapi.I2C):
        def __init__(self):
            self.cells = bytearray(8)

        def write_block(self, register, data):
            self.cells[register:register + len(data)] = data

        def read_block(self, register, count):
            return bytes(self.cells[register:register + count])

    device = Memory()
    device.write_block(2, b"\x0a\x0b")
    assert hwapi.to_hex_string(device.read_block(2, 2)) == "0a0b"