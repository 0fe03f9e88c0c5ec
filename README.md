# flykit

Building blocks for a small flight-control stack. The package has no
runtime dependencies and needs Python 3.10 or later.

## Modules

- **`flykit.hal`**: frozen dataclasses and enums that identify and
  configure ADC, GPIO, I²C, PWM, SPI and UART peripherals (`AdcConfig`,
  `GpioConfig`, `I2cConfig`, `PwmConfig`, `SpiConfig`, `UartConfig`, the
  matching `*Id` classes, `SpiMode` with its `cpol` and `cpha` properties,
  …). Integer fields are checked against their unsigned bit widths, and enum
  fields are converted from plain integers.
- **`flykit.ipc_cmds`**: the binary command set used between a simulated
  HAL client and its server (`SpiStatusCode`, `SpiAcquireBus`,
  `SpiReleaseBus`, `SpiXfer`, `I2cStatusCode`, `I2cStart`, `I2cStop`,
  `I2cWrite`, `I2cRead`, `I2cReadData`). Each command has `to_bytes()` and
  `from_bytes()`. `decode_command()` picks the command class from the
  leading type byte. Payload commands carry at most 1020 bytes.
- **`flykit.ipc`**: `CommandQueue`, a bounded ring of `Command`s. A client
  calls `enqueue(data)`, which blocks until the server answers. The server
  looks at `current()`, replaces its `data` with the response and calls
  `dequeue()`.
- **`flykit.hwapi`**: abstract `Spi`, `I2C` and `Gpio` interfaces,
  `PinMode` and `Edge`, and `to_hex_string()`. `GpioStub` is an in-memory
  `Gpio` whose lines start low. `get_gpio()` returns one shared
  `GpioStub`.
- **`flykit.bno055`**: the BNO055 register map, status enums
  (`CalibrationStatus`, `SystemStatus`, `ErrorCode`, …), the field helpers
  `get_unmasked()` and `set_masked()`, and a `BNO055` driver that works
  with any `I2C` implementation. The driver provides `configure()`, which
  checks the chip id, plus `read_register()` and `write_register()`.
- **`flykit.app`**: option handling for the sensor service.
  `parse_options()` accepts `--key=value` arguments, `parse_ip_port()`
  parses `a.b.c.d:port`, and `Args.ctrl_addr()` reads the `cx` option,
  defaulting to port 2221. `IpPort` holds an address and port.
  `encode_reading()` packs orientation and acceleration into the
  six-float little-endian reply.
- **`flykit.halserver`**: settings for the HAL simulation server. It
  provides the `LogBit` flags, `parse_log_bits()` for lists of `LB_*`
  names, and `get_config()`, where a `--name` entry overrides `name`.
  `settings_from_config()` returns a `ServerSettings`.
- **`flykit.throttle_states`**: the power-management state machine. It
  provides the events (`SpeedChangeEvent`, `LeverChangeEvent`,
  `FdChangeEvent`, `PowerModeChangeEvent`,
  `EffectiveStallSpeedChangeEvent`), the context interfaces
  (`FlightInstrumentContext`, `FlightPowerContext`, `UserInputContext`),
  and `ManualThrottleState`, `AutoThrottleState` and
  `TogaLkThrottleState`.

## Examples

### Register fields

```python
from flykit.bno055 import get_unmasked, set_masked

field = get_unmasked(0b00110000, 0b00100000)   # -> 2
raw = set_masked(0b00110000, field)            # -> 0b00100000
```

### IPC commands

```python
from flykit.ipc_cmds import I2cStart, decode_command

wire = I2cStart(bus=1, address=0x29).to_bytes()
command = decode_command(wire)                 # I2cStart(bus=1, address=41)
```

### Request/response queue

```python
import threading

from flykit.ipc import CommandQueue

queue = CommandQueue(capacity=4)

def serve_one():
    while not len(queue):
        pass
    command = queue.current()
    command.data = command.data.upper()
    queue.dequeue()

server = threading.Thread(target=serve_one)
server.start()
reply = queue.enqueue(b"ping")                 # -> b"PING"
server.join()
```

### Throttle state machine

To use the states, supply two things:

- a state machine, that is, a `FiniteStateMachine` with `change_state(state)`;
- a `FlightInstrumentContext` that implements `effective_stall_speed()` and
  `indicated_airspeed()`.

Then wire the states together:

```python
from flykit.throttle_states import (
    AutoThrottleState,
    ManualThrottleState,
    PowerMode,
    PowerModeChangeEvent,
    SpeedChangeEvent,
    TogaLkThrottleState,
)

manual = ManualThrottleState(fsm, instruments)
toga_lk = TogaLkThrottleState()

with AutoThrottleState(fsm, instruments) as auto:
    manual.set_target_state_instances(manual, auto, toga_lk)

    # Selecting or managing power hands control to the autothrottle.
    manual.on_event(PowerModeChangeEvent(PowerMode.SELECTED))

    # An airspeed at or below the effective stall speed locks TOGA.
    manual.on_event(SpeedChangeEvent(speed=4.0))
```

`AutoThrottleState` runs a background control loop that counts its cycles
in `cycles`:

- The loop starts paused (`is_paused()`).
- `on_enter()` releases it and `on_exit()` pauses it again.
- Leaving the `with` block, or calling `close()`, stops it.

## What the package does not do

- **No hardware access.** `Spi`, `I2C` and `Gpio` are interfaces only. The
  only implementation is the in-memory `GpioStub`. To talk to a real sensor
  or bus, supply your own `I2C` or `Spi`.
- **No running services and no command-line entry points.** The package
  does not:
  - open a UDP control socket or run a sensor sampling loop;
  - run a HAL simulation server or read its configuration file;
  - move commands between processes.

  `flykit.app` and `flykit.halserver` only parse options and settings, and
  `CommandQueue` works between threads of one process.
- **No concrete state machine.** The throttle states report transitions
  through the `FiniteStateMachine` you pass in. They do not compute or
  command engine power.