"""Auto-throttle state machine: flight contexts, power events and throttle states."""

from __future__ import annotations

import abc
import enum
import threading
from dataclasses import dataclass
from typing import Optional, Union

CONTROL_PERIOD_S = 0.1


class PowerMode(enum.Enum):
    """Operating mode of the power management."""

    MANUAL = enum.auto()
    SELECTED = enum.auto()
    MANAGED = enum.auto()


@dataclass(frozen=True)
class SpeedChangeEvent:
    speed: float


@dataclass(frozen=True)
class LeverChangeEvent:
    lever: float


@dataclass(frozen=True)
class FdChangeEvent:
    is_enabled: bool


@dataclass(frozen=True)
class PowerModeChangeEvent:
    mode: PowerMode


@dataclass(frozen=True)
class EffectiveStallSpeedChangeEvent:
    speed: float


ThrottleEvent = Union[
    SpeedChangeEvent,
    LeverChangeEvent,
    FdChangeEvent,
    PowerModeChangeEvent,
    EffectiveStallSpeedChangeEvent,
]

_EVENT_TYPES = (
    SpeedChangeEvent,
    LeverChangeEvent,
    FdChangeEvent,
    PowerModeChangeEvent,
    EffectiveStallSpeedChangeEvent,
)


def _check_event(event: object) -> None:
    if not isinstance(event, _EVENT_TYPES):
        raise TypeError(f"unsupported throttle event: {type(event).__name__}")


class FlightInstrumentContext(abc.ABC):
    """Speeds reported by the flight instruments."""

    @abc.abstractmethod
    def effective_stall_speed(self) -> float:
        """Current effective stall speed."""

    @abc.abstractmethod
    def indicated_airspeed(self) -> float:
        """Current indicated airspeed."""


class FlightPowerContext(abc.ABC):
    """Sink for commanded engine power."""

    @abc.abstractmethod
    def set_output_power_left(self, power: float) -> None:
        """Command the left engine."""

    @abc.abstractmethod
    def set_output_power_right(self, power: float) -> None:
        """Command the right engine."""

    @abc.abstractmethod
    def set_output_power(self, power: float) -> None:
        """Command both engines."""


class UserInputContext(abc.ABC):
    """Pilot inputs and selected targets."""

    @abc.abstractmethod
    def input_elevator(self) -> float:
        """Elevator input."""

    @abc.abstractmethod
    def input_power_left(self) -> float:
        """Left power lever."""

    @abc.abstractmethod
    def input_power_right(self) -> float:
        """Right power lever."""

    @abc.abstractmethod
    def alt_sel(self) -> float:
        """Selected altitude."""

    @abc.abstractmethod
    def spd_sel(self) -> float:
        """Selected speed."""

    @abc.abstractmethod
    def vs_sel(self) -> float:
        """Selected vertical speed."""


class State(abc.ABC):
    """A state of a finite state machine."""

    @abc.abstractmethod
    def on_enter(self) -> None:
        """Called when the machine enters this state."""

    @abc.abstractmethod
    def on_exit(self) -> None:
        """Called when the machine leaves this state."""


class FiniteStateMachine(abc.ABC):
    """A machine that can be moved to another state."""

    @abc.abstractmethod
    def change_state(self, target: State) -> None:
        """Switch to ``target``."""


class CommonThrottleState(State):
    """Transitions shared by the throttle states."""

    def __init__(
        self,
        fsm: FiniteStateMachine,
        flight_instrument_context: FlightInstrumentContext,
    ) -> None:
        self.fsm = fsm
        self.flight_instrument_context = flight_instrument_context
        self._manual: Optional[State] = None
        self._auto: Optional[State] = None
        self._toga_lk: Optional[State] = None

    def set_target_state_instances(
        self, manual: State, auto: State, toga_lk: State
    ) -> None:
        """Name the states this one may transition to."""
        self._manual = manual
        self._auto = auto
        self._toga_lk = toga_lk

    def _go(self, target: Optional[State]) -> None:
        if target is None:
            raise RuntimeError("target states have not been set")
        self.fsm.change_state(target)

    def on_event(self, event: ThrottleEvent) -> None:
        """React to a throttle event, possibly changing state."""
        _check_event(event)
        if isinstance(event, SpeedChangeEvent):
            if self.flight_instrument_context.effective_stall_speed() >= event.speed:
                self._go(self._toga_lk)
        elif isinstance(event, PowerModeChangeEvent):
            if event.mode is PowerMode.MANUAL:
                self._go(self._manual)
            elif event.mode in (PowerMode.SELECTED, PowerMode.MANAGED):
                self._go(self._auto)
        elif isinstance(event, EffectiveStallSpeedChangeEvent):
            if self.flight_instrument_context.indicated_airspeed() <= event.speed:
                self._go(self._toga_lk)
        # Lever and flight-director changes cause no transition here.


class ManualThrottleState(CommonThrottleState):
    """Power follows the levers."""

    def __init__(
        self,
        fsm: FiniteStateMachine,
        flight_instrument_context: FlightInstrumentContext,
    ) -> None:
        super().__init__(fsm, flight_instrument_context)
        self.active = False

    def on_enter(self) -> None:
        self.active = True

    def on_exit(self) -> None:
        self.active = False


class AutoThrottleState(CommonThrottleState):
    """Power is computed by a control loop that runs while the state is active."""

    def __init__(
        self,
        fsm: FiniteStateMachine,
        flight_instrument_context: FlightInstrumentContext,
    ) -> None:
        super().__init__(fsm, flight_instrument_context)
        self._cond = threading.Condition()
        self._paused = True
        self._exiting = False
        self._cycles = 0
        self._thread = threading.Thread(
            target=self._control_loop, name="auto-throttle", daemon=True
        )
        self._thread.start()

    @property
    def cycles(self) -> int:
        """Number of control cycles run so far."""
        with self._cond:
            return self._cycles

    def is_paused(self) -> bool:
        """Whether the control loop is currently held."""
        with self._cond:
            return self._paused

    def on_enter(self) -> None:
        with self._cond:
            self._paused = False
            self._cond.notify_all()

    def on_exit(self) -> None:
        with self._cond:
            self._paused = True

    def on_event(self, event: ThrottleEvent) -> None:
        _check_event(event)
        if isinstance(event, FdChangeEvent):
            return
        super().on_event(event)

    def close(self) -> None:
        """Stop the control loop and wait for it to finish."""
        with self._cond:
            self._exiting = True
            self._cond.notify_all()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join()

    def __enter__(self) -> "AutoThrottleState":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _control_loop(self) -> None:
        with self._cond:
            while True:
                self._cond.wait_for(lambda: not self._paused or self._exiting)
                if self._exiting:
                    break
                self._cycles += 1
                self._cond.notify_all()
                self._cond.wait_for(lambda: self._exiting, timeout=CONTROL_PERIOD_S)


class TogaLkThrottleState(State):
    """Take-off/go-around thrust lock; ignores every event."""

    def __init__(self) -> None:
        self.active = False

    def on_enter(self) -> None:
        self.active = True

    def on_exit(self) -> None:
        self.active = False

    def on_event(self, event: ThrottleEvent) -> None:
        _check_event(event)