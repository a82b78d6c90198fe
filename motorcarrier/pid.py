"""A discrete PID controller with anti-windup and bumpless transfer."""

from __future__ import annotations

import time
from enum import IntEnum
from typing import Callable

_MASK32 = 0xFFFFFFFF


class Mode(IntEnum):
    """Whether the controller is computing its output."""

    MANUAL = 0
    AUTOMATIC = 1


class Direction(IntEnum):
    """How the process reacts to a rising output."""

    DIRECT = 0
    REVERSE = 1


class ProportionalOn(IntEnum):
    """What the proportional term acts on."""

    MEASUREMENT = 0
    ERROR = 1


def _millis() -> int:
    """Milliseconds from a monotonic clock, wrapping at 32 bits."""
    return (time.monotonic_ns() // 1_000_000) & _MASK32


class PIDController:
    """A PID controller sampled at a fixed period.

    The process value is read from ``input``, the target from ``setpoint``,
    and the result is written to ``output``. ``clock`` returns the current
    time in milliseconds; differences are taken modulo 2**32 so a wrapping
    counter works.
    """

    def __init__(
        self,
        kp: float,
        ki: float,
        kd: float,
        direction: Direction = Direction.DIRECT,
        p_on: ProportionalOn = ProportionalOn.ERROR,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.input = 0.0
        self.output = 0.0
        self.setpoint = 0.0
        self._clock = clock if clock is not None else _millis
        self._in_auto = False
        self._out_min = 0.0
        self._out_max = 255.0
        self._output_sum = 0.0
        self._last_input = 0.0
        self._sample_time = 10
        self._kp = self._ki = self._kd = 0.0
        self._disp_kp = self._disp_ki = self._disp_kd = 0.0
        self._direction = Direction(direction)
        self._p_on = ProportionalOn(p_on)

        self.set_output_limits(0.0, 255.0)
        self.set_controller_direction(direction)
        self.set_tunings(kp, ki, kd, p_on)
        self._last_time = (int(self._clock()) - self._sample_time) & _MASK32

    def compute(self) -> bool:
        """Update ``output`` if a sample period has elapsed.

        Returns True when a new output was computed.
        """
        if not self._in_auto:
            return False
        now = int(self._clock()) & _MASK32
        if (now - self._last_time) & _MASK32 < self._sample_time:
            return False

        value = self.input
        error = self.setpoint - value
        d_input = value - self._last_input
        self._output_sum += self._ki * error
        if self._p_on is not ProportionalOn.ERROR:
            self._output_sum -= self._kp * d_input
        self._output_sum = self._clamp(self._output_sum)

        output = self._kp * error if self._p_on is ProportionalOn.ERROR else 0.0
        output += self._output_sum - self._kd * d_input
        self.output = self._clamp(output)

        self._last_input = value
        self._last_time = now
        return True

    def _clamp(self, value: float) -> float:
        if value > self._out_max:
            return self._out_max
        if value < self._out_min:
            return self._out_min
        return value

    def set_mode(self, mode: Mode) -> None:
        """Switch between manual and automatic; entering automatic re-initialises."""
        new_auto = mode == Mode.AUTOMATIC
        if new_auto and not self._in_auto:
            self._initialize()
        self._in_auto = new_auto

    def _initialize(self) -> None:
        self._output_sum = self._clamp(self.output)
        self._last_input = self.input

    def set_output_limits(self, minimum: float, maximum: float) -> None:
        """Clamp the output range; ignored unless ``minimum < maximum``."""
        if minimum >= maximum:
            return
        self._out_min = float(minimum)
        self._out_max = float(maximum)
        if self._in_auto:
            self.output = self._clamp(self.output)
            self._output_sum = self._clamp(self._output_sum)

    def set_tunings(
        self,
        kp: float,
        ki: float,
        kd: float,
        p_on: ProportionalOn | None = None,
    ) -> None:
        """Set the gains; a negative gain leaves all settings unchanged.

        Without ``p_on`` the current proportional mode is kept.
        """
        if kp < 0 or ki < 0 or kd < 0:
            return
        if p_on is not None:
            self._p_on = ProportionalOn(p_on)

        self._disp_kp, self._disp_ki, self._disp_kd = float(kp), float(ki), float(kd)
        sample_seconds = self._sample_time / 1000.0
        self._kp = float(kp)
        self._ki = ki * sample_seconds
        self._kd = kd / sample_seconds
        if self._direction is Direction.REVERSE:
            self._kp, self._ki, self._kd = -self._kp, -self._ki, -self._kd

    def set_controller_direction(self, direction: Direction) -> None:
        """Set whether a rising output raises or lowers the process value."""
        direction = Direction(direction)
        if self._in_auto and direction is not self._direction:
            self._kp, self._ki, self._kd = -self._kp, -self._ki, -self._kd
        self._direction = direction

    def set_sample_time(self, sample_time_ms: int) -> None:
        """Set the sampling period in milliseconds; non-positive values are ignored."""
        if sample_time_ms <= 0:
            return
        ratio = sample_time_ms / self._sample_time
        self._ki *= ratio
        self._kd /= ratio
        self._sample_time = int(sample_time_ms)

    @property
    def kp(self) -> float:
        """Proportional gain as entered."""
        return self._disp_kp

    @property
    def ki(self) -> float:
        """Integral gain as entered."""
        return self._disp_ki

    @property
    def kd(self) -> float:
        """Derivative gain as entered."""
        return self._disp_kd

    @property
    def mode(self) -> Mode:
        """The current operating mode."""
        return Mode.AUTOMATIC if self._in_auto else Mode.MANUAL

    @property
    def direction(self) -> Direction:
        """The controller direction."""
        return self._direction

    @property
    def sample_time(self) -> int:
        """The sampling period in milliseconds."""
        return self._sample_time