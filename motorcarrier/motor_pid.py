"""Cascaded position/velocity control of a DC motor from encoder feedback."""

from __future__ import annotations

import itertools
import math
from enum import IntEnum
from typing import Callable, ClassVar, Protocol

from motorcarrier.pid import Direction, Mode, PIDController

KP_DEFAULT = 5000.0
KI_DEFAULT = 100.0
KD_DEFAULT = 0.0

_POSITION_VELOCITY_LIMIT = 30.0
_VELOCITY_DUTY_LIMIT = 100.0
_DEADZONE = 13


class ControlMode(IntEnum):
    """Which loop drives the motor."""

    OPEN_LOOP = 0
    POSITION = 1
    VELOCITY = 2


class Target(IntEnum):
    """Which setpoint a value applies to."""

    VELOCITY = 0
    POSITION = 1


class _Encoder(Protocol):
    def get_raw_count(self) -> int: ...

    def get_count_per_second(self) -> float: ...


class _Motor(Protocol):
    def set_duty(self, duty: int) -> None: ...


def _int16(value: int) -> int:
    value = int(value) & 0xFFFF
    return value - 0x10000 if value >= 0x8000 else value


class CascadePID:
    """A position loop feeding a velocity loop that sets the motor duty cycle.

    In position mode the position loop's output, slew-limited by the maximum
    acceleration, becomes the velocity setpoint. The velocity loop's output
    is offset by a fixed dead-zone compensation before reaching the motor.
    """

    _instances: ClassVar[itertools.count] = itertools.count()

    def __init__(
        self,
        encoder: _Encoder,
        motor: _Motor,
        index: int,
        periodms_velo: int,
        periodms_pos: int,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.instance = next(CascadePID._instances)
        self.index = index
        self._encoder = encoder
        self._motor = motor
        self._mode = ControlMode.VELOCITY
        self._max_acceleration = math.inf
        self._max_velocity = math.inf
        self._max_duty = 100
        self._min_duty = 0
        self._prev_velocity_command = 0.0

        self._pid_pos = PIDController(
            KP_DEFAULT, KI_DEFAULT, KD_DEFAULT, Direction.DIRECT, clock=clock
        )
        self._pid_velo = PIDController(
            KP_DEFAULT, KI_DEFAULT, KD_DEFAULT, Direction.DIRECT, clock=clock
        )
        self._pid_pos.set_sample_time(periodms_pos)
        self._pid_velo.set_sample_time(periodms_velo)
        self._pid_pos.set_output_limits(-_POSITION_VELOCITY_LIMIT, _POSITION_VELOCITY_LIMIT)
        self._pid_velo.set_output_limits(-_VELOCITY_DUTY_LIMIT, _VELOCITY_DUTY_LIMIT)

    @property
    def position_controller(self) -> PIDController:
        """The outer, position loop."""
        return self._pid_pos

    @property
    def velocity_controller(self) -> PIDController:
        """The inner, velocity loop."""
        return self._pid_velo

    @property
    def mode(self) -> ControlMode:
        return self._mode

    @property
    def target_position(self) -> float:
        return self._pid_pos.setpoint

    @property
    def target_velocity(self) -> float:
        return self._pid_velo.setpoint

    @property
    def max_acceleration(self) -> float:
        return self._max_acceleration

    @property
    def max_velocity(self) -> float:
        return self._max_velocity

    @property
    def min_duty(self) -> int:
        return self._min_duty

    @property
    def max_duty(self) -> int:
        return self._max_duty

    def set_gains(self, kp: float, ki: float, kd: float) -> None:
        """Apply the same gains to both loops."""
        self._pid_pos.set_tunings(float(kp), float(ki), float(kd))
        self._pid_velo.set_tunings(float(kp), float(ki), float(kd))

    def reset_gains(self) -> None:
        """Restore the default gains on both loops."""
        self.set_gains(KP_DEFAULT, KI_DEFAULT, KD_DEFAULT)

    def set_control_mode(self, mode: ControlMode) -> None:
        self._mode = ControlMode(mode)

    def set_setpoint(self, target: Target, value: int) -> None:
        """Set the velocity or position setpoint (a 16-bit signed value)."""
        target = Target(target)
        if target is Target.VELOCITY:
            self._pid_velo.setpoint = float(_int16(value))
        else:
            self._pid_pos.setpoint = float(_int16(value))

    def set_max_acceleration(self, max_accel: int) -> None:
        self._max_acceleration = float(_int16(max_accel))

    def set_max_velocity(self, max_velocity: int) -> None:
        self._max_velocity = float(_int16(max_velocity))

    def set_limits(self, min_duty: int, max_duty: int) -> None:
        self._max_duty = _int16(max_duty)
        self._min_duty = _int16(min_duty)

    def run(self) -> None:
        """Start both loops."""
        self._pid_velo.set_mode(Mode.AUTOMATIC)
        self._pid_pos.set_mode(Mode.AUTOMATIC)

    def stop(self) -> None:
        """Stop both loops."""
        self._pid_velo.set_mode(Mode.MANUAL)
        self._pid_pos.set_mode(Mode.MANUAL)

    def update(self) -> None:
        """Read the encoder and run whichever loops are due; call often."""
        self._pid_pos.input = float(self._encoder.get_raw_count())
        self._pid_velo.input = float(self._encoder.get_count_per_second())

        if self._mode is ControlMode.POSITION and self._pid_pos.compute():
            command = self._pid_pos.output
            previous = self._prev_velocity_command
            if previous - command > self._max_acceleration:
                command = previous - self._max_acceleration
            if command - previous > self._max_acceleration:
                command = previous + self._max_acceleration
            self._pid_velo.setpoint = command
            self._prev_velocity_command = command

        if self._pid_velo.compute():
            duty = int(self._pid_velo.output)
            duty = duty + _DEADZONE if duty > 0 else duty - _DEADZONE
            self._motor.set_duty(duty)