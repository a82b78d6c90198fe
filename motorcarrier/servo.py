"""Servo motor channels driven through a command transport."""

from __future__ import annotations

import itertools
from enum import Enum
from typing import ClassVar, Protocol

_MIN_ANGLE = 0
_MAX_ANGLE = 180
_MIN_DUTY = 7
_MAX_DUTY = 28
_DETACHED = -1


class ServoCommand(Enum):
    """Commands a servo channel sends."""

    SET_PWM_DUTY_CYCLE = "set_pwm_duty_cycle_servo"
    SET_PWM_FREQUENCY = "set_pwm_frequency_servo"


class _Transport(Protocol):
    def set_data(self, command: ServoCommand, instance: int, value: int) -> None: ...


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def map_range(value: int, in_min: int, in_max: int, out_min: int, out_max: int) -> int:
    """Linearly re-map an integer from one range to another.

    Integer arithmetic throughout; the division truncates toward zero.
    """
    if in_max == in_min:
        raise ZeroDivisionError("input range is empty")
    return _trunc_div((value - in_min) * (out_max - out_min), in_max - in_min) + out_min


class ServoMotor:
    """One servo channel.

    Instances are numbered in creation order unless ``instance`` is given.
    """

    _instances: ClassVar[itertools.count] = itertools.count()

    def __init__(self, transport: _Transport, instance: int | None = None) -> None:
        self._transport = transport
        self.instance = next(ServoMotor._instances) if instance is None else instance

    def set_angle(self, angle: int) -> None:
        """Move to ``angle`` degrees, 0 to 180."""
        duty = map_range(angle, _MIN_ANGLE, _MAX_ANGLE, _MIN_DUTY, _MAX_DUTY)
        self._transport.set_data(ServoCommand.SET_PWM_DUTY_CYCLE, self.instance, duty)

    def detach(self) -> None:
        """Stop driving the servo."""
        self._transport.set_data(ServoCommand.SET_PWM_DUTY_CYCLE, self.instance, _DETACHED)

    def set_frequency(self, frequency: int) -> None:
        """Set the PWM frequency of the channel."""
        self._transport.set_data(ServoCommand.SET_PWM_FREQUENCY, self.instance, frequency)