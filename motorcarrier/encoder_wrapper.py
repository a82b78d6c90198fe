"""Encoder state with count and velocity interrupt thresholds."""

from __future__ import annotations

from motorcarrier.fixedpoint import FpS
from motorcarrier.quadrature import QuadratureDecoder

_FRAC_BITS = 8
_VELOCITY_MASK = 0xFFFFFF


def _fix16(value: int | float) -> FpS:
    """A 32-bit fixed-point value with 8 fractional bits."""
    return FpS(value, _FRAC_BITS, 32)


def _int32(value: int) -> int:
    value = int(value) & 0xFFFFFFFF
    return value - 0x1_0000_0000 if value >= 0x8000_0000 else value


class EncoderWrapper:
    """A quadrature encoder together with its interrupt configuration.

    ``pin1`` and ``pin2`` are the initial levels of the two channels.
    Position counting is done by a :class:`QuadratureDecoder`; the count
    and velocity thresholds that should raise an interrupt are kept here.
    """

    def __init__(self, pin1: bool | int, pin2: bool | int, index: int) -> None:
        self.index = index
        self._decoder = QuadratureDecoder(pin1, pin2)
        self.underflow = False
        self.overflow = False
        self.velocity = _fix16(0)
        self.position = _fix16(0)
        self.irq_ratio = _fix16(2.0)
        self.irq_count_enabled = False
        self.irq_velocity_enabled = False
        self.target_count = -1
        self.target_velocity = _fix16(-1.0)

    def update(self, pin1: bool | int, pin2: bool | int) -> int:
        """Feed a new sample of both channels; returns the change in count."""
        return self._decoder.update(pin1, pin2)

    def read(self) -> int:
        """The current position count."""
        return self._decoder.read()

    def reset_counter(self, value: int) -> None:
        """Set the position count to ``value``."""
        self._decoder.write(value)

    def set_irq_on_count(self, value: int) -> None:
        """Arm the interrupt that fires when the count reaches ``value``."""
        self.target_count = _int32(value)
        self.irq_count_enabled = True

    def set_irq_on_velocity(self, value: int) -> None:
        """Arm the velocity interrupt at the low 24 bits of ``value``.

        A value of zero disarms it and leaves the threshold unchanged.
        """
        if value != 0:
            self.target_velocity = _fix16(int(value) & _VELOCITY_MASK)
            self.irq_velocity_enabled = True
        else:
            self.irq_velocity_enabled = False