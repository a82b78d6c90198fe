"""Decoding of two-channel quadrature encoder signals into a position count."""

from __future__ import annotations

# Position change for each transition, indexed by
# (new pin2 << 3) | (new pin1 << 2) | (old pin2 << 1) | old pin1.
# A change on both channels at once is taken as two steps in the
# direction implied by a pin1 edge.
_TRANSITION_DELTA = (
    0, 1, -1, 2,
    -1, 0, -2, 1,
    1, -2, 0, -1,
    2, -1, 1, 0,
)


def _int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x1_0000_0000 if value >= 0x8000_0000 else value


def step(state: int, pin1: bool | int, pin2: bool | int) -> tuple[int, int]:
    """Advance the decoder by one sample of the two pins.

    ``state`` holds the previous pin levels (bit 0 for pin1, bit 1 for pin2);
    only its two low bits are used. Returns the new state and the change in
    position.
    """
    index = state & 3
    if pin1:
        index |= 4
    if pin2:
        index |= 8
    return index >> 2, _TRANSITION_DELTA[index]


class QuadratureDecoder:
    """Tracks the position of a quadrature encoder from sampled pin levels.

    The initial pin levels set the starting state; the position starts at
    zero and is kept as a signed 32-bit count that wraps on overflow.
    """

    __slots__ = ("_state", "_position")

    def __init__(self, pin1: bool | int, pin2: bool | int) -> None:
        state = 0
        if pin1:
            state |= 1
        if pin2:
            state |= 2
        self._state = state
        self._position = 0

    @property
    def state(self) -> int:
        """The last sampled pin levels: bit 0 is pin1, bit 1 is pin2."""
        return self._state

    def update(self, pin1: bool | int, pin2: bool | int) -> int:
        """Feed a new sample of both pins and return the change in position."""
        self._state, delta = step(self._state, pin1, pin2)
        if delta:
            self._position = _int32(self._position + delta)
        return delta

    def read(self) -> int:
        """The current position count."""
        return self._position

    def write(self, position: int) -> None:
        """Set the position count."""
        self._position = _int32(int(position))