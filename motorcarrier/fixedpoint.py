"""Fixed-point numbers with a per-value number of fractional bits."""

from __future__ import annotations

import math

_BASE_TO_OVERFLOW = {8: 16, 16: 32, 32: 64, 64: 64}


def _wrap(value: int, bits: int) -> int:
    """Wrap an integer into the signed two's-complement range of ``bits``."""
    mask = (1 << bits) - 1
    value &= mask
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    if b == 0:
        raise ZeroDivisionError("fixed-point division by zero")
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _trunc_mod(a: int, b: int) -> int:
    """Remainder whose sign follows the dividend."""
    if b == 0:
        raise ZeroDivisionError("fixed-point modulo by zero")
    return a - b * _trunc_div(a, b)


class FpS:
    """A signed fixed-point number stored in ``base_bits`` bits.

    Each value carries its own number of fractional bits. Arithmetic and
    comparisons between values of differing precision are done at the lower
    of the two precisions, and the result takes that precision. Raw storage
    wraps like a signed integer of ``base_bits`` bits; multiplication and
    division use an intermediate twice as wide (capped at 64 bits).
    """

    __slots__ = ("_raw", "_frac", "_base_bits")

    def __init__(self, value: int | float, num_frac_bits: int, base_bits: int = 32) -> None:
        self._check_format(num_frac_bits, base_bits)
        if isinstance(value, int):
            raw = value << num_frac_bits
        elif isinstance(value, float):
            if not math.isfinite(value):
                raise ValueError(f"cannot represent {value!r} as fixed point")
            raw = int(value * (1 << num_frac_bits))
        else:
            raise TypeError(f"expected int or float, got {type(value).__name__}")
        self._raw = _wrap(raw, base_bits)
        self._frac = num_frac_bits
        self._base_bits = base_bits

    @staticmethod
    def _check_format(num_frac_bits: int, base_bits: int) -> None:
        if base_bits not in _BASE_TO_OVERFLOW:
            raise ValueError(f"base_bits must be one of 8, 16, 32, 64, not {base_bits}")
        if not 0 <= num_frac_bits < base_bits:
            raise ValueError(
                f"num_frac_bits must be in 0..{base_bits - 1}, not {num_frac_bits}"
            )

    @classmethod
    def from_raw(cls, raw: int, num_frac_bits: int, base_bits: int = 32) -> FpS:
        """Build a value directly from its raw stored integer."""
        cls._check_format(num_frac_bits, base_bits)
        obj = cls.__new__(cls)
        obj._raw = _wrap(raw, base_bits)
        obj._frac = num_frac_bits
        obj._base_bits = base_bits
        return obj

    @property
    def raw(self) -> int:
        """The stored integer representation."""
        return self._raw

    @property
    def num_frac_bits(self) -> int:
        """The number of fractional bits."""
        return self._frac

    @property
    def base_bits(self) -> int:
        """The width of the stored integer."""
        return self._base_bits

    @property
    def _overflow_bits(self) -> int:
        return _BASE_TO_OVERFLOW[self._base_bits]

    def _align(self, other: FpS) -> tuple[int, int, int]:
        """Return both raw values at the lower precision, and that precision."""
        if other._base_bits != self._base_bits:
            raise TypeError(
                f"cannot combine {self._base_bits}-bit and {other._base_bits}-bit fixed point"
            )
        if self._frac == other._frac:
            return self._raw, other._raw, self._frac
        if self._frac > other._frac:
            return self._raw >> (self._frac - other._frac), other._raw, other._frac
        return self._raw, other._raw >> (other._frac - self._frac), self._frac

    def _make(self, raw: int, frac: int) -> FpS:
        return FpS.from_raw(raw, frac, self._base_bits)

    def __add__(self, other: object) -> FpS:
        if not isinstance(other, FpS):
            return NotImplemented
        a, b, n = self._align(other)
        return self._make(a + b, n)

    def __sub__(self, other: object) -> FpS:
        if not isinstance(other, FpS):
            return NotImplemented
        a, b, n = self._align(other)
        return self._make(a - b, n)

    def __mul__(self, other: object) -> FpS:
        if not isinstance(other, FpS):
            return NotImplemented
        a, b, n = self._align(other)
        wide = _wrap(a * b, self._overflow_bits)
        return self._make(wide >> n, n)

    def __truediv__(self, other: object) -> FpS:
        if not isinstance(other, FpS):
            return NotImplemented
        a, b, n = self._align(other)
        wide = _wrap(a << n, self._overflow_bits)
        return self._make(_wrap(_trunc_div(wide, b), self._overflow_bits), n)

    def __mod__(self, other: object) -> FpS:
        if not isinstance(other, FpS):
            return NotImplemented
        a, b, n = self._align(other)
        return self._make(_trunc_mod(a, b), n)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FpS):
            return NotImplemented
        a, b, _ = self._align(other)
        return a == b

    # Equality compares at the lower precision, so it is not transitive
    # across precisions and cannot back a consistent hash.
    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, FpS):
            return NotImplemented
        a, b, _ = self._align(other)
        return a < b

    def __le__(self, other: object) -> bool:
        if not isinstance(other, FpS):
            return NotImplemented
        a, b, _ = self._align(other)
        return a <= b

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, FpS):
            return NotImplemented
        a, b, _ = self._align(other)
        return a > b

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, FpS):
            return NotImplemented
        a, b, _ = self._align(other)
        return a >= b

    def to_int(self) -> int:
        """Integer part, rounded toward negative infinity."""
        return self._raw >> self._frac

    def to_float(self) -> float:
        """The value as a float."""
        return self._raw / (1 << self._frac)

    def __int__(self) -> int:
        return self.to_int()

    def __float__(self) -> float:
        return self.to_float()

    def __repr__(self) -> str:
        return (
            f"FpS.from_raw({self._raw}, num_frac_bits={self._frac}, "
            f"base_bits={self._base_bits})"
        )

    def __str__(self) -> str:
        return str(self.to_float())


def fps8(value: int | float, num_frac_bits: int) -> FpS:
    """An 8-bit fixed-point value with a 16-bit intermediate."""
    return FpS(value, num_frac_bits, 8)


def fps16(value: int | float, num_frac_bits: int) -> FpS:
    """A 16-bit fixed-point value with a 32-bit intermediate."""
    return FpS(value, num_frac_bits, 16)


def fps32(value: int | float, num_frac_bits: int) -> FpS:
    """A 32-bit fixed-point value with a 64-bit intermediate."""
    return FpS(value, num_frac_bits, 32)


def fps64(value: int | float, num_frac_bits: int) -> FpS:
    """A 64-bit fixed-point value; intermediates are not widened."""
    return FpS(value, num_frac_bits, 64)