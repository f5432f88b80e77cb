"""Unsigned 256-bit integer with checked arithmetic."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, ClassVar, Union

from scrtkit.common import (
    DECIMAL_FRACTIONAL,
    U256_MAX,
    div_error,
    overflow_error,
    underflow_error,
)
from scrtkit.std import StdError

_DIGITS = frozenset("0123456789")


def _coerce(value: Any) -> "Uint256":
    if isinstance(value, Uint256):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return Uint256(value)
    raise TypeError(f"cannot convert {type(value).__name__} to Uint256")


@dataclass(frozen=True, order=True)
class Uint256:
    """A value in ``0 ..= 2**256 - 1``; arithmetic raises :class:`StdError` when out of range."""

    value: int = 0

    MAX: ClassVar["Uint256"]

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"expected an integer, got {type(self.value).__name__}")
        if not 0 <= self.value <= U256_MAX:
            raise ValueError(f"value out of range for a 256-bit unsigned integer: {self.value}")

    @classmethod
    def zero(cls) -> "Uint256":
        return cls(0)

    @classmethod
    def from_str(cls, s: str) -> "Uint256":
        """Parse a string of decimal digits; the empty string is zero."""
        if any(ch not in _DIGITS for ch in s):
            raise StdError.generic_err("a character is not in the range 0-9")
        value = int(s) if s else 0
        if value > U256_MAX:
            raise StdError.generic_err("the number is too large for the type")
        return cls(value)

    def is_zero(self) -> bool:
        return self.value == 0

    def checked_add(self, rhs: Union["Uint256", int]) -> "Uint256":
        rhs = _coerce(rhs)
        result = self.value + rhs.value
        if result > U256_MAX:
            raise overflow_error(self, "+", rhs)
        return Uint256(result)

    def checked_sub(self, rhs: Union["Uint256", int]) -> "Uint256":
        rhs = _coerce(rhs)
        if rhs.value > self.value:
            raise underflow_error(self, "-", rhs)
        return Uint256(self.value - rhs.value)

    def checked_mul(self, rhs: Union["Uint256", int]) -> "Uint256":
        rhs = _coerce(rhs)
        result = self.value * rhs.value
        if result > U256_MAX:
            raise overflow_error(self, "*", rhs)
        return Uint256(result)

    def checked_div(self, rhs: Union["Uint256", int]) -> "Uint256":
        rhs = _coerce(rhs)
        if rhs.value == 0:
            raise div_error(self)
        return Uint256(self.value // rhs.value)

    def checked_pow(self, rhs: Union["Uint256", int]) -> "Uint256":
        rhs = _coerce(rhs)
        if self.value in (0, 1) or rhs.value == 0:
            return Uint256(self.value ** min(rhs.value, 1) if self.value == 0 else 1)
        # Any base of at least 2 overflows beyond exponent 255.
        if rhs.value > 256:
            raise overflow_error(self, "**", rhs)
        result = self.value**rhs.value
        if result > U256_MAX:
            raise overflow_error(self, "**", rhs)
        return Uint256(result)

    def sqrt(self) -> "Uint256":
        """The integer square root, rounded down."""
        return Uint256(math.isqrt(self.value))

    def multiply_ratio(self, nom: Union["Uint256", int], denom: Union["Uint256", int]) -> "Uint256":
        """``self * nom / denom``, with the product checked for overflow."""
        nominator = _coerce(nom)
        denominator = _coerce(denom)
        if denominator.is_zero():
            raise StdError.generic_err("Denominator cannot be zero")
        return self.checked_mul(nominator).checked_div(denominator)

    def decimal_mul(self, b: Any) -> "Uint256":
        """Multiply by a fixed-point decimal (an object with raw atomics in ``value``)."""
        if self.is_zero() or b.value == 0:
            return Uint256.zero()
        return self.multiply_ratio(b.value, DECIMAL_FRACTIONAL)

    def decimal_div(self, b: Any) -> "Uint256":
        """Divide by a fixed-point decimal (an object with raw atomics in ``value``)."""
        if b.value == 0:
            raise div_error(self)
        if self.is_zero():
            return Uint256.zero()
        return self.multiply_ratio(DECIMAL_FRACTIONAL, b.value)

    def low_u128(self) -> int:
        """The lowest 128 bits."""
        return self.value & ((1 << 128) - 1)

    def clamp_u128(self) -> int:
        """The lowest 128 bits; fails only when any of the top 64 bits is set."""
        if self.value >> 192:
            raise StdError.generic_err("u128 overflow")
        return self.low_u128()

    def to_json(self) -> str:
        return str(self.value)

    @classmethod
    def from_json(cls, value: Any) -> "Uint256":
        if not isinstance(value, str):
            raise StdError.parse_err("Uint256", "expected a string-encoded integer")
        try:
            return cls.from_str(value)
        except StdError as err:
            raise StdError.parse_err("Uint256", f"Invalid Uint256 '{value}' - {err}") from err

    def __str__(self) -> str:
        return str(self.value)

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __add__(self, rhs: Any) -> "Uint256":
        try:
            rhs = _coerce(rhs)
        except TypeError:
            return NotImplemented
        return self.checked_add(rhs)

    def __sub__(self, rhs: Any) -> "Uint256":
        try:
            rhs = _coerce(rhs)
        except TypeError:
            return NotImplemented
        return self.checked_sub(rhs)

    def __mul__(self, rhs: Any) -> "Uint256":
        try:
            rhs = _coerce(rhs)
        except TypeError:
            return NotImplemented
        return self.checked_mul(rhs)

    def __floordiv__(self, rhs: Any) -> "Uint256":
        try:
            rhs = _coerce(rhs)
        except TypeError:
            return NotImplemented
        return self.checked_div(rhs)

    def __pow__(self, rhs: Any) -> "Uint256":
        try:
            rhs = _coerce(rhs)
        except TypeError:
            return NotImplemented
        return self.checked_pow(rhs)


Uint256.MAX = Uint256(U256_MAX)