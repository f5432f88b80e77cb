"""Fixed-point decimal with 18 fractional digits, backed by a 256-bit unsigned integer."""

from __future__ import annotations

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
from scrtkit.uint256 import Uint256

_DIGITS = frozenset("0123456789")
_FRACTIONAL_DIGITS = 18
_U64_MAX = 2**64 - 1


def _raw(value: Any) -> int:
    """The plain integer behind an int or a :class:`Uint256`."""
    if isinstance(value, Uint256):
        return value.value
    if isinstance(value, int) and not isinstance(value, bool):
        if not 0 <= value <= U256_MAX:
            raise ValueError(f"value out of range for a 256-bit unsigned integer: {value}")
        return value
    raise TypeError(f"cannot convert {type(value).__name__} to a 256-bit integer")


def _parse_digits(text: str, error: str) -> int:
    """Parse decimal digits into an integer in the 256-bit range; empty text is zero."""
    if any(ch not in _DIGITS for ch in text):
        raise StdError.generic_err(error)
    value = int(text) if text else 0
    if value > U256_MAX:
        raise StdError.generic_err(error)
    return value


def _checked_u256(value: int) -> int:
    if value > U256_MAX:
        raise OverflowError("arithmetic operation overflow")
    return value


def _uint(value: Union[Uint256, int]) -> Uint256:
    return value if isinstance(value, Uint256) else Uint256(_raw(value))


@dataclass(frozen=True, order=True)
class Decimal256:
    """A decimal where ``Decimal256(10**18)`` is 1.0; ``value`` holds the raw atomics."""

    value: int = 0

    DECIMAL_FRACTIONAL: ClassVar[int] = DECIMAL_FRACTIONAL
    MAX: ClassVar["Decimal256"]

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"expected an integer, got {type(self.value).__name__}")
        if not 0 <= self.value <= U256_MAX:
            raise ValueError(f"value out of range for a 256-bit unsigned integer: {self.value}")

    @classmethod
    def one(cls) -> "Decimal256":
        return cls(DECIMAL_FRACTIONAL)

    @classmethod
    def zero(cls) -> "Decimal256":
        return cls(0)

    @classmethod
    def percent(cls, x: int) -> "Decimal256":
        """``x`` percent."""
        if not 0 <= x <= _U64_MAX:
            raise ValueError(f"percent out of range: {x}")
        return cls(x * 10**16)

    @classmethod
    def permille(cls, x: int) -> "Decimal256":
        """``x`` per thousand."""
        if not 0 <= x <= _U64_MAX:
            raise ValueError(f"permille out of range: {x}")
        return cls(x * 10**15)

    @classmethod
    def from_ratio(cls, nominator: Union[Uint256, int], denominator: Union[Uint256, int]) -> "Decimal256":
        """``nominator / denominator``, rounded down."""
        nom = _raw(nominator)
        denom = _raw(denominator)
        if denom == 0:
            raise div_error(nom)
        scaled = nom * DECIMAL_FRACTIONAL
        if scaled > U256_MAX:
            raise overflow_error(nom, "*", denom)
        return cls(scaled // denom)

    @classmethod
    def from_uint256(cls, value: Union[Uint256, int]) -> "Decimal256":
        """The decimal equal to the whole number ``value``."""
        number = _uint(value)
        scaled = number.value * DECIMAL_FRACTIONAL
        if scaled > U256_MAX:
            raise overflow_error(number, "*", DECIMAL_FRACTIONAL)
        return cls(scaled)

    @classmethod
    def from_str(cls, text: str) -> "Decimal256":
        """Parse ``"1.23"``, ``"1"``, ``"000012"`` and the like, without rounding.

        More than 18 fractional digits, even zeros, are an error. A value beyond
        the representable range raises :class:`OverflowError`.
        """
        parts = text.split(".")
        if len(parts) == 1:
            whole = _parse_digits(parts[0], "Error parsing whole")
            return cls(_checked_u256(whole * DECIMAL_FRACTIONAL))
        if len(parts) == 2:
            whole_text, fractional_text = parts
            whole = _parse_digits(whole_text, "Error parsing whole")
            fractional = _parse_digits(fractional_text, "Error parsing fractional")
            exp = _FRACTIONAL_DIGITS - len(fractional_text)
            if exp < 0:
                raise StdError.generic_err("Cannot parse more than 18 fractional digits")
            whole_atomics = _checked_u256(whole * DECIMAL_FRACTIONAL)
            return cls(_checked_u256(whole_atomics + fractional * 10**exp))
        raise StdError.generic_err("Unexpected number of dots")

    def is_zero(self) -> bool:
        return self.value == 0

    def checked_add(self, rhs: "Decimal256") -> "Decimal256":
        result = self.value + rhs.value
        if result > U256_MAX:
            raise overflow_error(self, "+", rhs)
        return Decimal256(result)

    def checked_sub(self, rhs: "Decimal256") -> "Decimal256":
        if rhs.value > self.value:
            raise underflow_error(self, "-", rhs)
        return Decimal256(self.value - rhs.value)

    def checked_mul(self, rhs: "Decimal256") -> "Decimal256":
        product = self.value * rhs.value
        if product > U256_MAX:
            raise overflow_error(self, "*", rhs)
        return Decimal256(product // DECIMAL_FRACTIONAL)

    def checked_div(self, rhs: "Decimal256") -> "Decimal256":
        return Decimal256.from_ratio(self.value, rhs.value)

    def uint_mul(self, rhs: Union[Uint256, int]) -> "Decimal256":
        """Multiply the raw atomics by the whole number ``rhs``."""
        return Decimal256(_uint(rhs).decimal_mul(self).value)

    def uint_div(self, rhs: Union[Uint256, int]) -> "Decimal256":
        """``rhs / self`` as raw atomics."""
        return Decimal256(_uint(rhs).decimal_div(self).value)

    def round(self) -> Uint256:
        """The whole part, rounded down."""
        return Uint256(self.value // DECIMAL_FRACTIONAL)

    def to_json(self) -> str:
        return str(self)

    @classmethod
    def from_json(cls, value: Any) -> "Decimal256":
        if not isinstance(value, str):
            raise StdError.parse_err("Decimal256", "expected a string-encoded decimal")
        try:
            return cls.from_str(value)
        except (StdError, OverflowError) as err:
            raise StdError.parse_err(
                "Decimal256", f"Error parsing decimal '{value}': {err}"
            ) from err

    def __str__(self) -> str:
        whole, fractional = divmod(self.value, DECIMAL_FRACTIONAL)
        if fractional == 0:
            return str(whole)
        digits = str(fractional).rjust(_FRACTIONAL_DIGITS, "0").rstrip("0")
        return f"{whole}.{digits}"

    def __add__(self, rhs: Any) -> "Decimal256":
        if not isinstance(rhs, Decimal256):
            return NotImplemented
        return self.checked_add(rhs)

    def __sub__(self, rhs: Any) -> "Decimal256":
        if not isinstance(rhs, Decimal256):
            return NotImplemented
        return self.checked_sub(rhs)

    def __mul__(self, rhs: Any) -> "Decimal256":
        if not isinstance(rhs, Decimal256):
            return NotImplemented
        return self.checked_mul(rhs)

    def __truediv__(self, rhs: Any) -> "Decimal256":
        if not isinstance(rhs, Decimal256):
            return NotImplemented
        return self.checked_div(rhs)


Decimal256.MAX = Decimal256(U256_MAX)