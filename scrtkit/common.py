"""Shared constants and error constructors for the 256-bit arithmetic types."""

from __future__ import annotations

from typing import Any

from scrtkit.std import StdError

U256_MAX = 2**256 - 1
U128_MAX = 2**128 - 1

# Number of atomic units in 1.0 for the 18-digit fixed-point decimal type.
DECIMAL_FRACTIONAL = 10**18


def overflow_error(lhs: Any, op: Any, rhs: Any) -> StdError:
    """The error for ``lhs op rhs`` exceeding the type's range."""
    return StdError.generic_err(f"Overflow when calculating {lhs} {op} {rhs}")


def underflow_error(lhs: Any, op: Any, rhs: Any) -> StdError:
    """The error for ``lhs op rhs`` going below zero."""
    return StdError.generic_err(f"Underflow when calculating {lhs} {op} {rhs}")


def div_error(lhs: Any) -> StdError:
    """The error for dividing ``lhs`` by zero."""
    return StdError.generic_err(f"Trying to divide {lhs} by 0")