"""Conversion of token amounts between different decimal precisions."""

from __future__ import annotations

from scrtkit.common import U128_MAX
from scrtkit.uint256 import Uint256


def one_token(decimals: int) -> int:
    """The amount representing one whole token with ``decimals`` decimals."""
    if decimals < 0:
        raise ValueError("decimals must not be negative")
    result = 10**decimals
    if result > U128_MAX:
        raise OverflowError("attempt to multiply with overflow")
    return result


def convert_token(amount: int, rate: int, input_decimals: int, output_decimals: int) -> int:
    """Convert ``amount`` of the input token at ``rate`` (in output-token units).

    For a 1:1 rate with an output token of 6 decimals, ``rate`` is 1_000_000.
    """
    result = Uint256(amount) * Uint256(rate)

    if input_decimals < output_decimals:
        result = result * Uint256(one_token(output_decimals - input_decimals))
    elif output_decimals < input_decimals:
        result = result // Uint256(one_token(input_decimals - output_decimals))

    result = result // Uint256(one_token(output_decimals))
    return result.clamp_u128()