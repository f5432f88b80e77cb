"""Messages and configuration types of a SNIP-20 token contract."""

from __future__ import annotations

import enum
from dataclasses import dataclass, fields
from typing import Any, Optional, Union

from scrtkit.common import U128_MAX
from scrtkit.std import HumanAddr, StdError
from scrtkit.std import space_pad as _pad


def _check_amount(amount: Any) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError(f"expected an integer amount, got {type(amount).__name__}")
    if not 0 <= amount <= U128_MAX:
        raise ValueError(f"amount out of range for a 128-bit unsigned integer: {amount}")


@dataclass
class InitialBalance:
    """A balance the token starts out with."""

    address: HumanAddr
    amount: int

    def __post_init__(self) -> None:
        _check_amount(self.amount)


@dataclass
class InitialAllowance:
    """An allowance the token starts out with."""

    owner: HumanAddr
    spender: HumanAddr
    amount: int
    expiration: Optional[int] = None

    def __post_init__(self) -> None:
        _check_amount(self.amount)


@dataclass
class InitConfig:
    """Optional features of the token; every unset flag means disabled."""

    public_total_supply: Optional[bool] = None
    enable_deposit: Optional[bool] = None
    enable_redeem: Optional[bool] = None
    enable_mint: Optional[bool] = None
    enable_burn: Optional[bool] = None

    @classmethod
    def builder(cls) -> "InitConfigBuilder":
        return InitConfigBuilder()

    def total_supply_is_public(self) -> bool:
        return bool(self.public_total_supply)

    def deposit_enabled(self) -> bool:
        return bool(self.enable_deposit)

    def redeem_enabled(self) -> bool:
        return bool(self.enable_redeem)

    def mint_enabled(self) -> bool:
        return bool(self.enable_mint)

    def burn_enabled(self) -> bool:
        return bool(self.enable_burn)

    def to_json(self) -> dict:
        return {item.name: getattr(self, item.name) for item in fields(self)}

    @classmethod
    def from_json(cls, data: Any) -> "InitConfig":
        """Parse a config object; missing flags are unset, unknown fields are an error."""
        if not isinstance(data, dict):
            raise StdError.parse_err(cls.__name__, "expected an object")
        names = {item.name for item in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in names:
                raise StdError.parse_err(cls.__name__, f"unknown field `{key}`")
            if value is not None and not isinstance(value, bool):
                raise StdError.parse_err(cls.__name__, f"`{key}` must be a boolean or null")
            values[key] = value
        return cls(**values)


class InitConfigBuilder:
    """Builds an :class:`InitConfig` by switching features on."""

    def __init__(self) -> None:
        self._config = InitConfig()

    def build(self) -> InitConfig:
        return InitConfig(**self._config.to_json())

    def public_total_supply(self) -> "InitConfigBuilder":
        self._config.public_total_supply = True
        return self

    def enable_deposit(self) -> "InitConfigBuilder":
        self._config.enable_deposit = True
        return self

    def enable_redeem(self) -> "InitConfigBuilder":
        self._config.enable_redeem = True
        return self

    def enable_mint(self) -> "InitConfigBuilder":
        self._config.enable_mint = True
        return self

    def enable_burn(self) -> "InitConfigBuilder":
        self._config.enable_burn = True
        return self


class ResponseStatus(enum.Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class ContractStatusLevel(enum.Enum):
    NORMAL_RUN = "normal_run"
    STOP_ALL_BUT_REDEEMS = "stop_all_but_redeems"
    STOP_ALL = "stop_all"


_LEVEL_CODES = {
    ContractStatusLevel.NORMAL_RUN: 0,
    ContractStatusLevel.STOP_ALL_BUT_REDEEMS: 1,
    ContractStatusLevel.STOP_ALL: 2,
}
_CODE_LEVELS = {code: level for level, code in _LEVEL_CODES.items()}


def status_level_to_u8(status_level: ContractStatusLevel) -> int:
    return _LEVEL_CODES[status_level]


def u8_to_status_level(status_level: int) -> ContractStatusLevel:
    try:
        return _CODE_LEVELS[status_level]
    except (KeyError, TypeError):
        raise StdError.generic_err("Invalid state level") from None


def space_pad(block_size: int, message: Union[bytes, bytearray]) -> bytes:
    """Pad ``message`` with spaces up to a multiple of ``block_size``."""
    return _pad(message, block_size)