"""Actions carried by the batch operations of a SNIP-20 token."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any, Optional

from scrtkit.common import U128_MAX
from scrtkit.std import HumanAddr, StdError


def _check_amount(amount: Any) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError(f"expected an integer amount, got {type(amount).__name__}")
    if not 0 <= amount <= U128_MAX:
        raise ValueError(f"amount out of range for a 128-bit unsigned integer: {amount}")


def _object(data: Any, type_name: str) -> dict:
    if not isinstance(data, dict):
        raise StdError.parse_err(type_name, "expected an object")
    return data


def _text(data: dict, key: str, type_name: str) -> str:
    if key not in data:
        raise StdError.parse_err(type_name, f"missing field `{key}`")
    value = data[key]
    if not isinstance(value, str):
        raise StdError.parse_err(type_name, f"`{key}` must be a string")
    return value


def _optional_text(data: dict, key: str, type_name: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise StdError.parse_err(type_name, f"`{key}` must be a string or null")
    return value


def _amount(data: dict, type_name: str) -> int:
    text = _text(data, "amount", type_name)
    if not text.isdigit() or not text.isascii() or int(text) > U128_MAX:
        raise StdError.parse_err(type_name, f"invalid amount '{text}'")
    return int(text)


def _optional_binary(data: dict, key: str, type_name: str) -> Optional[bytes]:
    value = _optional_text(data, key, type_name)
    if value is None:
        return None
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as err:
        raise StdError.parse_err(type_name, f"invalid base64: {err}") from err


def _encode_binary(value: Optional[bytes]) -> Optional[str]:
    return None if value is None else base64.b64encode(bytes(value)).decode("ascii")


@dataclass
class TransferAction:
    recipient: HumanAddr
    amount: int
    memo: Optional[str] = None

    def __post_init__(self) -> None:
        _check_amount(self.amount)

    def to_json(self) -> dict:
        return {"recipient": self.recipient, "amount": str(self.amount), "memo": self.memo}

    @classmethod
    def from_json(cls, data: Any) -> "TransferAction":
        name = cls.__name__
        obj = _object(data, name)
        return cls(
            recipient=_text(obj, "recipient", name),
            amount=_amount(obj, name),
            memo=_optional_text(obj, "memo", name),
        )


@dataclass
class SendAction:
    recipient: HumanAddr
    amount: int
    recipient_code_hash: Optional[str] = None
    msg: Optional[bytes] = None
    memo: Optional[str] = None

    def __post_init__(self) -> None:
        _check_amount(self.amount)

    def to_json(self) -> dict:
        return {
            "recipient": self.recipient,
            "recipient_code_hash": self.recipient_code_hash,
            "amount": str(self.amount),
            "msg": _encode_binary(self.msg),
            "memo": self.memo,
        }

    @classmethod
    def from_json(cls, data: Any) -> "SendAction":
        name = cls.__name__
        obj = _object(data, name)
        return cls(
            recipient=_text(obj, "recipient", name),
            recipient_code_hash=_optional_text(obj, "recipient_code_hash", name),
            amount=_amount(obj, name),
            msg=_optional_binary(obj, "msg", name),
            memo=_optional_text(obj, "memo", name),
        )


@dataclass
class TransferFromAction:
    owner: HumanAddr
    recipient: HumanAddr
    amount: int
    memo: Optional[str] = None

    def __post_init__(self) -> None:
        _check_amount(self.amount)

    def to_json(self) -> dict:
        return {
            "owner": self.owner,
            "recipient": self.recipient,
            "amount": str(self.amount),
            "memo": self.memo,
        }

    @classmethod
    def from_json(cls, data: Any) -> "TransferFromAction":
        name = cls.__name__
        obj = _object(data, name)
        return cls(
            owner=_text(obj, "owner", name),
            recipient=_text(obj, "recipient", name),
            amount=_amount(obj, name),
            memo=_optional_text(obj, "memo", name),
        )


@dataclass
class SendFromAction:
    owner: HumanAddr
    recipient: HumanAddr
    amount: int
    recipient_code_hash: Optional[str] = None
    msg: Optional[bytes] = None
    memo: Optional[str] = None

    def __post_init__(self) -> None:
        _check_amount(self.amount)

    def to_json(self) -> dict:
        return {
            "owner": self.owner,
            "recipient_code_hash": self.recipient_code_hash,
            "recipient": self.recipient,
            "amount": str(self.amount),
            "msg": _encode_binary(self.msg),
            "memo": self.memo,
        }

    @classmethod
    def from_json(cls, data: Any) -> "SendFromAction":
        name = cls.__name__
        obj = _object(data, name)
        return cls(
            owner=_text(obj, "owner", name),
            recipient_code_hash=_optional_text(obj, "recipient_code_hash", name),
            recipient=_text(obj, "recipient", name),
            amount=_amount(obj, name),
            msg=_optional_binary(obj, "msg", name),
            memo=_optional_text(obj, "memo", name),
        )


@dataclass
class MintAction:
    recipient: HumanAddr
    amount: int
    memo: Optional[str] = None

    def __post_init__(self) -> None:
        _check_amount(self.amount)

    def to_json(self) -> dict:
        return {"recipient": self.recipient, "amount": str(self.amount), "memo": self.memo}

    @classmethod
    def from_json(cls, data: Any) -> "MintAction":
        name = cls.__name__
        obj = _object(data, name)
        return cls(
            recipient=_text(obj, "recipient", name),
            amount=_amount(obj, name),
            memo=_optional_text(obj, "memo", name),
        )


@dataclass
class BurnFromAction:
    owner: HumanAddr
    amount: int
    memo: Optional[str] = None

    def __post_init__(self) -> None:
        _check_amount(self.amount)

    def to_json(self) -> dict:
        return {"owner": self.owner, "amount": str(self.amount), "memo": self.memo}

    @classmethod
    def from_json(cls, data: Any) -> "BurnFromAction":
        name = cls.__name__
        obj = _object(data, name)
        return cls(
            owner=_text(obj, "owner", name),
            amount=_amount(obj, name),
            memo=_optional_text(obj, "memo", name),
        )