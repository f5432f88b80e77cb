"""References to contract code and contract instances, and callbacks to them."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any, Union

from scrtkit import addr
from scrtkit.std import Env, StdError

CodeId = int
CodeHash = str


def _expect_fields(data: Any, names: tuple[str, ...], type_name: str) -> tuple:
    if not isinstance(data, dict):
        raise StdError.parse_err(type_name, "expected an object")
    for key in data:
        if key not in names:
            raise StdError.parse_err(type_name, f"unknown field `{key}`")
    for name in names:
        if name not in data:
            raise StdError.parse_err(type_name, f"missing field `{name}`")
    return tuple(data[name] for name in names)


def _encode_address(address: Union[str, bytes]) -> str:
    if isinstance(address, (bytes, bytearray)):
        return base64.b64encode(bytes(address)).decode("ascii")
    return address


@dataclass(eq=False)
class ContractInstantiationInfo:
    """Info needed to instantiate a contract. Equality ignores the code hash."""

    code_hash: CodeHash
    id: CodeId

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContractInstantiationInfo):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def to_json(self) -> dict:
        return {"code_hash": self.code_hash, "id": self.id}

    @classmethod
    def from_json(cls, data: Any) -> "ContractInstantiationInfo":
        code_hash, code_id = _expect_fields(data, ("code_hash", "id"), cls.__name__)
        if not isinstance(code_hash, str):
            raise StdError.parse_err(cls.__name__, "code_hash must be a string")
        if isinstance(code_id, bool) or not isinstance(code_id, int) or code_id < 0:
            raise StdError.parse_err(cls.__name__, "id must be an unsigned integer")
        return cls(code_hash=code_hash, id=code_id)


@dataclass(eq=False)
class ContractLink:
    """Info needed to talk to a contract instance. Equality ignores the code hash."""

    address: Union[str, bytes] = ""
    code_hash: CodeHash = ""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContractLink):
            return NotImplemented
        return self.address == other.address

    def __hash__(self) -> int:
        return hash(self.address)

    @classmethod
    def from_env(cls, env: Env) -> "ContractLink":
        return cls(address=env.contract.address, code_hash=env.contract_code_hash)

    def canonize(self, api: Any) -> "ContractLink":
        return ContractLink(addr.canonize(self.address, api), self.code_hash)

    def humanize(self, api: Any) -> "ContractLink":
        return ContractLink(addr.humanize(self.address, api), self.code_hash)

    def to_json(self) -> dict:
        return {"address": _encode_address(self.address), "code_hash": self.code_hash}

    @classmethod
    def from_json(cls, data: Any) -> "ContractLink":
        """Parse a link holding a human address."""
        address, code_hash = _expect_fields(data, ("address", "code_hash"), cls.__name__)
        if not isinstance(address, str) or not isinstance(code_hash, str):
            raise StdError.parse_err(cls.__name__, "address and code_hash must be strings")
        return cls(address=address, code_hash=code_hash)


@dataclass
class Callback:
    """Info needed to have another contract respond: a message and where to send it."""

    msg: bytes
    contract: ContractLink

    def canonize(self, api: Any) -> "Callback":
        return Callback(msg=self.msg, contract=self.contract.canonize(api))

    def humanize(self, api: Any) -> "Callback":
        return Callback(msg=self.msg, contract=self.contract.humanize(api))

    def to_json(self) -> dict:
        return {
            "msg": base64.b64encode(bytes(self.msg)).decode("ascii"),
            "contract": self.contract.to_json(),
        }

    @classmethod
    def from_json(cls, data: Any) -> "Callback":
        msg, contract = _expect_fields(data, ("msg", "contract"), cls.__name__)
        if not isinstance(msg, str):
            raise StdError.parse_err(cls.__name__, "msg must be a base64 string")
        try:
            raw = base64.b64decode(msg, validate=True)
        except binascii.Error as err:
            raise StdError.parse_err(cls.__name__, f"invalid base64: {err}") from err
        return cls(msg=raw, contract=ContractLink.from_json(contract))