"""Core contract-environment types: errors, coins, env, messages and JSON binary encoding."""

from __future__ import annotations

import base64
import enum
import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Union

HumanAddr = str
CanonicalAddr = bytes

BLOCK_SIZE = 256
MOCK_CONTRACT_ADDR = "cosmos2contract"

_UINT128_MAX = 2**128 - 1


class ErrorKind(enum.Enum):
    """The category of a :class:`StdError`."""

    GENERIC = "generic"
    UNAUTHORIZED = "unauthorized"
    PARSE = "parse"
    SERIALIZE = "serialize"


class StdError(Exception):
    """Error raised by contract code and the mock environment."""

    def __init__(self, kind: ErrorKind, msg: str = "") -> None:
        super().__init__(msg)
        self.kind = kind
        self.msg = msg

    @classmethod
    def generic_err(cls, msg: Any) -> "StdError":
        return cls(ErrorKind.GENERIC, str(msg))

    @classmethod
    def unauthorized(cls) -> "StdError":
        return cls(ErrorKind.UNAUTHORIZED)

    @classmethod
    def parse_err(cls, target: str, msg: Any) -> "StdError":
        return cls(ErrorKind.PARSE, f"Error parsing into type {target}: {msg}")

    @classmethod
    def serialize_err(cls, source: str, msg: Any) -> "StdError":
        return cls(ErrorKind.SERIALIZE, f"Error serializing type {source}: {msg}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StdError):
            return NotImplemented
        return (self.kind, self.msg) == (other.kind, other.msg)

    def __hash__(self) -> int:
        return hash((self.kind, self.msg))

    def __str__(self) -> str:
        if self.kind is ErrorKind.GENERIC:
            return f"Generic error: {self.msg}"
        if self.kind is ErrorKind.UNAUTHORIZED:
            return "Unauthorized"
        return self.msg

    def __repr__(self) -> str:
        return f"StdError({self.kind.name}, {self.msg!r})"


def _check_uint128(value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer amount, got {type(value).__name__}")
    if not 0 <= value <= _UINT128_MAX:
        raise ValueError(f"amount out of range for a 128-bit unsigned integer: {value}")


@dataclass
class Coin:
    """An amount of a native denomination."""

    denom: str
    amount: int

    def __post_init__(self) -> None:
        _check_uint128(self.amount)

    def to_json(self) -> dict:
        return {"denom": self.denom, "amount": str(self.amount)}

    @classmethod
    def from_json(cls, data: Any) -> "Coin":
        try:
            return cls(denom=data["denom"], amount=int(data["amount"]))
        except (KeyError, TypeError, ValueError) as err:
            raise StdError.parse_err("Coin", err) from err


def coin(amount: int, denom: str) -> Coin:
    """Build a :class:`Coin`."""
    return Coin(denom=denom, amount=amount)


@dataclass
class BlockInfo:
    height: int = 12_345
    time: int = 1_571_797_419
    chain_id: str = "cosmos-testnet-14002"


@dataclass
class MessageInfo:
    sender: HumanAddr
    sent_funds: list[Coin] = field(default_factory=list)


@dataclass
class ContractInfo:
    address: HumanAddr


@dataclass
class Env:
    """Execution environment handed to a contract."""

    block: BlockInfo
    message: MessageInfo
    contract: ContractInfo
    contract_key: Optional[str] = None
    contract_code_hash: str = ""


def mock_env(sender: HumanAddr, sent_funds: Iterable[Coin] = ()) -> Env:
    """An environment with test defaults, sent by ``sender`` with ``sent_funds``."""
    return Env(
        block=BlockInfo(),
        message=MessageInfo(sender=sender, sent_funds=list(sent_funds)),
        contract=ContractInfo(address=MOCK_CONTRACT_ADDR),
        contract_key="",
        contract_code_hash="",
    )


@dataclass
class MockApi:
    """Address conversion that pads human addresses with zero bytes."""

    canonical_length: int

    def canonical_address(self, human: HumanAddr) -> CanonicalAddr:
        raw = human.encode("utf-8")
        if len(raw) < 3:
            raise StdError.generic_err("Invalid input: human address too short")
        if len(raw) > self.canonical_length:
            raise StdError.generic_err("Invalid input: human address too long")
        return raw + bytes(self.canonical_length - len(raw))

    def human_address(self, canonical: CanonicalAddr) -> HumanAddr:
        if len(canonical) != self.canonical_length:
            raise StdError.generic_err(
                "Invalid input: canonical address length not correct"
            )
        trimmed = bytes(b for b in canonical if b != 0)
        try:
            return trimmed.decode("utf-8")
        except UnicodeDecodeError as err:
            raise StdError.generic_err(
                f"Cannot decode UTF8 bytes into string: {err}"
            ) from err


@dataclass
class WasmExecute:
    contract_addr: HumanAddr
    callback_code_hash: str
    msg: bytes
    send: list[Coin] = field(default_factory=list)


@dataclass
class WasmInstantiate:
    code_id: int
    callback_code_hash: str
    msg: bytes
    label: str
    send: list[Coin] = field(default_factory=list)


@dataclass
class BankSend:
    from_address: HumanAddr
    to_address: HumanAddr
    amount: list[Coin] = field(default_factory=list)


CosmosMsg = Union[WasmExecute, WasmInstantiate, BankSend]


@dataclass
class InitResponse:
    messages: list = field(default_factory=list)
    log: list = field(default_factory=list)


@dataclass
class HandleResponse:
    messages: list = field(default_factory=list)
    log: list = field(default_factory=list)
    data: Optional[bytes] = None


def log(key: str, value: Any) -> tuple[str, str]:
    """A log attribute: the key and the value's text form."""
    return (key, str(value))


def _jsonable(value: Any) -> Any:
    to_json = getattr(value, "to_json", None)
    if callable(to_json) and not isinstance(value, type):
        return _jsonable(to_json())
    if isinstance(value, enum.Enum):
        return _jsonable(value.value)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, dict):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    raise StdError.serialize_err(type(value).__name__, "unsupported value")


def to_binary(value: Any) -> bytes:
    """Serialize ``value`` to compact JSON bytes."""
    return json.dumps(
        _jsonable(value), separators=(",", ":"), ensure_ascii=False
    ).encode("utf-8")


def from_binary(data: Union[bytes, bytearray]) -> Any:
    """Parse JSON bytes into plain Python values."""
    try:
        return json.loads(bytes(data))
    except ValueError as err:
        raise StdError.parse_err("json", err) from err


def space_pad(message: Union[bytes, bytearray], block_size: int) -> bytes:
    """Pad ``message`` with spaces up to a multiple of ``block_size``."""
    if block_size <= 0:
        raise ValueError("block_size must be positive")
    message = bytes(message)
    surplus = len(message) % block_size
    if surplus == 0:
        return message
    return message + b" " * (block_size - surplus)


def to_cosmos_msg(contract_addr: HumanAddr, callback_code_hash: str, msg: Any) -> WasmExecute:
    """An execute message carrying ``msg`` padded to :data:`BLOCK_SIZE`."""
    return WasmExecute(
        contract_addr=contract_addr,
        callback_code_hash=callback_code_hash,
        msg=space_pad(to_binary(msg), BLOCK_SIZE),
        send=[],
    )