"""The message a SNIP-20 token sends to a contract receiving tokens."""

from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Optional

from scrtkit.common import U128_MAX
from scrtkit.std import BLOCK_SIZE, HumanAddr, WasmExecute, space_pad, to_binary


@dataclass
class Snip20ReceiveMsg:
    """Sent to a receiver under the ``receive`` variant of its handle message.

    ``from_`` is the account whose tokens were sent; it is ``from`` on the wire.
    """

    sender: HumanAddr
    from_: HumanAddr
    amount: int
    memo: Optional[str] = None
    msg: Optional[bytes] = None

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise TypeError(f"expected an integer amount, got {type(self.amount).__name__}")
        if not 0 <= self.amount <= U128_MAX:
            raise ValueError(f"amount out of range for a 128-bit unsigned integer: {self.amount}")

    def to_json(self) -> dict:
        data = {"sender": self.sender, "from": self.from_, "amount": str(self.amount)}
        if self.memo is not None:
            data["memo"] = self.memo
        data["msg"] = None if self.msg is None else base64.b64encode(bytes(self.msg)).decode("ascii")
        return data

    def into_binary(self) -> bytes:
        """The serialized ``receive`` message, padded to :data:`BLOCK_SIZE` bytes."""
        return space_pad(to_binary({"receive": self.to_json()}), BLOCK_SIZE)

    def into_cosmos_msg(self, callback_code_hash: str, contract_addr: HumanAddr) -> WasmExecute:
        """An execute message delivering this to ``contract_addr``."""
        return WasmExecute(
            contract_addr=contract_addr,
            callback_code_hash=callback_code_hash,
            msg=self.into_binary(),
            send=[],
        )