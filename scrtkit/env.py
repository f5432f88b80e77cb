"""A builder for the environment handed to contracts in the ensemble."""

from __future__ import annotations

from typing import Iterable

from scrtkit.link import ContractLink
from scrtkit.std import Coin, Env, HumanAddr, mock_env


class MockEnv:
    """An :class:`Env` with test defaults, addressed to ``contract`` and sent by ``sender``.

    The setters change the environment in place and return ``self`` for chaining.
    """

    def __init__(self, sender: HumanAddr, contract: ContractLink) -> None:
        env = mock_env(sender, ())
        env.contract.address = contract.address
        env.contract_code_hash = contract.code_hash
        self.env: Env = env

    def sent_funds(self, funds: Iterable[Coin]) -> "MockEnv":
        self.env.message.sent_funds = list(funds)
        return self

    def time(self, time: int) -> "MockEnv":
        self.env.block.time = time
        return self

    def height(self, height: int) -> "MockEnv":
        self.env.block.height = height
        return self

    def chain_id(self, chain_id: str) -> "MockEnv":
        self.env.block.chain_id = str(chain_id)
        return self

    def contract_key(self, key: str) -> "MockEnv":
        self.env.contract_key = str(key)
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MockEnv):
            return NotImplemented
        return self.env == other.env

    def __repr__(self) -> str:
        return f"MockEnv({self.env!r})"