"""Native coin balances of accounts in the mock chain."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from scrtkit.std import Coin, HumanAddr, StdError, coin

Balances = dict[str, int]


@dataclass
class Bank:
    """Balances per address, each a mapping from denomination to amount."""

    accounts: dict[HumanAddr, Balances] = field(default_factory=dict)

    def _account(self, address: HumanAddr) -> Balances:
        return self.accounts.setdefault(address, {})

    def add_funds(self, address: HumanAddr, coins: Iterable[Coin]) -> None:
        """Credit ``coins`` to ``address``; nothing happens for no coins."""
        coins = list(coins)
        if not coins:
            return
        account = self._account(address)
        for item in coins:
            account[item.denom] = account.get(item.denom, 0) + item.amount

    def transfer(self, sender: HumanAddr, recipient: HumanAddr, coins: Iterable[Coin]) -> None:
        """Move ``coins`` from ``sender`` to ``recipient``.

        Raises :class:`StdError` when the sender lacks any of the coins.
        """
        coins = list(coins)
        if not coins:
            return
        self._account(sender)
        self._account(recipient)
        for item in coins:
            balances = self.accounts[sender]
            balance = balances.get(item.denom)
            if balance is None or balance < item.amount:
                raise StdError.generic_err(
                    f"Insufficient balance: sender: {sender}, denom: {item.denom}, "
                    f"balance: {balance or 0}, required: {item.amount}"
                )
            balances[item.denom] = balance - item.amount
            target = self.accounts[recipient]
            target[item.denom] = target.get(item.denom, 0) + item.amount

    def query_balances(self, address: HumanAddr, denom: Optional[str] = None) -> list[Coin]:
        """All balances of ``address``, or just the one for ``denom`` (zero if absent)."""
        account = self.accounts.get(address, {})
        if denom is not None:
            return [coin(account.get(denom, 0), denom)]
        return [coin(amount, name) for name, amount in account.items()]