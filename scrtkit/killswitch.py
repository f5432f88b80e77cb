"""Contract status: operational, paused or migrating, kept in contract storage."""

from __future__ import annotations

import base64
import binascii
import enum
from dataclasses import dataclass
from typing import Any, Optional, Union

from scrtkit import addr
from scrtkit.std import HumanAddr, StdError, from_binary, to_binary

PREFIX = b"fadroma_migration_state"


class ContractStatusLevel(enum.Enum):
    """Possible states of a contract."""

    OPERATIONAL = "Operational"
    PAUSED = "Paused"
    MIGRATING = "Migrating"

    def __str__(self) -> str:
        return self.value.lower()


@dataclass
class ContractStatus:
    """Current state of a contract, with a reason and an optional pointer to its new version."""

    level: ContractStatusLevel = ContractStatusLevel.OPERATIONAL
    reason: str = ""
    new_address: Optional[Union[str, bytes]] = None

    def humanize(self, api: Any) -> "ContractStatus":
        return ContractStatus(self.level, self.reason, addr.humanize(self.new_address, api))

    def canonize(self, api: Any) -> "ContractStatus":
        return ContractStatus(self.level, self.reason, addr.canonize(self.new_address, api))

    def to_json(self) -> dict:
        return {
            "level": self.level.value,
            "reason": self.reason,
            "new_address": self.new_address,
        }


def _parse_stored(data: Any) -> ContractStatus:
    try:
        level = ContractStatusLevel(data["level"])
        reason = data["reason"]
        raw_address = data.get("new_address")
        if not isinstance(reason, str):
            raise ValueError("reason must be a string")
        new_address = (
            None if raw_address is None else base64.b64decode(raw_address, validate=True)
        )
    except (KeyError, TypeError, ValueError, AttributeError, binascii.Error) as err:
        raise StdError.parse_err("ContractStatus", err) from err
    return ContractStatus(level, reason, new_address)


def load(storage: Any) -> ContractStatus:
    """The stored status with a canonical address; operational if nothing is stored."""
    raw = storage.get(PREFIX)
    if raw is None:
        return ContractStatus()
    return _parse_stored(from_binary(raw))


def save(storage: Any, status: ContractStatus) -> None:
    """Store ``status``, whose address must be canonical."""
    storage.set(PREFIX, to_binary(status))


def get_status(storage: Any, api: Any) -> ContractStatus:
    """The current status with a human address."""
    return load(storage).humanize(api)


def _migration_message(reason: str, new_address: Optional[HumanAddr]) -> str:
    return (
        f"This contract is being migrated to {new_address or ''}, "
        f"please use that address instead. Reason: {reason}"
    )


def is_operational(storage: Any, api: Any) -> None:
    """Raise :class:`StdError` unless the contract is operational."""
    status = get_status(storage, api)
    if status.level is ContractStatusLevel.PAUSED:
        raise StdError.generic_err(f"This contract has been paused. Reason: {status.reason}")
    if status.level is ContractStatusLevel.MIGRATING:
        raise StdError.generic_err(_migration_message(status.reason, status.new_address))


def can_set_status(storage: Any, api: Any, to_level: ContractStatusLevel) -> None:
    """Raise :class:`StdError` when trying to leave the migrating status."""
    status = get_status(storage, api)
    if (
        status.level is ContractStatusLevel.MIGRATING
        and to_level is not ContractStatusLevel.MIGRATING
    ):
        raise StdError.generic_err(_migration_message(status.reason, status.new_address))


def set_status(
    storage: Any,
    api: Any,
    level: ContractStatusLevel,
    reason: str,
    new_address: Optional[HumanAddr] = None,
) -> None:
    """Store a new status, if the current one allows it."""
    can_set_status(storage, api, level)
    canonical = None if new_address is None else addr.canonize_maybe_empty(api, new_address)
    save(storage, ContractStatus(level, reason, canonical))