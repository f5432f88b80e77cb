"""A multi-contract test harness: contracts, their storage, a bank and message routing."""

from __future__ import annotations

import abc
import base64
import binascii
import dataclasses
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional

from scrtkit.bank import Balances, Bank
from scrtkit.env import MockEnv
from scrtkit.link import ContractInstantiationInfo, ContractLink
from scrtkit.revertable import Revertable
from scrtkit.std import (
    BankSend,
    BlockInfo,
    Coin,
    Env,
    HandleResponse,
    HumanAddr,
    InitResponse,
    MockApi,
    StdError,
    WasmExecute,
    WasmInstantiate,
    from_binary,
    to_binary,
)
from scrtkit.storage import RevertableStorage


class ContractHarness(abc.ABC):
    """The entry points of a contract that the ensemble can run."""

    @abc.abstractmethod
    def init(self, deps: "MockDeps", env: Env, msg: bytes) -> InitResponse:
        """Instantiate the contract with the JSON message ``msg``."""

    @abc.abstractmethod
    def handle(self, deps: "MockDeps", env: Env, msg: bytes) -> HandleResponse:
        """Execute the JSON message ``msg``."""

    @abc.abstractmethod
    def query(self, deps: "MockDeps", msg: bytes) -> bytes:
        """Answer the JSON query ``msg`` with JSON bytes."""


@dataclass
class MockDeps:
    """What a contract instance works with: its storage, an address API and a querier."""

    storage: RevertableStorage
    api: MockApi
    querier: "EnsembleQuerier"


def _system_error(message: str) -> StdError:
    return StdError.generic_err(f"Querier system error: {message}")


def _invalid_request(message: str) -> StdError:
    return _system_error(f"Cannot parse request: {message}")


def _single_variant(value: Any, what: str) -> tuple[str, Any]:
    if not isinstance(value, dict) or len(value) != 1:
        raise _invalid_request(f"Parsing query request: expected a single {what} variant")
    ((name, body),) = value.items()
    return name, body


class EnsembleQuerier:
    """Answers queries from a contract against the other contracts and the bank."""

    def __init__(self, ctx: "_Context") -> None:
        self._ctx = ctx

    def raw_query(self, bin_request: bytes) -> bytes:
        """Answer a JSON-encoded query request with the JSON-encoded response.

        System failures and errors of the queried contract raise :class:`StdError`.
        """
        try:
            request = from_binary(bin_request)
        except StdError as err:
            raise _invalid_request(f"Parsing query request: {err}") from err

        kind, query = _single_variant(request, "request")
        if kind == "wasm":
            return self._wasm_query(query)
        if kind == "bank":
            return self._bank_query(query)
        raise _system_error(f"Unsupported query type: {kind}")

    def query(self, request: Any) -> Any:
        """Answer a query request given as plain values, returning the parsed response."""
        return from_binary(self.raw_query(to_binary(request)))

    def _wasm_query(self, query: Any) -> bytes:
        variant, body = _single_variant(query, "wasm query")
        if variant not in ("smart", "raw"):
            raise _invalid_request(f"Parsing query request: unknown wasm query `{variant}`")
        if not isinstance(body, dict) or not isinstance(body.get("contract_addr"), str):
            raise _invalid_request("Parsing query request: missing field `contract_addr`")

        contract_addr = body["contract_addr"]
        if contract_addr not in self._ctx.instances:
            raise _system_error(f"No such contract: {contract_addr}")

        if variant == "raw":
            raise _system_error("Unsupported query type: wasm raw")

        encoded = body.get("msg")
        if not isinstance(encoded, str):
            raise _invalid_request("Parsing query request: missing field `msg`")
        try:
            msg = base64.b64decode(encoded, validate=True)
        except binascii.Error as err:
            raise _invalid_request(f"Parsing query request: {err}") from err
        return self._ctx.query(contract_addr, msg)

    def _bank_query(self, query: Any) -> bytes:
        variant, body = _single_variant(query, "bank query")
        if not isinstance(body, dict) or not isinstance(body.get("address"), str):
            raise _invalid_request("Parsing query request: missing field `address`")
        bank = self._ctx.bank.readable()

        if variant == "all_balances":
            return to_binary({"amount": bank.query_balances(body["address"], None)})
        if variant == "balance":
            denom = body.get("denom")
            if not isinstance(denom, str):
                raise _invalid_request("Parsing query request: missing field `denom`")
            (amount,) = bank.query_balances(body["address"], denom)
            return to_binary({"amount": amount})
        raise _invalid_request(f"Parsing query request: unknown bank query `{variant}`")


@dataclass
class _ContractInstance:
    deps: MockDeps
    index: int

    def commit(self) -> None:
        self.deps.storage.commit()

    def revert(self) -> None:
        self.deps.storage.revert()


class _Context:
    def __init__(self, canonical_length: int) -> None:
        self.canonical_length = canonical_length
        self.instances: dict[HumanAddr, _ContractInstance] = {}
        self.contracts: list[ContractHarness] = []
        self.bank: Revertable[Bank] = Revertable(Bank())

    def _new_instance(self, index: int) -> _ContractInstance:
        deps = MockDeps(
            storage=RevertableStorage(),
            api=MockApi(self.canonical_length),
            querier=EnsembleQuerier(self),
        )
        return _ContractInstance(deps=deps, index=index)

    def _instance(self, address: HumanAddr) -> _ContractInstance:
        try:
            return self.instances[address]
        except KeyError:
            raise LookupError(f"Contract address doesn't exist: {address}") from None

    def instantiate(self, code_id: int, msg: bytes, env: MockEnv) -> ContractLink:
        if not 0 <= code_id < len(self.contracts):
            raise LookupError("Contract id doesn't exist.")
        contract = self.contracts[code_id]

        inner = env.env
        address = inner.contract.address
        code_hash = inner.contract_code_hash
        block = dataclasses.replace(inner.block)

        if address in self.instances:
            raise ValueError(f"Trying to instantiate an already existing address: {address}.")

        self.bank.writable().transfer(inner.message.sender, address, inner.message.sent_funds)

        instance = self._new_instance(code_id)
        self.instances[address] = instance

        try:
            response = contract.init(instance.deps, inner, msg)
            self.execute_messages(response.messages, address, block)
        except Exception:
            self.instances.pop(address, None)
            raise

        return ContractLink(address=address, code_hash=code_hash)

    def execute(self, msg: bytes, env: MockEnv) -> None:
        inner = env.env
        address = inner.contract.address
        instance = self._instance(address)

        self.bank.writable().transfer(inner.message.sender, address, inner.message.sent_funds)

        contract = self.contracts[instance.index]
        block = dataclasses.replace(inner.block)
        response = contract.handle(instance.deps, inner, msg)

        self.execute_messages(response.messages, address, block)

    def query(self, address: HumanAddr, msg: bytes) -> bytes:
        instance = self._instance(address)
        contract = self.contracts[instance.index]
        return contract.query(instance.deps, msg)

    def commit(self) -> None:
        for instance in self.instances.values():
            instance.commit()
        self.bank.commit()

    def revert(self) -> None:
        for instance in self.instances.values():
            instance.revert()
        self.bank.revert()

    def _callee_env(
        self, sender: HumanAddr, link: ContractLink, send: Iterable[Coin], block: BlockInfo
    ) -> MockEnv:
        return (
            MockEnv(sender, link)
            .sent_funds(send)
            .chain_id(block.chain_id)
            .time(block.time)
            .height(block.height)
        )

    def execute_messages(self, messages: Iterable[Any], sender: HumanAddr, block: BlockInfo) -> None:
        for message in messages:
            if isinstance(message, WasmExecute):
                env = self._callee_env(
                    sender,
                    ContractLink(message.contract_addr, message.callback_code_hash),
                    message.send,
                    block,
                )
                self.execute(message.msg, env)
            elif isinstance(message, WasmInstantiate):
                env = self._callee_env(
                    sender,
                    ContractLink(message.label, message.callback_code_hash),
                    message.send,
                    block,
                )
                self.instantiate(message.code_id, message.msg, env)
            elif isinstance(message, BankSend):
                self.bank.writable().transfer(
                    message.from_address, message.to_address, message.amount
                )
            else:
                raise TypeError(f"Unsupported message: {message!r}")

    def __repr__(self) -> str:
        return (
            f"Context(instances={list(self.instances)!r}, contracts_len={len(self.contracts)}, "
            f"canonical_length={self.canonical_length}, bank={self.bank!r})"
        )


class ContractEnsemble:
    """Runs registered contracts against each other with a shared bank.

    Every top-level ``instantiate`` or ``execute`` is a transaction: on success all
    storage and bank changes are committed, on failure they are all reverted.
    """

    def __init__(self, canonical_length: int) -> None:
        self._ctx = _Context(canonical_length)

    def register(self, harness: ContractHarness) -> ContractInstantiationInfo:
        """Add a contract's code; returns its id and a made-up code hash."""
        self._ctx.contracts.append(harness)
        code_id = len(self._ctx.contracts) - 1
        return ContractInstantiationInfo(code_hash=f"test_contract_{code_id}", id=code_id)

    def add_funds(self, address: HumanAddr, coins: Iterable[Coin]) -> None:
        self._ctx.bank.current.add_funds(address, coins)

    def balances(self, address: HumanAddr) -> Optional[Balances]:
        """The live committed balances of ``address``, or ``None`` for an unknown account."""
        return self._ctx.bank.current.accounts.get(address)

    def _instance(self, address: HumanAddr) -> _ContractInstance:
        try:
            return self._ctx.instances[address]
        except KeyError:
            raise LookupError(f"Contract not found: {address}") from None

    def deps(self, address: HumanAddr) -> MockDeps:
        """The dependencies of the contract at ``address``; raises ``LookupError`` if absent."""
        return self._instance(address).deps

    @contextmanager
    def deps_mut(self, address: HumanAddr) -> Iterator[MockDeps]:
        """Yield the contract's dependencies and commit its storage changes on exit."""
        instance = self._instance(address)
        yield instance.deps
        instance.deps.storage.commit()

    def _transaction(self, action: Any) -> Any:
        try:
            result = action()
        except Exception:
            self._ctx.revert()
            raise
        self._ctx.commit()
        return result

    def instantiate(self, code_id: int, msg: Any, env: MockEnv) -> ContractLink:
        """Instantiate code ``code_id`` at the address and code hash given in ``env``."""
        payload = to_binary(msg)
        return self._transaction(lambda: self._ctx.instantiate(code_id, payload, env))

    def execute(self, msg: Any, env: MockEnv) -> None:
        """Execute the contract at ``env``'s contract address."""
        payload = to_binary(msg)
        self._transaction(lambda: self._ctx.execute(payload, env))

    def query(self, address: HumanAddr, msg: Any) -> Any:
        """Query the contract at ``address``, returning the parsed JSON answer."""
        return from_binary(self._ctx.query(address, to_binary(msg)))

    def __repr__(self) -> str:
        return f"ContractEnsemble(ctx={self._ctx!r})"