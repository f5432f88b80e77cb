# scrtkit

A toolkit for writing and testing smart contracts in Python. It provides:

- **Checked 256-bit math** (`scrtkit.uint256`, `scrtkit.decimal256`):
  `Uint256` and the 18-digit fixed-point `Decimal256`. Every overflow,
  underflow and division by zero raises `StdError` instead of wrapping.
  `scrtkit.decimal` has `convert_token` and `one_token` for converting amounts
  between tokens with different numbers of decimals.
- **Platform types** (`scrtkit.std`, `scrtkit.addr`, `scrtkit.link`):
  `StdError`, `Coin`/`coin`, `Env`/`mock_env`, `MockApi`, the messages
  `WasmExecute`, `WasmInstantiate` and `BankSend`, `InitResponse`,
  `HandleResponse`, `ContractLink`, `Callback` and
  `ContractInstantiationInfo`. It also has the address helpers `canonize`,
  `humanize`, `canonize_maybe_empty` and `humanize_maybe_empty`, and the
  message helpers `to_binary`, `from_binary`, `to_cosmos_msg` and `space_pad`.
- **A contract ensemble** (`scrtkit.ensemble`): `ContractEnsemble` runs
  several `ContractHarness` implementations together in memory. They share a
  bank (`scrtkit.bank.Bank`) and each has its own revertable storage
  (`scrtkit.storage.RevertableStorage`). A failed `instantiate` or `execute`
  rolls back every storage and bank change it made.
- **Contract status** (`scrtkit.killswitch`): the levels operational, paused
  and migrating, stored in contract storage.
- **SNIP-20 message types** (`scrtkit.snip20_msg`, `scrtkit.snip20_batch`,
  `scrtkit.snip20_receiver`): init configuration and its builder, status
  levels, batch actions and the receiver message.
- **Crypto helpers** (`scrtkit.crypto`): `sha_256`, the constant-time
  `compare_slice_ct_time`, and `Prng`. `Prng` is a ChaCha20 stream keyed with
  `sha256(seed || entropy)`, and its `rand_bytes` returns 32 bytes at a time.

## Installation

```
pip install scrtkit
```

To run the test suite, install the test extra:

```
pip install "scrtkit[test]"
```

## Fixed-point math

```python
from scrtkit.uint256 import Uint256
from scrtkit.decimal256 import Decimal256

price = Decimal256.from_str("1.5")
print(Uint256(300).decimal_mul(price))   # 450
print(Decimal256.from_ratio(1, 8))       # 0.125

Uint256(1).checked_sub(Uint256(2))       # raises StdError (underflow)
```

`Decimal256.from_str` never rounds. It rejects more than 18 fractional digits
with `StdError`. A value beyond the 256-bit range raises `OverflowError`.
Both types serialize to JSON strings with `to_json` and parse with
`from_json`.

## Testing contracts with an ensemble

A harness implements `init`, `handle` and `query`. Each receives `MockDeps`,
which has `storage`, `api` and `querier`, and gets messages as JSON bytes:

```python
from scrtkit.ensemble import ContractEnsemble, ContractHarness
from scrtkit.env import MockEnv
from scrtkit.link import ContractLink
from scrtkit.std import HandleResponse, InitResponse, coin, from_binary, to_binary


class Counter(ContractHarness):
    def init(self, deps, env, msg):
        deps.storage.set(b"num", to_binary(from_binary(msg)["count"]))
        return InitResponse()

    def handle(self, deps, env, msg):
        number = from_binary(deps.storage.get(b"num")) + 1
        deps.storage.set(b"num", to_binary(number))
        return HandleResponse()

    def query(self, deps, msg):
        return deps.storage.get(b"num")


ensemble = ContractEnsemble(20)
info = ensemble.register(Counter())
ensemble.add_funds("admin", [coin(100, "uscrt")])

link = ensemble.instantiate(
    info.id,
    {"count": 0},
    MockEnv("admin", ContractLink("counter", info.code_hash)).sent_funds([coin(100, "uscrt")]),
)
ensemble.execute({"increment": {}}, MockEnv("admin", link))
print(ensemble.query(link.address, {"number": {}}))  # 1
print(ensemble.balances("counter"))                  # {'uscrt': 100}
```

Messages returned in a response's `messages` are run in order, with the
contract as sender:

- `WasmExecute` executes another contract.
- `WasmInstantiate` instantiates one at the address given by `label`.
- `BankSend` moves coins.

If any step raises, the whole call is rolled back. `deps(address)` returns a
contract's dependencies. `deps_mut(address)` is a context manager that
commits the contract's storage changes on exit. Both raise `LookupError` for
an unknown address.

From inside a contract, `deps.querier.query(...)` accepts
`{"wasm": {"smart": {"contract_addr": ..., "msg": <base64>}}}`,
`{"bank": {"balance": {"address": ..., "denom": ...}}}` and
`{"bank": {"all_balances": {"address": ...}}}`.

## Contract status

```python
from scrtkit import killswitch
from scrtkit.killswitch import ContractStatusLevel

killswitch.set_status(storage, api, ContractStatusLevel.PAUSED, "maintenance")
killswitch.is_operational(storage, api)  # raises StdError while paused or migrating
```

Once a contract is migrating, `can_set_status` and `set_status` refuse any
level other than migrating.

## What this package does not do

- `set_status` does not check who is calling. Any admin check is left to the
  calling code.
- The ensemble does not answer raw wasm storage queries. A `raw` query to an
  existing contract raises `StdError`.
- The SNIP-20 modules provide message and configuration types only. There is
  no token contract that handles transfers, allowances or viewing keys.
- There is no command-line interface.