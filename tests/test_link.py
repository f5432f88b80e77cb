import pytest

from scrtkit.link import Callback, ContractInstantiationInfo, ContractLink
from scrtkit.std import ErrorKind, MockApi, StdError, from_binary, mock_env, to_binary

HASH_LOWER = "c1dc8261059fee1de9f1873cd1359ccd7a6bc5623772661fa3d55332eb652084"
HASH_UPPER = "C1dc8261059fee1de9f1873cd1359ccd7a6bc5623772661fa3d55332eb652084"
ADDRESS_ONE = "secret1placeholdercontract0001"
ADDRESS_TWO = "secret1placeholdercontract0002"

API = MockApi(20)


def test_instantiation_info_eq():
    assert ContractInstantiationInfo(id=1, code_hash=HASH_LOWER) == ContractInstantiationInfo(
        id=1, code_hash=HASH_LOWER
    )
    assert ContractInstantiationInfo(id=1, code_hash=HASH_LOWER) == ContractInstantiationInfo(
        id=1, code_hash=HASH_UPPER
    )
    assert ContractInstantiationInfo(id=1, code_hash=HASH_LOWER) != ContractInstantiationInfo(
        id=2, code_hash=HASH_UPPER
    )


def test_contract_link_eq():
    assert ContractLink(address=ADDRESS_ONE, code_hash=HASH_LOWER) == ContractLink(
        address=ADDRESS_ONE, code_hash=HASH_LOWER
    )
    assert ContractLink(address=ADDRESS_ONE, code_hash=HASH_LOWER) == ContractLink(
        address=ADDRESS_ONE, code_hash=HASH_UPPER
    )
    assert ContractLink(address=ADDRESS_ONE, code_hash=HASH_LOWER) != ContractLink(
        address=ADDRESS_TWO, code_hash=HASH_UPPER
    )


def test_instantiation_info_to_json():
    info = ContractInstantiationInfo(code_hash=HASH_LOWER, id=3)
    assert info.to_json() == {"code_hash": HASH_LOWER, "id": 3}


def test_instantiation_info_round_trip():
    info = ContractInstantiationInfo(code_hash=HASH_LOWER, id=7)
    parsed = ContractInstantiationInfo.from_json(from_binary(to_binary(info)))
    assert parsed == info
    assert parsed.code_hash == HASH_LOWER


def test_instantiation_info_unknown_field():
    with pytest.raises(StdError) as info:
        ContractInstantiationInfo.from_json({"code_hash": "h", "id": 1, "extra": 0})
    assert info.value.kind is ErrorKind.PARSE


def test_instantiation_info_missing_field():
    with pytest.raises(StdError):
        ContractInstantiationInfo.from_json({"code_hash": "h"})


def test_contract_link_round_trip():
    link = ContractLink(address=ADDRESS_ONE, code_hash=HASH_LOWER)
    parsed = ContractLink.from_json(from_binary(to_binary(link)))
    assert parsed == link
    assert parsed.code_hash == HASH_LOWER


def test_contract_link_unknown_field():
    with pytest.raises(StdError):
        ContractLink.from_json({"address": "a", "code_hash": "h", "id": 1})


def test_contract_link_default_is_empty():
    link = ContractLink()
    assert link.address == ""
    assert link.code_hash == ""


def test_contract_link_from_env():
    env = mock_env("admin")
    env.contract.address = "counter"
    env.contract_code_hash = HASH_LOWER
    link = ContractLink.from_env(env)
    assert link.address == "counter"
    assert link.code_hash == HASH_LOWER


def test_contract_link_canonize_round_trip():
    link = ContractLink(address="counter", code_hash=HASH_LOWER)
    canonical = link.canonize(API)
    assert canonical.address == API.canonical_address("counter")
    assert canonical.code_hash == HASH_LOWER
    human = canonical.humanize(API)
    assert human == link
    assert human.code_hash == HASH_LOWER


def test_contract_link_canonize_empty():
    assert ContractLink(address="", code_hash="h").canonize(API).address == b""


def test_canonical_link_serializes_address_as_base64():
    canonical = ContractLink(address="counter", code_hash="h").canonize(API)
    import base64

    encoded = canonical.to_json()["address"]
    assert base64.b64decode(encoded) == API.canonical_address("counter")


def test_callback_round_trip():
    callback = Callback(msg=b'{"register":{}}', contract=ContractLink("counter", HASH_LOWER))
    parsed = Callback.from_json(from_binary(to_binary(callback)))
    assert parsed == callback
    assert parsed.msg == b'{"register":{}}'
    assert parsed.contract.code_hash == HASH_LOWER


def test_callback_equality_ignores_code_hash():
    one = Callback(msg=b"m", contract=ContractLink("counter", HASH_LOWER))
    two = Callback(msg=b"m", contract=ContractLink("counter", HASH_UPPER))
    assert one == two
    assert one != Callback(msg=b"n", contract=ContractLink("counter", HASH_LOWER))


def test_callback_canonize_round_trip():
    callback = Callback(msg=b"m", contract=ContractLink("counter", HASH_LOWER))
    canonical = callback.canonize(API)
    assert canonical.contract.address == API.canonical_address("counter")
    assert canonical.msg == b"m"
    assert canonical.humanize(API) == callback


def test_callback_invalid_base64():
    with pytest.raises(StdError) as info:
        Callback.from_json({"msg": "not base64!", "contract": {"address": "a", "code_hash": "h"}})
    assert info.value.kind is ErrorKind.PARSE


def test_callback_unknown_field():
    with pytest.raises(StdError):
        Callback.from_json(
            {"msg": "", "contract": {"address": "a", "code_hash": "h"}, "other": 1}
        )