import base64

import pytest

from scrtkit.snip20_receiver import Snip20ReceiveMsg
from scrtkit.std import BLOCK_SIZE, WasmExecute, from_binary


def test_into_binary_wire_format():
    data = Snip20ReceiveMsg("a", "b", 10).into_binary()
    assert len(data) == BLOCK_SIZE
    assert data.rstrip(b" ") == b'{"receive":{"sender":"a","from":"b","amount":"10","msg":null}}'


def test_memo_is_skipped_when_absent():
    assert "memo" not in Snip20ReceiveMsg("a", "b", 1).to_json()
    assert Snip20ReceiveMsg("a", "b", 1, memo="hi").to_json()["memo"] == "hi"


def test_into_binary_round_trip():
    message = Snip20ReceiveMsg("sender", "owner", 500, "note", b"inner")
    parsed = from_binary(message.into_binary())
    body = parsed["receive"]
    assert body["sender"] == "sender"
    assert body["from"] == "owner"
    assert int(body["amount"]) == 500
    assert body["memo"] == "note"
    assert base64.b64decode(body["msg"]) == b"inner"


def test_into_binary_is_block_multiple_for_long_messages():
    data = Snip20ReceiveMsg("a", "b", 1, memo="x" * 300).into_binary()
    assert len(data) % BLOCK_SIZE == 0
    assert len(data) > BLOCK_SIZE


def test_into_cosmos_msg():
    message = Snip20ReceiveMsg("a", "b", 3)
    result = message.into_cosmos_msg("hash", "receiver")
    assert result == WasmExecute(
        contract_addr="receiver",
        callback_code_hash="hash",
        msg=message.into_binary(),
        send=[],
    )


def test_rejects_negative_amount():
    with pytest.raises(ValueError):
        Snip20ReceiveMsg("a", "b", -1)