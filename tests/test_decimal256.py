import pytest

from scrtkit.decimal256 import Decimal256
from scrtkit.std import StdError, from_binary, to_binary
from scrtkit.uint256 import Uint256

FRACTIONAL = 1_000_000_000_000_000_000


def one_and_half():
    return Decimal256.one() + Decimal256.percent(50)


def test_one():
    assert Decimal256.one().value == FRACTIONAL


def test_zero():
    assert Decimal256.zero().value == 0


def test_percent():
    assert Decimal256.percent(50).value == FRACTIONAL // 2


def test_permille():
    assert Decimal256.permille(125).value == FRACTIONAL // 8


@pytest.mark.parametrize(
    "nom, denom, expected",
    [
        (1, 1, Decimal256.one()),
        (53, 53, Decimal256.one()),
        (125, 125, Decimal256.one()),
        (3, 2, Decimal256.percent(150)),
        (150, 100, Decimal256.percent(150)),
        (333, 222, Decimal256.percent(150)),
        (1, 8, Decimal256.permille(125)),
        (125, 1000, Decimal256.permille(125)),
        (1, 3, Decimal256(333_333_333_333_333_333)),
        (2, 3, Decimal256(666_666_666_666_666_666)),
    ],
)
def test_from_ratio_works(nom, denom, expected):
    assert Decimal256.from_ratio(nom, denom) == expected


def test_from_ratio_accepts_uint256():
    assert Decimal256.from_ratio(Uint256(3), Uint256(2)) == Decimal256.percent(150)


def test_from_ratio_zero_denominator():
    with pytest.raises(StdError) as info:
        Decimal256.from_ratio(1, 0)
    assert info.value == StdError.generic_err("Trying to divide 1 by 0")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", Decimal256.percent(0)),
        ("0", Decimal256.percent(0)),
        ("1", Decimal256.percent(100)),
        ("5", Decimal256.percent(500)),
        ("42", Decimal256.percent(4200)),
        ("000", Decimal256.percent(0)),
        ("001", Decimal256.percent(100)),
        ("005", Decimal256.percent(500)),
        ("0042", Decimal256.percent(4200)),
        ("1.", Decimal256.percent(100)),
        ("1.0", Decimal256.percent(100)),
        ("1.5", Decimal256.percent(150)),
        ("0.5", Decimal256.percent(50)),
        ("0.123", Decimal256.permille(123)),
        ("40.00", Decimal256.percent(4000)),
        ("04.00", Decimal256.percent(400)),
        ("00.40", Decimal256.percent(40)),
        ("00.04", Decimal256.percent(4)),
        ("7.123456789012345678", Decimal256(7123456789012345678)),
        ("7.999999999999999999", Decimal256(7999999999999999999)),
        (
            "115792089237316195423570985008687907853269984665640564039457.584007913129639935",
            Decimal256.MAX,
        ),
    ],
)
def test_from_str_works(text, expected):
    assert Decimal256.from_str(text) == expected


@pytest.mark.parametrize(
    "text, message",
    [
        (" ", "Error parsing whole"),
        ("-1", "Error parsing whole"),
        ("1. ", "Error parsing fractional"),
        ("1.e", "Error parsing fractional"),
        ("1.2e3", "Error parsing fractional"),
        ("7.1234567890123456789", "Cannot parse more than 18 fractional digits"),
        ("7.1230000000000000000", "Cannot parse more than 18 fractional digits"),
        ("1.2.3", "Unexpected number of dots"),
        ("1.2.3.4", "Unexpected number of dots"),
    ],
)
def test_from_str_errors(text, message):
    with pytest.raises(StdError) as info:
        Decimal256.from_str(text)
    assert info.value.msg == message


@pytest.mark.parametrize(
    "text",
    [
        "115792089237316195423570985008687907853269984665640564039458",
        "115792089237316195423570985008687907853269984665640564039458.0",
        "115792089237316195423570985008687907853269984665640564039457.584007913129639936",
    ],
)
def test_from_str_overflow(text):
    with pytest.raises(OverflowError, match="arithmetic operation overflow"):
        Decimal256.from_str(text)


def test_is_zero_works():
    assert Decimal256.zero().is_zero()
    assert Decimal256.percent(0).is_zero()
    assert Decimal256.permille(0).is_zero()

    assert not Decimal256.one().is_zero()
    assert not Decimal256.percent(123).is_zero()
    assert not Decimal256.permille(1234).is_zero()


def test_add():
    assert one_and_half().value == FRACTIONAL * 3 // 2


def test_add_overflow():
    with pytest.raises(StdError) as info:
        Decimal256.MAX + Decimal256(1)
    assert info.value.msg.startswith("Overflow when calculating ")


def test_sub():
    assert Decimal256.one() - Decimal256.percent(50) == Decimal256.percent(50)


def test_sub_underflow():
    with pytest.raises(StdError) as info:
        Decimal256.zero() - Decimal256.one()
    assert info.value == StdError.generic_err("Underflow when calculating 0 - 1")


def test_mul():
    assert Decimal256.percent(50) * Decimal256.percent(50) == Decimal256.percent(25)


def test_mul_overflow():
    with pytest.raises(StdError) as info:
        Decimal256.MAX * Decimal256.percent(200)
    assert info.value.msg.startswith("Overflow when calculating ")


def test_div():
    assert Decimal256.one() + Decimal256.one() == Decimal256.percent(50) / Decimal256.percent(25)


def test_div_by_zero():
    with pytest.raises(StdError) as info:
        Decimal256.one().checked_div(Decimal256.zero())
    assert info.value == StdError.generic_err(f"Trying to divide {FRACTIONAL} by 0")


@pytest.mark.parametrize(
    "value, expected",
    [
        (Decimal256.zero(), "0"),
        (Decimal256.one(), "1"),
        (Decimal256.percent(500), "5"),
        (Decimal256.percent(125), "1.25"),
        (Decimal256.percent(42638), "426.38"),
        (Decimal256.percent(1), "0.01"),
        (Decimal256.permille(987), "0.987"),
        (Decimal256(1), "0.000000000000000001"),
        (Decimal256(10), "0.00000000000000001"),
        (Decimal256(100), "0.0000000000000001"),
        (Decimal256(1000), "0.000000000000001"),
        (Decimal256(10000), "0.00000000000001"),
        (Decimal256(100000), "0.0000000000001"),
        (Decimal256(1000000), "0.000000000001"),
        (Decimal256(10000000), "0.00000000001"),
        (Decimal256(100000000), "0.0000000001"),
        (Decimal256(1000000000), "0.000000001"),
        (Decimal256(10000000000), "0.00000001"),
        (Decimal256(100000000000), "0.0000001"),
        (Decimal256(10000000000000), "0.00001"),
        (Decimal256(100000000000000), "0.0001"),
        (Decimal256(1000000000000000), "0.001"),
        (Decimal256(10000000000000000), "0.01"),
        (Decimal256(100000000000000000), "0.1"),
    ],
)
def test_to_string(value, expected):
    assert str(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (Decimal256.zero(), b'"0"'),
        (Decimal256.one(), b'"1"'),
        (Decimal256.percent(8), b'"0.08"'),
        (Decimal256.percent(87), b'"0.87"'),
        (Decimal256.percent(876), b'"8.76"'),
        (Decimal256.percent(8765), b'"87.65"'),
    ],
)
def test_serialize(value, expected):
    assert to_binary(value) == expected


@pytest.mark.parametrize(
    "data, expected",
    [
        (b'"0"', Decimal256.zero()),
        (b'"1"', Decimal256.one()),
        (b'"000"', Decimal256.zero()),
        (b'"001"', Decimal256.one()),
        (b'"0.08"', Decimal256.percent(8)),
        (b'"0.87"', Decimal256.percent(87)),
        (b'"8.76"', Decimal256.percent(876)),
        (b'"87.65"', Decimal256.percent(8765)),
    ],
)
def test_deserialize(data, expected):
    assert Decimal256.from_json(from_binary(data)) == expected


def test_deserialize_rejects_bad_input():
    with pytest.raises(StdError) as info:
        Decimal256.from_json("1.2.3")
    assert "Error parsing decimal '1.2.3'" in info.value.msg
    with pytest.raises(StdError):
        Decimal256.from_json(5)


def test_uint_mul():
    assert one_and_half().uint_mul(Uint256(300)) == Decimal256(450)
    assert Decimal256.zero().uint_mul(Uint256(300)) == Decimal256.zero()
    assert one_and_half().uint_mul(Uint256(0)) == Decimal256.zero()


def test_uint_div():
    assert one_and_half().uint_div(Uint256(300)) == Decimal256(200)

    with pytest.raises(StdError) as info:
        Decimal256.zero().uint_div(Uint256(300))
    assert info.value == StdError.generic_err("Trying to divide 300 by 0")

    assert one_and_half().uint_div(Uint256(0)) == Decimal256.zero()


def test_round():
    assert Decimal256.from_str("100").round() == Uint256(100)
    assert Decimal256.from_str("100.4").round() == Uint256(100)
    assert Decimal256.from_str("20.3").round() == Uint256(20)

    raw = Uint256(123 * 10**18)
    assert Decimal256.from_uint256(raw).round() == raw


def test_from_uint256_overflow():
    with pytest.raises(StdError) as info:
        Decimal256.from_uint256(Uint256.MAX)
    assert info.value.msg == (
        f"Overflow when calculating {2**256 - 1} * 1000000000000000000"
    )


def test_ordering():
    assert Decimal256.percent(50) < Decimal256.one()
    assert Decimal256.from_str("2.5") > Decimal256.from_str("2.49")


def test_uint256_decimal_mul():
    assert Uint256(300).decimal_mul(one_and_half()) == Uint256(450)
    assert Uint256(300).decimal_mul(Decimal256.zero()) == Uint256(0)
    assert Uint256(0).decimal_mul(one_and_half()) == Uint256(0)


def test_uint256_decimal_div():
    assert Uint256(300).decimal_div(one_and_half()) == Uint256(200)

    with pytest.raises(StdError) as info:
        Uint256(300).decimal_div(Decimal256.zero())
    assert info.value == StdError.generic_err("Trying to divide 300 by 0")

    assert Uint256(0).decimal_div(one_and_half()) == Uint256(0)