import pytest

from bl4_codec.b4s.b85.decode import decode
from bl4_codec.b4s.b85.encode import encode
from bl4_codec.errors import GroupOverflow, InvalidSymbol

from serial_fixtures import GOLDEN_SERIAL


def test_golden_payload_round_trips():
    payload = GOLDEN_SERIAL[2:]
    data = decode(payload)
    assert len(data) == 18
    assert encode(data) == payload


def test_partial_group_tail():
    # The last two bytes of the golden payload encode to a 3 symbol tail
    data = decode(GOLDEN_SERIAL[2:])
    assert encode(data).endswith("u>k")


def test_group_is_big_endian():
    assert encode(b"\x00\x00\x00\x00") == "00000"
    assert decode("00001") == b"\x00\x00\x00\x01"


@pytest.mark.parametrize("length", range(0, 13))
def test_every_length_round_trips(rng, length):
    for _ in range(20):
        data = bytes(rng.getrandbits(8) for _ in range(length))
        text = encode(data)
        assert len(text) == length // 4 * 5 + (length % 4 + 1 if length % 4 else 0)
        assert decode(text) == data


def test_single_dangling_symbol_yields_nothing():
    assert decode("00000A") == b"\x00\x00\x00\x00"


@pytest.mark.parametrize("bad", ['"', " ", "\\", "é"])
def test_invalid_symbol(bad):
    payload = GOLDEN_SERIAL[2:-1] + bad
    with pytest.raises(InvalidSymbol) as exc:
        decode(payload)
    assert exc.value.symbol == bad
    assert exc.value.offset == len(payload) - 1


def test_partial_group_is_completed_with_tilde():
    assert decode("00") == b"\x00"
    assert encode(b"\x01") == "0R"
    assert decode("0R") == b"\x01"
    assert decode(encode(b"\x01\x80")) == b"\x01\x80"
    assert decode(GOLDEN_SERIAL[2:])[-1] == 0x01


@pytest.mark.parametrize("text, offset", [("~~~~~", 0), ("00000~~~~~", 5), ("00000~~", 5)])
def test_group_overflow(text, offset):
    with pytest.raises(GroupOverflow) as exc:
        decode(text)
    assert exc.value.offset == offset
