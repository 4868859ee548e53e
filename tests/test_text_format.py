import pytest

from bl4_codec.b4s.serial.from_string import parse_part, parse_tokens
from bl4_codec.b4s.serial.to_string import format_tokens
from bl4_codec.b4s.serial.token import (
    SEPARATOR, SOFT_SEPARATOR, Part, Single, String, ValueList, VarBit, VarInt,
)
from bl4_codec.decoder_logic import decode_serial_to_string, encode_string_to_serial

from serial_fixtures import GOLDEN_SERIAL, GOLDEN_TEXT, GOLDEN_TOKENS

GOLDEN_EXACT = "180928b18| 50b8| {0:1} 1660b11|| {8} {14} {252:97}|"


def test_golden_text():
    assert format_tokens(GOLDEN_TOKENS) == GOLDEN_TEXT
    assert format_tokens(GOLDEN_TOKENS, exact=True) == GOLDEN_EXACT


def test_exact_text_rebuilds_the_serial():
    assert tuple(parse_tokens(GOLDEN_EXACT)) == GOLDEN_TOKENS
    assert encode_string_to_serial(GOLDEN_EXACT) == (GOLDEN_SERIAL, None)


def test_plain_numbers_pick_the_smallest_token():
    assert parse_tokens("50 70000") == [VarInt(50), VarBit(70000, 17)]


def test_decode_serial_to_string():
    text, tokens, err = decode_serial_to_string(GOLDEN_SERIAL)
    assert err is None
    assert text == GOLDEN_TEXT
    assert tokens == GOLDEN_TOKENS


def test_decode_serial_to_string_reports_errors():
    assert decode_serial_to_string("not a serial")[2]
    text, tokens, err = decode_serial_to_string("@U00000")
    assert (text, tokens) == ("", ())
    assert err.startswith("Error while decoding")


def test_encode_string_to_serial_reports_errors():
    assert encode_string_to_serial("  ") == ("", "Input string cannot be empty.")
    serial, err = encode_string_to_serial("{1:")
    assert serial == ""
    assert "Unmatched" in err


@pytest.mark.parametrize("text, part", [
    ("{7}", Part(7)),
    ("{ 7 : 3 }", Part(7, Single(3))),
    ("{7:[1 2 70000]}", Part(7, ValueList((1, 2, 70000)))),
    ("{7:[1b4 2]}", Part(7, ValueList((VarBit(1, 4), VarInt(2))))),
    ("{7:[]}", Part(7, ValueList())),
])
def test_parse_part(text, part):
    assert parse_part(text) == part


def test_strings_and_soft_separators():
    tokens = [String(b'say "hi" \\o/'), SOFT_SEPARATOR, VarInt(1), SEPARATOR]
    text = format_tokens(tokens)
    assert text == '"say \\"hi\\" \\\\o/", 1|'
    assert parse_tokens(text) == tokens


def test_invalid_character():
    with pytest.raises(ValueError):
        parse_tokens("12 ?")


def test_exact_text_round_trips(rng):
    printable = bytes(range(32, 127))
    for _ in range(200):
        tokens = []
        for _ in range(rng.randint(1, 15)):
            kind = rng.randrange(6)
            if kind == 0:
                tokens.append(SEPARATOR)
            elif kind == 1:
                tokens.append(SOFT_SEPARATOR)
            elif kind == 2:
                tokens.append(VarInt(rng.randint(0, 0xFFFF)))
            elif kind == 3:
                value = rng.getrandbits(rng.randint(1, 31))
                tokens.append(VarBit(value, rng.randint(value.bit_length(), 31)))
            elif kind == 4:
                tokens.append(Part(rng.randint(0, 300), Single(rng.randint(0, 300))))
            else:
                tokens.append(String(bytes(rng.choice(printable) for _ in range(rng.randint(0, 8)))))
        assert parse_tokens(format_tokens(tokens, exact=True)) == tokens


def test_list_items_keep_their_kind_in_exact_text():
    part = Part(7, ValueList((VarBit(5, 3), VarInt(9), 70000)))
    assert format_tokens([part]) == "{7:[5 9 70000]}"
    assert format_tokens([part], exact=True) == "{7:[5b3 9 70000b17]}"
    assert parse_tokens("{7:[5b3 9 70000b17]}") == [part]


def test_surrounding_whitespace_is_ignored():
    text, tokens, err = decode_serial_to_string("  " + GOLDEN_SERIAL + "\n")
    assert err is None
    assert text == GOLDEN_TEXT
