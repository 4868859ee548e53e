import pytest

from bl4_codec.b4s.serial_datatypes.b4string.read import read_b4string
from bl4_codec.b4s.serial_datatypes.b4string.write import write_b4string
from bl4_codec.b4s.serial_datatypes.varbit.read import read_varbit
from bl4_codec.b4s.serial_datatypes.varbit.write import varbit_size, write_varbit
from bl4_codec.b4s.serial_datatypes.varint.read import read_varint
from bl4_codec.b4s.serial_datatypes.varint.write import varint_size, write_varint
from bl4_codec.lib.bit.reader import BitReader
from bl4_codec.lib.bit.writer import BitWriter


def test_varint_zero_is_one_nibble():
    bw = BitWriter()
    write_varint(bw, 0)
    assert str(bw) == "00000"


def test_varint_nibbles_are_low_first():
    bw = BitWriter()
    write_varint(bw, 0x61)
    # nibble 1, continue, nibble 6, stop
    assert str(bw) == "0001" + "1" + "0110" + "0"


def test_varint_every_value():
    bw = BitWriter()
    for v in range(0x10000):
        write_varint(bw, v)
    br = BitReader(bw.get_data())
    for v in range(0x10000):
        start = br.get_pos()
        assert read_varint(br) == v
        assert br.get_pos() - start == varint_size(v)


def test_varint_rejects_out_of_range():
    with pytest.raises(ValueError):
        write_varint(BitWriter(), 0x10000)


def test_varbit_zero_length_consumes_only_the_length():
    bw = BitWriter()
    write_varbit(bw, 0)
    bw.write_bits(3, 0b111)
    br = BitReader(bw.get_data())
    assert read_varbit(br) == (0, 0)
    assert br.get_pos() == 5


def test_varbit_keeps_explicit_length():
    bw = BitWriter()
    write_varbit(bw, 50, 8)
    assert str(bw) == "01000" + "00110010"
    assert read_varbit(BitReader(bw.get_data())) == (50, 8)


def test_varbit_random_values(rng):
    values = [rng.getrandbits(rng.randint(0, 31)) for _ in range(500)]
    bw = BitWriter()
    for v in values:
        write_varbit(bw, v)
    br = BitReader(bw.get_data())
    for v in values:
        start = br.get_pos()
        assert read_varbit(br) == (v, v.bit_length())
        assert br.get_pos() - start == varbit_size(v)


def test_b4string_is_seven_bit():
    bw = BitWriter()
    write_b4string(bw, b"Hi")
    assert bw.get_pos() == 5 + 2 * 7
    assert read_b4string(BitReader(bw.get_data())) == b"Hi"
