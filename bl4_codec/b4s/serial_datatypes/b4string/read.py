from bl4_codec.b4s.serial_datatypes.varint.read import read_varint
from bl4_codec.lib.bit.reader import BitReader

B4STRING_CHAR_BITS = 7


def read_b4string(br: BitReader) -> bytes:
    length = read_varint(br)
    return bytes(br.read_bits(B4STRING_CHAR_BITS) for _ in range(length))
