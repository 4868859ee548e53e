from bl4_codec.b4s.serial_datatypes.b4string.read import B4STRING_CHAR_BITS
from bl4_codec.b4s.serial_datatypes.varint.write import write_varint
from bl4_codec.lib.bit.writer import BitWriter


def write_b4string(bw: BitWriter, data: bytes):
    write_varint(bw, len(data))
    for byte in data:
        bw.write_bits(B4STRING_CHAR_BITS, byte)
