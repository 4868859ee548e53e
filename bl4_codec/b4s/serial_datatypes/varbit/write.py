from bl4_codec.b4s.serial_datatypes.varbit.read import VARBIT_LENGTH_BLOCK_SIZE
from bl4_codec.lib.bit.writer import BitWriter


def varbit_size(value: int) -> int:
    return VARBIT_LENGTH_BLOCK_SIZE + value.bit_length()


def write_varbit(bw: BitWriter, value: int, bit_length: int = None):
    if bit_length is None:
        bit_length = value.bit_length()
    bw.write_bits(VARBIT_LENGTH_BLOCK_SIZE, bit_length)
    bw.write_bits(bit_length, value)
