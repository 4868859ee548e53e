from bl4_codec.lib.bit.reader import BitReader

VARBIT_LENGTH_BLOCK_SIZE = 5


def read_varbit(br: BitReader) -> (int, int):
    """Returns ``(value, bit_length)``. A zero length means a zero value."""
    length = br.read_bits(VARBIT_LENGTH_BLOCK_SIZE)
    if length == 0:
        return 0, 0
    return br.read_bits(length), length
