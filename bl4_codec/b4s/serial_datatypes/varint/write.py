from bl4_codec.b4s.serial_datatypes.varint.read import VARINT_BITS_PER_BLOCK, VARINT_NB_BLOCKS
from bl4_codec.lib.bit.writer import BitWriter

VARINT_MAX_USABLE_BITS = VARINT_NB_BLOCKS * VARINT_BITS_PER_BLOCK


def varint_size(value: int) -> int:
    """Number of bits ``write_varint`` emits for ``value``."""
    nibbles = max(1, -(-value.bit_length() // VARINT_BITS_PER_BLOCK))
    return nibbles * (VARINT_BITS_PER_BLOCK + 1)


def write_varint(bw: BitWriter, value: int):
    if not 0 <= value < (1 << VARINT_MAX_USABLE_BITS):
        raise ValueError(f"varint value {value} does not fit in {VARINT_MAX_USABLE_BITS} bits")

    while True:
        bw.write_bits(VARINT_BITS_PER_BLOCK, value & 0xF)
        value >>= VARINT_BITS_PER_BLOCK
        bw.write_bit(1 if value else 0)
        if not value:
            break
