from bl4_codec.lib.bit.reader import BitReader

VARINT_NB_BLOCKS = 4
VARINT_BITS_PER_BLOCK = 4


def read_varint(br: BitReader) -> int:
    data_read = 0
    output = 0

    for _ in range(VARINT_NB_BLOCKS):
        # Nibbles arrive low first
        output |= br.read_bits(VARINT_BITS_PER_BLOCK) << data_read
        data_read += VARINT_BITS_PER_BLOCK

        # Continuation bit
        if br.read() == 0:
            break

    return output
