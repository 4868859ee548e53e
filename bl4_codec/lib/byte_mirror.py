"""Bit-order reversal inside each byte of a buffer."""


def _reverse_bits(value: int, width: int) -> int:
    out = 0
    for _ in range(width):
        out = (out << 1) | (value & 1)
        value >>= 1
    return out


UINT8_MIRROR = tuple(_reverse_bits(i, 8) for i in range(256))


def mirror(data: bytes) -> bytes:
    """Reverse the bit order of every byte. Applying it twice is a no-op."""
    return bytes(UINT8_MIRROR[b] for b in data)
