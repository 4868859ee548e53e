from bl4_codec.errors import OutOfData


class BitReader:
    """Forward-only MSB-first bit reader over a byte buffer."""

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.pos = 0

    def _bit_at(self, pos: int) -> int:
        byte = self.data[pos // 8]
        return (byte >> (7 - pos % 8)) & 1

    def read(self) -> int:
        if self.pos >= len(self):
            raise OutOfData("Unexpected end of data while reading a bit", self.pos)
        bit = self._bit_at(self.pos)
        self.pos += 1
        return bit

    def read_bits(self, n: int) -> int:
        if n < 0:
            raise ValueError(f"Cannot read a negative number of bits: {n}")
        if self.pos + n > len(self):
            raise OutOfData(f"Needed {n} bits, only {self.remaining()} left", self.pos)

        value = 0
        for _ in range(n):
            value = (value << 1) | self._bit_at(self.pos)
            self.pos += 1
        return value

    def peek_bits(self, n: int) -> int:
        old_pos = self.pos
        try:
            return self.read_bits(n)
        finally:
            self.pos = old_pos

    def remaining(self) -> int:
        return len(self) - self.pos

    def rest_is_zero(self) -> bool:
        return all(self._bit_at(i) == 0 for i in range(self.pos, len(self)))

    def get_pos(self) -> int:
        return self.pos

    # alias used in diagnostics
    bits_consumed = get_pos

    def set_pos(self, n: int) -> bool:
        if not (0 <= n <= len(self)):
            return False
        self.pos = n
        return True

    def string_after(self) -> str:
        return "".join(str(self._bit_at(i)) for i in range(self.pos, len(self)))

    def full_string(self) -> str:
        return "".join(str(self._bit_at(i)) for i in range(len(self)))

    def __len__(self):
        return len(self.data) * 8
