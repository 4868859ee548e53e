class BitWriter:
    """Append-only MSB-first bit writer backed by a growable bytearray."""

    def __init__(self):
        self.data = bytearray()
        self.pos = 0

    def write_bit(self, bit: int):
        byte_index = self.pos // 8
        bit_index_in_byte = 7 - (self.pos % 8)

        while byte_index >= len(self.data):
            self.data.append(0)

        if bit & 1:
            self.data[byte_index] |= (1 << bit_index_in_byte)

        self.pos += 1

    def write_bits(self, n: int, value: int):
        if n < 0:
            raise ValueError(f"Cannot write a negative number of bits: {n}")
        if value < 0 or value >> n:
            raise ValueError(f"Value {value} does not fit in {n} bits")
        for i in range(n - 1, -1, -1):
            self.write_bit((value >> i) & 1)

    def pad_to_byte(self):
        while self.pos % 8:
            self.write_bit(0)

    def get_data(self) -> bytes:
        return bytes(self.data)

    def get_pos(self) -> int:
        return self.pos

    bits_written = get_pos

    def __str__(self):
        s = ""
        for i in range(self.pos):
            if (self.data[i // 8] >> (7 - i % 8)) & 1:
                s += "1"
            else:
                s += "0"
        return s
