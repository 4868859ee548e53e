from enum import Enum

from bl4_codec.errors import MalformedPart, OutOfData, UnknownTokenPrefix
from bl4_codec.lib.bit.reader import BitReader
from bl4_codec.lib.bit.writer import BitWriter


class TokenKind(Enum):
    # (prefix bits, prefix length)
    SEPARATOR = (0b00, 2)          # "00" hard separator, the last one terminates the stream
    SOFT_SEPARATOR = (0b01, 2)     # "01" soft separator
    VARINT = (0b100, 3)            # "100" ... nibble varint
    PART = (0b101, 3)              # "101" ... complex part block
    VARBIT = (0b110, 3)            # "110" ... length-prefixed varbit
    STRING = (0b111, 3)            # "111" ... 7-bit string

    @property
    def prefix(self) -> int:
        return self.value[0]

    @property
    def prefix_length(self) -> int:
        return self.value[1]

    def write_prefix(self, bw: BitWriter):
        bw.write_bits(self.prefix_length, self.prefix)


_SHORT_KINDS = {k.prefix: k for k in TokenKind if k.prefix_length == 2}
_LONG_KINDS = {k.prefix: k for k in TokenKind if k.prefix_length == 3}


class Tokenizer:
    def __init__(self, data: bytes):
        self.br = BitReader(data)
        self.split_positions = []

    def done_string(self) -> str:
        """The bitstream with a double space before each token, for debugging."""
        splitted = self.br.full_string()
        for pos in sorted(self.split_positions, reverse=True):
            splitted = splitted[:pos] + "  " + splitted[pos:]
        return splitted

    def bit_reader(self) -> BitReader:
        return self.br

    def next_kind(self) -> TokenKind:
        start = self.br.get_pos()
        self.split_positions.append(start)

        try:
            tok = self.br.read_bits(2)
            if tok in _SHORT_KINDS:
                return _SHORT_KINDS[tok]

            tok = (tok << 1) | self.br.read()
        except OutOfData:
            raise OutOfData("End of stream while reading token prefix", start) from None

        if tok in _LONG_KINDS:
            return _LONG_KINDS[tok]

        # Unreachable with the current prefix table
        raise UnknownTokenPrefix(f"Invalid token prefix {tok:03b}", start)

    def expect(self, msg: str, *bits: int, error=MalformedPart):
        for bit in bits:
            pos = self.br.get_pos()
            b = self.br.read()
            if b != bit:
                raise error(f"{msg} => expected bit {bit}, got {b}", pos)
