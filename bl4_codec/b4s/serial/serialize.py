from typing import Iterable

from bl4_codec.b4s.serial.token import Part, Separator, SoftSeparator, String, Token, VarBit, VarInt
from bl4_codec.b4s.serial_datatypes.b4string.write import write_b4string
from bl4_codec.b4s.serial_datatypes.part.write import write_part
from bl4_codec.b4s.serial_datatypes.varbit.write import write_varbit
from bl4_codec.b4s.serial_datatypes.varint.write import write_varint
from bl4_codec.b4s.serial_tokenizer.tokenizer import TokenKind
from bl4_codec.config import SERIAL_MAGIC, SERIAL_MAGIC_BITS
from bl4_codec.lib.bit.writer import BitWriter


def write_token(bw: BitWriter, token: Token):
    if isinstance(token, Separator):
        TokenKind.SEPARATOR.write_prefix(bw)
    elif isinstance(token, SoftSeparator):
        TokenKind.SOFT_SEPARATOR.write_prefix(bw)
    elif isinstance(token, VarInt):
        TokenKind.VARINT.write_prefix(bw)
        write_varint(bw, token.value)
    elif isinstance(token, VarBit):
        TokenKind.VARBIT.write_prefix(bw)
        write_varbit(bw, token.value, token.bit_length)
    elif isinstance(token, Part):
        TokenKind.PART.write_prefix(bw)
        write_part(bw, token)
    elif isinstance(token, String):
        TokenKind.STRING.write_prefix(bw)
        write_b4string(bw, token.data)
    else:
        raise TypeError(f"Not a serial token: {token!r}")


def serialize(tokens: Iterable[Token]) -> bytes:
    """
    Writes the magic header and the tokens, then a terminating separator
    unless the sequence already ends with one, then zero bits up to the next
    byte boundary.
    """
    bw = BitWriter()
    bw.write_bits(SERIAL_MAGIC_BITS, SERIAL_MAGIC)

    last = None
    for token in tokens:
        write_token(bw, token)
        last = token

    if not isinstance(last, Separator):
        TokenKind.SEPARATOR.write_prefix(bw)

    bw.pad_to_byte()
    return bw.get_data()
