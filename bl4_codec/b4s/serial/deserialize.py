import logging
from dataclasses import dataclass
from typing import Tuple

from bl4_codec.b4s.serial.serialize import serialize
from bl4_codec.b4s.serial.token import SEPARATOR, SOFT_SEPARATOR, Separator, String, Token, VarBit, VarInt
from bl4_codec.b4s.serial_datatypes.b4string.read import read_b4string
from bl4_codec.b4s.serial_datatypes.part.read import read_part
from bl4_codec.b4s.serial_datatypes.varbit.read import read_varbit
from bl4_codec.b4s.serial_datatypes.varint.read import read_varint
from bl4_codec.b4s.serial_tokenizer.tokenizer import Tokenizer, TokenKind
from bl4_codec.config import SERIAL_MAGIC, SERIAL_MAGIC_BITS
from bl4_codec.errors import BadMagic, OutOfData, SerialError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Deserialized:
    tokens: Tuple[Token, ...]
    # False when non-zero bits follow the terminating separator
    padding_clean: bool = True
    # False when re-encoding the tokens gives different bytes
    canonical: bool = True

    @property
    def terminated(self) -> bool:
        return bool(self.tokens) and isinstance(self.tokens[-1], Separator)


def _read_token(t: Tokenizer, kind: TokenKind) -> Token:
    br = t.bit_reader()
    if kind == TokenKind.SOFT_SEPARATOR:
        return SOFT_SEPARATOR
    if kind == TokenKind.VARINT:
        return VarInt(read_varint(br))
    if kind == TokenKind.VARBIT:
        value, length = read_varbit(br)
        return VarBit(value, length)
    if kind == TokenKind.PART:
        return read_part(t)
    if kind == TokenKind.STRING:
        return String(read_b4string(br))
    raise AssertionError(f"unhandled token kind {kind}")


def deserialize(data: bytes) -> Deserialized:
    """
    Tokenizes a mirrored serial bitstream.

    Separators also appear in the middle of a serial; the one that ends the
    stream is the separator followed by nothing but zero padding. When fewer
    than a byte of non-zero bits follows a separator, decoding continues but
    remembers that separator; if the leftover bits then fail to form tokens,
    the stream is cut back to it and the padding is reported as unclean.
    """
    t = Tokenizer(data)
    br = t.bit_reader()

    # Expect the magic header as the first bits
    try:
        magic = br.read_bits(SERIAL_MAGIC_BITS)
    except OutOfData:
        raise BadMagic("Serial is too short to hold the magic header", 0) from None
    if magic != SERIAL_MAGIC:
        raise BadMagic(f"Bad magic header {magic:07b}, expected {SERIAL_MAGIC:07b}", 0)

    tokens = []
    candidate = None
    padding_clean = True

    try:
        while True:
            remaining = br.remaining()
            if remaining == 0 or (remaining < 2 and br.rest_is_zero()):
                break

            kind = t.next_kind()
            if kind != TokenKind.SEPARATOR:
                tokens.append(_read_token(t, kind))
                continue

            tokens.append(SEPARATOR)
            if br.rest_is_zero():
                break
            if candidate is None and br.remaining() < 8:
                candidate = (len(tokens), br.get_pos())
    except SerialError as e:
        if candidate is None:
            raise e.with_partial(tokens)
        count, pos = candidate
        br.set_pos(pos)
        logger.warning("Non-zero padding after the terminator at bit %d: %s", pos, br.string_after())
        del tokens[count:]
        padding_clean = False

    tokens = tuple(tokens)
    canonical = serialize(tokens) == data
    if padding_clean and not canonical:
        logger.warning("Serial uses a non-canonical encoding and will re-encode differently")

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Deserialized %d tokens from %d bits: %s", len(tokens), len(br), t.done_string())
    return Deserialized(tokens, padding_clean, canonical)
