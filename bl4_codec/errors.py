"""
Exceptions raised by the serial codec and the save envelope.

Serial errors are ``ValueError`` subclasses (``OutOfData`` is also an
``EOFError``) so callers written against the plain builtins keep working.
Every serial error carries the bit offset where decoding stopped and the
tokens decoded before that point; those tokens are for diagnostics only.
"""
from typing import Optional, Tuple


class CodecError(Exception):
    """Base class for every error raised by bl4_codec."""


class SerialError(CodecError, ValueError):
    def __init__(self, message: str, bit_offset: Optional[int] = None, partial: Tuple = ()):
        self.bit_offset = bit_offset
        self.partial = tuple(partial)
        if bit_offset is not None:
            message = f"{message} (at bit {bit_offset})"
        super().__init__(message)

    def with_partial(self, partial) -> "SerialError":
        self.partial = tuple(partial)
        return self


class InvalidSymbol(SerialError):
    def __init__(self, symbol: str, offset: int):
        self.symbol = symbol
        self.offset = offset
        super().__init__(f"Invalid Base85 symbol {symbol!r} at character {offset}")


class GroupOverflow(SerialError):
    def __init__(self, group: str, offset: int):
        self.group = group
        self.offset = offset
        super().__init__(f"Base85 group {group!r} at character {offset} does not fit in 32 bits")


class BadMagic(SerialError):
    pass


class OutOfData(SerialError, EOFError):
    pass


class MalformedPart(SerialError):
    pass


class UnknownTokenPrefix(SerialError):
    pass


class EnvelopeError(CodecError, ValueError):
    pass


class BadPadding(EnvelopeError):
    """PKCS7 validation failed; almost always a wrong player id."""


class DecompressionFailure(EnvelopeError):
    """The decrypted body is not a valid zlib stream; corrupt or foreign file."""
