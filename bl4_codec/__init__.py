# bl4_codec
# Borderlands 4 item serial codec and save file envelope

from .b4s.serial.token import (
    Part,
    PartValue,
    Separator,
    Single,
    SoftSeparator,
    String,
    Token,
    ValueList,
    VarBit,
    VarInt,
)
from .decoder_logic import (
    ItemSerial,
    decode_serial,
    decode_serial_to_string,
    encode_serial,
    encode_string_to_serial,
    encode_tokens,
)
from .errors import (
    BadMagic,
    BadPadding,
    CodecError,
    DecompressionFailure,
    EnvelopeError,
    GroupOverflow,
    InvalidSymbol,
    MalformedPart,
    OutOfData,
    SerialError,
    UnknownTokenPrefix,
)
from .lookup import PartLookup
from .save.envelope import Platform, decrypt, derive_key, encrypt

__version__ = "0.1.0"
