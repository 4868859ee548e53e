# -*- coding: utf-8 -*-
"""
String-level entry points for item serials.

A serial is ``@U`` followed by Base85 text. Decoding Base85-decodes
everything after ``@U``, mirrors the bits of every byte and tokenizes the
result; encoding runs the same steps backwards. The character after ``@Ug``
is the item type selector and is reported as ``type_char``.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple

from bl4_codec.b4s.b85.decode import decode as b85_decode
from bl4_codec.b4s.b85.encode import encode as b85_encode
from bl4_codec.b4s.serial.deserialize import deserialize
from bl4_codec.b4s.serial.from_string import parse_tokens
from bl4_codec.b4s.serial.serialize import serialize
from bl4_codec.b4s.serial.to_string import format_tokens
from bl4_codec.b4s.serial.token import Token
from bl4_codec.config import SERIAL_HEADER, SERIAL_PREFIX
from bl4_codec.errors import BadMagic, SerialError
from bl4_codec.lib.byte_mirror import mirror

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ItemSerial:
    type_char: str
    tokens: Tuple[Token, ...] = field(default_factory=tuple)
    padding_clean: bool = True
    canonical: bool = True

    def to_text(self, exact: bool = False) -> str:
        return format_tokens(self.tokens, exact)

    def encode(self) -> str:
        return encode_serial(self)


def serial_to_bytes(serial: str) -> bytes:
    """The mirrored bitstream carried by a serial string."""
    if not serial.startswith(SERIAL_PREFIX):
        raise BadMagic(f"Not a Borderlands 4 item serial: missing {SERIAL_PREFIX!r} prefix")
    return mirror(b85_decode(serial[len(SERIAL_PREFIX):]))


def bytes_to_serial(data: bytes) -> str:
    return SERIAL_PREFIX + b85_encode(mirror(data))


def decode_serial(serial: str) -> ItemSerial:
    serial = serial.strip()
    data = serial_to_bytes(serial)
    result = deserialize(data)
    type_char = serial[len(SERIAL_HEADER)] if len(serial) > len(SERIAL_HEADER) else ""
    return ItemSerial(type_char, result.tokens, result.padding_clean, result.canonical)


def encode_tokens(tokens: Iterable[Token]) -> str:
    return bytes_to_serial(serialize(tokens))


def encode_serial(item: ItemSerial) -> str:
    serial = encode_tokens(item.tokens)
    new_type = serial[len(SERIAL_HEADER)] if len(serial) > len(SERIAL_HEADER) else ""
    if item.type_char and new_type != item.type_char:
        logger.debug("Item type changed from %r to %r after encoding", item.type_char, new_type)
    return serial


def decode_serial_to_string(serial_b85: str, exact: bool = False) -> Tuple[str, Tuple[Token, ...], Optional[str]]:
    """
    Decodes a serial into its human-readable form.

    Returns ``(formatted, tokens, error)``; on failure the first two are
    empty and ``error`` describes what went wrong and where.
    """
    serial_b85 = (serial_b85 or "").strip()
    if not serial_b85.startswith(SERIAL_PREFIX):
        return "", (), f"Invalid serial: it must start with '{SERIAL_PREFIX}'."

    try:
        item = decode_serial(serial_b85)
    except SerialError as e:
        return "", (), f"Error while decoding: {e}"

    return item.to_text(exact), item.tokens, None


def encode_string_to_serial(decoded_string: str) -> Tuple[str, Optional[str]]:
    """
    Encodes the human-readable form back into a serial.

    Returns ``(serial, error)``.
    """
    if not decoded_string or not decoded_string.strip():
        return "", "Input string cannot be empty."

    try:
        return encode_tokens(parse_tokens(decoded_string)), None
    except ValueError as e:
        return "", f"Error while encoding: {e}"


def decode_many(serials: Iterable[str]) -> Iterator[Tuple[str, Optional[ItemSerial], Optional[SerialError]]]:
    """Decodes serials independently; one bad serial never stops the batch."""
    for serial in serials:
        try:
            yield serial, decode_serial(serial), None
        except SerialError as e:
            logger.warning("Failed to decode serial %s: %s", serial, e)
            yield serial, None, e


def roundtrip_problems(serials: Iterable[str]) -> List[Tuple[str, str]]:
    """Serials that do not re-encode to themselves, with the re-encoded form."""
    problems = []
    for serial, item, err in decode_many(serials):
        if err is not None:
            problems.append((serial, str(err)))
            continue
        encoded = encode_serial(item)
        if encoded != serial.strip():
            problems.append((serial, encoded))
    return problems
