"""
Encryption envelope around Borderlands 4 save files.

Reading a ``.sav``:  AES-256-ECB decrypt -> strip PKCS7 -> zlib inflate.
Writing one:         zlib deflate + trailer -> PKCS7 pad -> AES-256-ECB encrypt.

The key is the fixed base key with its first bytes XORed with the player
id. ECB and the weak derivation are part of the file format and have to be
reproduced exactly. The envelope never looks inside the body it carries.
"""
import logging
import zlib
from enum import Enum
from typing import Tuple

from Crypto.Cipher import AES
from Crypto.Util.Padding import pad, unpad

from bl4_codec.config import AES_BLOCK_SIZE, BASE_KEY, TRAILER_SIZE, ZLIB_LEVEL
from bl4_codec.errors import BadPadding, DecompressionFailure, EnvelopeError

logger = logging.getLogger(__name__)


class Platform(Enum):
    STEAM = "steam"
    EPIC = "epic"

    @property
    def checksum_byteorder(self) -> str:
        return "big" if self is Platform.EPIC else "little"


# ── Key derivation ────────────────────────────────────────────────────────────

def _key_steam(player_id: str, base_key: bytes) -> bytes:
    digits = ''.join(ch for ch in str(player_id) if ch.isdigit())
    if not digits:
        raise ValueError(f"Player id {player_id!r} contains no digits")
    try:
        sid = int(digits, 10).to_bytes(8, "little", signed=False)
    except OverflowError:
        raise ValueError(f"Player id {player_id!r} does not fit in 64 bits") from None

    k = bytearray(base_key)
    for i, b in enumerate(sid):
        k[i] ^= b
    return bytes(k)


def _key_epic(player_id: str, base_key: bytes) -> bytes:
    wid = str(player_id).strip().encode("utf-16le")
    k = bytearray(base_key)
    for i in range(min(len(wid), len(k))):
        k[i] ^= wid[i]
    return bytes(k)


def derive_key(player_id, platform: Platform = Platform.STEAM, base_key: bytes = BASE_KEY) -> bytes:
    """
    Derives the AES-256 key for a player.

    Steam ids: the digits of ``player_id`` as a little-endian u64 XORed into
    bytes 0-7 of the base key; bytes 8-31 stay untouched. Epic ids: the
    UTF-16LE bytes of the id XORed into the start of the base key.
    """
    if len(base_key) != 32:
        raise ValueError(f"Base key must be 32 bytes, got {len(base_key)}")
    if platform is Platform.EPIC:
        return _key_epic(player_id, base_key)
    return _key_steam(player_id, base_key)


# ── Block cipher ──────────────────────────────────────────────────────────────

def _check_blocks(data: bytes):
    if len(data) % AES_BLOCK_SIZE != 0:
        raise EnvelopeError(f"Input size {len(data)} is not a multiple of {AES_BLOCK_SIZE}")


def aes_decrypt(data: bytes, key: bytes) -> bytes:
    _check_blocks(data)
    return AES.new(key, AES.MODE_ECB).decrypt(data)


def aes_encrypt(data: bytes, key: bytes) -> bytes:
    _check_blocks(data)
    return AES.new(key, AES.MODE_ECB).encrypt(data)


# ── Padding ───────────────────────────────────────────────────────────────────

def pkcs7_pad(data: bytes) -> bytes:
    return pad(data, AES_BLOCK_SIZE, style="pkcs7")


def pkcs7_unpad(data: bytes) -> bytes:
    """Strips PKCS7 padding; a bad pad is the usual sign of a wrong player id."""
    if not data:
        raise BadPadding("Cannot unpad an empty buffer")
    try:
        return unpad(data, AES_BLOCK_SIZE, style="pkcs7")
    except ValueError as e:
        raise BadPadding(f"Invalid PKCS7 padding (pad byte {data[-1]:#04x}): wrong player id? ({e})") from None


# ── Compression ───────────────────────────────────────────────────────────────

def _adler32(b: bytes) -> int:
    return zlib.adler32(b) & 0xFFFFFFFF


def compress(body: bytes, platform: Platform = Platform.STEAM) -> bytes:
    """zlib stream followed by adler32(body) and len(body)."""
    trailer = (_adler32(body).to_bytes(4, platform.checksum_byteorder)
               + len(body).to_bytes(4, "little"))
    return zlib.compress(body, ZLIB_LEVEL) + trailer


def decompress(data: bytes, platform: Platform = Platform.STEAM) -> bytes:
    d = zlib.decompressobj()
    try:
        body = d.decompress(data) + d.flush()
    except zlib.error as e:
        raise DecompressionFailure(f"Zlib decompression failed: {e}") from None
    if not d.eof:
        raise DecompressionFailure("Zlib stream is truncated")

    trailer = d.unused_data
    if len(trailer) == TRAILER_SIZE:
        chk = int.from_bytes(trailer[:4], platform.checksum_byteorder)
        ln = int.from_bytes(trailer[4:], "little")
        if len(body) != ln:
            raise DecompressionFailure(f"Length mismatch: got {len(body)}, expected {ln}")
        if _adler32(body) != chk:
            logger.warning("Adler32 mismatch in save trailer: got %08x, expected %08x", _adler32(body), chk)
    elif trailer:
        logger.warning("Ignoring %d unexpected bytes after the zlib stream", len(trailer))

    return body


# ── Pipelines ─────────────────────────────────────────────────────────────────

def decrypt(ciphertext: bytes, player_id, platform: Platform = Platform.STEAM) -> bytes:
    """File bytes -> plaintext body."""
    key = derive_key(player_id, platform)
    plain = pkcs7_unpad(aes_decrypt(ciphertext, key))
    body = decompress(plain, platform)
    logger.debug("Decrypted %d bytes into a %d byte body (%s)", len(ciphertext), len(body), platform.value)
    return body


def encrypt(body: bytes, player_id, platform: Platform = Platform.STEAM) -> bytes:
    """Plaintext body -> file bytes."""
    key = derive_key(player_id, platform)
    return aes_encrypt(pkcs7_pad(compress(body, platform)), key)


def decrypt_any(ciphertext: bytes, player_id) -> Tuple[bytes, Platform]:
    """
    Tries the Epic key first, then the Steam key.

    Returns ``(body, platform)``; raises the Steam attempt's error when both
    fail, or the Epic one when the id cannot be a Steam id.
    """
    try:
        return decrypt(ciphertext, player_id, Platform.EPIC), Platform.EPIC
    except EnvelopeError as e:
        logger.debug("Epic key failed: %s", e)
        epic_error = e

    try:
        return decrypt(ciphertext, player_id, Platform.STEAM), Platform.STEAM
    except EnvelopeError:
        raise
    except ValueError:
        raise epic_error from None
