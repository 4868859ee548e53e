# -*- coding: utf-8 -*-
"""
Fixed format constants for Borderlands 4 serials and save files.

Nothing here is tunable at runtime: the values are dictated by the game's
file formats and changing any of them produces files the game rejects.
"""

# ── Serial strings ────────────────────────────────────────────────────────────
SERIAL_PREFIX = "@U"
SERIAL_HEADER = "@Ug"

B85_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz!#$%&()*+-;<=>?@^_`{/}~"

SERIAL_MAGIC = 0b0010000
SERIAL_MAGIC_BITS = 7

# ── Save files ────────────────────────────────────────────────────────────────
BASE_KEY = bytes((0x35, 0xEC, 0x33, 0x77, 0xF3, 0x5D, 0xB0, 0xEA, 0xBE, 0x6B, 0x83, 0x11, 0x54, 0x03, 0xEB, 0xFB,
                  0x27, 0x25, 0x64, 0x2E, 0xD5, 0x49, 0x06, 0x29, 0x05, 0x78, 0xBD, 0x60, 0xBA, 0x4A, 0xA7, 0x87))

AES_BLOCK_SIZE = 16
ZLIB_LEVEL = 9

# zlib stream is followed by adler32(body) and len(body), 4 bytes each
TRAILER_SIZE = 8
