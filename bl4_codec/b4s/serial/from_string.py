import re
from typing import List

from bl4_codec.b4s.serial.token import (
    SEPARATOR, SOFT_SEPARATOR, VARINT_MAX, Part, Single, String, Token, ValueList, VarBit, VarInt,
)

_NUMBER = re.compile(r"(\d+)(?:b(\d+))?")
_PART_SIMPLE = re.compile(r"\{\s*(\d+)\s*\}")
_PART_INT = re.compile(r"\{\s*(\d+)\s*:\s*(\d+)\s*\}")
_PART_LIST = re.compile(r"\{\s*(\d+)\s*:\s*\[([^\]]*)\]\s*\}")


def number_token(value: int) -> Token:
    """Plain numbers become a VarInt when they fit, a VarBit otherwise."""
    if value <= VARINT_MAX:
        return VarInt(value)
    return VarBit(value)


def _number(m: re.Match) -> Token:
    # "123b9" keeps an explicit VarBit length
    value = int(m.group(1))
    if m.group(2) is not None:
        return VarBit(value, int(m.group(2)))
    return number_token(value)


def parse_part(part_str: str) -> Part:
    m = _PART_LIST.fullmatch(part_str)
    if m:
        values = []
        for num_str in re.split(r'[\s,]+', m.group(2).strip()):
            if not num_str:
                continue
            num = _NUMBER.fullmatch(num_str)
            if not num:
                raise ValueError(f"Invalid value {num_str!r} in part list '{part_str}'")
            values.append(_number(num))
        return Part(int(m.group(1)), ValueList(values))

    m = _PART_INT.fullmatch(part_str)
    if m:
        return Part(int(m.group(1)), Single(int(m.group(2))))

    m = _PART_SIMPLE.fullmatch(part_str)
    if m:
        return Part(int(m.group(1)))

    raise ValueError(f"Invalid part format: '{part_str}'")


def parse_tokens(s: str) -> List[Token]:
    """
    Parses the text produced by ``format_tokens`` back into tokens.

    ``|`` separator, ``,`` soft separator, ``123`` number, ``123b9`` VarBit
    with an explicit length, ``{i}`` / ``{i:v}`` / ``{i:[a b c]}`` parts and
    ``"..."`` strings with backslash escapes.
    """
    tokens = []
    i = 0
    while i < len(s):
        char = s[i]

        if char.isspace():
            i += 1
            continue

        if char == '|':
            tokens.append(SEPARATOR)
            i += 1
            continue

        if char == ',':
            tokens.append(SOFT_SEPARATOR)
            i += 1
            continue

        if char.isdigit():
            m = _NUMBER.match(s, i)
            i = m.end()
            tokens.append(_number(m))
            continue

        if char == '{':
            end = s.find('}', i)
            if end == -1:
                raise ValueError(f"Unmatched '{{' at position {i}")
            tokens.append(parse_part(s[i:end + 1]))
            i = end + 1
            continue

        if char == '"':
            end = i + 1
            chars = []
            while end < len(s) and s[end] != '"':
                if s[end] == '\\' and end + 1 < len(s):
                    end += 1
                chars.append(s[end])
                end += 1

            if end >= len(s):
                raise ValueError(f"Unmatched '\"' at position {i}")

            tokens.append(String("".join(chars).encode("ascii")))
            i = end + 1
            continue

        raise ValueError(f"Invalid character: '{char}' at position {i}")

    return tokens
