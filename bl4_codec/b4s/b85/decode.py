from bl4_codec.config import B85_CHARSET
from bl4_codec.errors import GroupOverflow, InvalidSymbol

B85_PADDING_CHAR = '~'
B85_PADDING_VALUE = 84  # Value of '~' in the charset, used to complete partial groups

REVERSE_LOOKUP = {char: i for i, char in enumerate(B85_CHARSET)}

_GROUP_CHARS = 5
_GROUP_BYTES = 4


def decode(text: str) -> bytes:
    """
    Decodes Base85 text into bytes, 5 symbols to 4 big-endian bytes.

    A trailing group of k < 5 symbols is completed with '~' and yields
    k - 1 bytes. Every symbol is validated before any group is built; a
    group worth more than 32 bits raises ``GroupOverflow``.
    """
    values = []
    for offset, char in enumerate(text):
        value = REVERSE_LOOKUP.get(char)
        if value is None:
            raise InvalidSymbol(char, offset)
        values.append(value)

    result = bytearray()
    for start in range(0, len(values), _GROUP_CHARS):
        group = values[start:start + _GROUP_CHARS]
        char_count = len(group)

        # Handle padding for incomplete groups
        group = group + [B85_PADDING_VALUE] * (_GROUP_CHARS - char_count)

        v = 0
        for value in group:
            v = v * 85 + value

        byte_count = _GROUP_BYTES if char_count == _GROUP_CHARS else char_count - 1
        if byte_count == 0:
            break
        if v > 0xFFFFFFFF:
            raise GroupOverflow(text[start:start + _GROUP_CHARS], start)
        result.extend(v.to_bytes(_GROUP_BYTES, "big")[:byte_count])

    return bytes(result)
