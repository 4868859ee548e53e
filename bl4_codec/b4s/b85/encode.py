from bl4_codec.config import B85_CHARSET

_85_1 = 85
_85_2 = 85 * 85
_85_3 = 85 * 85 * 85
_85_4 = 85 * 85 * 85 * 85


def _encode_group(v: int) -> str:
    return (B85_CHARSET[v // _85_4]
            + B85_CHARSET[v // _85_3 % 85]
            + B85_CHARSET[v // _85_2 % 85]
            + B85_CHARSET[v // _85_1 % 85]
            + B85_CHARSET[v % 85])


def encode(data: bytes) -> str:
    result = []
    length = len(data)
    extra_bytes = length % 4
    full_length = length - extra_bytes

    for idx in range(0, full_length, 4):
        result.append(_encode_group(int.from_bytes(data[idx:idx + 4], "big")))

    if extra_bytes != 0:
        # Partial group: zero-filled, then cut to one symbol more than its bytes
        tail = bytes(data[full_length:]).ljust(4, b"\x00")
        result.append(_encode_group(int.from_bytes(tail, "big"))[:extra_bytes + 1])

    return "".join(result)
