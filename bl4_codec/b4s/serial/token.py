"""
Decoded units of a serial bitstream.

The grammar is closed: a serial is a flat sequence of the six token types
below and nothing else. ``Token`` is the union of them; code that walks a
sequence should handle every member explicitly.
"""
from dataclasses import dataclass
from typing import Optional, Tuple, Union

VARINT_MAX = 0xFFFF
VARBIT_MAX_LENGTH = 31


@dataclass(frozen=True)
class Separator:
    pass


@dataclass(frozen=True)
class SoftSeparator:
    pass


@dataclass(frozen=True)
class VarInt:
    value: int

    def __post_init__(self):
        if not 0 <= self.value <= VARINT_MAX:
            raise ValueError(f"VarInt value {self.value} outside 0..{VARINT_MAX}")


@dataclass(frozen=True)
class VarBit:
    value: int
    bit_length: Optional[int] = None

    def __post_init__(self):
        if self.value < 0:
            raise ValueError(f"VarBit value {self.value} is negative")
        if self.bit_length is None:
            object.__setattr__(self, "bit_length", self.value.bit_length())
        if not 0 <= self.bit_length <= VARBIT_MAX_LENGTH:
            raise ValueError(f"VarBit length {self.bit_length} outside 0..{VARBIT_MAX_LENGTH}")
        if self.value >> self.bit_length:
            raise ValueError(f"VarBit value {self.value} does not fit in {self.bit_length} bits")


@dataclass(frozen=True)
class Single:
    value: int

    def __post_init__(self):
        if not 0 <= self.value <= VARINT_MAX:
            raise ValueError(f"Part value {self.value} outside 0..{VARINT_MAX}")


ListItem = Union[VarInt, VarBit]


def _list_item(v) -> ListItem:
    if isinstance(v, (VarInt, VarBit)):
        return v
    if v > VARINT_MAX:
        return VarBit(v)
    return VarInt(v)


@dataclass(frozen=True)
class ValueList:
    """
    Values of a list part. Each item keeps the token it was stored as; plain
    ints become a VarInt, or a VarBit above ``VARINT_MAX``.
    """
    items: Tuple[ListItem, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(_list_item(v) for v in self.items))

    @property
    def values(self) -> Tuple[int, ...]:
        return tuple(item.value for item in self.items)


# A part with no value is represented by ``None``
PartValue = Union[None, Single, ValueList]


@dataclass(frozen=True)
class Part:
    index: int
    value: PartValue = None

    def __post_init__(self):
        if not 0 <= self.index <= VARINT_MAX:
            raise ValueError(f"Part index {self.index} outside 0..{VARINT_MAX}")


@dataclass(frozen=True)
class String:
    data: bytes

    def __post_init__(self):
        object.__setattr__(self, "data", bytes(self.data))
        bad = [b for b in self.data if b > 0x7F]
        if bad:
            raise ValueError(f"String byte {bad[0]:#x} is not 7-bit ASCII")

    @property
    def text(self) -> str:
        return self.data.decode("ascii")


Token = Union[Separator, SoftSeparator, VarInt, VarBit, Part, String]

SEPARATOR = Separator()
SOFT_SEPARATOR = SoftSeparator()
