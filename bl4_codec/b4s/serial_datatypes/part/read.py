from bl4_codec.b4s.serial.token import Part, Single, ValueList, VarBit, VarInt
from bl4_codec.b4s.serial_datatypes.varbit.read import read_varbit
from bl4_codec.b4s.serial_datatypes.varint.read import read_varint
from bl4_codec.b4s.serial_tokenizer.tokenizer import Tokenizer, TokenKind
from bl4_codec.errors import MalformedPart

PART_SUBTYPE_NONE = 0b10
PART_SUBTYPE_LIST = 0b01


def read_part(t: Tokenizer) -> Part:
    br = t.bit_reader()
    start = br.get_pos()

    # First, read the index
    index = read_varint(br)

    # Next flag partially determines the type of part
    if br.read() == 1:
        value = read_varint(br)
        t.expect("part with a single value, expected 000 terminator", 0, 0, 0)
        return Part(index, Single(value))

    # If we are here, the rest of the decoding depends on the next two bits
    sub_type = br.read_bits(2)

    if sub_type == PART_SUBTYPE_NONE:
        return Part(index)

    if sub_type == PART_SUBTYPE_LIST:
        kind = t.next_kind()
        if kind != TokenKind.SOFT_SEPARATOR:
            raise MalformedPart(f"Part {index} value list must open with a soft separator, got {kind.name}",
                                br.get_pos())

        values = []
        while True:
            kind = t.next_kind()
            if kind == TokenKind.SEPARATOR:
                return Part(index, ValueList(values))
            elif kind == TokenKind.VARINT:
                values.append(VarInt(read_varint(br)))
            elif kind == TokenKind.VARBIT:
                values.append(VarBit(*read_varbit(br)))
            else:
                raise MalformedPart(f"Unexpected {kind.name} inside the value list of part {index}",
                                    br.get_pos())

    raise MalformedPart(f"Unknown subtype {sub_type:02b} for part {index}", start)
