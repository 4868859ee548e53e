from bl4_codec.b4s.serial.token import Part, Single, ValueList, VarBit
from bl4_codec.b4s.serial_datatypes.part.read import PART_SUBTYPE_LIST, PART_SUBTYPE_NONE
from bl4_codec.b4s.serial_datatypes.varbit.write import write_varbit
from bl4_codec.b4s.serial_datatypes.varint.write import write_varint
from bl4_codec.b4s.serial_tokenizer.tokenizer import TokenKind
from bl4_codec.lib.bit.writer import BitWriter


def write_part(bw: BitWriter, p: Part):
    write_varint(bw, p.index)

    if p.value is None:
        bw.write_bit(0)
        bw.write_bits(2, PART_SUBTYPE_NONE)
    elif isinstance(p.value, Single):
        bw.write_bit(1)
        write_varint(bw, p.value.value)
        bw.write_bits(3, 0b000)
    elif isinstance(p.value, ValueList):
        bw.write_bit(0)
        bw.write_bits(2, PART_SUBTYPE_LIST)
        TokenKind.SOFT_SEPARATOR.write_prefix(bw)

        for item in p.value.items:
            if isinstance(item, VarBit):
                TokenKind.VARBIT.write_prefix(bw)
                write_varbit(bw, item.value, item.bit_length)
            else:
                TokenKind.VARINT.write_prefix(bw)
                write_varint(bw, item.value)

        TokenKind.SEPARATOR.write_prefix(bw)
    else:
        raise TypeError(f"Unsupported part value {p.value!r}")
