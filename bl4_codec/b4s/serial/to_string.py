from typing import Sequence

from bl4_codec.b4s.serial.token import Part, Separator, Single, SoftSeparator, String, Token, VarBit, VarInt


def format_part(part: Part, exact: bool = False) -> str:
    if part.value is None:
        return f"{{{part.index}}}"
    if isinstance(part.value, Single):
        return f"{{{part.index}:{part.value.value}}}"
    values_str = ' '.join(format_token(item, exact) for item in part.value.items)
    return "{" + f"{part.index}:[{values_str}]" + "}"


def format_token(token: Token, exact: bool = False) -> str:
    if isinstance(token, VarInt):
        return str(token.value)
    if isinstance(token, VarBit):
        if exact:
            return f"{token.value}b{token.bit_length}"
        return str(token.value)
    if isinstance(token, Part):
        return format_part(token, exact)
    if isinstance(token, String):
        escaped_str = token.text.replace('\\', '\\\\').replace('"', '\\"')
        return f'"{escaped_str}"'
    if isinstance(token, Separator):
        return "|"
    if isinstance(token, SoftSeparator):
        return ","
    raise TypeError(f"Not a serial token: {token!r}")


def format_tokens(tokens: Sequence[Token], exact: bool = False) -> str:
    """
    Formats tokens into the human-readable form, e.g.
    '180928| 50| {0:1} 1660|| {8} {14} {252:97}|'.

    With ``exact`` every VarBit carries its bit length ('50b8') so that
    ``parse_tokens`` rebuilds the identical bitstream.
    """
    output_parts = []
    for i, token in enumerate(tokens):
        is_separator = isinstance(token, (Separator, SoftSeparator))
        output_parts.append(format_token(token, exact))

        # Add space logic
        if i + 1 < len(tokens):
            next_token = tokens[i + 1]
            next_is_separator = isinstance(next_token, (Separator, SoftSeparator))
            # Add a space if current token is data and next token is also data
            if not is_separator and not next_is_separator:
                output_parts.append(" ")
            # Add a space after a comma separator
            elif isinstance(token, SoftSeparator):
                output_parts.append(" ")
            # Add a space after a pipe unless it's followed by another pipe
            elif isinstance(token, Separator) and not isinstance(next_token, Separator):
                output_parts.append(" ")

    return "".join(output_parts)
