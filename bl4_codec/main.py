import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from bl4_codec.decoder_logic import decode_serial, encode_string_to_serial, roundtrip_problems
from bl4_codec.errors import CodecError
from bl4_codec.save import envelope
from bl4_codec.save.envelope import Platform


def _cmd_decode(args) -> int:
    item = decode_serial(args.serial)
    print(f"Type: {item.type_char}")
    print(f"Formatted: {item.to_text(exact=args.exact)}")
    if not item.padding_clean:
        print("Warning: non-zero padding after the terminator", file=sys.stderr)
    elif not item.canonical:
        print("Warning: non-canonical encoding, the reconstructed serial will differ", file=sys.stderr)
    print(f"Reconstructed: {item.encode()}")
    return 0


def _cmd_encode(args) -> int:
    serial, err = encode_string_to_serial(args.text)
    if err:
        print(err, file=sys.stderr)
        return 1
    print(f"Encoded: {serial}")
    return 0


def _cmd_check(args) -> int:
    lines = [line.strip() for line in Path(args.file).read_text(encoding="utf-8").splitlines()]
    problems = roundtrip_problems(line for line in lines if line)
    for serial, detail in problems:
        print(f"{serial}\t{detail}")
    return 1 if problems else 0


def _platform(args) -> Optional[Platform]:
    return Platform(args.platform) if args.platform else None


def _cmd_decrypt(args) -> int:
    data = Path(args.save).read_bytes()
    platform = _platform(args)
    if platform is None:
        body, platform = envelope.decrypt_any(data, args.player_id)
    else:
        body = envelope.decrypt(data, args.player_id, platform)
    out = Path(args.output) if args.output else Path(args.save).with_suffix(".yaml")
    out.write_bytes(body)
    print(f"Decrypted ({platform.value}) -> {out}")
    return 0


def _cmd_encrypt(args) -> int:
    body = Path(args.document).read_bytes()
    data = envelope.encrypt(body, args.player_id, _platform(args) or Platform.STEAM)
    out = Path(args.output) if args.output else Path(args.document).with_suffix(".sav")
    out.write_bytes(data)
    print(f"Encrypted -> {out}")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bl4-codec", description="Borderlands 4 item serial and save codec")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("decode", help="decode an @U... item serial")
    p.add_argument("serial")
    p.add_argument("--exact", action="store_true", help="keep VarBit lengths in the text form")
    p.set_defaults(func=_cmd_decode)

    p = sub.add_parser("encode", help="encode the text form back into a serial")
    p.add_argument("text")
    p.set_defaults(func=_cmd_encode)

    p = sub.add_parser("check", help="report serials in a file that do not re-encode to themselves")
    p.add_argument("file")
    p.set_defaults(func=_cmd_check)

    for name, target, helptext in (("decrypt", "save", "decrypt a .sav into its YAML body"),
                                   ("encrypt", "document", "encrypt a YAML body into a .sav")):
        p = sub.add_parser(name, help=helptext)
        p.add_argument(target)
        p.add_argument("player_id")
        p.add_argument("-o", "--output")
        p.add_argument("--platform", choices=[pl.value for pl in Platform])
        p.set_defaults(func=_cmd_decrypt if name == "decrypt" else _cmd_encrypt)

    return parser


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = _build_parser().parse_args(None if argv is None else list(argv))
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args)
    except (CodecError, ValueError, OSError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
