from bl4_codec.main import main
from bl4_codec.save import envelope

from serial_fixtures import GOLDEN_SERIAL, GOLDEN_TEXT

STEAM_ID = "76561198012345678"


def test_decode(capsys):
    assert main(["decode", GOLDEN_SERIAL]) == 0
    out = capsys.readouterr().out
    assert "Type: r" in out
    assert f"Formatted: {GOLDEN_TEXT}" in out
    assert f"Reconstructed: {GOLDEN_SERIAL}" in out


def test_decode_error(capsys):
    assert main(["decode", "@U00000"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_encode(capsys):
    assert main(["encode", "180928b18| 50b8| {0:1} 1660b11|| {8} {14} {252:97}|"]) == 0
    assert capsys.readouterr().out.strip() == f"Encoded: {GOLDEN_SERIAL}"


def test_check(tmp_path, capsys):
    path = tmp_path / "serials.txt"
    path.write_text(f"{GOLDEN_SERIAL}\n\n", encoding="utf-8")
    assert main(["check", str(path)]) == 0

    path.write_text(f"{GOLDEN_SERIAL}\n@U00000\n", encoding="utf-8")
    assert main(["check", str(path)]) == 1
    assert "@U00000" in capsys.readouterr().out


def test_encrypt_decrypt(tmp_path):
    body = tmp_path / "1.yaml"
    body.write_bytes(b"state:\n  cash: 1\n")
    assert main(["encrypt", str(body), STEAM_ID]) == 0
    sav = tmp_path / "1.sav"
    assert envelope.decrypt(sav.read_bytes(), STEAM_ID) == body.read_bytes()

    out = tmp_path / "out.yaml"
    assert main(["decrypt", str(sav), STEAM_ID, "-o", str(out)]) == 0
    assert out.read_bytes() == body.read_bytes()


def test_decrypt_wrong_id(tmp_path):
    sav = tmp_path / "1.sav"
    sav.write_bytes(envelope.encrypt(b"x: 1\n", STEAM_ID))
    assert main(["decrypt", str(sav), "1", "--platform", "steam"]) == 1
