import json

import pytest

from bl4_codec.b4s.serial.token import Part, Single, VarInt
from bl4_codec.lookup import PartLookup


def test_from_json(tmp_path):
    path = tmp_path / "parts.json"
    path.write_text(json.dumps({"parts": [
        {"name": "JAK_PS.part_barrel_01", "category": 3, "index": 8},
        {"name": "JAK_PS.part_body", "category": 3, "index": 14},
    ]}), encoding="utf-8")

    lookup = PartLookup.from_file(path)
    assert len(lookup) == 2
    assert (3, 8) in lookup
    assert lookup.name(3, 14) == "JAK_PS.part_body"
    assert lookup.name(4, 14) is None


def test_from_tsv_skips_bad_lines(tmp_path):
    path = tmp_path / "parts.tsv"
    path.write_text("category\tindex\tname\n3\t8\tbarrel\nbroken\n3\tx\tnope\n", encoding="utf-8")
    lookup = PartLookup.from_file(path)
    assert len(lookup) == 1
    assert lookup.name(3, 8) == "barrel"


def test_describe_parts():
    lookup = PartLookup({(3, 8): "barrel"})
    tokens = [VarInt(3), Part(8), Part(9, Single(1))]
    assert lookup.describe_parts(3, tokens) == [(Part(8), "barrel"), (Part(9, Single(1)), None)]


def test_from_weapon_part_sheet(tmp_path):
    path = tmp_path / "all_weapon_part.csv"
    path.write_text(
        "Manufacturer & Weapon Type ID,Part ID,Stat,Description\n"
        "3,8,Barrel 01,\n"
        "3,252,Legendary,Big gun\n",
        encoding="utf-8",
    )
    lookup = PartLookup.from_file(path)
    assert lookup.name(3, 252) == "Legendary"
    assert len(lookup) == 2


def test_missing_columns(tmp_path):
    path = tmp_path / "parts.csv"
    path.write_text("a,b\n1,2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        PartLookup.from_file(path)
