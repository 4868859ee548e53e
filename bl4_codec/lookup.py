# -*- coding: utf-8 -*-
"""
Read-only part name table, keyed by ``(category_id, part_index)``.

The table is produced by external extraction tools and only ever used to
label decoded parts; decoding and encoding never consult it.
"""
import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple, Union

import pandas as pd

from bl4_codec.b4s.serial.token import Part, Token

logger = logging.getLogger(__name__)

PartKey = Tuple[int, int]

_COLUMN_ALIASES = {
    "Manufacturer & Weapon Type ID": "category",
    "Part ID": "index",
    "Part_ID": "index",
    "Stat": "name",
}


class PartLookup:
    def __init__(self, names: Optional[Mapping[PartKey, str]] = None):
        self._names = MappingProxyType(dict(names or {}))

    def __len__(self):
        return len(self._names)

    def __contains__(self, key):
        return key in self._names

    def name(self, category_id: int, part_index: int) -> Optional[str]:
        return self._names.get((category_id, part_index))

    def describe_parts(self, category_id: int, tokens: Iterable[Token]) -> List[Tuple[Part, Optional[str]]]:
        return [(t, self.name(category_id, t.index)) for t in tokens if isinstance(t, Part)]

    @classmethod
    def from_entries(cls, entries: Iterable[dict]) -> "PartLookup":
        return cls({(int(e["category"]), int(e["index"])): str(e["name"]) for e in entries})

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "PartLookup":
        """
        Loads a parts database: either JSON ``{"parts": [{"name", "category",
        "index"}, ...]}`` or a CSV/TSV table with ``category``, ``index`` and
        ``name`` columns. Weapon part sheets headed ``Manufacturer & Weapon
        Type ID``, ``Part ID``, ``Stat`` are accepted too.
        """
        path = Path(path)
        if path.suffix == ".json":
            return cls.from_entries(json.loads(path.read_text(encoding="utf-8")).get("parts", []))

        df = pd.read_csv(path, sep="\t" if path.suffix == ".tsv" else ",", dtype=str)
        df = df.rename(columns=_COLUMN_ALIASES)
        missing = {"category", "index", "name"} - set(df.columns)
        if missing:
            raise ValueError(f"{path} is missing columns: {', '.join(sorted(missing))}")

        df["category"] = pd.to_numeric(df["category"], errors="coerce")
        df["index"] = pd.to_numeric(df["index"], errors="coerce")
        valid = df.dropna(subset=["category", "index", "name"])
        if len(valid) != len(df):
            logger.debug("Skipped %d malformed rows in %s", len(df) - len(valid), path)

        return cls({(int(row["category"]), int(row["index"])): row["name"] for _, row in valid.iterrows()})
