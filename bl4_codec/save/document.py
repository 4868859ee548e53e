# -*- coding: utf-8 -*-
"""
The YAML document inside a decrypted save, and the serials it carries.

This layer sits on top of the envelope: the envelope hands over bytes, this
module turns them into Python objects and finds item serials in them.
"""
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

import yaml

from bl4_codec.config import SERIAL_PREFIX
from bl4_codec.decoder_logic import ItemSerial, decode_serial
from bl4_codec.errors import SerialError
from bl4_codec.save import envelope
from bl4_codec.save.envelope import Platform
from bl4_codec.save.state_flags import StateFlags

logger = logging.getLogger(__name__)

PathKey = Union[str, int]

_SLOT_PATTERN = re.compile(r"slot_(\d+)")


def get_yaml_loader():
    """A PyYAML SafeLoader that ignores the game's custom tags."""

    class AnyTagLoader(yaml.SafeLoader):
        pass

    def _ignore_any(loader: AnyTagLoader, tag_suffix: str, node: yaml.Node):
        if isinstance(node, yaml.ScalarNode): return loader.construct_scalar(node)
        if isinstance(node, yaml.SequenceNode): return loader.construct_sequence(node)
        if isinstance(node, yaml.MappingNode): return loader.construct_mapping(node)
        return None

    AnyTagLoader.add_multi_constructor("", _ignore_any)
    return AnyTagLoader


def load_document(body: bytes) -> Any:
    return yaml.load(body, Loader=get_yaml_loader())


def dump_document(doc: Any) -> bytes:
    return yaml.safe_dump(doc, sort_keys=False, allow_unicode=True, indent=2).encode("utf-8")


def find_node_by_path(doc: Any, path: List[PathKey]) -> Optional[Any]:
    node = doc
    try:
        for key in path:
            node = node[key]
    except (KeyError, IndexError, TypeError):
        return None
    return node


def set_by_path(root: Any, path: List[PathKey], val: Any):
    cur = root
    for key in path[:-1]:
        cur = cur[key]
    cur[path[-1]] = val


def _walk_find(node: Any, target: str, path: List[PathKey]) -> Optional[List[PathKey]]:
    if isinstance(node, dict):
        for k, v in node.items():
            if k == target:
                return path + [k]
            found = _walk_find(v, target, path + [k])
            if found:
                return found
    elif isinstance(node, list):
        for i, v in enumerate(node):
            found = _walk_find(v, target, path + [i])
            if found:
                return found
    return None


def find_serials(node: Any, path: Optional[List[PathKey]] = None) -> List[Tuple[List[PathKey], dict]]:
    """
    Recursively walks the document to find every mapping with a
    ``serial: "@U..."`` entry. Returns ``(path_to_item, item_mapping)`` pairs.
    """
    if path is None:
        path = []
    found_items = []
    if isinstance(node, dict):
        serial = node.get("serial")
        if isinstance(serial, str) and serial.startswith(SERIAL_PREFIX):
            found_items.append((path, node))
        else:
            for k, v in node.items():
                found_items.extend(find_serials(v, path + [k]))
    elif isinstance(node, list):
        for i, v in enumerate(node):
            found_items.extend(find_serials(v, path + [i]))
    return found_items


@dataclass
class DocumentItem:
    path: List[PathKey]
    serial: str
    item: Optional[ItemSerial]
    error: Optional[SerialError]
    state_flags: Optional[StateFlags]

    @property
    def ok(self) -> bool:
        return self.error is None


def decode_document_serials(doc: Any) -> List[DocumentItem]:
    """Decodes every serial in the document. Failures are collected, not raised."""
    items = []
    for path, node in find_serials(doc):
        serial = node["serial"]
        flags = node.get("state_flags")
        flags = StateFlags(int(flags)) if isinstance(flags, int) else None
        try:
            items.append(DocumentItem(path, serial, decode_serial(serial), None, flags))
        except SerialError as e:
            logger.warning("Undecodable serial at %s: %s", "/".join(map(str, path)), e)
            items.append(DocumentItem(path, serial, None, e, flags))
    return items


def add_backpack_item(doc: Any, serial: str, flags: StateFlags = StateFlags.backpack()) -> List[PathKey]:
    """
    Adds an item after the highest existing ``slot_N`` of the backpack.
    Returns the path of the new item.
    """
    backpack_path = _walk_find(doc, "backpack", [])
    if not backpack_path:
        raise ValueError("No backpack found in the save document")

    backpack_node = find_node_by_path(doc, backpack_path)
    if backpack_node is None:
        backpack_node = {}
        set_by_path(doc, backpack_path, backpack_node)
    if not isinstance(backpack_node, dict):
        raise ValueError(f"Backpack at {backpack_path} is not a mapping")

    max_slot = -1
    for key in backpack_node:
        match = _SLOT_PATTERN.fullmatch(str(key))
        if match:
            max_slot = max(max_slot, int(match.group(1)))

    new_slot_key = f"slot_{max_slot + 1}"
    backpack_node[new_slot_key] = {"serial": serial, "state_flags": int(flags)}
    return backpack_path + [new_slot_key]


class SaveFile:
    """A decrypted save: the document plus what is needed to write it back."""

    def __init__(self, document: Any, player_id: str, platform: Platform = Platform.STEAM,
                 path: Optional[Path] = None):
        self.document = document
        self.player_id = player_id
        self.platform = platform
        self.path = path

    @classmethod
    def from_bytes(cls, ciphertext: bytes, player_id: str, platform: Optional[Platform] = None) -> "SaveFile":
        if platform is None:
            body, platform = envelope.decrypt_any(ciphertext, player_id)
        else:
            body = envelope.decrypt(ciphertext, player_id, platform)
        return cls(load_document(body), player_id, platform)

    @classmethod
    def open(cls, path: Union[str, Path], player_id: str, platform: Optional[Platform] = None) -> "SaveFile":
        path = Path(path)
        save = cls.from_bytes(path.read_bytes(), player_id, platform)
        save.path = path
        logger.info("Opened %s (%s)", path, save.platform.value)
        return save

    def to_bytes(self) -> bytes:
        return envelope.encrypt(dump_document(self.document), self.player_id, self.platform)

    def save(self, path: Union[str, Path, None] = None, backup: bool = True) -> Optional[Path]:
        """
        Encrypts and writes the save. An existing file is first copied to a
        timestamped ``.bak`` next to it; returns that backup path.
        """
        path = Path(path) if path is not None else self.path
        if path is None:
            raise ValueError("No path to save to")

        data = self.to_bytes()
        backup_path = None
        if backup and path.exists():
            ts = datetime.now().strftime("%Y-%m-%d-%H%M%S")
            backup_path = path.with_suffix(f".{ts}.bak")
            backup_path.write_bytes(path.read_bytes())

        path.write_bytes(data)
        logger.info("Wrote %s (%d bytes)", path, len(data))
        return backup_path

    def items(self) -> List[DocumentItem]:
        return decode_document_serials(self.document)

    def add_backpack_item(self, serial: str, flags: StateFlags = StateFlags.backpack()) -> List[PathKey]:
        return add_backpack_item(self.document, serial, flags)
