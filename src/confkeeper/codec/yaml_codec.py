#!/usr/bin/env python3
"""
CONFKEEPER YAML CODEC - High-Fidelity Round-Trip
------------------------------------------------
Thin wrapper over ruamel.yaml in round-trip mode. Holds the value tree as
an ordered CommentedMap and exposes it by dotted path.

The codec knows nothing about headers: comment handling happens in the
streaming layer, which feeds this codec header-free text.

Author: ConfKeeper Team
Date: 2026-10-19
"""

import io
from typing import Any, Iterator, List, Optional, Tuple

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq

from confkeeper.streaming.escapes import join_path, split_path

_MISSING = object()


class ConfigFormatError(ValueError):
    """Raised when a document does not hold a mapping at its root."""


class YamlCodec:
    """
    The value tree plus the ruamel.yaml instance that reads and writes it.
    """

    def __init__(self, indent: int = 2):
        self.yaml = YAML(typ='rt')
        self.yaml.preserve_quotes = True
        self.yaml.allow_unicode = True
        self.yaml.width = 4096
        self._indent = 2
        self.indent = indent
        self.root = CommentedMap()

    @property
    def indent(self) -> int:
        return self._indent

    @indent.setter
    def indent(self, value: int):
        value = int(value)
        if value < 1:
            raise ValueError(f"Indent must be at least 1, got {value}")
        self._indent = value
        # Sequences sit one level in, dash offset by the same indent
        self.yaml.indent(mapping=value, sequence=value + 2, offset=value)

    # --- Text I/O ---

    def load_from_string(self, text: str):
        data = self.yaml.load(text) if text.strip() else None
        if data is None:
            data = CommentedMap()
        if not isinstance(data, CommentedMap):
            raise ConfigFormatError(
                f"Configuration root must be a mapping, got {type(data).__name__}"
            )
        self.root = canonical(data)

    def save_to_string(self) -> str:
        if not self.root:
            return ""
        stream = io.StringIO()
        self.yaml.dump(self.root, stream)
        return stream.getvalue()

    # --- Path Access ---

    def _parent_of(self, segments: List[str], create: bool) -> Optional[CommentedMap]:
        node = self.root
        for segment in segments[:-1]:
            child = node.get(segment)
            if not isinstance(child, dict):
                if not create:
                    return None
                child = CommentedMap()
                node[segment] = child
            node = child
        return node

    def get(self, path: str, default: Any = None) -> Any:
        segments = split_path(path)
        if not segments:
            return self.root
        parent = self._parent_of(segments, create=False)
        if parent is None:
            return default
        return parent.get(segments[-1], default)

    def contains(self, path: str) -> bool:
        return self.get(path, _MISSING) is not _MISSING

    def set(self, path: str, value: Any):
        """Sets a value, creating intermediate maps. None removes the key."""
        if value is None:
            self.remove(path)
            return
        segments = split_path(path)
        if not segments:
            raise KeyError("Cannot replace the root node")
        parent = self._parent_of(segments, create=True)
        parent[segments[-1]] = to_tree(value)

    def remove(self, path: str) -> bool:
        """
        Removes a key and prunes maps left empty by the removal.
        Returns True if something was removed.
        """
        segments = split_path(path)
        if not segments:
            self.root.clear()
            return True
        chain = [self.root]
        for segment in segments[:-1]:
            child = chain[-1].get(segment)
            if not isinstance(child, dict):
                return False
            chain.append(child)
        if segments[-1] not in chain[-1]:
            return False
        del chain[-1][segments[-1]]

        # Prune empty parents, innermost first
        for depth in range(len(chain) - 1, 0, -1):
            if chain[depth]:
                break
            del chain[depth - 1][segments[depth - 1]]
        return True

    def get_keys(self, deep: bool = False, path: str = "") -> List[str]:
        """Keys below `path`, relative to it. Deep listings include nested maps and their children."""
        node = self.get(path)
        if not isinstance(node, dict):
            return []
        return [key for key, _ in walk(node, deep)]


def walk(node: dict, deep: bool, prefix: Tuple[str, ...] = ()) -> Iterator[Tuple[str, Any]]:
    """Yields (relative dotted path, value) pairs in document order."""
    for key, value in node.items():
        segments = prefix + (key_text(key),)
        yield join_path(segments), value
        if deep and isinstance(value, dict):
            yield from walk(value, deep, segments)


def to_tree(value: Any) -> Any:
    """Converts plain dicts/lists into their ordered ruamel counterparts."""
    if isinstance(value, dict) and not isinstance(value, CommentedMap):
        tree = CommentedMap()
        for key, item in value.items():
            tree[key_text(key)] = to_tree(item)
        return tree
    if isinstance(value, (list, tuple)) and not isinstance(value, CommentedSeq):
        return CommentedSeq(to_tree(item) for item in value)
    return value


def key_text(key: Any) -> str:
    """The string form a key is stored and addressed under."""
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    return str(key)


def canonical(value: Any) -> Any:
    """
    Brings a freshly loaded tree into the shape the saver relies on:
    every key a string and every collection in block style, so each
    key is emitted on its own line.
    """
    if isinstance(value, CommentedMap):
        value.fa.set_block_style()
        items = list(value.items())
        if any(not isinstance(key, str) for key, _ in items):
            comments = {key: value.ca.items.get(key) for key, _ in items}
            for key, _ in items:
                del value[key]
            for key, item in items:
                value[key_text(key)] = item
                if comments[key] is not None:
                    value.ca.items[key_text(key)] = comments[key]
        for _, item in items:
            canonical(item)
    elif isinstance(value, CommentedSeq):
        value.fa.set_block_style()
        for item in value:
            canonical(item)
    return value
