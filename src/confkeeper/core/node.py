#!/usr/bin/env python3
"""
CONFKEEPER CONFIGURATION NODE
-----------------------------
The in-memory hierarchical value store. A ConfigurationNode is a view onto
the root document at a dotted path; every node of one document shares the
root's YamlCodec (values) and PathHeaderStore (headers).

Paths passed to node methods are relative to the node itself.

Author: ConfKeeper Team
Date: 2026-10-19
"""

from typing import Any, Dict, List, Optional

from ruamel.yaml.comments import CommentedMap

from confkeeper.codec.yaml_codec import YamlCodec
from confkeeper.core.headers import PathHeaderStore
from confkeeper.streaming.escapes import PATH_SEPARATOR, join_path, split_path


class ConfigurationNode:
    """
    A map-like node of the configuration tree.

    Created without arguments it is a standalone root document; child
    views are obtained through get_node().
    """

    def __init__(self, root: Optional["ConfigurationNode"] = None, path: str = "", indent: int = 2):
        if root is None:
            self._codec = YamlCodec(indent=indent)
            self._headers = PathHeaderStore()
            root = self
        self._root = root
        self._path = path

    # --- Shared State ---

    @property
    def codec(self) -> YamlCodec:
        return self._root._codec

    @property
    def headers(self) -> PathHeaderStore:
        return self._root._headers

    # --- Identity ---

    def get_path(self, append: Optional[str] = None) -> str:
        """The absolute dotted path of this node, optionally extended by `append`."""
        if not append:
            return self._path
        if not self._path:
            return append
        return self._path + PATH_SEPARATOR + append

    def get_name(self) -> str:
        segments = split_path(self._path)
        return segments[-1] if segments else ""

    def get_parent(self) -> Optional["ConfigurationNode"]:
        segments = split_path(self._path)
        if not segments:
            return None
        return ConfigurationNode(self._root, join_path(segments[:-1]))

    def is_root(self) -> bool:
        return self._root is self

    # --- Values ---

    def get(self, path: str, default: Any = None) -> Any:
        return self.codec.get(self.get_path(path), default)

    def set(self, path: str, value: Any):
        """Stores a value, creating parent nodes on the way. None removes."""
        if isinstance(value, ConfigurationNode):
            value = value.get_values(deep=True)
        self.codec.set(self.get_path(path), value)

    def remove(self, path: str) -> bool:
        """Removes a key; headers of the removed path are kept as orphans."""
        return self.codec.remove(self.get_path(path))

    def contains(self, path: str) -> bool:
        return self.codec.contains(self.get_path(path))

    def __contains__(self, path: str) -> bool:
        return self.contains(path)

    def is_node(self, path: str) -> bool:
        return isinstance(self.get(path), dict)

    def get_node(self, path: str) -> "ConfigurationNode":
        """Returns the child node at `path`, creating an empty one if needed."""
        if not self.is_node(path):
            self.set(path, CommentedMap())
        return ConfigurationNode(self._root, self.get_path(path))

    def get_nodes(self) -> List["ConfigurationNode"]:
        return [self.get_node(key) for key in self.get_keys() if self.is_node(key)]

    def get_keys(self, deep: bool = False) -> List[str]:
        return self.codec.get_keys(deep=deep, path=self._path)

    def get_values(self, deep: bool = False) -> Dict[str, Any]:
        """
        Direct children as a plain dict in document order.
        With deep=True nested nodes are converted to plain dicts as well.
        """
        node = self.codec.get(self._path)
        if not isinstance(node, dict):
            return {}
        return {str(k): _plain(v) if deep else v for k, v in node.items()}

    def is_empty(self) -> bool:
        return not self.get_keys()

    def clear(self):
        node = self.codec.get(self._path)
        if isinstance(node, dict):
            node.clear()

    # --- Headers ---

    def set_header(self, *args: Optional[str]):
        """
        set_header(text) sets the header of this node;
        set_header(path, text) sets the header of a child path.
        """
        if len(args) == 1:
            self.headers.set_header(self._path, args[0])
        elif len(args) == 2:
            self.headers.set_header(self.get_path(args[0]), args[1])
        else:
            raise TypeError(f"set_header() takes 1 or 2 arguments ({len(args)} given)")

    def get_header(self, path: Optional[str] = None) -> Optional[str]:
        return self.headers.get_header(self.get_path(path))

    def remove_header(self, path: Optional[str] = None):
        self.headers.remove_header(self.get_path(path))

    def get_headers(self) -> Dict[str, str]:
        """All headers at or below this node, keyed by path relative to it."""
        if not self._path:
            return dict(self.headers.items())
        prefix = self._path + PATH_SEPARATOR
        result = {}
        for path, text in self.headers.items():
            if path == self._path:
                result[""] = text
            elif path.startswith(prefix):
                result[path[len(prefix):]] = text
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self._path!r}, keys={self.get_keys()!r})"


def _plain(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value
