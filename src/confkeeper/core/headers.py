#!/usr/bin/env python3
"""
CONFKEEPER HEADER STORE
-----------------------
Maps dotted paths to header text, independently of the value tree.
The empty path holds the document header.

Author: ConfKeeper Team
Date: 2026-10-19
"""

from typing import Dict, Iterator, List, Optional, Tuple


class PathHeaderStore:
    """
    A plain path -> text mapping. Paths are never checked against the
    value tree; orphaned headers simply stay until removed.
    """

    def __init__(self):
        self._headers: Dict[str, str] = {}

    def set_header(self, path: str, text: Optional[str]):
        if text is None:
            self.remove_header(path)
        else:
            self._headers[path] = text

    def get_header(self, path: str) -> Optional[str]:
        return self._headers.get(path)

    def remove_header(self, path: str):
        self._headers.pop(path, None)

    def paths(self) -> List[str]:
        return list(self._headers)

    def items(self) -> List[Tuple[str, str]]:
        return list(self._headers.items())

    def clear(self):
        self._headers.clear()

    def __contains__(self, path: str) -> bool:
        return path in self._headers

    def __len__(self) -> int:
        return len(self._headers)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._headers))
