#!/usr/bin/env python3
"""
CONFKEEPER CORE MODELS
----------------------
Defines the small value types shared by the streaming layer.
A configuration file is processed one line at a time; these models describe
what a single line turned out to be and where in the tree it sits.

Author: ConfKeeper Team
Date: 2026-10-19
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class LineKind(Enum):
    """The four shapes a raw configuration line can take."""
    COMMENT = "comment"
    DOCUMENT_HEADER = "document_header"
    NODE = "node"
    OTHER = "other"


@dataclass(frozen=True)
class IndentationFrame:
    """
    One level of the indentation stack.

    The stack grows with every nested key and shrinks whenever a line
    is indented at or before an existing frame.
    """
    width: int              # Leading space count of the key line
    key: str                # Unescaped key segment active at this level
    parent_path: str = ""   # Dotted path of the enclosing node ("" for root)


@dataclass
class ClassifiedLine:
    """
    A single raw line after classification.

    Only NODE lines carry a key; only COMMENT and DOCUMENT_HEADER lines
    carry header text.
    """
    kind: LineKind
    indent: int = 0                # Leading space count
    key: Optional[str] = None      # Unescaped key token (NODE only)
    text: Optional[str] = None     # Comment text with the marker stripped
    raw_line: str = ""             # The line as it was handed in

    @property
    def is_node(self) -> bool:
        return self.kind is LineKind.NODE

    @property
    def is_header(self) -> bool:
        return self.kind in (LineKind.COMMENT, LineKind.DOCUMENT_HEADER)
