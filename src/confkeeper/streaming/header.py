#!/usr/bin/env python3
"""
CONFKEEPER HEADER BLOCK - The Scribe
------------------------------------
Accumulates a run of comment lines into one multi-line header text.

Blank lines inside a run are remembered and only kept when another comment
line follows, so paragraph breaks survive a save/load cycle while the
separator before the next key does not leak into the header.

Author: ConfKeeper Team
Date: 2026-10-19
"""

from typing import List, Optional, Sequence

DOCUMENT_HEADER_PREFIX = "#> "
COMMENT_PREFIX = "# "

DOCUMENT_PREFIXES = (DOCUMENT_HEADER_PREFIX,)
NODE_PREFIXES = (DOCUMENT_HEADER_PREFIX, COMMENT_PREFIX)


def strip_marker(stripped: str, prefixes: Sequence[str]) -> Optional[str]:
    """
    Removes the first matching comment marker and returns the remaining text,
    or None when the line carries none of the markers.

    Each prefix is a marker plus one optional space: '# x' and '#x' both give 'x'.
    """
    for prefix in prefixes:
        marker = prefix.rstrip()
        if stripped.startswith(prefix):
            return stripped[len(prefix):]
        if stripped.startswith(marker):
            rest = stripped[len(marker):]
            # '#>foo' is a plain comment, not a document header line
            if prefix != COMMENT_PREFIX and rest:
                continue
            return rest
    return None


class HeaderBlock:
    """Collects consecutive comment lines preceding a key."""

    def __init__(self, prefixes: Sequence[str] = NODE_PREFIXES):
        self.prefixes = tuple(prefixes)
        self.lines: List[str] = []
        self.pending_blanks = 0

    def handle(self, line: str) -> bool:
        """
        Consumes `line` if it belongs to the header.

        Returns False for anything else; the caller then attaches
        the accumulated header (if any) to the key on that line.
        """
        stripped = line.strip(" \r\n")
        if not stripped:
            if not self.lines:
                return False
            self.pending_blanks += 1
            return True

        text = strip_marker(stripped, self.prefixes)
        if text is None:
            return False

        self.lines.extend([""] * self.pending_blanks)
        self.pending_blanks = 0
        self.lines.append(text)
        return True

    def has_header(self) -> bool:
        return bool(self.lines)

    def get_header(self) -> Optional[str]:
        if not self.lines:
            return None
        return "\n".join(self.lines)

    def clear(self):
        self.lines = []
        self.pending_blanks = 0
