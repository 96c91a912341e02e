#!/usr/bin/env python3
"""
CONFKEEPER ESCAPES - Bidirectional Token Table
----------------------------------------------
Every textual rewrite between the file on disk and the YAML codec lives
here, so that the Loader and the Saver apply exactly the same table in
opposite directions:

1. Colour codes: '&a' in the file is held as '§a' in memory. A bare '&'
   at the start of a YAML value would otherwise be read as an anchor.
2. Reserved keys: a key that is a lone '*' is quoted for the codec, since an
   unquoted '*' starts an alias.
3. Dotted paths: key segments that contain the separator are quoted inside
   a path so that join_path and split_path stay exact inverses.

Author: ConfKeeper Team
Date: 2026-10-19
"""

import re
from typing import Dict, Iterable, List

PATH_SEPARATOR = "."
COLOR_CHAR = "§"

# In-file key token -> token handed to the codec
RESERVED_KEYS: Dict[str, str] = {
    "*": "'*'",
}

_AMP_CODE = re.compile(r"&([0-9a-fk-or])", re.IGNORECASE)


def amp_to_color(line: str) -> str:
    """Replaces '&x' colour codes with the internal formatting marker."""
    return _AMP_CODE.sub(COLOR_CHAR + r"\1", line)


def color_to_amp(line: str) -> str:
    """Replaces the internal formatting marker with '&'."""
    return line.replace(COLOR_CHAR, "&")


def _swap_key(line: str, table: Dict[str, str]) -> str:
    indent = len(line) - len(line.lstrip(" "))
    trimmed = line[indent:]
    for source, target in table.items():
        token = source + ":"
        if trimmed == token or trimmed.startswith(token + " "):
            return " " * indent + target + trimmed[len(source):]
    return line


class EscapeTable:
    """
    Applies the reversible rewrites in one direction or the other.

    to_codec() is used while loading (file text -> codec text) and
    to_file() while saving (codec text -> file text).
    """

    def __init__(self, reserved_keys: Dict[str, str] = None):
        self.to_codec_keys = dict(RESERVED_KEYS if reserved_keys is None else reserved_keys)
        self.to_file_keys = {v: k for k, v in self.to_codec_keys.items()}

    def to_codec(self, line: str) -> str:
        return _swap_key(amp_to_color(line), self.to_codec_keys)

    def to_file(self, line: str) -> str:
        return _swap_key(color_to_amp(line), self.to_file_keys)

    def text_to_file(self, text: str) -> str:
        """Colour un-escape for free text such as header blocks."""
        return color_to_amp(text)


def escape_segment(segment: str) -> str:
    if PATH_SEPARATOR in segment or segment.startswith("'") or not segment:
        return "'" + segment.replace("'", "''") + "'"
    return segment


def join_path(segments: Iterable[str]) -> str:
    """Joins key segments into a dotted path, quoting where required."""
    return PATH_SEPARATOR.join(escape_segment(s) for s in segments)


def split_path(path: str) -> List[str]:
    """
    Splits a dotted path back into key segments.

    Quoted segments ('a.b') are taken literally with '' standing for a
    single quote. The empty path is the root and has no segments.
    """
    if not path:
        return []
    segments: List[str] = []
    i, n = 0, len(path)
    while True:
        if i < n and path[i] == "'":
            # Quoted segment
            i += 1
            buf = []
            while i < n:
                if path[i] == "'":
                    if i + 1 < n and path[i + 1] == "'":
                        buf.append("'")
                        i += 2
                        continue
                    i += 1
                    break
                buf.append(path[i])
                i += 1
            # Anything between the closing quote and the separator is kept
            end = path.find(PATH_SEPARATOR, i)
            end = n if end == -1 else end
            segments.append("".join(buf) + path[i:end])
            i = end
        else:
            end = path.find(PATH_SEPARATOR, i)
            end = n if end == -1 else end
            segments.append(path[i:end])
            i = end
        if i >= n:
            break
        i += 1  # Skip separator
        if i == n:
            segments.append("")
            break
    return segments
