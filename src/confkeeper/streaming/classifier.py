#!/usr/bin/env python3
"""
CONFKEEPER CLASSIFIER - The Sorter
----------------------------------
Decides what a raw configuration line is: a document header line, a comment,
a key-defining ("node") line or anything else. Node lines yield their key,
already unescaped, for the IndentTracker.

The classifier keeps block-scalar state (|, >) so that text inside a literal
or folded block is never mistaken for a key.

Author: ConfKeeper Team
Date: 2026-10-19
"""

import re

from confkeeper.core.models import ClassifiedLine, LineKind
from confkeeper.streaming.header import (
    COMMENT_PREFIX,
    DOCUMENT_HEADER_PREFIX,
    strip_marker,
)


class NodeLineClassifier:
    """
    Splits lines into the four LineKinds.
    Create one per streaming pass; block state carries across lines.
    """

    # Group 'key': quoted or plain key token, Group 'value': rest after the colon
    KEY_PATTERN = re.compile(
        r"""^(?P<key>'(?:[^']|'')*'|"(?:[^"\\]|\\.)*"|[^\s'"#\[\]{}].*?)\s*:(?:\s+(?P<value>.*))?$"""
    )
    BLOCK_SCALAR = re.compile(r"^[|>][-+0-9]*\s*(?:#.*)?$")
    NEVER_KEYS = ("- ", "? ", "---", "...", "%")

    _DQ_ESCAPES = {'"': '"', "\\": "\\", "n": "\n", "t": "\t", "/": "/", "0": "\0"}

    def __init__(self):
        self.in_block = False
        self.block_indent = 0

    def reset(self):
        self.in_block = False
        self.block_indent = 0

    def classify(self, raw_line: str) -> ClassifiedLine:
        line = raw_line.rstrip("\r\n")
        indent = len(line) - len(line.lstrip(" "))
        trimmed = line[indent:]
        stripped = trimmed.rstrip()

        # 1. Block Protection
        if self.in_block:
            if not stripped or indent > self.block_indent:
                return ClassifiedLine(LineKind.OTHER, indent=indent, raw_line=raw_line)
            self.in_block = False

        # 2. Header Lines
        if stripped == DOCUMENT_HEADER_PREFIX.rstrip() or trimmed.startswith(DOCUMENT_HEADER_PREFIX):
            text = strip_marker(stripped, (DOCUMENT_HEADER_PREFIX,))
            return ClassifiedLine(LineKind.DOCUMENT_HEADER, indent=indent, text=text, raw_line=raw_line)
        if stripped.startswith("#"):
            text = strip_marker(stripped, (COMMENT_PREFIX,))
            return ClassifiedLine(LineKind.COMMENT, indent=indent, text=text, raw_line=raw_line)

        # 3. Node Lines
        key, value = self._split_key(stripped)
        if key is None:
            return ClassifiedLine(LineKind.OTHER, indent=indent, raw_line=raw_line)

        if value and self.BLOCK_SCALAR.match(value):
            self.in_block = True
            self.block_indent = indent
        return ClassifiedLine(LineKind.NODE, indent=indent, key=key, raw_line=raw_line)

    def _split_key(self, stripped: str):
        if not stripped or stripped == "-" or stripped.startswith(self.NEVER_KEYS):
            return None, None
        match = self.KEY_PATTERN.match(stripped)
        if not match:
            return None, None
        return self.unescape_key(match.group("key")), match.group("value")

    def unescape_key(self, token: str) -> str:
        """Strips YAML quoting from a key token."""
        if len(token) >= 2 and token[0] == token[-1] == "'":
            return token[1:-1].replace("''", "'")
        if len(token) >= 2 and token[0] == token[-1] == '"':
            return re.sub(r"\\(.)", self._dq_escape, token[1:-1])
        return token

    def _dq_escape(self, match) -> str:
        char = match.group(1)
        return self._DQ_ESCAPES.get(char, "\\" + char)
