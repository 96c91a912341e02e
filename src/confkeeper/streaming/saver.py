#!/usr/bin/env python3
"""
CONFKEEPER SAVER - Header Re-insertion Pass
-------------------------------------------
Serializes the value tree with the YAML codec, then walks the emitted text
line by line, recovering each key's path from indentation and writing its
stored header right above it.

The codec output is never assumed to line up with anything the caller
tracked; paths are re-derived from the text every time.

Author: ConfKeeper Team
Date: 2026-10-19
"""

from typing import List, Optional

from confkeeper.codec.yaml_codec import YamlCodec, walk
from confkeeper.core.headers import PathHeaderStore
from confkeeper.streaming.classifier import NodeLineClassifier
from confkeeper.streaming.escapes import EscapeTable
from confkeeper.streaming.header import COMMENT_PREFIX, DOCUMENT_HEADER_PREFIX
from confkeeper.streaming.tracker import IndentTracker


class Saver:
    """Renders one document, headers included, to file text."""

    def __init__(self, codec: YamlCodec, headers: PathHeaderStore, escapes: Optional[EscapeTable] = None):
        self.codec = codec
        self.headers = headers
        self.escapes = escapes or EscapeTable()

    def split_multiline_values(self) -> List[str]:
        """
        Pass 1: replaces every string value holding newlines with the list of
        its lines. Returns the affected paths.

        This is one-way; loading the file again yields the list.
        """
        affected = [path for path, value in walk(self.codec.root, deep=True)
                    if isinstance(value, str) and "\n" in value]
        for path in affected:
            self.codec.set(path, str(self.codec.get(path)).split("\n"))
        return affected

    def _header_lines(self, header: str, indent: int) -> List[str]:
        lines = []
        for text in header.split("\n"):
            text = self.escapes.text_to_file(text)
            # Blank header lines become blank file lines
            lines.append(" " * indent + (COMMENT_PREFIX + text if text.strip() else ""))
        return lines

    def render(self) -> str:
        """Pass 2: codec text with document and node headers woven in."""
        self.split_multiline_values()
        output: List[str] = []

        # 1. Document header
        document_header = self.headers.get_header("")
        if document_header is not None:
            for text in document_header.split("\n"):
                text = self.escapes.text_to_file(text)
                output.append(DOCUMENT_HEADER_PREFIX + text)
            output.append("")

        # 2. Nodes and their headers
        classifier = NodeLineClassifier()
        tracker = IndentTracker()
        # Only \n ends a line; other Unicode breaks can sit inside quoted scalars
        text = self.codec.save_to_string()
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        for line in lines:
            line = self.escapes.to_file(line)
            classified = classifier.classify(line)
            if classified.is_node:
                path = tracker.advance(classified.indent, classified.key)
                header = self.headers.get_header(path)
                if header is not None:
                    output.extend(self._header_lines(header, classified.indent))
            output.append(line)

        return "\n".join(output) + "\n" if output else ""
