#!/usr/bin/env python3
"""
CONFKEEPER LOADER - Header Extraction Pass
------------------------------------------
Streams the lines of a configuration file once. Comment blocks are lifted
out into the PathHeaderStore under the path of the key they precede; all
other lines are collected into a header-free buffer that is handed to the
YAML codec.

States: READING_DOCUMENT_HEADER -> READING_BODY -> DONE.
'#> ' lines only extend the document header until the first key is seen;
after that they are treated as ordinary comments of the next key.

Author: ConfKeeper Team
Date: 2026-10-19
"""

import logging
from enum import Enum
from typing import Iterable, List, Optional

from confkeeper.codec.yaml_codec import YamlCodec
from confkeeper.core.headers import PathHeaderStore
from confkeeper.core.models import LineKind
from confkeeper.streaming.classifier import NodeLineClassifier
from confkeeper.streaming.escapes import EscapeTable
from confkeeper.streaming.header import DOCUMENT_PREFIXES, NODE_PREFIXES, HeaderBlock
from confkeeper.streaming.tracker import IndentTracker

logger = logging.getLogger("confkeeper.loader")


class LoaderState(Enum):
    READING_DOCUMENT_HEADER = "reading_document_header"
    READING_BODY = "reading_body"
    DONE = "done"


class Loader:
    """
    One-shot loader for a single document.

    Headers are committed to the store as soon as their key line is seen, so
    a failure in the codec afterwards still leaves them in place.
    """

    def __init__(self, codec: YamlCodec, headers: PathHeaderStore, escapes: Optional[EscapeTable] = None):
        self.codec = codec
        self.headers = headers
        self.escapes = escapes or EscapeTable()
        self.classifier = NodeLineClassifier()
        self.tracker = IndentTracker()
        self.document_header = HeaderBlock(DOCUMENT_PREFIXES)
        self.node_header = HeaderBlock(NODE_PREFIXES)
        self.buffer: List[str] = []
        self.state = LoaderState.READING_DOCUMENT_HEADER

    def feed(self, raw_line: str):
        """Processes a single line of file text."""
        line = self.escapes.to_codec(raw_line.rstrip("\r\n"))
        classified = self.classifier.classify(line)
        trimmed = line.lstrip(" ")

        # 1. Document header, only before the first key
        if classified.kind is LineKind.DOCUMENT_HEADER and self.state is LoaderState.READING_DOCUMENT_HEADER:
            self.document_header.handle(trimmed)
            return

        # 2. Node header lines
        if classified.is_header:
            self.node_header.handle(trimmed)
            return

        # 3. Blank lines inside a header run
        if classified.kind is LineKind.OTHER and not trimmed.strip():
            if self.node_header.handle(trimmed):
                return
            if self.state is LoaderState.READING_DOCUMENT_HEADER and self.document_header.handle(trimmed):
                return

        # 4. Key lines pick up the pending header
        if classified.is_node:
            self.state = LoaderState.READING_BODY
            path = self.tracker.advance(classified.indent, classified.key)
            if self.node_header.has_header():
                self.headers.set_header(path, self.node_header.get_header())
                self.node_header.clear()

        self.buffer.append(line)

    def finish(self) -> str:
        """Commits the document header and returns the header-free text."""
        if self.document_header.has_header():
            self.headers.set_header("", self.document_header.get_header())
            self.document_header.clear()
        if self.node_header.has_header():
            logger.debug(f"Dropping trailing comment block with no key after it: {self.node_header.get_header()!r}")
            self.node_header.clear()
        self.state = LoaderState.DONE
        return "\n".join(self.buffer) + "\n" if self.buffer else ""

    def load(self, lines: Iterable[str]) -> str:
        """Feeds every line, then builds the value tree from the cleaned text."""
        for line in lines:
            self.feed(line)
        text = self.finish()
        self.codec.load_from_string(text)
        return text
