#!/usr/bin/env python3
"""
CONFKEEPER LINE SUITE
---------------------
Classification of raw lines, comment accumulation and the escape table.

Author: ConfKeeper Team
Date: 2026-10-19
"""

import pytest
from confkeeper.core.models import LineKind
from confkeeper.streaming.classifier import NodeLineClassifier
from confkeeper.streaming.escapes import EscapeTable, join_path, split_path
from confkeeper.streaming.header import DOCUMENT_PREFIXES, HeaderBlock


@pytest.mark.parametrize("line, kind, indent, key", [
    ("name: value", LineKind.NODE, 0, "name"),
    ("  nested:", LineKind.NODE, 2, "nested"),
    ("    url: http://example.com", LineKind.NODE, 4, "url"),
    ("'*':", LineKind.NODE, 0, "*"),
    ("*:", LineKind.NODE, 0, "*"),
    ("'it''s': 1", LineKind.NODE, 0, "it's"),
    ('"a \\"b\\"": 1', LineKind.NODE, 0, 'a "b"'),
    ("'a.b': 1", LineKind.NODE, 0, "a.b"),
    ("  - item", LineKind.OTHER, 2, None),
    ("  - name: x", LineKind.OTHER, 2, None),
    ("plain scalar", LineKind.OTHER, 0, None),
    ("", LineKind.OTHER, 0, None),
    ("---", LineKind.OTHER, 0, None),
    ("# note", LineKind.COMMENT, 0, None),
    ("  #", LineKind.COMMENT, 2, None),
    ("#> banner", LineKind.DOCUMENT_HEADER, 0, None),
    ("#>", LineKind.DOCUMENT_HEADER, 0, None),
])
def test_classify(line, kind, indent, key):
    result = NodeLineClassifier().classify(line)
    assert result.kind is kind
    assert result.indent == indent
    assert result.key == key


def test_comment_text_is_stripped_of_marker():
    classifier = NodeLineClassifier()
    assert classifier.classify("# hello").text == "hello"
    assert classifier.classify("#hello").text == "hello"
    assert classifier.classify("#  two spaces").text == " two spaces"
    assert classifier.classify("#> banner").text == "banner"
    # No space after '#>': an ordinary comment
    assert classifier.classify("#>banner").kind is LineKind.COMMENT


def test_block_scalar_content_is_never_a_node():
    classifier = NodeLineClassifier()
    lines = [
        "script: |",
        "  key: not a key",
        "",
        "  # not a comment",
        "next: 1",
    ]
    kinds = [classifier.classify(line).kind for line in lines]
    assert kinds == [LineKind.NODE, LineKind.OTHER, LineKind.OTHER, LineKind.OTHER, LineKind.NODE]


def test_header_block_keeps_inner_blank_lines_only():
    block = HeaderBlock()
    for line in ["# first", "", "# second", ""]:
        assert block.handle(line) is True
    assert block.handle("key: 1") is False
    assert block.get_header() == "first\n\nsecond"

    block.clear()
    assert not block.has_header()
    assert block.get_header() is None
    # A blank line with nothing accumulated is not part of a header
    assert block.handle("") is False


def test_header_block_empty_comment_is_an_empty_segment():
    block = HeaderBlock()
    for line in ["# a", "#", "# b"]:
        block.handle(line)
    assert block.get_header() == "a\n\nb"


def test_document_header_block_ignores_plain_comments():
    block = HeaderBlock(DOCUMENT_PREFIXES)
    assert block.handle("#> Title") is True
    assert block.handle("#> ") is True
    assert block.handle("#> More") is True
    assert block.handle("# node comment") is False
    assert block.get_header() == "Title\n\nMore"


def test_escape_table_is_symmetric():
    table = EscapeTable()
    file_lines = ["*:", "  *: 3", "msg: '&aGreen &lbold'", "amp: a & b"]
    codec_lines = [table.to_codec(line) for line in file_lines]

    assert codec_lines[0] == "'*':"
    assert codec_lines[1] == "  '*': 3"
    assert codec_lines[2] == "msg: '§aGreen §lbold'"
    # '&' followed by a space is not a colour code
    assert codec_lines[3] == "amp: a & b"
    assert [table.to_file(line) for line in codec_lines] == file_lines


@pytest.mark.parametrize("segments", [
    [],
    ["a"],
    ["a", "b", "c"],
    ["with.dot", "x"],
    ["'lead", "mid'dle"],
    ["", "empty"],
])
def test_split_path_inverts_join_path(segments):
    assert split_path(join_path(segments)) == segments
