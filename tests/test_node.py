#!/usr/bin/env python3
"""
CONFKEEPER NODE SUITE
---------------------
The in-memory value tree and the path header store.

Author: ConfKeeper Team
Date: 2026-10-19
"""

import pytest
from confkeeper.codec.yaml_codec import ConfigFormatError, YamlCodec
from confkeeper.core.headers import PathHeaderStore
from confkeeper.core.node import ConfigurationNode


def test_set_creates_parents_in_insertion_order():
    root = ConfigurationNode()
    root.set("server.host", "localhost")
    root.set("server.port", 8080)
    root.set("debug", True)

    assert root.get_keys() == ["server", "debug"]
    assert root.get_keys(deep=True) == ["server", "server.host", "server.port", "debug"]
    assert root.get("server.port") == 8080
    assert root.get("missing.key", "fallback") == "fallback"
    assert root.is_node("server")
    assert not root.is_node("debug")


def test_remove_prunes_empty_parents():
    root = ConfigurationNode()
    root.set("a.b.c", 1)
    root.set("keep", 2)

    assert root.remove("a.b.c") is True
    assert "a" not in root
    assert root.get_keys() == ["keep"]
    assert root.remove("a.b.c") is False


def test_set_none_removes():
    root = ConfigurationNode()
    root.set("x.y", 1)
    root.set("x.z", 2)
    root.set("x.y", None)
    assert root.get_keys(deep=True) == ["x", "x.z"]


def test_child_node_views_share_the_root():
    root = ConfigurationNode()
    database = root.get_node("database")
    database.set("user", "admin")
    database.set_header("user", "Login name")
    database.set_header("All database settings")

    assert database.get_path() == "database"
    assert database.get_name() == "database"
    assert database.get_parent().get_path() == ""
    assert root.get_parent() is None
    assert root.get("database.user") == "admin"
    assert root.get_header("database.user") == "Login name"
    assert root.get_header("database") == "All database settings"
    assert database.get_headers() == {"": "All database settings", "user": "Login name"}
    assert [n.get_path() for n in root.get_nodes()] == ["database"]


def test_get_values_deep_returns_plain_containers():
    root = ConfigurationNode()
    root.set("list", [1, 2])
    root.set("map", {"inner": {"value": "v"}})

    values = root.get_values(deep=True)
    assert values == {"list": [1, 2], "map": {"inner": {"value": "v"}}}
    assert type(values["map"]) is dict


def test_keys_with_dots_are_addressed_by_quoted_segments():
    root = ConfigurationNode()
    root.set("hosts.'example.com'", "allowed")
    assert root.get_keys(deep=True) == ["hosts", "hosts.'example.com'"]
    assert root.get("hosts.'example.com'") == "allowed"


def test_clear_and_is_empty():
    root = ConfigurationNode()
    node = root.get_node("section")
    assert node.is_empty()
    node.set("k", "v")
    assert not node.is_empty()
    node.clear()
    assert node.is_empty()
    assert "section" in root


def test_set_header_argument_count():
    with pytest.raises(TypeError):
        ConfigurationNode().set_header("a", "b", "c")


def test_path_header_store_is_independent_of_values():
    store = PathHeaderStore()
    store.set_header("a.b", "text")
    store.set_header("", "document")

    assert store.get_header("a.b") == "text"
    assert "a.b" in store
    assert len(store) == 2
    assert store.paths() == ["a.b", ""]

    store.set_header("a.b", None)
    assert store.get_header("a.b") is None
    store.remove_header("never.set")
    assert store.items() == [("", "document")]


def test_codec_rejects_non_mapping_documents():
    codec = YamlCodec()
    with pytest.raises(ConfigFormatError):
        codec.load_from_string("- just\n- a list\n")


def test_codec_indent_validation():
    codec = YamlCodec()
    codec.indent = 4
    assert codec.indent == 4
    with pytest.raises(ValueError):
        codec.indent = 0
