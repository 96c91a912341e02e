#!/usr/bin/env python3
"""
CONFKEEPER CLI SUITE
--------------------
Drives the argparse front end end-to-end against temporary files.

Author: ConfKeeper Team
Date: 2026-10-19
"""

from confkeeper.cli.main import ConfKeeperCLI
from confkeeper.core.config_file import FileConfiguration


def write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


def test_fmt_normalizes_indentation_and_keeps_headers(tmp_path):
    target = write(tmp_path / "app.yml", "#> App\n# Section\na:\n      b: 1\n")

    assert ConfKeeperCLI().run(["fmt", str(tmp_path)]) == 0
    assert target.read_text(encoding="utf-8") == "#> App\n\n# Section\na:\n  b: 1\n"


def test_fmt_dry_run_does_not_write(tmp_path):
    original = "a:\n      b: 1\n"
    target = write(tmp_path / "app.yml", original)

    assert ConfKeeperCLI().run(["fmt", str(target), "--dry-run", "--diff"]) == 0
    assert target.read_text(encoding="utf-8") == original


def test_fmt_reports_unloadable_files(tmp_path):
    write(tmp_path / "bad.yml", "a: [1\n")
    assert ConfKeeperCLI().run(["fmt", str(tmp_path)]) == 1


def test_header_set_and_remove(tmp_path):
    target = write(tmp_path / "app.yml", "server:\n  port: 1\n")
    cli = ConfKeeperCLI()

    assert cli.run(["header", str(target), "server.port", "--set", "Listen port\\nTCP only"]) == 0
    config = FileConfiguration(target)
    config.load()
    assert config.get_header("server.port") == "Listen port\nTCP only"

    assert cli.run(["header", str(target), "server.port", "--remove"]) == 0
    assert "#" not in target.read_text(encoding="utf-8")


def test_show(tmp_path):
    target = write(tmp_path / "app.yml", "#> Banner\n# Note\nkey: value\n")
    assert ConfKeeperCLI().run(["show", str(target)]) == 0
    assert ConfKeeperCLI().run(["show", str(tmp_path / "missing.yml")]) == 1
