#!/usr/bin/env python3
"""
CONFKEEPER FILE CONFIGURATION - The Keeper
------------------------------------------
A ConfigurationNode bound to a file on disk. load() and save() run the
Loader and Saver passes and never raise: a missing file loads as an empty
document, every other failure is reported through the DiagnosticSink.

Author: ConfKeeper Team
Date: 2026-10-19
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from confkeeper.core.diagnostics import DiagnosticSink, LoggingSink
from confkeeper.core.node import ConfigurationNode
from confkeeper.streaming.escapes import EscapeTable
from confkeeper.streaming.loader import Loader
from confkeeper.streaming.saver import Saver

DEFAULT_FILE_NAME = "config.yml"
TEMP_SUFFIX = ".confkeeper.tmp"


class FileConfiguration(ConfigurationNode):
    """
    The root node of a configuration file.

    Args:
        path: Absolute path, or a path relative to `base_dir`.
        base_dir: Directory that relative paths resolve against (e.g. an
            application data folder). Defaults to the working directory.
        indent: Indentation width of nested keys.
        sink: Receives error and notice reports; logs by default.
    """

    def __init__(self, path: Union[str, Path] = DEFAULT_FILE_NAME,
                 base_dir: Optional[Union[str, Path]] = None,
                 indent: int = 2, sink: Optional[DiagnosticSink] = None):
        super().__init__(indent=indent)
        path = Path(path)
        if base_dir is not None and not path.is_absolute():
            path = Path(base_dir) / path
        self.file = path
        self.sink = sink or LoggingSink()
        self.escapes = EscapeTable()

    def exists(self) -> bool:
        return self.file.exists()

    def set_indent(self, indent: int):
        """Sets the indentation of sub-nodes."""
        self.codec.indent = indent

    def get_indent(self) -> int:
        """Gets the indentation of sub-nodes."""
        return self.codec.indent

    def load(self):
        """Loads this configuration from its file, keeping whatever was read on failure."""
        loader = Loader(self.codec, self.headers, self.escapes)
        try:
            with open(self.file, "r", encoding="utf-8-sig") as stream:
                loader.load(stream)
        except FileNotFoundError:
            return
        except Exception:
            self.sink.report(logging.ERROR, f"An error occurred while loading file '{self.file}':", exc_info=True)

    def to_text(self) -> str:
        """The file content save() would write."""
        return Saver(self.codec, self.headers, self.escapes).render()

    def save(self) -> bool:
        """
        Saves this configuration to its file.
        Returns True when the file did not exist before and has been generated.
        """
        regen = not self.exists()
        try:
            content = self.to_text()
            self.file.absolute().parent.mkdir(parents=True, exist_ok=True)
            self._atomic_write(self.file, content)
        except Exception:
            self.sink.report(logging.ERROR, f"An error occurred while saving to file '{self.file}':", exc_info=True)
            return False

        if regen:
            self.sink.report(logging.INFO, f"File '{self.file}' has been generated")
        return regen

    def _atomic_write(self, target_path: Path, content: str):
        temp_file = target_path.with_name(target_path.name + TEMP_SUFFIX)
        try:
            with open(temp_file, "w", encoding="utf-8", newline="\n") as stream:
                stream.write(content)
            os.replace(temp_file, target_path)
        except Exception:
            if temp_file.exists():
                temp_file.unlink()
            raise

    def __repr__(self) -> str:
        return f"FileConfiguration(file={str(self.file)!r})"
