#!/usr/bin/env python3
"""
CONFKEEPER DIAGNOSTICS
----------------------
File operations never raise to their caller; they report through a
DiagnosticSink instead. The default sink forwards to the standard
logging module under a named logger.

Author: ConfKeeper Team
Date: 2026-10-19
"""

import logging
from typing import Any, List, Optional, Protocol, Tuple


class DiagnosticSink(Protocol):
    """Anything that can receive a report."""

    def report(self, level: int, message: str, exc_info: Any = None) -> None:
        ...


class LoggingSink:
    """Forwards reports to a named logger."""

    def __init__(self, name: str = "confkeeper.file"):
        self.logger = logging.getLogger(name)

    def report(self, level: int, message: str, exc_info: Any = None) -> None:
        self.logger.log(level, message, exc_info=exc_info)


class RecordingSink:
    """Keeps reports in memory; used by the CLI summary and by tests."""

    def __init__(self, forward: Optional[DiagnosticSink] = None):
        self.records: List[Tuple[int, str]] = []
        self.forward = forward

    def report(self, level: int, message: str, exc_info: Any = None) -> None:
        self.records.append((level, message))
        if self.forward is not None:
            self.forward.report(level, message, exc_info=exc_info)

    def messages(self, level: Optional[int] = None) -> List[str]:
        return [msg for lvl, msg in self.records if level is None or lvl == level]
