#!/usr/bin/env python3
"""
CONFKEEPER INDENT TRACKER - The Cartographer
--------------------------------------------
Derives the fully-qualified dotted path of a key line from its indentation
alone. The tracker keeps a stack of IndentationFrames; every key line pops
the frames it is not nested in and pushes itself.

Malformed indentation is taken at face value: it produces a plausible
path, never an error.

Author: ConfKeeper Team
Date: 2026-10-19
"""

from typing import Tuple

from confkeeper.core.models import IndentationFrame
from confkeeper.streaming.escapes import join_path

Frames = Tuple[IndentationFrame, ...]


def push_frame(frames: Frames, width: int, key: str) -> Frames:
    """
    Pure stack transition: drops every frame at or beyond `width`
    and pushes a new frame for `key` under the remaining top.
    """
    if width <= 0:
        kept: Frames = ()
    else:
        kept = frames
        while kept and kept[-1].width >= width:
            kept = kept[:-1]
    parent = path_of(kept)
    return kept + (IndentationFrame(width=width, key=key, parent_path=parent),)


def path_of(frames: Frames) -> str:
    return join_path(frame.key for frame in frames)


class IndentTracker:
    """
    Holds the current indentation stack for a single streaming pass.
    One tracker per load or save; call reset() to reuse it.
    """

    def __init__(self):
        self.frames: Frames = ()

    def advance(self, indent_width: int, key: str) -> str:
        """Moves to a new key line and returns its dotted path."""
        self.frames = push_frame(self.frames, indent_width, key)
        return self.path

    @property
    def path(self) -> str:
        return path_of(self.frames)

    @property
    def depth(self) -> int:
        return len(self.frames)

    def reset(self):
        self.frames = ()
