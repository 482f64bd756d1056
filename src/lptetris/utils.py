"""Utility helpers for the engine and its text front-end."""

from __future__ import annotations

import sys
from typing import List, Optional, TextIO

import numpy as np

from .board import HEIGHT, WIDTH


# Threshold constant the speed level is subtracted from.  With the default
# frame delay of 4ms this is roughly one second per row at speed 1.
GRAVITY_BASE = 255


def gravity_interval(speed: int, base: int = GRAVITY_BASE) -> int:
    """Return the number of frames between automatic descents at ``speed``.

    Higher speeds give shorter intervals.  ``speed`` is clamped to
    ``0..base`` first and the interval never drops below one frame, so
    extreme values saturate instead of wrapping.
    """

    speed = min(max(speed, 0), base)
    return max(1, base - speed)


def render_text(grid: np.ndarray, filled: str = "#", empty: str = ".") -> List[str]:
    """Return ``grid`` as text lines with the ceiling first."""

    return ["".join(filled if cell else empty for cell in row) for row in grid[::-1]]


class TextDisplay:
    """Frame sink writing the grid as text to ``stream``.

    Only every ``every``-th frame is written so that a fast loop does not
    flood the terminal.
    """

    def __init__(self, stream: Optional[TextIO] = None, every: int = 1) -> None:
        self.stream = stream or sys.stdout
        self.every = max(1, every)
        self.frames = 0

    def send_matrix(self, grid: np.ndarray) -> None:
        self.frames += 1
        if self.frames % self.every:
            return
        self.stream.write("\n".join(render_text(grid)) + "\n\n")
        self.stream.flush()

    def clear(self) -> None:
        """Write an all-empty frame and restart the frame count."""

        self.frames = 0
        blank = np.zeros((HEIGHT, WIDTH), dtype=np.uint8)
        self.stream.write("\n".join(render_text(blank)) + "\n\n")
        self.stream.flush()
