"""Tetromino definitions and orientation handling.

Each of the seven shapes is stored once, in its spawn orientation, as a
read-only boolean layout.  A :class:`Piece` only carries a reference to its
shape and an orientation index; the occupancy grid for any orientation is
derived on demand by :func:`render_layout`, so rotating a piece never touches
the shared shape table.

Layouts are written top row first.  Code that places a piece on the board
counts rows upward from the piece's bottom row instead, see :meth:`Piece.cells`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, Iterator, List, Tuple

import numpy as np
from numpy.typing import NDArray

Layout = NDArray[np.bool_]


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    S = "S"
    J = "J"
    L = "L"
    I = "I"
    T = "T"
    Z = "Z"
    O = "O"


class Orientation(IntEnum):
    """Quarter-turn orientation index of a piece."""

    ZERO = 0
    HALF_PI = 1
    PI = 2
    ONE_HALF_PI = 3


def _frozen(rows: List[List[int]]) -> Layout:
    layout = np.array(rows, dtype=bool)
    layout.setflags(write=False)
    return layout


# Spawn orientation of every shape.  The remaining orientations are derived by
# ``render_layout``.
BASE_LAYOUTS: Dict[TetrominoType, Layout] = {
    TetrominoType.S: _frozen([[0, 1, 1], [1, 1, 0]]),
    TetrominoType.J: _frozen([[0, 1], [0, 1], [1, 1]]),
    TetrominoType.L: _frozen([[1, 0], [1, 0], [1, 1]]),
    TetrominoType.I: _frozen([[1], [1], [1], [1]]),
    TetrominoType.T: _frozen([[1, 1, 1], [0, 1, 0]]),
    TetrominoType.Z: _frozen([[1, 1, 0], [0, 1, 1]]),
    TetrominoType.O: _frozen([[1, 1], [1, 1]]),
}

# Palette ids of the LED grid.  ``0`` is reserved for an unlit cell.
SHAPE_COLORS: Dict[TetrominoType, int] = {
    TetrominoType.S: 5,
    TetrominoType.J: 13,
    TetrominoType.L: 21,
    TetrominoType.I: 3,
    TetrominoType.T: 37,
    TetrominoType.Z: 45,
    TetrominoType.O: 53,
}


def render_layout(shape: TetrominoType, orientation: int) -> Layout:
    """Return the occupancy grid of ``shape`` at ``orientation``.

    The four orientations are fixed transforms of the base layout ``B``:

    ``0``
        ``B`` unchanged.
    ``1``
        The columns of ``B`` in reverse column order, each becoming a row.
    ``2``
        The cells of ``B`` in reverse linear order, reshaped to ``B``'s shape.
    ``3``
        The rows of ``B`` in reverse order, each becoming a column.

    ``orientation`` is wrapped so any integer is accepted.  The returned array
    is a fresh copy and may be modified by the caller.
    """

    base = BASE_LAYOUTS[shape]
    k = orientation % 4
    if k == Orientation.ZERO:
        out = base
    elif k == Orientation.HALF_PI:
        out = base.T[::-1]
    elif k == Orientation.PI:
        out = base.ravel()[::-1].reshape(base.shape)
    else:
        out = base[::-1].T
    return np.array(out, dtype=bool)


@dataclass
class Piece:
    """Falling piece: a shape reference plus a mutable orientation."""

    shape: TetrominoType
    orientation: Orientation = Orientation.ZERO

    def rotate_left(self) -> None:
        """Step the orientation back by one quarter turn.

        No legality check happens here; the board decides whether the new
        orientation fits.
        """

        self.orientation = Orientation((self.orientation - 1) % 4)

    def rotate_right(self) -> None:
        """Step the orientation forward by one quarter turn."""

        self.orientation = Orientation((self.orientation + 1) % 4)

    def rotated_left(self) -> "Piece":
        piece = Piece(self.shape, self.orientation)
        piece.rotate_left()
        return piece

    def rotated_right(self) -> "Piece":
        piece = Piece(self.shape, self.orientation)
        piece.rotate_right()
        return piece

    @property
    def color(self) -> int:
        return SHAPE_COLORS[self.shape]

    def render(self) -> Layout:
        """Return the occupancy grid for the current orientation."""

        return render_layout(self.shape, self.orientation)

    @property
    def width(self) -> int:
        return int(self.render().shape[1])

    @property
    def height(self) -> int:
        return int(self.render().shape[0])

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(r, c)`` offsets of the occupied cells.

        ``r`` counts upward from the piece's bottom row, matching the board's
        floor-up row numbering; ``c`` counts from the leftmost column.
        """

        layout = self.render()
        rows = layout.shape[0]
        for top_r, c in zip(*np.nonzero(layout)):
            yield rows - 1 - int(top_r), int(c)
