"""Board representation for the 8×8 playfield.

Rows are numbered from the floor up: row ``0`` is the bottom of the display and
row ``7`` the top.  Every query on this module (collision, placement, row
clearing and column heights) uses that numbering, as does the frame handed to
a renderer.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .tetromino import Piece


LOGGER = logging.getLogger(__name__)

# Dimensions of the LED grid the board mirrors.
WIDTH = 8
HEIGHT = 8

Grid = NDArray[np.uint8]


class CollisionResult(Enum):
    """Outcome of testing a piece at a board position."""

    UNOBSTRUCTED = "unobstructed"
    COLLIDES = "collides"
    COLLIDES_HBOUND = "collides_hbound"


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


class Board:
    """Occupancy grid holding the colours of locked cells."""

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()

    def reset(self) -> None:
        self.grid.fill(0)

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Safely set the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            self.grid[row, col] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    # Placement --------------------------------------------------------
    def _paint(self, grid: Grid, piece: Piece, x: int, y: int) -> Grid:
        color = np.uint8(piece.color)
        for r, c in piece.cells():
            row, col = y + r, x + c
            if 0 <= row < self.height and 0 <= col < self.width:
                grid[row, col] = color
        return grid

    def place(self, piece: Piece, x: int, y: int) -> None:
        """Lock ``piece`` into the grid with its bottom-left anchor at ``(x, y)``.

        Cells that land outside the grid, typically above the ceiling, are
        dropped without error.
        """

        self._paint(self.grid, piece, x, y)

    def shadow(self, piece: Piece, x: int, y: int) -> Grid:
        """Return a copy of the grid with ``piece`` painted on top."""

        return self._paint(self.grid.copy(), piece, x, y)

    # Queries ----------------------------------------------------------
    def row_filled(self, y: int) -> int:
        """Return how many cells of row ``y`` are occupied."""

        return int(np.count_nonzero(self.grid[y]))

    def column_height(self, x: int) -> int:
        """Return one more than the highest occupied row of column ``x``."""

        for row in range(self.height - 1, -1, -1):
            if self.grid[row, x] != 0:
                return row + 1
        return 0

    def finished(self) -> bool:
        """Return ``True`` once any column is stacked up to the ceiling."""

        return any(self.column_height(x) == self.height for x in range(self.width))

    def clear_rows(self) -> int:
        """Remove full rows and return how many were removed.

        Rows are scanned from the floor up.  Each removed row lets everything
        above it fall by one and an empty row enters at the ceiling.
        """

        cleared = 0
        row = 0
        while row < self.height:
            if self.row_filled(row) == self.width:
                self.grid = np.vstack(
                    (np.delete(self.grid, row, axis=0), np.zeros((1, self.width), dtype=np.uint8))
                )
                cleared += 1
            else:
                row += 1
        if cleared:
            LOGGER.debug("Cleared %d row(s)", cleared)
        return cleared

    # Collision --------------------------------------------------------
    def collides(self, piece: Piece, x: int, y: int) -> CollisionResult:
        """Test ``piece`` with its bottom-left anchor at ``(x, y)``.

        A piece reaching past either side wall is reported as
        ``COLLIDES_HBOUND``.  Cells above the ceiling are always vacant, which
        lets a freshly spawned piece hang partly outside the grid.
        """

        if x < 0 or x + piece.width > self.width:
            return CollisionResult.COLLIDES_HBOUND
        for r, c in piece.cells():
            row, col = y + r, x + c
            if not (0 <= row < self.height and 0 <= col < self.width):
                continue
            if self.grid[row, col] != 0:
                return CollisionResult.COLLIDES
        return CollisionResult.UNOBSTRUCTED

    def try_rotation(self, piece: Piece, x: int, y: int) -> Optional[Tuple[int, int]]:
        """Find an anchor for an already rotated ``piece`` near ``(x, y)``.

        The piece is accepted where it is if it fits.  Against a side wall it is
        shifted left one column at a time, by less than its width.  Against the
        stack only a single column to the right, then to the left, is tried.
        ``None`` means no anchor was found and the caller should undo the
        rotation.
        """

        result = self.collides(piece, x, y)
        if result is CollisionResult.UNOBSTRUCTED:
            return x, y
        if result is CollisionResult.COLLIDES_HBOUND:
            candidates = [x - i for i in range(1, piece.width)]
        else:
            candidates = [x + 1, x - 1]
        for candidate in candidates:
            if self.collides(piece, candidate, y) is CollisionResult.UNOBSTRUCTED:
                return candidate, y
        return None
