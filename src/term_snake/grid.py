"""Grid representation for the snake game."""

from __future__ import annotations

import enum

import numpy as np

from term_snake.snake import Point


class CellType(enum.IntEnum):
    """Integer codes stored in the grid array."""

    EMPTY = 0
    SNAKE = 1
    APPLE = 2


class Grid:
    """NumPy-backed occupancy grid for one game session.

    The grid mirrors the snake and apple positions as integers for O(1)
    collision checks. Cells are indexed ``cells[y, x]`` so that rows map to
    terminal lines.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError("Grid dimensions must be at least 1×1.")
        self.width = width
        self.height = height
        self.cells = np.zeros((height, width), dtype=np.int8)

    def in_bounds(self, point: Point) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= point.x < self.width and 0 <= point.y < self.height

    def get(self, point: Point) -> CellType:
        """Return the cell type at the given coordinate."""
        return CellType(self.cells[point.y, point.x])

    def set(self, point: Point, cell_type: CellType) -> None:
        """Set the cell type at the given coordinate."""
        self.cells[point.y, point.x] = cell_type

    def is_free(self, point: Point) -> bool:
        """Return True if no snake segment occupies the cell."""
        return self.get(point) != CellType.SNAKE
