"""Apple placement logic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

import numpy as np

from term_snake.grid import CellType
from term_snake.snake import Point

if TYPE_CHECKING:
    from term_snake.grid import Grid

logger = logging.getLogger(__name__)

# Last-resort cell when no free cell was found within max_attempts draws.
FALLBACK_CELL = Point(1, 1)


class RandomSource(Protocol):
    """Anything that yields integers in ``[low, high)``.

    ``numpy.random.Generator`` satisfies this; tests substitute a scripted
    sequence.
    """

    def integers(self, low: int, high: int) -> int: ...


class AppleSpawner:
    """Places the single apple on the grid.

    Uses rejection sampling: draw a uniformly random cell, retry while it is
    covered by the snake, and give up after *max_attempts* draws.
    """

    def __init__(
        self,
        grid: Grid,
        rng: RandomSource | None = None,
        max_attempts: int = 1000,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = max_attempts
        self.position: Point | None = None

    def place(self) -> Point:
        """Move the apple to a random free cell and return its position."""
        self._clear()
        for _ in range(self.max_attempts):
            candidate = Point(
                int(self.rng.integers(0, self.grid.width)),
                int(self.rng.integers(0, self.grid.height)),
            )
            if self.grid.is_free(candidate):
                return self._put(candidate)

        logger.warning(
            "No free cell found after %d attempts; using fallback %s.",
            self.max_attempts, FALLBACK_CELL,
        )
        return self._put(FALLBACK_CELL)

    def _put(self, point: Point) -> Point:
        self.position = point
        # The fallback cell may sit under the snake; keep the grid consistent.
        if self.grid.in_bounds(point) and self.grid.is_free(point):
            self.grid.set(point, CellType.APPLE)
        return point

    def _clear(self) -> None:
        pos = self.position
        if (
            pos is not None
            and self.grid.in_bounds(pos)
            and self.grid.get(pos) == CellType.APPLE
        ):
            self.grid.set(pos, CellType.EMPTY)
        self.position = None
